"""OpenAPI document rendering and documentation endpoints."""

from openroute.openapi.plugin import AIPlugin, PluginApi, PluginAuth
from openroute.openapi.renderer import (
    derive_operation_id,
    render_field_schema,
    render_operation,
    render_parameter,
    render_request_body,
    render_response,
)

__all__ = [
    "AIPlugin",
    "PluginApi",
    "PluginAuth",
    "derive_operation_id",
    "render_field_schema",
    "render_operation",
    "render_parameter",
    "render_request_body",
    "render_response",
]
