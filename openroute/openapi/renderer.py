"""Render field schemas and endpoints as OpenAPI 3.0 objects.

The renderer reads the same ``FieldSchema`` tree the validation engine walks,
so documented types and validated types always agree.
"""

import re
from typing import Any

from openroute.core.constants import DEFAULT_RESPONSE_DESCRIPTION
from openroute.schema.endpoint import CompiledEndpoint
from openroute.schema.fields import FieldKind, FieldSchema
from openroute.schema.parameters import Parameter, RequestBody, ResponseSpec

# kind -> (OpenAPI type, format)
_TYPE_FORMATS: dict[FieldKind, tuple[str, str | None]] = {
    FieldKind.STRING: ("string", None),
    FieldKind.NUMBER: ("number", None),
    FieldKind.INTEGER: ("integer", None),
    FieldKind.BOOLEAN: ("boolean", None),
    FieldKind.DATETIME: ("string", "date-time"),
    FieldKind.DATE: ("string", "date"),
    FieldKind.REGEX: ("string", None),
    FieldKind.EMAIL: ("string", "email"),
    FieldKind.UUID: ("string", "uuid"),
    FieldKind.HOSTNAME: ("string", "hostname"),
    FieldKind.IPV4: ("string", "ipv4"),
    FieldKind.IPV6: ("string", "ipv6"),
    FieldKind.ENUM: ("string", None),
    FieldKind.ARRAY: ("array", None),
    FieldKind.OBJECT: ("object", None),
}

_PATH_PARAMETER = re.compile(r"(?<!\w):(\w+)")
_PATH_CONVERTER = re.compile(r"\{(\w+):\w+\}")
_REPEATED_SLASHES = re.compile(r"/+(/|$)")


def render_field_schema(field: FieldSchema, *, include_docs: bool = True) -> dict[str, Any]:
    """Render ``field`` as an OpenAPI schema object.

    Args:
        field: Schema to render.
        include_docs: Whether to emit ``description``. Parameters carry their
            description at the parameter level instead.

    Returns:
        dict: OpenAPI schema object.
    """
    openapi_type, openapi_format = _TYPE_FORMATS[field.kind]
    rendered: dict[str, Any] = {"type": openapi_type}
    if openapi_format:
        rendered["format"] = openapi_format

    if field.kind is FieldKind.REGEX:
        rendered["pattern"] = field.pattern
    elif field.kind is FieldKind.ENUM:
        rendered["enum"] = list(field.values or {})
    elif field.kind is FieldKind.ARRAY and field.element is not None:
        rendered["items"] = render_field_schema(field.element)
    elif field.kind is FieldKind.OBJECT:
        children = field.fields or {}
        rendered["properties"] = {
            name: render_field_schema(child) for name, child in children.items()
        }
        required = [name for name, child in children.items() if not child.is_optional]
        if required:
            rendered["required"] = required

    if include_docs and field.description:
        rendered["description"] = field.description
    if field.example is not None:
        rendered["example"] = field.example
    if field.has_default:
        rendered["default"] = field.default
    if field.deprecated:
        rendered["deprecated"] = True
    return rendered


def render_parameter(name: str, parameter: Parameter) -> dict[str, Any]:
    """Render a parameter object; its description sits beside ``schema``."""
    field = parameter.field_schema
    rendered: dict[str, Any] = {
        "name": name,
        "in": parameter.location.value,
        "required": parameter.required,
        "schema": render_field_schema(field, include_docs=False),
    }
    if field.description:
        rendered["description"] = field.description
    if field.deprecated:
        rendered["deprecated"] = True
    return rendered


def render_request_body(body: RequestBody) -> dict[str, Any]:
    rendered: dict[str, Any] = {
        "content": {body.content_type: {"schema": render_field_schema(body.field_schema)}},
    }
    if body.description:
        rendered["description"] = body.description
    if not body.field_schema.is_optional:
        rendered["required"] = True
    return rendered


def render_response(spec: ResponseSpec) -> dict[str, Any]:
    rendered: dict[str, Any] = {"description": spec.description}
    if spec.field_schema is not None:
        rendered["content"] = {
            spec.content_type: {"schema": render_field_schema(spec.field_schema)}
        }
    return rendered


def render_operation(compiled: CompiledEndpoint, operation_id: str) -> dict[str, Any]:
    """Render the full operation object of one endpoint.

    Args:
        compiled: Compiled endpoint.
        operation_id: Operation id, explicit or derived by the router.

    Returns:
        dict: OpenAPI operation object.
    """
    endpoint = compiled.endpoint
    operation: dict[str, Any] = {"operationId": operation_id}
    if endpoint.tags:
        operation["tags"] = list(endpoint.tags)
    if endpoint.summary:
        operation["summary"] = endpoint.summary
    if endpoint.description:
        operation["description"] = endpoint.description
    if endpoint.deprecated:
        operation["deprecated"] = True

    operation["parameters"] = [
        render_parameter(name, parameter)
        for group in compiled.parameters.values()
        for name, parameter in group.items()
    ]
    if endpoint.request_body is not None:
        operation["requestBody"] = render_request_body(endpoint.request_body)

    responses = {
        status: render_response(spec) for status, spec in endpoint.responses.items()
    }
    operation["responses"] = responses or {
        "200": {"description": DEFAULT_RESPONSE_DESCRIPTION}
    }
    return operation


def derive_operation_id(method: str, route: str, handler_name: str | None = None) -> str:
    """Build a stable operation id from the method and handler or route.

    Examples:
        >>> derive_operation_id("get", "/todos", "TodoList")
        'get_TodoList'
        >>> derive_operation_id("get", "/todos/{id}")
        'get__todos_{id}'
    """
    if handler_name:
        return f"{method}_{handler_name}"
    return f"{method}_{route.replace('/', '_')}"


def to_route_path(route: str) -> str:
    """Strip repeated and trailing slashes and turn ``:name`` into ``{name}``.

    Starlette convertors such as ``{todo_id:int}`` are kept.

    Examples:
        >>> to_route_path("/todos//:todo_id/")
        '/todos/{todo_id}'
    """
    path = _PATH_PARAMETER.sub(r"{\1}", _REPEATED_SLASHES.sub(r"\1", route))
    return path or "/"


def to_openapi_path(route: str) -> str:
    """Return the documented form of ``route``, without Starlette convertors.

    Examples:
        >>> to_openapi_path("/todos/{todo_id:int}")
        '/todos/{todo_id}'
    """
    return _PATH_CONVERTER.sub(r"{\1}", to_route_path(route))
