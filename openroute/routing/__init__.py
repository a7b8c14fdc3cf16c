"""Request extraction, validation, endpoint base class and router."""

from openroute.routing.route import OpenAPIRoute
from openroute.routing.router import OpenAPIRouter, RouteHandle, RouterOptions
from openroute.routing.validation import ValidationOutcome, validate_request

__all__ = [
    "OpenAPIRoute",
    "OpenAPIRouter",
    "RouteHandle",
    "RouterOptions",
    "ValidationOutcome",
    "validate_request",
]
