"""openroute - declare endpoint inputs once, get validation and OpenAPI docs.

An endpoint declares its path, query and header parameters, request body and
responses with compact type declarations (``int``, ``[str]``,
``{"title": str}``, ``Enumeration(...)``). From that single declaration
openroute derives:

- request validation and coercion, reporting every failing field at once
- an OpenAPI 3 document, served with Swagger UI and ReDoc

Both views come from the same canonical ``FieldSchema`` tree, so what is
documented is exactly what is validated.

Package layout:
- **schema**: field schemas, type constructors, parameter declarations
- **routing**: request extraction, validation, ``OpenAPIRoute``, ``OpenAPIRouter``
- **openapi**: document rendering and documentation endpoints
- **core**: configuration, logging, exceptions and request context
- **api**: example application wiring routers, middleware and error handlers
"""

from openroute.core.exceptions import (
    BodyParseError,
    MissingOperationIdError,
    MissingParameterNameError,
    OpenRouteError,
    UnsupportedLocationError,
    UnsupportedTypeError,
    ValidationError,
)
from openroute.openapi.plugin import AIPlugin
from openroute.routing import OpenAPIRoute, OpenAPIRouter, RouterOptions
from openroute.schema import (
    Arr,
    Body,
    Bool,
    Cookie,
    DateOnly,
    DateTime,
    Email,
    EndpointSchema,
    Enumeration,
    FieldSchema,
    Header,
    Hostname,
    Int,
    Ipv4,
    Ipv6,
    Num,
    Obj,
    Path,
    Query,
    Regex,
    RequestBody,
    Response,
    ResponseSpec,
    Str,
    Uuid,
    normalize,
)

__all__ = [
    "AIPlugin",
    "Arr",
    "Body",
    "BodyParseError",
    "Bool",
    "Cookie",
    "DateOnly",
    "DateTime",
    "Email",
    "EndpointSchema",
    "Enumeration",
    "FieldSchema",
    "Header",
    "Hostname",
    "Int",
    "Ipv4",
    "Ipv6",
    "MissingOperationIdError",
    "MissingParameterNameError",
    "Num",
    "Obj",
    "OpenAPIRoute",
    "OpenAPIRouter",
    "OpenRouteError",
    "Path",
    "Query",
    "Regex",
    "RequestBody",
    "Response",
    "ResponseSpec",
    "RouterOptions",
    "Str",
    "UnsupportedLocationError",
    "UnsupportedTypeError",
    "Uuid",
    "ValidationError",
    "normalize",
]
