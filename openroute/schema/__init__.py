"""Declaration engine: field schemas, type constructors and parameters."""

from openroute.schema.endpoint import CompiledEndpoint, EndpointSchema, compile_endpoint
from openroute.schema.fields import FieldKind, FieldSchema
from openroute.schema.locations import classify_parameters
from openroute.schema.normalizer import normalize
from openroute.schema.parameters import (
    Body,
    Cookie,
    Header,
    Location,
    Parameter,
    Path,
    Query,
    RequestBody,
    Response,
    ResponseSpec,
)
from openroute.schema.types import (
    Arr,
    Bool,
    DateOnly,
    DateTime,
    Email,
    Enumeration,
    Hostname,
    Int,
    Ipv4,
    Ipv6,
    Num,
    Obj,
    Regex,
    Str,
    Uuid,
)

__all__ = [
    "Arr",
    "Body",
    "Bool",
    "CompiledEndpoint",
    "Cookie",
    "DateOnly",
    "DateTime",
    "Email",
    "EndpointSchema",
    "Enumeration",
    "FieldKind",
    "FieldSchema",
    "Header",
    "Hostname",
    "Int",
    "Ipv4",
    "Ipv6",
    "Location",
    "Num",
    "Obj",
    "Parameter",
    "Path",
    "Query",
    "RequestBody",
    "Regex",
    "Response",
    "ResponseSpec",
    "Str",
    "Uuid",
    "classify_parameters",
    "compile_endpoint",
    "normalize",
]
