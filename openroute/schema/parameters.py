"""Declarations of request parameters, request bodies and responses.

Examples:
    >>> Query(int, default=10).required
    False
    >>> Path(str, name="todo_id").location
    <Location.PATH: 'path'>
"""

from enum import StrEnum
from typing import Any, Unpack

from pydantic import BaseModel, ConfigDict

from openroute.core.constants import DEFAULT_RESPONSE_DESCRIPTION, JSON_CONTENT_TYPE
from openroute.schema.fields import FieldOptions, FieldSchema
from openroute.schema.normalizer import normalize


class Location(StrEnum):
    """Where a parameter is read from."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class Parameter(BaseModel):
    """A declared path, query, header or cookie parameter.

    Attributes:
        location: Where the raw value is read from.
        name: Wire name. Optional when declared in a mapping.
        field_schema: Normalized type and constraints of the value.
    """

    model_config = ConfigDict(frozen=True)

    location: Location
    name: str | None = None
    field_schema: FieldSchema

    @property
    def required(self) -> bool:
        return not self.field_schema.is_optional

    def named(self, name: str) -> "Parameter":
        """Return this parameter with ``name`` set, or unchanged if already named."""
        if self.name is not None:
            return self
        return self.model_copy(update={"name": name})


def _parameter(
    location: Location,
    declaration: object,
    name: str | None,
    options: FieldOptions,
) -> Parameter:
    return Parameter(
        location=location,
        name=name,
        field_schema=normalize(declaration, **options),
    )


def Query(  # noqa: N802
    declaration: object, *, name: str | None = None, **options: Unpack[FieldOptions]
) -> Parameter:
    """Declare a query string parameter."""
    return _parameter(Location.QUERY, declaration, name, options)


def Path(  # noqa: N802
    declaration: object, *, name: str | None = None, **options: Unpack[FieldOptions]
) -> Parameter:
    """Declare a path parameter."""
    return _parameter(Location.PATH, declaration, name, options)


def Header(  # noqa: N802
    declaration: object, *, name: str | None = None, **options: Unpack[FieldOptions]
) -> Parameter:
    """Declare a header parameter. Header names match case-insensitively."""
    return _parameter(Location.HEADER, declaration, name, options)


def Cookie(  # noqa: N802
    declaration: object, *, name: str | None = None, **options: Unpack[FieldOptions]
) -> Parameter:
    """Declare a cookie parameter.

    Cookies are documented but cannot be extracted yet; validating an endpoint
    that declares one raises ``UnsupportedLocationError``.
    """
    return _parameter(Location.COOKIE, declaration, name, options)


class RequestBody(BaseModel):
    """Declared request body."""

    model_config = ConfigDict(frozen=True)

    field_schema: FieldSchema
    content_type: str = JSON_CONTENT_TYPE
    description: str | None = None

    @classmethod
    def declare(
        cls,
        declaration: object,
        *,
        content_type: str = JSON_CONTENT_TYPE,
        description: str | None = None,
        **options: Any,
    ) -> "RequestBody":
        """Build a body from any supported type declaration."""
        return cls(
            field_schema=normalize(declaration, **options),
            content_type=content_type,
            description=description,
        )


class ResponseSpec(BaseModel):
    """Declared response for one status code. ``field_schema`` may be absent."""

    model_config = ConfigDict(frozen=True)

    field_schema: FieldSchema | None = None
    content_type: str = JSON_CONTENT_TYPE
    description: str = DEFAULT_RESPONSE_DESCRIPTION

    @classmethod
    def declare(
        cls,
        declaration: object = None,
        *,
        content_type: str = JSON_CONTENT_TYPE,
        description: str = DEFAULT_RESPONSE_DESCRIPTION,
    ) -> "ResponseSpec":
        """Build a response from any supported type declaration, or none."""
        return cls(
            field_schema=None if declaration is None else normalize(declaration),
            content_type=content_type,
            description=description,
        )


def Body(  # noqa: N802
    declaration: object,
    *,
    content_type: str = JSON_CONTENT_TYPE,
    description: str | None = None,
    **options: Unpack[FieldOptions],
) -> RequestBody:
    """Declare a request body."""
    return RequestBody.declare(
        declaration, content_type=content_type, description=description, **options
    )


def Response(  # noqa: N802
    declaration: object = None,
    *,
    content_type: str = JSON_CONTENT_TYPE,
    description: str = DEFAULT_RESPONSE_DESCRIPTION,
) -> ResponseSpec:
    """Declare a response body."""
    return ResponseSpec.declare(
        declaration, content_type=content_type, description=description
    )
