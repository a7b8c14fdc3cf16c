"""Leaf value coercion backed by pydantic ``TypeAdapter``s.

Request values mostly arrive as strings (query, path, headers), so every
leaf kind is coerced with pydantic's lax mode: ``"5"`` becomes ``5`` for an
integer, ``"yes"`` becomes ``True`` for a boolean. Adapters are built once
per kind and cached. Email addresses are checked by ``EmailStr``
(``email-validator``).

``coerce_leaf`` never raises on bad input; it returns a ``LeafResult`` whose
``errors`` hold the messages to report against the field path.
"""

from datetime import date, datetime
from functools import lru_cache
from ipaddress import IPv4Address, IPv6Address
from typing import Annotated, Any
from uuid import UUID

from pydantic import ConfigDict, EmailStr, StringConstraints, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from openroute.schema.fields import FieldKind, FieldSchema

HOSTNAME_PATTERN = (
    r"^(?=.{1,253}$)([A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?)"
    r"(\.([A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?))*$"
)
DATE_LENGTH = 10

STRING_KINDS = frozenset(
    {
        FieldKind.STRING,
        FieldKind.REGEX,
        FieldKind.EMAIL,
        FieldKind.HOSTNAME,
        FieldKind.UUID,
        FieldKind.IPV4,
        FieldKind.IPV6,
        FieldKind.DATE,
    }
)

_SIMPLE_TYPES: dict[FieldKind, Any] = {
    FieldKind.NUMBER: float,
    FieldKind.INTEGER: int,
    FieldKind.BOOLEAN: bool,
    FieldKind.DATETIME: datetime,
    FieldKind.DATE: date,
    FieldKind.UUID: UUID,
    FieldKind.EMAIL: EmailStr,
    FieldKind.IPV4: IPv4Address,
    FieldKind.IPV6: IPv6Address,
}

# Kinds whose documented output is the string form of the parsed value
_STRINGIFIED = frozenset({FieldKind.UUID, FieldKind.IPV4, FieldKind.IPV6})


class LeafResult:
    """Outcome of coercing one leaf value."""

    __slots__ = ("errors", "value")

    def __init__(self, value: Any = None, errors: list[str] | None = None) -> None:
        self.value = value
        self.errors = errors or []

    @property
    def ok(self) -> bool:
        return not self.errors


@lru_cache(maxsize=256)
def get_adapter(kind: FieldKind) -> TypeAdapter[Any]:
    """Return the cached adapter validating ``kind``.

    Args:
        kind: Leaf kind (not array, object, enum or regex).

    Returns:
        TypeAdapter: Adapter running in lax mode.
    """
    if kind in _SIMPLE_TYPES:
        return TypeAdapter(_SIMPLE_TYPES[kind])

    if kind is not FieldKind.HOSTNAME:
        return TypeAdapter(str)

    # python-re supports lookaheads and search semantics
    return TypeAdapter(
        Annotated[str, StringConstraints(pattern=HOSTNAME_PATTERN)],
        config=ConfigDict(regex_engine="python-re"),
    )


def _stringify(value: Any) -> str | None:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str | int | float):
        return str(value)
    return None


def _messages(exc: PydanticValidationError) -> list[str]:
    return [error["msg"] for error in exc.errors(include_url=False)]


def coerce_leaf(field: FieldSchema, value: Any) -> LeafResult:
    """Coerce a present, non-null leaf value against ``field``.

    Args:
        field: Schema of a leaf kind.
        value: Raw value from the request.

    Returns:
        LeafResult: Coerced value, or the error messages.
    """
    kind = field.kind

    if kind is FieldKind.ENUM:
        label = field.match_enum(value) if _stringify(value) is not None else None
        if label is None:
            allowed = ", ".join(repr(v) for v in field.values or {})
            return LeafResult(errors=[f"Input should be {allowed}"])
        return LeafResult(label)

    if kind in STRING_KINDS and not isinstance(value, str):
        text = _stringify(value)
        if text is None:
            return LeafResult(errors=["Input should be a valid string"])
        value = text

    if kind is FieldKind.DATE:
        value = value[:DATE_LENGTH]

    if kind is FieldKind.REGEX:
        # search semantics: an unanchored pattern may match anywhere
        if not field.search(value):
            return LeafResult(errors=[f"String should match pattern '{field.pattern}'"])
        return LeafResult(value)

    try:
        coerced = get_adapter(kind).validate_python(value)
    except PydanticValidationError as exc:
        return LeafResult(errors=_messages(exc))

    if kind in _STRINGIFIED:
        coerced = str(coerced)
    return LeafResult(coerced)
