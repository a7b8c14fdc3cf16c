"""Turn any supported type declaration into a canonical ``FieldSchema``.

Supported declarations, checked in this order:

- an existing ``FieldSchema`` (identity, or a copy with options applied)
- a tagged type constructor passed uncalled (``Int``, ``Enumeration``...)
- a primitive marker: ``str``, ``float``, ``int``, ``bool``, ``datetime``,
  ``date``
- a subclass of ``enum.Enum`` (labels are member names)
- a literal ``str``/``bool``/``int``/``float`` value, used as the example
- a non-empty list or tuple, or a ``list[...]`` alias: array of its first
  element
- a dict: object whose values are normalized recursively

Anything else raises ``UnsupportedTypeError`` right away, at definition
time, rather than degrading to a string field.
"""

import enum
import typing
from datetime import date, datetime
from typing import Any

from loguru import logger

from openroute.core.exceptions import UnsupportedTypeError
from openroute.schema.fields import FIELD_OPTIONS, FieldKind, FieldSchema

PRIMITIVE_KINDS: dict[type, FieldKind] = {
    str: FieldKind.STRING,
    float: FieldKind.NUMBER,
    int: FieldKind.INTEGER,
    bool: FieldKind.BOOLEAN,
    datetime: FieldKind.DATETIME,
    date: FieldKind.DATE,
}

EMPTY_ARRAY_MESSAGE = "array must declare an element type"


def _field_options(options: dict[str, Any]) -> dict[str, Any]:
    # None means "not given", except for an explicit None default
    return {
        key: value
        for key, value in options.items()
        if key in FIELD_OPTIONS and (value is not None or key == "default")
    }


def _literal_kind(value: object) -> FieldKind | None:
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return FieldKind.BOOLEAN
    if isinstance(value, str):
        return FieldKind.STRING
    if isinstance(value, int):
        return FieldKind.INTEGER
    if isinstance(value, float):
        return FieldKind.NUMBER
    return None


def normalize(declaration: object, **options: Any) -> FieldSchema:
    """Resolve ``declaration`` into a field schema.

    Args:
        declaration: Any supported type declaration.
        **options: Declaration options applied to the resulting node
            (``required``, ``description``, ``example``, ``default``,
            ``deprecated``, ``pattern``, ``values``, ``enum_case_sensitive``).
            Children of arrays and objects never inherit them.

    Returns:
        FieldSchema: The canonical schema.

    Raises:
        UnsupportedTypeError: If the declaration shape is not supported, an
            array declaration has no element type or a regex pattern does
            not compile.
    """
    options = _field_options(options)

    if isinstance(declaration, FieldSchema):
        try:
            return declaration.with_options(**options)
        except ValueError as exc:
            raise UnsupportedTypeError(
                declaration, f"Options {options!r} are invalid: {exc}"
            ) from exc

    if callable(declaration) and hasattr(declaration, "field_kind"):
        try:
            return declaration(**options)
        except (TypeError, ValueError) as exc:
            raise UnsupportedTypeError(
                declaration,
                f"{getattr(declaration, '__name__', declaration)} cannot be built "
                f"from {options!r}: {exc}",
            ) from exc

    if isinstance(declaration, type):
        return _normalize_class(declaration, options)

    kind = _literal_kind(declaration)
    if kind is not None:
        return FieldSchema(kind=kind, **{"example": declaration, **options})

    if typing.get_origin(declaration) is list:
        args = typing.get_args(declaration)
        if not args:
            raise UnsupportedTypeError(declaration, EMPTY_ARRAY_MESSAGE)
        return _array(args[0], options)

    if isinstance(declaration, list | tuple):
        if not declaration:
            raise UnsupportedTypeError(declaration, EMPTY_ARRAY_MESSAGE)
        return _array(declaration[0], options)

    if isinstance(declaration, dict):
        children = {
            str(name): normalize(child) for name, child in declaration.items()
        }
        return FieldSchema(kind=FieldKind.OBJECT, fields=children, **options)

    logger.debug("Rejecting unsupported declaration {!r}", declaration)
    raise UnsupportedTypeError(declaration)


def _normalize_class(declaration: type, options: dict[str, Any]) -> FieldSchema:
    if declaration in PRIMITIVE_KINDS:
        return FieldSchema(kind=PRIMITIVE_KINDS[declaration], **options)

    if issubclass(declaration, enum.Enum):
        values = {member.name: member.value for member in declaration}
        return FieldSchema(kind=FieldKind.ENUM, **{"values": values, **options})

    if declaration is list:
        raise UnsupportedTypeError(declaration, EMPTY_ARRAY_MESSAGE)

    raise UnsupportedTypeError(declaration)


def _array(element: object, options: dict[str, Any]) -> FieldSchema:
    return FieldSchema(kind=FieldKind.ARRAY, element=normalize(element), **options)


def is_declaration(value: object) -> bool:
    """Tell whether ``value`` can be normalized without raising."""
    try:
        normalize(value)
    except UnsupportedTypeError:
        return False
    return True


