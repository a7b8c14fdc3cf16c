"""Type constructors for declaring fields explicitly.

Each constructor returns a canonical ``FieldSchema``. They can be called
directly (``Str(description="Title")``) or passed uncalled to a parameter
declaration, which then calls them with its own options
(``Query(Enumeration, values=["asc", "desc"])``).

Examples:
    >>> Int(default=10).has_default
    True
    >>> Arr(str).element.kind
    <FieldKind.STRING: 'string'>
    >>> Obj({"city": str, "zip": Regex(pattern=r"^\\d{5}$")}).fields["zip"].kind
    <FieldKind.REGEX: 'regex'>
"""

from collections.abc import Callable, Mapping
from typing import Any, Unpack

from openroute.schema.fields import FIELD_OPTIONS, FieldKind, FieldOptions, FieldSchema
from openroute.schema.normalizer import normalize

type TypeConstructor = Callable[..., FieldSchema]


def _build(kind: FieldKind, options: Mapping[str, Any], **structure: Any) -> FieldSchema:
    """Create a schema of ``kind`` keeping only recognised options."""
    declared = {k: v for k, v in options.items() if k in FIELD_OPTIONS}
    return FieldSchema(kind=kind, **declared, **structure)


def type_constructor(kind: FieldKind) -> Callable[[TypeConstructor], TypeConstructor]:
    """Tag a function as the constructor of ``kind``.

    The normalizer recognises tagged functions passed without being called.
    """

    def decorator(func: TypeConstructor) -> TypeConstructor:
        func.field_kind = kind  # type: ignore[attr-defined]
        return func

    return decorator


@type_constructor(FieldKind.STRING)
def Str(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    """Free-form string. Scalars are stringified."""
    return _build(FieldKind.STRING, options)


@type_constructor(FieldKind.NUMBER)
def Num(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    """Floating point number, parsed from strings."""
    return _build(FieldKind.NUMBER, options)


@type_constructor(FieldKind.INTEGER)
def Int(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    """Whole number, parsed from strings."""
    return _build(FieldKind.INTEGER, options)


@type_constructor(FieldKind.BOOLEAN)
def Bool(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    """Boolean accepting true/false, 1/0, yes/no and on/off."""
    return _build(FieldKind.BOOLEAN, options)


@type_constructor(FieldKind.DATETIME)
def DateTime(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    """ISO 8601 date and time."""
    return _build(FieldKind.DATETIME, options)


@type_constructor(FieldKind.DATE)
def DateOnly(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    """Calendar date; only the first 10 characters of the input are read."""
    return _build(FieldKind.DATE, options)


@type_constructor(FieldKind.REGEX)
def Regex(pattern: str, **options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    """String that must match ``pattern``."""
    return _build(FieldKind.REGEX, {**options, "pattern": pattern})


@type_constructor(FieldKind.EMAIL)
def Email(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    return _build(FieldKind.EMAIL, options)


@type_constructor(FieldKind.UUID)
def Uuid(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    return _build(FieldKind.UUID, options)


@type_constructor(FieldKind.HOSTNAME)
def Hostname(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    return _build(FieldKind.HOSTNAME, options)


@type_constructor(FieldKind.IPV4)
def Ipv4(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    return _build(FieldKind.IPV4, options)


@type_constructor(FieldKind.IPV6)
def Ipv6(**options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    return _build(FieldKind.IPV6, options)


@type_constructor(FieldKind.ENUM)
def Enumeration(  # noqa: N802
    values: Mapping[str, Any] | list[Any],
    **options: Unpack[FieldOptions],
) -> FieldSchema:
    """One of the declared labels.

    Args:
        values: Label to raw value mapping, or a list of labels.
        **options: Field options; ``enum_case_sensitive=False`` makes label
            matching ignore case.

    Returns:
        FieldSchema: Enum schema whose validated value is the matched label.
    """
    if not isinstance(values, list):
        values = dict(values)
    return _build(FieldKind.ENUM, {**options, "values": values})


def Arr(element: object, **options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    """Array of ``element``, itself any supported declaration."""
    return _build(FieldKind.ARRAY, options, element=normalize(element))


def Obj(fields: Mapping[str, object], **options: Unpack[FieldOptions]) -> FieldSchema:  # noqa: N802
    """Object with the given child declarations."""
    children = {name: normalize(child) for name, child in fields.items()}
    return _build(FieldKind.OBJECT, options, fields=children)
