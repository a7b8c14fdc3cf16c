"""Canonical field schema shared by validation and documentation.

Every type declaration accepted by openroute (primitive markers, literals,
lists, dicts, type constructors) is normalized into a ``FieldSchema`` tree.
The validation engine walks that tree to coerce request values and the
OpenAPI renderer walks the very same tree to describe them, so the two views
cannot drift apart.

Nodes are frozen. Applying declaration options (``required``, ``example``,
``description``...) always produces a new node through ``with_options``, so
a schema shared between endpoints is never changed behind their back.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Any, TypedDict

from pydantic import BaseModel, ConfigDict, PrivateAttr, model_validator


class FieldKind(StrEnum):
    """Kinds of values a field schema can describe."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    DATE = "date"
    REGEX = "regex"
    EMAIL = "email"
    UUID = "uuid"
    HOSTNAME = "hostname"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"


# Options a declaration may carry, in the order they are documented
FIELD_OPTIONS = (
    "required",
    "description",
    "example",
    "default",
    "deprecated",
    "pattern",
    "values",
    "enum_case_sensitive",
)


class FieldOptions(TypedDict, total=False):
    """Keyword options accepted by type constructors and parameter declarations."""

    required: bool
    description: str
    example: Any
    default: Any
    deprecated: bool
    pattern: str
    values: dict[str, Any] | list[Any]
    enum_case_sensitive: bool


class FieldSchema(BaseModel):
    """Type and constraints of one value.

    Attributes:
        kind: Resolved kind of the value.
        required: Whether the value must be present.
        description: Documentation text.
        example: Sample value shown in documentation.
        default: Value used when the field is omitted.
        has_default: Whether ``default`` was explicitly declared.
        deprecated: Documentation-only deprecation flag.
        pattern: Regular expression for ``regex`` fields.
        values: Label to raw value mapping for ``enum`` fields.
        enum_case_sensitive: Whether enum labels match case-sensitively.
        element: Element schema for ``array`` fields.
        fields: Ordered child schemas for ``object`` fields.
    """

    model_config = ConfigDict(frozen=True)

    kind: FieldKind
    required: bool = True
    description: str | None = None
    example: Any = None
    default: Any = None
    has_default: bool = False
    deprecated: bool = False

    pattern: str | None = None
    values: dict[str, Any] | None = None
    enum_case_sensitive: bool = True
    element: FieldSchema | None = None
    fields: dict[str, FieldSchema] | None = None

    # Derived at construction: lookup key -> declared label
    _enum_lookup: dict[str, str] = PrivateAttr(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def prepare_declaration(cls, data: Any) -> Any:
        """Fill derived declaration attributes.

        Records whether a default was given so that ``None`` stays usable as a
        default, turns enum value lists into identity mappings and gives object
        fields an empty mapping.
        """
        if not isinstance(data, dict):
            return data
        if "default" in data and "has_default" not in data:
            data = {**data, "has_default": True}
        if data.get("kind") == FieldKind.OBJECT and data.get("fields") is None:
            data = {**data, "fields": {}}
        if isinstance(data.get("values"), list | tuple):
            data = {**data, "values": {str(v): v for v in data["values"]}}
        return data

    @model_validator(mode="after")
    def check_kind_fields(self) -> FieldSchema:
        """Ensure kind-specific attributes are present."""
        if self.kind is FieldKind.REGEX:
            if not self.pattern:
                msg = "regex fields require a pattern"
                raise ValueError(msg)
            try:
                re.compile(self.pattern)
            except re.error as exc:
                msg = f"invalid pattern {self.pattern!r}: {exc}"
                raise ValueError(msg) from exc
        if self.kind is FieldKind.ARRAY and self.element is None:
            msg = "array must declare an element type"
            raise ValueError(msg)
        if self.kind is FieldKind.ENUM:
            if not self.values:
                msg = "enum fields require values"
                raise ValueError(msg)
        return self

    def model_post_init(self, __context: object) -> None:
        """Pre-compute the enum lookup, lowercasing labels when case-insensitive."""
        if self.kind is FieldKind.ENUM and self.values:
            if self.enum_case_sensitive:
                self._enum_lookup = {label: label for label in self.values}
            else:
                self._enum_lookup = {label.lower(): label for label in self.values}

    def match_enum(self, value: object) -> str | None:
        """Return the declared label matching ``value``, or None."""
        key = str(value)
        if not self.enum_case_sensitive:
            key = key.lower()
        return self._enum_lookup.get(key)

    def search(self, value: str) -> bool:
        """Tell whether ``pattern`` matches anywhere in ``value``.

        The pattern was compiled once when the node was validated, so it is
        known to be well formed.
        """
        return self.pattern is not None and re.search(self.pattern, value) is not None

    @property
    def is_optional(self) -> bool:
        """A field may be omitted when not required or when it has a default."""
        return not self.required or self.has_default

    def with_options(self, **options: Any) -> FieldSchema:
        """Return a copy of this schema with declaration options applied.

        Only known options are honoured; ``None`` values are ignored except
        for ``default``, where an explicit ``None`` is a valid default.

        Args:
            **options: Declaration options (see ``FIELD_OPTIONS``).

        Returns:
            FieldSchema: The same node when nothing changes, otherwise a new one.
        """
        update: dict[str, Any] = {
            key: value
            for key, value in options.items()
            if key in FIELD_OPTIONS and value is not None and key != "default"
        }
        if "default" in options:
            update["default"] = options["default"]
            update["has_default"] = True
        if not update:
            return self
        # Re-validate so derived attributes (enum lookup) follow the new options
        declared = {name: getattr(self, name) for name in type(self).model_fields}
        return FieldSchema.model_validate({**declared, **update})
