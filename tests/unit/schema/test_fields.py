"""Unit tests for FieldSchema and the type constructors."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from openroute.schema.fields import FieldKind, FieldSchema
from openroute.schema.types import (
    Arr,
    Bool,
    DateOnly,
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


@pytest.mark.unit
class TestFieldSchema:
    def test_is_frozen(self) -> None:
        field = Str()
        with pytest.raises(PydanticValidationError):
            field.required = False  # type: ignore[misc]

    def test_none_default_is_a_default(self) -> None:
        field = Str(default=None)
        assert field.has_default is True
        assert field.default is None
        assert field.is_optional is True

    def test_with_options_leaves_original_untouched(self) -> None:
        shared = Int()
        first = shared.with_options(description="first")
        second = shared.with_options(description="second")
        assert shared.description is None
        assert first.description == "first"
        assert second.description == "second"

    def test_with_options_ignores_unknown_and_none(self) -> None:
        field = Int()
        assert field.with_options(description=None, unknown=1) is field

    def test_regex_requires_pattern(self) -> None:
        with pytest.raises(PydanticValidationError, match="regex fields require a pattern"):
            FieldSchema(kind=FieldKind.REGEX)

    def test_regex_pattern_must_compile(self) -> None:
        with pytest.raises(PydanticValidationError, match=r"invalid pattern '\['"):
            FieldSchema(kind=FieldKind.REGEX, pattern="[")

    def test_regex_search_matches_anywhere(self) -> None:
        field = Regex(r"\d{3}")
        assert field.search("abc123")
        assert not field.search("abc")

    def test_array_requires_element(self) -> None:
        with pytest.raises(PydanticValidationError, match="array must declare an element"):
            FieldSchema(kind=FieldKind.ARRAY)

    def test_object_defaults_to_no_fields(self) -> None:
        assert FieldSchema(kind=FieldKind.OBJECT).fields == {}


@pytest.mark.unit
class TestEnumMatching:
    def test_case_sensitive_by_default(self) -> None:
        field = Enumeration(values=["Asc", "Desc"])
        assert field.match_enum("Asc") == "Asc"
        assert field.match_enum("asc") is None

    def test_case_insensitive_returns_declared_label(self) -> None:
        field = Enumeration(values=["Asc", "Desc"], enum_case_sensitive=False)
        assert field.match_enum("ASC") == "Asc"
        assert field.match_enum("desc") == "Desc"
        assert field.match_enum("up") is None

    def test_mapping_values_keep_raw_values(self) -> None:
        field = Enumeration(values={"json": "application/json", "csv": "text/csv"})
        assert field.values == {"json": "application/json", "csv": "text/csv"}
        assert field.match_enum("csv") == "csv"

    def test_lookup_follows_with_options(self) -> None:
        field = Enumeration(values=["A"]).with_options(enum_case_sensitive=False)
        assert field.match_enum("a") == "A"


@pytest.mark.unit
class TestConstructors:
    @pytest.mark.parametrize(
        ("constructor", "kind"),
        [
            (Str, FieldKind.STRING),
            (Num, FieldKind.NUMBER),
            (Int, FieldKind.INTEGER),
            (Bool, FieldKind.BOOLEAN),
            (DateOnly, FieldKind.DATE),
            (Email, FieldKind.EMAIL),
            (Uuid, FieldKind.UUID),
            (Hostname, FieldKind.HOSTNAME),
            (Ipv4, FieldKind.IPV4),
            (Ipv6, FieldKind.IPV6),
        ],
    )
    def test_tagged_constructors(self, constructor: object, kind: FieldKind) -> None:
        assert getattr(constructor, "field_kind") is kind
        assert constructor().kind is kind  # type: ignore[operator]

    def test_regex_keeps_pattern(self) -> None:
        assert Regex(r"^\d+$").pattern == r"^\d+$"

    def test_arr_and_obj_normalize_children(self) -> None:
        field = Obj({"tags": Arr(str), "count": 3})
        assert field.fields is not None
        tags = field.fields["tags"]
        assert tags.kind is FieldKind.ARRAY
        assert tags.element is not None
        assert tags.element.kind is FieldKind.STRING
        assert field.fields["count"].example == 3
