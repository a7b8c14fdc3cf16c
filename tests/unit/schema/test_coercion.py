"""Unit tests for leaf coercion."""

from datetime import date, datetime
from typing import Any

import pytest

from openroute.schema.coercion import coerce_leaf, get_adapter
from openroute.schema.fields import FieldKind
from openroute.schema.types import (
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
    Regex,
    Str,
    Uuid,
)


@pytest.mark.unit
class TestScalarCoercion:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("5", 5), ("-12", -12), (7, 7)],
    )
    def test_integer(self, raw: Any, expected: int) -> None:
        result = coerce_leaf(Int(), raw)
        assert result.ok
        assert result.value == expected

    def test_integer_rejects_fraction(self) -> None:
        assert not coerce_leaf(Int(), "5.5").ok

    def test_integer_rejects_text(self) -> None:
        result = coerce_leaf(Int(), "abc")
        assert not result.ok
        assert result.errors

    def test_number(self) -> None:
        assert coerce_leaf(Num(), "2.5").value == 2.5

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("false", False),
            ("1", True),
            ("0", False),
            ("yes", True),
            ("no", False),
            ("on", True),
            ("off", False),
        ],
    )
    def test_boolean(self, raw: str, expected: bool) -> None:
        assert coerce_leaf(Bool(), raw).value is expected

    def test_boolean_rejects_garbage(self) -> None:
        assert not coerce_leaf(Bool(), "maybe").ok

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(5, "5"), (2.5, "2.5"), (True, "true"), ("x", "x")],
    )
    def test_string_stringifies_scalars(self, raw: Any, expected: str) -> None:
        assert coerce_leaf(Str(), raw).value == expected

    def test_string_rejects_objects(self) -> None:
        assert not coerce_leaf(Str(), {"a": 1}).ok


@pytest.mark.unit
class TestDates:
    def test_datetime(self) -> None:
        value = coerce_leaf(DateTime(), "2024-03-01T10:30:00").value
        assert value == datetime(2024, 3, 1, 10, 30)

    def test_date_only_truncates_to_ten_characters(self) -> None:
        result = coerce_leaf(DateOnly(), "2024-03-01T10:30:00Z")
        assert result.ok
        assert result.value == date(2024, 3, 1)

    def test_date_only_rejects_invalid_date(self) -> None:
        assert not coerce_leaf(DateOnly(), "2024-13-45").ok


@pytest.mark.unit
class TestFormats:
    def test_regex_uses_search(self) -> None:
        assert coerce_leaf(Regex(r"\d{3}"), "abc123").ok
        result = coerce_leaf(Regex(r"^\d{5}$"), "123")
        assert result.errors == ["String should match pattern '^\\d{5}$'"]

    @pytest.mark.parametrize(
        ("constructor", "valid", "invalid"),
        [
            (Email, "dev@example.com", "not-an-email"),
            (Email, "dev@example.com", "dev..ops@example.com"),
            (Email, "dev@example.com", ".dev@example.com"),
            (Hostname, "api.example.com", "-bad-.example"),
            (Ipv4, "192.168.0.1", "300.1.1.1"),
            (Ipv6, "::1", "192.168.0.1"),
            (Uuid, "123e4567-e89b-12d3-a456-426614174000", "1234"),
        ],
    )
    def test_string_formats(self, constructor: Any, valid: str, invalid: str) -> None:
        field = constructor()
        ok = coerce_leaf(field, valid)
        assert ok.ok
        assert ok.value == valid
        assert not coerce_leaf(field, invalid).ok


@pytest.mark.unit
class TestEnum:
    def test_returns_label(self) -> None:
        field = Enumeration(values={"json": 1, "csv": 2})
        assert coerce_leaf(field, "csv").value == "csv"

    def test_case_insensitive(self) -> None:
        field = Enumeration(values=["Json", "Csv"], enum_case_sensitive=False)
        assert coerce_leaf(field, "JSON").value == "Json"

    def test_rejects_unknown_label(self) -> None:
        result = coerce_leaf(Enumeration(values=["a", "b"]), "c")
        assert result.errors == ["Input should be 'a', 'b'"]


@pytest.mark.unit
def test_adapters_are_cached() -> None:
    assert get_adapter(FieldKind.INTEGER) is get_adapter(FieldKind.INTEGER)
