"""Unit tests for raw value extraction."""

from collections.abc import Callable

import pytest
from starlette.requests import Request

from openroute.core.exceptions import UnsupportedLocationError
from openroute.routing.extractor import extract_parameter, parse_query_string
from openroute.schema.parameters import Location

type RequestFactory = Callable[..., Request]


@pytest.mark.unit
class TestParseQueryString:
    def test_single_value_is_scalar(self) -> None:
        assert parse_query_string("http://test/todos?x=1") == {"x": "1"}

    def test_repeated_keys_promote_to_list(self) -> None:
        assert parse_query_string("/todos?x=1&x=2&x=3") == {"x": ["1", "2", "3"]}

    def test_two_values_make_two_element_list(self) -> None:
        assert parse_query_string("/todos?x=1&y=a&x=2") == {"x": ["1", "2"], "y": "a"}

    def test_no_query(self) -> None:
        assert parse_query_string("/todos") == {}

    def test_bare_key_has_no_value(self) -> None:
        assert parse_query_string("/todos?flag&x=1") == {"flag": None, "x": "1"}

    def test_trailing_equals_keeps_empty_string(self) -> None:
        assert parse_query_string("/todos?flag=") == {"flag": ""}

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("/todos?tag&tag=a", {"tag": "a"}),
            ("/todos?tag=a&tag", {"tag": "a"}),
            ("/todos?tag=a&tag=b&tag", {"tag": ["a", "b"]}),
        ],
    )
    def test_bare_key_mixed_with_values(
        self, url: str, expected: dict[str, object]
    ) -> None:
        assert parse_query_string(url) == expected

    def test_value_keeps_later_equals(self) -> None:
        assert parse_query_string("/q?expr=a=b") == {"expr": "a=b"}

    def test_percent_decoding(self) -> None:
        assert parse_query_string("/q?name=J%C3%BAlia&city=S%C3%A3o") == {
            "name": "Júlia",
            "city": "São",
        }


@pytest.mark.unit
class TestExtractParameter:
    def test_query(self, make_request: RequestFactory) -> None:
        request = make_request()
        assert extract_parameter(request, {"a": "1"}, Location.QUERY, "a") == "1"
        assert extract_parameter(request, {}, Location.QUERY, "a") is None

    def test_path(self, make_request: RequestFactory) -> None:
        request = make_request(path_params={"todo_id": 3})
        assert extract_parameter(request, {}, Location.PATH, "todo_id") == "3"
        assert extract_parameter(request, {}, Location.PATH, "other") is None

    def test_header_is_case_insensitive(self, make_request: RequestFactory) -> None:
        request = make_request(headers={"X-Token": "secret"})
        assert extract_parameter(request, {}, Location.HEADER, "x-token") == "secret"
        assert extract_parameter(request, {}, Location.HEADER, "X-TOKEN") == "secret"

    def test_cookie_not_implemented(self, make_request: RequestFactory) -> None:
        with pytest.raises(NotImplementedError, match="Cookie parameters not implemented yet"):
            extract_parameter(make_request(), {}, Location.COOKIE, "session")

    def test_cookie_error_type(self, make_request: RequestFactory) -> None:
        with pytest.raises(UnsupportedLocationError):
            extract_parameter(make_request(), {}, Location.COOKIE, "session")
