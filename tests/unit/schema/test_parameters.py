"""Unit tests for parameter declarations, classification and endpoint schemas."""

import pytest

from openroute.core.exceptions import MissingParameterNameError, UnsupportedTypeError
from openroute.schema.endpoint import EndpointSchema, compile_endpoint
from openroute.schema.fields import FieldKind
from openroute.schema.locations import classify_parameters
from openroute.schema.parameters import (
    Body,
    Cookie,
    Header,
    Location,
    Path,
    Query,
    RequestBody,
    Response,
    ResponseSpec,
)
from openroute.schema.types import Enumeration, Regex


@pytest.mark.unit
class TestParameterDeclarations:
    @pytest.mark.parametrize(
        ("factory", "location"),
        [
            (Query, Location.QUERY),
            (Path, Location.PATH),
            (Header, Location.HEADER),
            (Cookie, Location.COOKIE),
        ],
    )
    def test_location(self, factory: object, location: Location) -> None:
        parameter = factory(str, name="p")  # type: ignore[operator]
        assert parameter.location is location
        assert parameter.name == "p"

    def test_required_by_default(self) -> None:
        assert Query(int).required is True

    def test_default_implies_optional(self) -> None:
        assert Query(int, default=10).required is False

    def test_constructor_with_values(self) -> None:
        parameter = Query(Enumeration, values=["asc", "desc"], enum_case_sensitive=False)
        assert parameter.field_schema.kind is FieldKind.ENUM
        assert parameter.field_schema.match_enum("ASC") == "asc"

    def test_malformed_regex_rejected_on_declaration(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            Query(Regex, pattern="[")

    def test_body_and_response(self) -> None:
        body = Body({"title": str}, description="New item")
        assert body.content_type == "application/json"
        assert body.field_schema.kind is FieldKind.OBJECT

        response = Response()
        assert response.field_schema is None
        assert response.description == "Successful Response"


@pytest.mark.unit
class TestClassifyParameters:
    def test_list_form_groups_by_location_in_order(self) -> None:
        grouped = classify_parameters(
            [
                Query(int, name="page"),
                Path(int, name="todo_id"),
                Query(str, name="search"),
                Header(str, name="x-token"),
            ]
        )
        assert list(grouped[Location.QUERY]) == ["page", "search"]
        assert list(grouped[Location.PATH]) == ["todo_id"]
        assert list(grouped[Location.HEADER]) == ["x-token"]

    def test_list_form_requires_names(self) -> None:
        with pytest.raises(MissingParameterNameError) as exc_info:
            classify_parameters([Query(int, name="page"), Query(int)])
        assert exc_info.value.context == {"position": 1}
        assert "must have a defined name" in exc_info.value.message

    def test_mapping_form_uses_keys(self) -> None:
        grouped = classify_parameters({"page": Query(int), "id": Path(int)})
        assert grouped[Location.QUERY]["page"].name == "page"
        assert grouped[Location.PATH]["id"].name == "id"

    def test_mapping_form_explicit_name_wins(self) -> None:
        grouped = classify_parameters({"token": Header(str, name="x-token")})
        assert list(grouped[Location.HEADER]) == ["x-token"]

    def test_empty(self) -> None:
        assert classify_parameters(None) == {}
        assert classify_parameters([]) == {}


@pytest.mark.unit
class TestEndpointSchema:
    def test_wraps_bare_declarations(self) -> None:
        schema = EndpointSchema(
            request_body={"title": str},
            responses={200: {"id": int}, "404": Response(description="Missing")},
        )
        assert isinstance(schema.request_body, RequestBody)
        assert list(schema.responses) == ["200", "404"]
        assert isinstance(schema.responses["200"], ResponseSpec)
        assert schema.responses["404"].description == "Missing"

    def test_compile_groups_parameters(self) -> None:
        compiled = compile_endpoint(
            EndpointSchema(parameters=[Path(int, name="id"), Query(str, name="q")])
        )
        assert list(compiled.location(Location.PATH)) == ["id"]
        assert compiled.location(Location.HEADER) == {}
        assert compiled.request_body is None
