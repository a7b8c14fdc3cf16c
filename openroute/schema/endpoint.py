"""Endpoint declarations and their compiled, request-ready form."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from openroute.schema.locations import GroupedParameters, classify_parameters
from openroute.schema.parameters import Location, Parameter, RequestBody, ResponseSpec


class EndpointSchema(BaseModel):
    """Everything declared about one endpoint.

    ``request_body`` and ``responses`` values may be given either as
    ``RequestBody``/``ResponseSpec`` instances or as bare type declarations,
    which are wrapped with the default content type.

    Examples:
        >>> schema = EndpointSchema(
        ...     operation_id="get_todo",
        ...     parameters=[Path(int, name="todo_id")],
        ...     responses={200: {"id": int, "title": str}},
        ... )
        >>> list(schema.responses)
        ['200']
    """

    model_config = ConfigDict(frozen=True)

    operation_id: str | None = None
    summary: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    deprecated: bool = False
    parameters: list[Parameter] | dict[str, Parameter] = Field(default_factory=list)
    request_body: RequestBody | None = None
    responses: dict[str, ResponseSpec] = Field(default_factory=dict)

    @field_validator("request_body", mode="before")
    @classmethod
    def wrap_request_body(cls, value: Any) -> Any:
        """Wrap a bare declaration into a JSON request body."""
        if value is None or isinstance(value, RequestBody):
            return value
        return RequestBody.declare(value)

    @field_validator("responses", mode="before")
    @classmethod
    def wrap_responses(cls, value: Any) -> Any:
        """Key responses by status string and wrap bare declarations."""
        if not value:
            return {}
        return {
            str(status): declared
            if isinstance(declared, ResponseSpec)
            else ResponseSpec.declare(declared)
            for status, declared in value.items()
        }


class CompiledEndpoint(BaseModel):
    """Request-ready view of an ``EndpointSchema``.

    Built once per endpoint class and shared, read-only, by every request.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: EndpointSchema
    parameters: GroupedParameters

    @property
    def request_body(self) -> RequestBody | None:
        return self.endpoint.request_body

    def location(self, location: Location) -> dict[str, Parameter]:
        """Return the parameters read from ``location``, in declaration order."""
        return self.parameters.get(location, {})


def compile_endpoint(endpoint: EndpointSchema) -> CompiledEndpoint:
    """Classify the parameters of ``endpoint``.

    Raises:
        MissingParameterNameError: If a list-form parameter has no name.
    """
    return CompiledEndpoint(
        endpoint=endpoint,
        parameters=classify_parameters(endpoint.parameters),
    )
