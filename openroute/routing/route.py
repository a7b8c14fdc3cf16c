"""Base class for endpoints declared with an ``EndpointSchema``.

Subclasses declare ``schema`` once and implement ``handle``::

    class GetTodo(OpenAPIRoute):
        schema = EndpointSchema(
            summary="Get a single ToDo",
            parameters={"todo_id": Path(int)},
            responses={200: {"id": int, "title": str}},
        )

        async def handle(self, request, data):
            return {"id": data["path"]["todo_id"], "title": "..."}

``handle`` only ever runs with validated data. Invalid requests get a 400
response without reaching it.
"""

from typing import Any, ClassVar

from fastapi import status
from loguru import logger
from starlette.requests import Request
from starlette.responses import Response

from openroute.core.types import ErrorReport, ValidatedData
from openroute.routing.responses import ORJSONResponse
from openroute.routing.validation import ValidationOutcome, validate_request
from openroute.schema.endpoint import CompiledEndpoint, EndpointSchema, compile_endpoint

type HandlerResult = Response | dict[str, Any] | list[Any]

_COMPILED_ATTR = "_compiled_endpoint"


class OpenAPIRoute:
    """An endpoint whose inputs are validated against its declared schema.

    Attributes:
        schema: Endpoint declaration. A plain dict is accepted and validated
            into an ``EndpointSchema`` on first use.
        raise_unknown_parameters: Reject undeclared top-level keys.
    """

    schema: ClassVar[EndpointSchema | dict[str, Any]] = EndpointSchema()

    def __init__(self, *, raise_unknown_parameters: bool = True) -> None:
        self.raise_unknown_parameters = raise_unknown_parameters

    @classmethod
    def get_schema(cls) -> EndpointSchema:
        return cls.compiled().endpoint

    @classmethod
    def compiled(cls) -> CompiledEndpoint:
        """Return the compiled declaration, built once per class.

        Raises:
            UnsupportedTypeError: If a declaration cannot be normalized.
            MissingParameterNameError: If a list-form parameter has no name.
        """
        cached = cls.__dict__.get(_COMPILED_ATTR)
        if cached is None:
            declared = cls.schema
            endpoint = (
                declared
                if isinstance(declared, EndpointSchema)
                else EndpointSchema.model_validate(declared)
            )
            cached = compile_endpoint(endpoint)
            setattr(cls, _COMPILED_ATTR, cached)
        return cached

    async def validate_request(self, request: Request) -> ValidationOutcome:
        return await validate_request(
            self.compiled(),
            request,
            raise_unknown_parameters=self.raise_unknown_parameters,
        )

    def handle_validation_error(self, errors: ErrorReport) -> Response:
        """Build the 400 response returned for invalid requests."""
        return ORJSONResponse(
            {"errors": errors, "success": False, "result": {}},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    async def execute(self, request: Request) -> Response:
        """Validate ``request`` and run ``handle`` with the validated data.

        Dict and list results are JSON-encoded; responses pass through.

        Raises:
            BodyParseError: If the JSON body is malformed. Left to the
                application's exception handlers.
        """
        outcome = await self.validate_request(request)
        if not outcome.success:
            return self.handle_validation_error(outcome.errors)

        result = await self.handle(request, outcome.data)
        if isinstance(result, Response):
            return result
        return ORJSONResponse(result)

    async def handle(self, request: Request, data: ValidatedData) -> HandlerResult:
        logger.error("{} does not implement handle()", type(self).__name__)
        raise NotImplementedError
