"""Single-pass request validation against a compiled endpoint.

The raw request is assembled into one envelope, ``{location: {name: raw},
"body": parsed_json}``, and walked once against the declared schemas. Every
issue is collected, so a request with three bad fields gets three errors
back, each keyed by its dotted path (``query.limit``, ``body.address.zip``,
``query.tags.1``).

Strict mode (``raise_unknown_parameters``) reports keys that are not
declared at the top levels of the envelope: the envelope itself, each
location group and the body root object. Nested objects always drop
unknown keys.
"""

from typing import Any, Final, cast

import orjson
from loguru import logger
from pydantic import BaseModel, Field
from starlette.requests import Request

from openroute.core.constants import (
    EXTRA_FORBIDDEN_MESSAGE,
    FIELD_REQUIRED_MESSAGE,
    JSON_CONTENT_TYPE,
)
from openroute.core.exceptions import BodyParseError, ValidationError
from openroute.core.types import ErrorReport, ValidatedData
from openroute.routing.extractor import extract_parameter, parse_query_string
from openroute.schema.coercion import coerce_leaf
from openroute.schema.endpoint import CompiledEndpoint
from openroute.schema.fields import FieldKind, FieldSchema

BODY_KEY: Final[str] = "body"
OBJECT_EXPECTED_MESSAGE: Final[str] = "Input should be a valid dictionary or object"

# Sentinel for "no value produced", distinct from a validated None
_MISSING: Final = object()


class ValidationOutcome(BaseModel):
    """Result of validating one request.

    Attributes:
        data: Coerced values keyed by location then field name. Empty on failure.
        errors: ``{"form_errors": [...], "field_errors": {path: [messages]}}``.
            Empty on success.
    """

    data: ValidatedData = Field(default_factory=dict)
    errors: ErrorReport = Field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise ``ValidationError`` carrying the report if validation failed."""
        if not self.success:
            raise ValidationError(self.errors)


class _ErrorCollector:
    def __init__(self) -> None:
        self.form_errors: list[str] = []
        self.field_errors: dict[str, list[str]] = {}

    def add(self, path: str, message: str) -> None:
        if not path:
            self.form_errors.append(message)
            return
        self.field_errors.setdefault(path, []).append(message)

    def extend(self, path: str, messages: list[str]) -> None:
        for message in messages:
            self.add(path, message)

    def __bool__(self) -> bool:
        return bool(self.form_errors or self.field_errors)

    def report(self) -> ErrorReport:
        return {"form_errors": self.form_errors, "field_errors": self.field_errors}


def _join(path: str, key: str | int) -> str:
    return f"{path}.{key}" if path else str(key)


def validate_value(
    field: FieldSchema, value: Any, path: str, errors: _ErrorCollector
) -> Any:
    """Coerce ``value`` against ``field``, recording problems under ``path``.

    ``None`` counts as absent: the default is used when declared, otherwise a
    required field reports "Field required" and an optional one is omitted.

    Returns:
        The coerced value, or ``_MISSING`` when nothing should be output.
    """
    if value is None:
        if field.has_default:
            return field.default
        if field.required:
            errors.add(path, FIELD_REQUIRED_MESSAGE)
        return _MISSING

    if field.kind is FieldKind.ARRAY:
        # A lone query value is a one-element array
        items = value if isinstance(value, list) else [value]
        element = cast("FieldSchema", field.element)
        coerced = []
        for index, item in enumerate(items):
            result = validate_value(element, item, _join(path, index), errors)
            if result is not _MISSING:
                coerced.append(result)
        return coerced

    if field.kind is FieldKind.OBJECT:
        if not isinstance(value, dict):
            errors.add(path, OBJECT_EXPECTED_MESSAGE)
            return _MISSING
        return validate_object(field.fields or {}, value, path, errors, strict=False)

    result = coerce_leaf(field, value)
    if not result.ok:
        errors.extend(path, result.errors)
        return _MISSING
    return result.value


def validate_object(
    fields: dict[str, FieldSchema],
    raw: dict[str, Any],
    path: str,
    errors: _ErrorCollector,
    *,
    strict: bool,
) -> dict[str, Any]:
    """Validate every declared field of an object, then its unknown keys."""
    output: dict[str, Any] = {}
    for name, child in fields.items():
        result = validate_value(child, raw.get(name), _join(path, name), errors)
        if result is not _MISSING:
            output[name] = result

    if strict:
        for key in raw:
            if key not in fields:
                errors.add(_join(path, key), EXTRA_FORBIDDEN_MESSAGE)
    return output


def _is_json(content_type: str | None) -> bool:
    if not content_type:
        return True
    return content_type.split(";", 1)[0].strip().lower() == JSON_CONTENT_TYPE


async def read_json_body(request: Request) -> Any:
    """Read and decode the request body, or None when it is empty.

    Raises:
        BodyParseError: If the body is not valid JSON.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise BodyParseError(f"Malformed JSON body: {exc}", cause=exc) from exc


def should_parse_body(compiled: CompiledEndpoint, request: Request) -> bool:
    """A declared JSON body is read for every method except GET.

    Only the declared content type counts. The request's ``Content-Type``
    header is ignored, so a mislabelled body is still validated.
    """
    body = compiled.request_body
    if body is None or request.method.lower() == "get":
        return False
    return _is_json(body.content_type)


async def validate_request(
    compiled: CompiledEndpoint,
    request: Request,
    *,
    raise_unknown_parameters: bool = True,
) -> ValidationOutcome:
    """Extract, coerce and validate every declared input of ``request``.

    Args:
        compiled: Compiled endpoint declaration.
        request: Incoming Starlette request.
        raise_unknown_parameters: Report undeclared top-level keys instead of
            dropping them.

    Returns:
        ValidationOutcome: Coerced data on success, the error report otherwise.

    Raises:
        BodyParseError: If a JSON body was expected and could not be decoded.
        UnsupportedLocationError: If the endpoint declares cookie parameters.
    """
    query = parse_query_string(str(request.url))
    errors = _ErrorCollector()
    data: ValidatedData = {}

    for location, parameters in compiled.parameters.items():
        raw = {
            name: extract_parameter(request, query, location, name)
            for name in parameters
        }
        fields = {name: p.field_schema for name, p in parameters.items()}
        data[location.value] = validate_object(
            fields, raw, location.value, errors, strict=raise_unknown_parameters
        )

    if should_parse_body(compiled, request):
        body_schema = compiled.request_body.field_schema  # type: ignore[union-attr]
        raw_body = await read_json_body(request)
        if body_schema.kind is FieldKind.OBJECT and isinstance(raw_body, dict):
            result: Any = validate_object(
                body_schema.fields or {},
                raw_body,
                BODY_KEY,
                errors,
                strict=raise_unknown_parameters,
            )
        else:
            result = validate_value(body_schema, raw_body, BODY_KEY, errors)
        if result is not _MISSING:
            data[BODY_KEY] = result

    if errors:
        logger.info(
            "Request validation failed for {} {}",
            request.method,
            request.url.path,
            field_paths=sorted(errors.field_errors),
        )
        return ValidationOutcome(errors=errors.report())

    return ValidationOutcome(data=data)
