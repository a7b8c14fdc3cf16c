"""Application-level exception handlers.

Routes answer their own validation failures. These handlers cover what
escapes a route:

- ``ValidationError``: the same 400 envelope routes use, for handlers that
  call ``ValidationOutcome.raise_for_errors()`` themselves
- ``BodyParseError``: 400 ``ErrorResponse``
- other ``OpenRouteError``: ``UnsupportedLocationError`` maps to 501,
  definition errors to 500
- ``HTTPException``: its own status code
- anything else: 500, details hidden in production
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from openroute.api.constants import INTERNAL_ERROR_MESSAGE
from openroute.api.schemas.errors import ErrorResponse, ServiceInfo
from openroute.core.config import Settings, get_settings
from openroute.core.context import RequestContext, generate_request_id
from openroute.core.exceptions import (
    BodyParseError,
    ErrorCode,
    OpenRouteError,
    Severity,
    UnsupportedLocationError,
    ValidationError,
)
from openroute.routing.responses import ORJSONResponse


def get_service_info(settings: Settings) -> ServiceInfo:
    return ServiceInfo(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


def _error_response(
    status_code: int,
    *,
    error_code: str,
    message: str,
    severity: str,
    details: dict[str, Any] | None = None,
    debug_info: dict[str, Any] | None = None,
) -> Response:
    settings = get_settings()
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        correlation_id=RequestContext.get_correlation_id(),
        request_id=generate_request_id(),
        severity=severity,
        service_info=get_service_info(settings),
        debug_info=debug_info if settings.environment == "development" else None,
    )
    return ORJSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _status_for(exc: OpenRouteError) -> int:
    if isinstance(exc, ValidationError | BodyParseError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, UnsupportedLocationError):
        return status.HTTP_501_NOT_IMPLEMENTED
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def openroute_error_handler(request: Request, exc: Exception) -> Response:
    """Handle every ``OpenRouteError``.

    Args:
        request: The request that caused the exception.
        exc: The OpenRouteError to handle.

    Returns:
        Response: The 400 validation envelope for ``ValidationError``,
            an ``ErrorResponse`` otherwise.

    Raises:
        TypeError: If exc is not an OpenRouteError instance.
    """
    if not isinstance(exc, OpenRouteError):
        raise TypeError(f"Expected OpenRouteError, got {type(exc).__name__}")

    log = logger.warning if exc.is_expected else logger.error
    log(
        "Handling {}: {}",
        type(exc).__name__,
        exc.message,
        error_code=exc.error_code,
        fingerprint=exc.fingerprint,
        request_method=request.method,
        request_path=request.url.path,
    )

    if isinstance(exc, ValidationError):
        return ORJSONResponse(
            {"errors": exc.errors, "success": False, "result": {}},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    debug_info: dict[str, Any] = {
        "stack_trace": exc.stack_trace,
        "exception_type": type(exc).__name__,
    }
    if exc.cause:
        debug_info["cause"] = {
            "type": type(exc.cause).__name__,
            "message": str(exc.cause),
        }

    return _error_response(
        _status_for(exc),
        error_code=exc.error_code,
        message=exc.message,
        severity=exc.severity.value,
        details=exc.context or None,
        debug_info=debug_info,
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette ``HTTPException`` (404 and 405 from the router included).

    Raises:
        TypeError: If exc is not an HTTPException instance.
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    logger.warning(
        "HTTP exception",
        status=exc.status_code,
        detail=exc.detail,
        request_method=request.method,
        request_path=request.url.path,
    )

    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error_code, severity = ErrorCode.NOT_FOUND, Severity.LOW
    elif exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        error_code, severity = ErrorCode.HTTP_ERROR, Severity.HIGH
    else:
        error_code, severity = ErrorCode.HTTP_ERROR, Severity.MEDIUM

    response = _error_response(
        exc.status_code,
        error_code=error_code.value,
        message=str(exc.detail),
        severity=severity.value,
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected exceptions. Details are hidden in production."""
    logger.exception(
        "Unhandled exception: {}",
        type(exc).__name__,
        request_method=request.method,
        request_path=request.url.path,
    )

    if get_settings().environment == "production":
        message = INTERNAL_ERROR_MESSAGE
        details = None
    else:
        message = f"Internal server error: {type(exc).__name__}"
        details = {"error": str(exc), "type": type(exc).__name__}

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code=ErrorCode.INTERNAL_ERROR.value,
        message=message,
        severity=Severity.CRITICAL.value,
        details=details,
        debug_info={
            "stack_trace": traceback.format_tb(exc.__traceback__),
            "exception_type": type(exc).__name__,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on ``app``."""
    app.add_exception_handler(OpenRouteError, openroute_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
