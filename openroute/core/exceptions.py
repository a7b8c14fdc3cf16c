"""Errors raised while declaring endpoints and while validating requests.

Two families, propagated differently:

- **Definition-time errors** (``UnsupportedTypeError``,
  ``MissingParameterNameError``, ``MissingOperationIdError``): a broken
  endpoint declaration. They abort route registration.
- **Request-time errors** (``ValidationError``, ``BodyParseError``,
  ``UnsupportedLocationError``): one bad request. Routes answer validation
  failures themselves; the rest reach the application's exception handlers.

Every error carries an ``ErrorCode`` value, a ``Severity`` and a fingerprint
grouping errors raised from the same place.
"""

import hashlib
import traceback
from enum import Enum
from typing import Any

FINGERPRINT_FRAMES = 5


class ErrorCode(Enum):
    """Codes reported as ``error_code`` in logs and error responses."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """Unhandled exception outside openroute."""

    # Definition errors
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    """A type declaration could not be resolved into a field schema."""

    MISSING_PARAMETER_NAME = "MISSING_PARAMETER_NAME"
    """A parameter declared in list form has no explicit name."""

    UNSUPPORTED_LOCATION = "UNSUPPORTED_LOCATION"
    """A parameter was declared in a request location that is not supported."""

    MISSING_OPERATION_ID = "MISSING_OPERATION_ID"
    """An endpoint has no operation id while id generation is disabled."""

    # Request errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Request parameters or body failed validation."""

    BODY_PARSE_ERROR = "BODY_PARSE_ERROR"
    """The request body could not be parsed as JSON."""

    NOT_FOUND = "NOT_FOUND"
    """No route or resource matches the request."""

    HTTP_ERROR = "HTTP_ERROR"
    """An HTTP exception raised by the framework or a handler."""


class Severity(Enum):
    """How bad an error is. LOW and MEDIUM are logged as warnings."""

    LOW = "LOW"
    """Bad client input."""

    MEDIUM = "MEDIUM"
    """Default for errors without a more specific level."""

    HIGH = "HIGH"
    """Broken endpoint declarations and unsupported features."""

    CRITICAL = "CRITICAL"
    """Unhandled exceptions."""


class OpenRouteError(Exception):
    """Base class of every openroute error.

    Args:
        error_code: ``ErrorCode`` member or a custom code string
        message: Human-readable message
        severity: Defaults to MEDIUM
        context: Values identifying what failed (route, position, location...)
        cause: Exception this error was raised from
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code.value if isinstance(error_code, ErrorCode) else error_code
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause
        if cause:
            self.__cause__ = cause

        self.stack_trace = traceback.format_stack()[:-1]
        self.fingerprint = self._generate_fingerprint()

    def _generate_fingerprint(self) -> str:
        """Hash the error type with the innermost openroute frames.

        The same broken declaration always yields the same fingerprint, so
        repeated failures group together in logs.
        """
        parts = [type(self).__name__, self.error_code]
        for frame in self.stack_trace[-FINGERPRINT_FRAMES:]:
            if "site-packages" not in frame and "openroute/" in frame:
                parts.append(frame.strip().split("\n")[0])
        return hashlib.sha256(":".join(parts).encode()).hexdigest()[:16]

    @property
    def is_expected(self) -> bool:
        """LOW and MEDIUM errors are part of normal operation."""
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        context = f", context={self.context}" if self.context else ""
        return (
            f"{type(self).__name__}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context})"
        )


class UnsupportedTypeError(OpenRouteError):
    """Raised when a type declaration cannot be normalized.

    Args:
        value: The offending declaration
        message: Optional override of the default message
    """

    def __init__(self, value: object, message: str | None = None) -> None:
        super().__init__(
            ErrorCode.UNSUPPORTED_TYPE,
            message or f"{value!r} not implemented",
            Severity.HIGH,
            {"declaration": repr(value)},
        )
        self.value = value


class MissingParameterNameError(OpenRouteError):
    """Raised when a list of parameters contains one without a name."""

    def __init__(self, position: int) -> None:
        super().__init__(
            ErrorCode.MISSING_PARAMETER_NAME,
            "Parameter must have a defined name when using as Array",
            Severity.HIGH,
            {"position": position},
        )


class UnsupportedLocationError(OpenRouteError, NotImplementedError):
    """Raised when a value is read from a location that is not implemented."""

    def __init__(self, location: str) -> None:
        super().__init__(
            ErrorCode.UNSUPPORTED_LOCATION,
            f"{location.capitalize()} parameters not implemented yet",
            Severity.HIGH,
            {"location": location},
        )
        self.location = location


class MissingOperationIdError(OpenRouteError):
    """Raised when operation id generation is disabled and a route has none."""

    def __init__(self, route: str, method: str) -> None:
        super().__init__(
            ErrorCode.MISSING_OPERATION_ID,
            f"Route {route} don't have operationId set!",
            Severity.HIGH,
            {"route": route, "method": method},
        )
        self.route = route


class ValidationError(OpenRouteError):
    """Raised when request parameters or body fail validation.

    Args:
        errors: Flattened error report (form_errors and field_errors)
        message: Description of the validation failure
    """

    def __init__(
        self,
        errors: dict[str, Any],
        message: str = "Request validation failed",
    ) -> None:
        super().__init__(ErrorCode.VALIDATION_ERROR, message, Severity.LOW, errors)
        self.errors = errors


class BodyParseError(OpenRouteError):
    """Raised when a request body that should be JSON cannot be decoded."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(
            ErrorCode.BODY_PARSE_ERROR,
            message,
            Severity.LOW,
            cause=cause,
        )
