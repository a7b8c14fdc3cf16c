"""Error response schemas returned by the application's exception handlers.

Request validation failures inside an ``OpenAPIRoute`` never use these models:
they are answered with the route's own 400 envelope
(``{"errors": ..., "success": false, "result": {}}``). ``ErrorResponse`` covers
everything that escapes a route: malformed JSON bodies, HTTP exceptions,
definition errors surfacing at request time and unexpected failures.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceInfo(BaseModel):
    """Identification of the service that produced the error."""

    name: str = Field(..., description="Name of the service", examples=["openroute"])
    version: str = Field(..., description="Version of the service", examples=["0.1.0"])
    environment: str = Field(
        ...,
        description="Environment where the service is running",
        examples=["development", "production"],
    )


class ErrorResponse(BaseModel):
    """Standard error body for errors handled at application level."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error_code": "BODY_PARSE_ERROR",
                    "message": "Malformed JSON body: unexpected character",
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "req-660e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2026-01-14T12:00:00+00:00",
                    "severity": "LOW",
                    "service_info": {
                        "name": "openroute",
                        "version": "0.1.0",
                        "environment": "production",
                    },
                },
            ]
        }
    )

    error_code: str = Field(
        ...,
        description="Unique error code identifying the error type",
        examples=["BODY_PARSE_ERROR", "VALIDATION_ERROR", "NOT_FOUND"],
    )
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details, such as the validation report",
    )
    correlation_id: str | None = Field(
        default=None, description="Request correlation ID for tracing"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the error occurred (with timezone)",
    )
    severity: str | None = Field(default=None, description="Error severity level")
    service_info: ServiceInfo | None = Field(
        default=None, description="Service that generated the error"
    )
    request_id: str | None = Field(default=None, description="Unique request identifier")
    debug_info: dict[str, Any] | None = Field(
        default=None,
        description="Debug information (only populated in development environments)",
    )
