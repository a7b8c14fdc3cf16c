"""Settings of an openroute application.

Values come from environment variables, then a ``.env`` file, then the
defaults below. Nested sections use ``__``::

    ROUTER_CONFIG__BASE=/api
    ROUTER_CONFIG__RAISE_UNKNOWN_PARAMETERS=false
    LOG_CONFIG__LOG_LEVEL=DEBUG

``RouterConfig`` only holds defaults: ``RouterOptions.from_settings`` turns
it into the options an ``OpenAPIRouter`` is built with.
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

type FormatterType = Literal["console", "json"]


class LogConfig(BaseModel):
    """Log sink and request logging options."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum level written by the sink",
    )
    log_formatter_type: FormatterType | None = Field(
        default=None,
        description="console or json; chosen from the environment when unset",
    )
    excluded_paths: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="Request paths the request logging middleware ignores",
    )
    slow_request_threshold_ms: int = Field(
        default=1000,
        gt=0,
        description="Requests slower than this get an extra warning",
    )


class RouterConfig(BaseModel):
    """Defaults applied to every OpenAPIRouter built from settings."""

    base: str = Field(default="", description="Path prefix for every route")
    docs_url: str | None = Field(default="/docs", description="Swagger UI path")
    redoc_url: str | None = Field(default="/redocs", description="ReDoc path")
    openapi_url: str | None = Field(
        default="/openapi.json",
        description="OpenAPI document path; disabling it disables every doc route",
    )
    openapi_version: str = Field(default="3.0.2", description="OpenAPI version")
    raise_unknown_parameters: bool = Field(
        default=True,
        description="Reject request keys that are not declared in the schema",
    )
    generate_operation_ids: bool = Field(
        default=True,
        description="Derive operationId for endpoints that do not declare one",
    )

    @field_validator("docs_url", "redoc_url", "openapi_url", mode="before")
    @classmethod
    def disable_empty_url(cls, v: str | None) -> str | None:
        """An empty string (``ROUTER_CONFIG__DOCS_URL=``) disables the route."""
        return None if v == "" else v


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="openroute", description="OpenAPI info.title")
    app_version: str = Field(default="0.1.0", description="OpenAPI info.version")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment; error details are hidden in production",
    )
    debug: bool = Field(default=True, description="Uvicorn auto-reload and log diagnose")

    api_host: str = Field(default="127.0.0.1", description="Uvicorn bind host")
    api_port: int = Field(default=8000, description="Uvicorn port unless PORT is set")

    log_config: LogConfig = Field(default_factory=LogConfig)
    router_config: RouterConfig = Field(default_factory=RouterConfig)

    def model_post_init(self, __context: object) -> None:
        super().model_post_init(__context)
        if self.log_config.log_formatter_type is None:
            self.log_config.log_formatter_type = self._detect_formatter()

    def _detect_formatter(self) -> FormatterType:
        """JSON on Cloud Run and AWS or outside development, console otherwise."""
        if os.getenv("K_SERVICE") or os.getenv("AWS_EXECUTION_ENV"):
            return "json"
        return "console" if self.environment == "development" else "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
