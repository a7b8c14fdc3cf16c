"""Application factory wiring OpenAPI routers into a FastAPI application.

The FastAPI application only provides the ASGI shell: middleware, exception
handlers and the health endpoint. FastAPI's own documentation routes are
disabled; every ``OpenAPIRouter`` serves its own document, Swagger UI and
ReDoc pages.

Middleware run in reverse order of registration, so the request context
(correlation id) is set before request logging runs.
"""

from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from openroute.api.constants import HEALTH_PATH
from openroute.api.middleware.error_handler import register_exception_handlers
from openroute.api.middleware.request_context import RequestContextMiddleware
from openroute.api.middleware.request_logging import RequestLoggingMiddleware
from openroute.api.todos import TodoStore, build_todo_router
from openroute.core.config import Settings, get_settings
from openroute.core.logging import setup_logging
from openroute.routing.responses import ORJSONResponse
from openroute.routing.router import OpenAPIRouter, RouterOptions


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Log application startup and shutdown."""
    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )
    yield
    logger.info("Application shutdown complete")


def create_app(
    settings: Settings | None = None,
    routers: Sequence[OpenAPIRouter] | None = None,
) -> FastAPI:
    """Create and configure the application.

    Args:
        settings: Settings instance. Defaults to ``get_settings()``.
        routers: Routers to serve. Defaults to the ToDo example router built
            from the settings.

    Returns:
        FastAPI: Configured application.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    if routers is None:
        routers = [build_todo_router(RouterOptions.from_settings(settings))]

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    application.state.todos = TodoStore()

    register_exception_handlers(application)

    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)
    application.add_middleware(RequestContextMiddleware)

    @application.get(HEALTH_PATH)
    async def health() -> dict[str, object]:
        """Liveness probe."""
        return {"status": "healthy", "routes": len(application.router.routes)}

    for router in routers:
        application.router.routes.extend(router.routes)
        logger.info(
            "Mounted router with {} endpoints",
            len(router.api_routes),
            base=router.config.base or "/",
        )

    return application
