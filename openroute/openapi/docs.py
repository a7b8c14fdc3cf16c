"""Documentation endpoints: OpenAPI JSON, Swagger UI, ReDoc and AI plugin manifest."""

from collections.abc import Callable
from typing import Any

from fastapi.openapi.docs import get_redoc_html, get_swagger_ui_html
from starlette.requests import Request
from starlette.responses import HTMLResponse, Response
from starlette.routing import Route

from openroute.openapi.plugin import AIPlugin, build_manifest
from openroute.routing.responses import ORJSONResponse

AI_PLUGIN_PATH = "/.well-known/ai-plugin.json"


def build_docs_routes(
    *,
    base: str,
    title: str,
    docs_url: str | None,
    redoc_url: str | None,
    openapi_url: str | None,
    get_schema: Callable[[], dict[str, Any]],
    ai_plugin: AIPlugin | None = None,
) -> list[Route]:
    """Create the documentation routes of a router.

    Every route lives under ``base``. The UIs and the plugin manifest need the
    OpenAPI document, so disabling ``openapi_url`` disables all of them.

    Args:
        base: Path prefix of the router.
        title: Page title of the UIs.
        docs_url: Swagger UI path, or None to disable it.
        redoc_url: ReDoc path, or None to disable it.
        openapi_url: OpenAPI JSON path, or None to disable every doc route.
        get_schema: Returns the current OpenAPI document.
        ai_plugin: Manifest served at ``/.well-known/ai-plugin.json``.

    Returns:
        list[Route]: Routes to mount on the router.
    """
    if openapi_url is None:
        return []

    schema_url = f"{base}{openapi_url}"

    async def openapi_json(request: Request) -> Response:
        return ORJSONResponse(get_schema())

    async def swagger_ui(request: Request) -> HTMLResponse:
        return get_swagger_ui_html(openapi_url=schema_url, title=f"{title} - Swagger UI")

    async def redoc_ui(request: Request) -> HTMLResponse:
        return get_redoc_html(openapi_url=schema_url, title=f"{title} - ReDoc")

    routes = [
        Route(f"{base}{openapi_url}", openapi_json, methods=["GET"], include_in_schema=False)
    ]
    if docs_url is not None:
        routes.append(
            Route(f"{base}{docs_url}", swagger_ui, methods=["GET"], include_in_schema=False)
        )
    if redoc_url is not None:
        routes.append(
            Route(f"{base}{redoc_url}", redoc_ui, methods=["GET"], include_in_schema=False)
        )

    if ai_plugin is not None:
        plugin = ai_plugin

        async def ai_plugin_manifest(request: Request) -> Response:
            return ORJSONResponse(
                build_manifest(plugin, schema_url, request.headers.get("host"))
            )

        routes.append(
            Route(
                f"{base}{AI_PLUGIN_PATH}",
                ai_plugin_manifest,
                methods=["GET"],
                include_in_schema=False,
            )
        )
    return routes
