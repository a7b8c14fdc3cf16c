"""Router that registers endpoints and documents them in one step.

``OpenAPIRouter`` wraps a Starlette ``Router``. Registering an endpoint with
``get``/``post``/... both adds the Starlette route and records the rendered
OpenAPI operation under the route's path, so the document served at
``openapi_url`` always lists exactly the registered endpoints.

Examples:
    >>> router = OpenAPIRouter(RouterOptions(base="/api"))
    >>> handle = router.get("/todos/:todo_id", GetTodo)
    >>> handle.path
    '/api/todos/{todo_id}'
"""

import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Self

from loguru import logger
from pydantic import BaseModel, Field
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import BaseRoute, Route, Router
from starlette.types import Receive, Scope, Send

from openroute.core.config import Settings
from openroute.core.constants import DEFAULT_OPENAPI_TITLE, DEFAULT_OPENAPI_VERSION
from openroute.core.exceptions import MissingOperationIdError
from openroute.openapi.docs import build_docs_routes
from openroute.openapi.plugin import AIPlugin
from openroute.openapi.renderer import (
    derive_operation_id,
    render_operation,
    to_openapi_path,
    to_route_path,
)
from openroute.routing.route import OpenAPIRoute
from openroute.schema.endpoint import EndpointSchema, compile_endpoint
from openroute.schema.parameters import Path

type Endpoint = Callable[[Request], Awaitable[Response]]
type Handler = type[OpenAPIRoute] | Endpoint

_ROUTE_PARAMETER = re.compile(r"\{(\w+)(?::\w+)?\}")


class RouterOptions(BaseModel):
    """Options of an ``OpenAPIRouter``.

    Attributes:
        base: Path prefix of every route, documentation routes included.
        title: ``info.title`` of the document.
        version: ``info.version`` of the document.
        docs_url: Swagger UI path; None disables it.
        redoc_url: ReDoc path; None disables it.
        openapi_url: OpenAPI JSON path; None disables every doc route.
        openapi_version: ``openapi`` field of the document.
        raise_unknown_parameters: Strict mode for every registered endpoint.
        generate_operation_ids: Derive missing operation ids instead of failing.
        openapi_extra: Extra top-level document keys (``servers``, ``info``...).
        ai_plugin: Manifest served at ``/.well-known/ai-plugin.json``.
    """

    base: str = ""
    title: str = DEFAULT_OPENAPI_TITLE
    version: str = DEFAULT_OPENAPI_VERSION
    docs_url: str | None = "/docs"
    redoc_url: str | None = "/redocs"
    openapi_url: str | None = "/openapi.json"
    openapi_version: str = "3.0.2"
    raise_unknown_parameters: bool = True
    generate_operation_ids: bool = True
    openapi_extra: dict[str, Any] = Field(default_factory=dict)
    ai_plugin: AIPlugin | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> Self:
        """Build options from application settings.

        Args:
            settings: Application settings; ``router_config`` supplies the
                defaults, ``app_name`` and ``app_version`` the document info.
            **overrides: Options taking precedence over the settings.

        Returns:
            RouterOptions: The merged options.
        """
        values: dict[str, Any] = {
            "title": settings.app_name,
            "version": settings.app_version,
            **settings.router_config.model_dump(),
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class RouteHandle:
    """A registered endpoint."""

    method: str
    path: str
    operation_id: str
    handler: Handler


class OpenAPIRouter:
    """ASGI router documenting every endpoint it registers.

    Args:
        options: Router options. Defaults to ``RouterOptions()``.
    """

    def __init__(self, options: RouterOptions | None = None) -> None:
        self.config = options or RouterOptions()
        self._paths: dict[str, dict[str, Any]] = {}
        self._api_routes: list[Route] = []
        self._router = Router(
            routes=build_docs_routes(
                base=self.config.base,
                title=self.config.title,
                docs_url=self.config.docs_url,
                redoc_url=self.config.redoc_url,
                openapi_url=self.config.openapi_url,
                get_schema=lambda: self.schema,
                ai_plugin=self.config.ai_plugin,
            )
        )

    @property
    def schema(self) -> dict[str, Any]:
        """The OpenAPI document of every registered endpoint."""
        document: dict[str, Any] = {
            "openapi": self.config.openapi_version,
            "info": {"title": self.config.title, "version": self.config.version},
        }
        document.update(self.config.openapi_extra)
        document["paths"] = self._paths
        return document

    @property
    def routes(self) -> list[BaseRoute]:
        return self._router.routes

    @property
    def api_routes(self) -> list[Route]:
        """Registered endpoint routes, without the documentation routes."""
        return list(self._api_routes)

    def get(self, path: str, handler: Handler, *, name: str | None = None) -> RouteHandle:
        return self.add_route("get", path, handler, name=name)

    def post(self, path: str, handler: Handler, *, name: str | None = None) -> RouteHandle:
        return self.add_route("post", path, handler, name=name)

    def put(self, path: str, handler: Handler, *, name: str | None = None) -> RouteHandle:
        return self.add_route("put", path, handler, name=name)

    def patch(self, path: str, handler: Handler, *, name: str | None = None) -> RouteHandle:
        return self.add_route("patch", path, handler, name=name)

    def delete(self, path: str, handler: Handler, *, name: str | None = None) -> RouteHandle:
        return self.add_route("delete", path, handler, name=name)

    def head(self, path: str, handler: Handler, *, name: str | None = None) -> RouteHandle:
        return self.add_route("head", path, handler, name=name)

    def options(self, path: str, handler: Handler, *, name: str | None = None) -> RouteHandle:
        return self.add_route("options", path, handler, name=name)

    def _full_path(self, path: str) -> str:
        route_path = to_route_path(path)
        if self.config.base and route_path == "/":
            return self.config.base
        return f"{self.config.base}{route_path}"

    def add_route(
        self,
        method: str,
        path: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> RouteHandle:
        """Register ``handler`` for ``method`` on ``path`` and document it.

        ``handler`` is either an ``OpenAPIRoute`` subclass or a plain
        ``async def endpoint(request)``. Plain endpoints are documented with
        their path parameters as strings and always get a derived
        operation id.

        Args:
            method: Lower-case HTTP method.
            path: Route path; ``:name`` and ``{name}`` parameters are accepted.
            handler: Endpoint class or function.
            name: Starlette route name. Defaults to the operation id.

        Returns:
            RouteHandle: The registered endpoint.

        Raises:
            MissingOperationIdError: If operation id generation is disabled and
                an endpoint class declares none.
            UnsupportedTypeError: If the endpoint declaration is invalid.
        """
        method = method.lower()
        route_path = self._full_path(path)
        handler_name = getattr(handler, "__name__", None)

        if isinstance(handler, type) and issubclass(handler, OpenAPIRoute):
            compiled = handler.compiled()
            operation_id = compiled.endpoint.operation_id
            if operation_id is None:
                if not self.config.generate_operation_ids:
                    raise MissingOperationIdError(path, method)
                operation_id = derive_operation_id(method, path, handler_name)
            endpoint = self._class_endpoint(handler)
        else:
            compiled = compile_endpoint(
                EndpointSchema(
                    parameters=[
                        Path(str, name=parameter)
                        for parameter in _ROUTE_PARAMETER.findall(route_path)
                    ]
                )
            )
            operation_id = derive_operation_id(method, path, handler_name)
            endpoint = handler

        openapi_path = to_openapi_path(route_path)
        self._paths.setdefault(openapi_path, {})[method] = render_operation(
            compiled, operation_id
        )

        route = Route(
            route_path,
            endpoint,
            methods=[method.upper()],
            name=name or operation_id,
        )
        self._api_routes.append(route)
        self._router.routes.append(route)

        logger.debug(
            "Registered {} {}",
            method.upper(),
            openapi_path,
            operation_id=operation_id,
        )
        return RouteHandle(
            method=method, path=openapi_path, operation_id=operation_id, handler=handler
        )

    def _class_endpoint(self, handler: type[OpenAPIRoute]) -> Endpoint:
        raise_unknown_parameters = self.config.raise_unknown_parameters

        async def endpoint(request: Request) -> Response:
            route = handler(raise_unknown_parameters=raise_unknown_parameters)
            return await route.execute(request)

        endpoint.__name__ = handler.__name__
        return endpoint

    def include_router(self, other: "OpenAPIRouter", prefix: str = "") -> None:
        """Merge the endpoints and documented paths of ``other`` under ``prefix``.

        Documentation routes of ``other`` are not mounted.
        """
        prefix = f"{self.config.base}{to_route_path(prefix) if prefix else ''}"
        for path, operations in other.schema["paths"].items():
            self._paths.setdefault(f"{prefix}{path}", {}).update(operations)

        for route in other.api_routes:
            merged = Route(
                f"{prefix}{route.path}",
                route.endpoint,
                methods=sorted(route.methods or ()),
                name=route.name,
            )
            self._api_routes.append(merged)
            self._router.routes.append(merged)

        logger.debug(
            "Included {} routes under '{}'", len(other.api_routes), prefix or "/"
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self._router(scope, receive, send)
