"""Unit tests for the application factory."""

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from pytest_mock import MockerFixture

from openroute.api.main import create_app
from openroute.api.todos import TodoStore
from openroute.core.config import Settings
from openroute.core.logging import _state
from openroute.routing.router import OpenAPIRouter, RouterOptions


@pytest.fixture(autouse=True)
def quiet_logging() -> Generator[None]:
    """Skip logging setup so the factory does not replace test sinks."""
    previous = _state.configured
    _state.configured = True
    yield
    _state.configured = previous


@pytest.mark.unit
class TestCreateApp:
    def test_uses_settings(self) -> None:
        app = create_app(Settings(app_name="todo-api", app_version="2.0.0"))
        assert isinstance(app, FastAPI)
        assert app.title == "todo-api"
        assert app.version == "2.0.0"
        assert isinstance(app.state.todos, TodoStore)

    def test_framework_docs_disabled(self) -> None:
        app = create_app(Settings())
        assert app.docs_url is None
        assert app.redoc_url is None
        assert app.openapi_url is None

    def test_default_router_mounted(self) -> None:
        paths = {getattr(route, "path", None) for route in create_app(Settings()).routes}
        assert {"/todos", "/todos/{todo_id}", "/openapi.json", "/docs", "/redocs"} <= paths
        assert "/health" in paths

    def test_custom_routers(self) -> None:
        router = OpenAPIRouter(RouterOptions(base="/v2", docs_url=None))
        app = create_app(Settings(), routers=[router])
        paths = {getattr(route, "path", None) for route in app.routes}
        assert "/v2/openapi.json" in paths
        assert "/v2/docs" not in paths
        assert "/todos" not in paths

    def test_router_base_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROUTER_CONFIG__BASE", "/api")
        paths = {getattr(route, "path", None) for route in create_app().routes}
        assert "/api/todos" in paths

    def test_logging_configured_by_factory(self, mocker: MockerFixture) -> None:
        setup = mocker.patch("openroute.api.main.setup_logging")
        settings = Settings()
        create_app(settings)
        setup.assert_called_once_with(settings)
