"""Shared fixtures for unit tests."""

from collections.abc import Callable, Generator
from typing import Any

import orjson
import pytest
from starlette.requests import Request

from openroute.core.config import Settings, get_settings
from openroute.core.context import RequestContext

type RequestFactory = Callable[..., Request]


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Start and finish every test with a fresh settings cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Keep correlation ids from leaking between tests."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Provide Settings built from test environment variables.

    Returns:
        Settings: Settings object with test defaults.
    """
    monkeypatch.setenv("APP_NAME", "TestApp")
    monkeypatch.setenv("APP_VERSION", "1.0.0")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEBUG", "false")
    return Settings()


@pytest.fixture
def make_request() -> RequestFactory:
    """Build Starlette requests without a server.

    Usage:
        request = make_request("POST", "/todos", query="a=1", json={"x": 1})
    """

    def _make(
        method: str = "GET",
        path: str = "/",
        *,
        query: str = "",
        headers: dict[str, str] | None = None,
        path_params: dict[str, Any] | None = None,
        body: bytes = b"",
        json: Any = None,
    ) -> Request:
        raw_headers = {k.lower(): v for k, v in (headers or {}).items()}
        if json is not None:
            body = orjson.dumps(json)
            raw_headers.setdefault("content-type", "application/json")

        scope = {
            "type": "http",
            "http_version": "1.1",
            "method": method,
            "scheme": "http",
            "server": ("test", 80),
            "root_path": "",
            "path": path,
            "query_string": query.encode(),
            "headers": [(k.encode(), v.encode()) for k, v in raw_headers.items()],
            "path_params": path_params or {},
        }
        sent = False

        async def receive() -> dict[str, Any]:
            nonlocal sent
            if sent:
                return {"type": "http.disconnect"}
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(scope, receive)

    return _make
