"""Shared fixtures for integration tests.

Every test gets a fresh application with its own in-memory ToDo store. Logging
setup is skipped so Loguru sinks registered by tests stay in place.
"""

from collections.abc import AsyncGenerator, Callable, Generator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from openroute.api.main import create_app
from openroute.core.config import Settings, get_settings
from openroute.core.context import RequestContext
from openroute.core.logging import _state

type AppFactory = Callable[..., FastAPI]


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture(autouse=True)
def skip_logging_setup() -> Generator[None]:
    previous = _state.configured
    _state.configured = True
    yield
    _state.configured = previous


@pytest.fixture
def test_settings() -> Settings:
    """Settings with debug off so unhandled errors reach the exception handlers."""
    return Settings(environment="development", debug=False)


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client talking to the application in process."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as test_client:
        yield test_client
