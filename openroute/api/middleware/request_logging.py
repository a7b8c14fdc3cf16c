"""One log line per request, with its status and duration.

Requests outside ``LogConfig.excluded_paths`` log ``Request completed``
(or ``Request failed`` when an exception escapes, which is then re-raised).
Requests slower than ``slow_request_threshold_ms`` also log a warning. The
request id is taken from ``X-Request-ID`` or generated, and echoed back.
"""

import time

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from openroute.api.constants import REQUEST_ID_HEADER
from openroute.core.config import LogConfig
from openroute.core.constants import MILLISECONDS_PER_SECOND
from openroute.core.context import generate_request_id


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request.

    Args:
        app: The ASGI application.
        log_config: Excluded paths and slow request threshold.
    """

    def __init__(self, app: ASGIApp, *, log_config: LogConfig) -> None:
        super().__init__(app)
        self.excluded_paths = frozenset(log_config.excluded_paths)
        self.slow_threshold_ms = log_config.slow_request_threshold_ms

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.excluded_paths:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        started = time.perf_counter()

        with logger.contextualize(
            request_id=request_id, method=request.method, path=request.url.path
        ):
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.error(
                    "Request failed",
                    duration_ms=self._elapsed_ms(started),
                    error_type=type(exc).__name__,
                )
                raise

            duration_ms = self._elapsed_ms(started)
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            if duration_ms > self.slow_threshold_ms:
                logger.warning(
                    "Slow request detected",
                    duration_ms=duration_ms,
                    threshold_ms=self.slow_threshold_ms,
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.perf_counter() - started) * MILLISECONDS_PER_SECOND, 2)
