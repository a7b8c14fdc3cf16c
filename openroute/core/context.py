"""Request-scoped context shared by middleware, handlers and error responses."""

import uuid
from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class RequestContext:
    """Async-safe access to the correlation id of the current request.

    The id is set by ``RequestContextMiddleware`` and read by the exception
    handlers so error responses can be matched with their log lines.
    """

    @staticmethod
    def set_correlation_id(correlation_id: str) -> None:
        _correlation_id_var.set(correlation_id)

    @staticmethod
    def get_correlation_id() -> str | None:
        """Return the correlation id of the current request, if any."""
        return _correlation_id_var.get()

    @staticmethod
    def clear() -> None:
        _correlation_id_var.set(None)


def generate_correlation_id() -> str:
    """Generate a correlation id (UUID4 string).

    Examples:
        >>> len(generate_correlation_id())
        36
    """
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """Generate a request id, ``req-`` followed by a UUID4.

    Examples:
        >>> generate_request_id().startswith("req-")
        True
    """
    return f"req-{uuid.uuid4()}"
