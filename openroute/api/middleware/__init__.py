"""Middleware and exception handlers shared by every endpoint.

- **RequestContextMiddleware**: Correlation id in context and on responses
- **RequestLoggingMiddleware**: One log line per request with its duration
- **error_handler**: Exception handlers producing consistent error bodies

The request context middleware is the outermost one, so request logs and
error responses carry the correlation id.
"""
