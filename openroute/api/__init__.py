"""Example HTTP application built on openroute.

Key components:
- **main**: Application factory wiring routers, middleware and handlers
- **todos**: In-memory ToDo endpoints declared with ``OpenAPIRoute``
- **middleware**: Correlation ids, request logging and exception handlers
- **schemas**: Error response models

FastAPI provides the ASGI shell; routing, validation and documentation of
the endpoints come from ``openroute.routing`` and ``openroute.openapi``.
"""
