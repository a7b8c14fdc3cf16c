"""API-related constants."""

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Messages
INTERNAL_ERROR_MESSAGE = "An internal server error occurred"
HEALTH_PATH = "/health"
