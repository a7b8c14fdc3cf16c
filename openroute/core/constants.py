"""Core constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Content types
JSON_CONTENT_TYPE = "application/json"

# Documentation defaults
DEFAULT_RESPONSE_DESCRIPTION = "Successful Response"
DEFAULT_OPENAPI_TITLE = "OpenAPI"
DEFAULT_OPENAPI_VERSION = "1.0"

# Validation envelope messages
FIELD_REQUIRED_MESSAGE = "Field required"
EXTRA_FORBIDDEN_MESSAGE = "Extra inputs are not permitted"
