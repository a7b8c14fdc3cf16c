"""Type aliases for dynamic data structures used across openroute.

Request values arrive as strings (or lists of strings for repeated query
keys), are coerced into typed values, and leave as JSON. The aliases below
name each of those stages.
"""

from typing import Any


# Raw value extracted from a request before coercion
type RawValue = str | list[str] | None

# Parsed query string, repeated keys promoted to lists, bare keys None
type QueryParams = dict[str, str | list[str] | None]

# Validated request data keyed by location, then by field name
type ValidatedData = dict[str, Any]

# Flattened validation report: form_errors plus per-path field_errors
type ErrorReport = dict[str, Any]
