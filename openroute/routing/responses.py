"""JSON response class using orjson serialization.

Handlers may return plain dicts and lists; routes wrap them in
``ORJSONResponse``. orjson handles ``datetime``, ``date`` and ``UUID`` values
natively, which covers every value the validation engine produces.
"""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ORJSONResponse(JSONResponse):
    """Response class using orjson for JSON serialization.

    Key order is preserved so OpenAPI documents keep their declaration order.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON using orjson.

        Args:
            content: The content to serialize to JSON.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json")

        return orjson.dumps(content, option=orjson.OPT_NON_STR_KEYS)
