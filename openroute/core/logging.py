"""Loguru setup for openroute applications.

Records carry bound fields such as ``operation_id`` (route registration),
``field_paths`` (validation failures) and ``correlation_id`` (request
middleware). Two sinks render them:

- **console**: one coloured line, bound fields inline (development)
- **json**: one object per line, bound fields as top-level keys

Standard library loggers (uvicorn, starlette) are redirected into Loguru so
every record reaches the same sink.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Final, cast

from loguru import logger

if TYPE_CHECKING:
    from openroute.core.config import Settings


class _LoggingState:
    """Whether ``setup_logging`` already ran in this process."""

    def __init__(self) -> None:
        self.configured = False


_state = _LoggingState()

CORRELATION_ID_DISPLAY_LENGTH: Final[int] = 8
MAX_FIELD_VALUE_LENGTH: Final[int] = 100
STD_LOGGERS: Final[tuple[str, ...]] = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Shown first, in this order, by the console formatter
PRIORITY_FIELDS: Final[tuple[str, ...]] = (
    "correlation_id",
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "operation_id",
    "field_paths",
)


def _escape(value: object) -> str:
    """Double braces so Loguru does not read values as format fields."""
    return str(value).replace("{", "{{").replace("}", "}}")


def _display_value(key: str, value: object) -> str:
    if isinstance(value, list | tuple):
        text = ",".join(str(item) for item in value)
    else:
        text = str(value)

    if key == "correlation_id":
        return text[:CORRELATION_ID_DISPLAY_LENGTH]
    if key == "duration_ms":
        return f"{text}ms"
    if len(text) > MAX_FIELD_VALUE_LENGTH:
        return text[: MAX_FIELD_VALUE_LENGTH - 3] + "..."
    return text


def _format_field(key: str, value: object) -> str:
    """Render one bound field as ``key=value``.

    Correlation ids are shortened, durations get a unit, sequences (the
    failing ``field_paths`` of a request) are comma-joined and long values
    are truncated.
    """
    return f"{_escape(key)}={_escape(_display_value(key, value))}"


def _format_context_fields(extra: dict[str, Any]) -> list[str]:
    """Markup for every visible bound field, priority fields first.

    Fields starting with ``_`` and ``None`` values are skipped.
    """
    parts = [
        f"<yellow>{_format_field(key, extra[key])}</yellow>"
        for key in PRIORITY_FIELDS
        if extra.get(key) is not None
    ]
    parts.extend(
        f"<dim>{_format_field(key, value)}</dim>"
        for key, value in extra.items()
        if key not in PRIORITY_FIELDS and not key.startswith("_") and value is not None
    )
    return parts


def format_console_with_context(record: dict[str, Any]) -> str:
    """Build the Loguru format string of one console line."""
    timestamp = record["time"].strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    location = f"{record['name']}:{record['function']}:{record['line']}"
    columns = [
        f"<green>{timestamp}</green>",
        f"<level>{record['level'].name: <8}</level>",
        f"<cyan>{location}</cyan>",
    ]

    if context := _format_context_fields(record.get("extra", {})):
        columns.append(" ".join(f"[{part}]" for part in context))

    columns.append(_escape(record.get("message", "")))
    line = " | ".join(columns)
    if record.get("exception"):
        line += "\n{exception}"
    return line + "\n"


def serialize_for_json(record: dict[str, Any]) -> str:
    """Serialize one record as a JSON line.

    Bound fields become top-level keys next to ``timestamp``, ``level``,
    ``message`` and the emitting ``logger``/``function``/``line``.
    """
    entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
    }
    entry.update(
        (key, value)
        for key, value in record.get("extra", {}).items()
        if not key.startswith("_")
    )

    if error := record.get("exception"):
        entry["exception"] = {
            "type": error.type.__name__ if error.type else None,
            "value": str(error.value) if error.value else None,
        }

    return json.dumps(entry, default=str) + "\n"


def _json_sink(message: object) -> None:
    record = getattr(message, "record", None)
    if record is not None:
        sys.stdout.write(serialize_for_json(record))
        sys.stdout.flush()


class InterceptHandler(logging.Handler):
    """Standard library handler that re-emits records through Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so Loguru reports the real caller
        frame, depth = sys._getframe(6), 6
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def intercept_std_logging(names: Iterable[str] = STD_LOGGERS) -> None:
    """Route the root logger and the named loggers into Loguru."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


def setup_logging(settings: Settings) -> None:
    """Replace Loguru's default sink with the configured one.

    Only the first call has an effect; later calls return immediately.

    Args:
        settings: Application settings; ``log_config`` picks the level and
            the formatter, ``debug`` enables Loguru's diagnose mode.
    """
    if _state.configured:
        return

    log_config = settings.log_config
    formatter_type = log_config.log_formatter_type or "console"

    logger.remove()
    if formatter_type == "console":
        logger.add(
            sys.stdout,
            format=cast("Any", format_console_with_context),
            level=log_config.log_level,
            colorize=True,
            diagnose=settings.debug,
            backtrace=settings.debug,
        )
    else:
        logger.add(_json_sink, level=log_config.log_level, diagnose=False, backtrace=False)

    intercept_std_logging()
    _state.configured = True

    logger.info(
        "Logging configured with {} formatter",
        formatter_type,
        log_level=log_config.log_level,
    )
