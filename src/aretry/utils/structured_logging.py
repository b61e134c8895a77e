r"""Structured logging utilities for retry diagnostics.

The retry templates emit one debug record per phase (attempt started,
succeeded, failed, backing off, exhausted, aborted). Each record carries
the fields ``retry_operation``, ``retry_attempt`` and, where relevant,
``retry_delay``, so that log aggregation systems can query them. Using
the provided formatter is opt-in.

Example:
    Render aretry diagnostics as JSON lines:

    ```python
    import logging
    from aretry.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("aretry")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```

    Tag every record emitted while handling a request:

    ```python
    from aretry import RetryTemplate
    from aretry.utils.structured_logging import clear_correlation_id, set_correlation_id

    set_correlation_id("request-123")
    try:
        RetryTemplate().execute(load_profile)
    finally:
        clear_correlation_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "aretry_correlation_id", default=None
)

# Attributes every LogRecord has; anything else was added through ``extra``.
_RESERVED_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context.

    Returns:
        The current correlation ID, or None if not set.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import get_correlation_id, set_correlation_id
        >>> set_correlation_id("req-123")
        >>> get_correlation_id()
        'req-123'

        ```
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context.

    The value is stored in a context variable, so it is isolated between
    threads and between asyncio tasks.

    Args:
        correlation_id: The correlation ID to set (e.g., request ID, trace ID).
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID for the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp in UTC
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - correlation_id: Correlation ID, when one is set
        - exception: Formatted traceback, when the record has one

    Fields added through the ``extra`` argument of a logging call (for
    example ``retry_operation``) are copied as-is; values that are not
    JSON serializable are rendered with ``str``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from aretry.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord("aretry", logging.DEBUG, __file__, 1, "hello", (), None)
        >>> record.retry_attempt = 2
        >>> data = json.loads(StructuredFormatter().format(record))
        >>> data["message"], data["retry_attempt"]
        ('hello', 2)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRIBUTES:
                log_data[key] = value
        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    exc_info: BaseException | None = None,
    **extra: Any,
) -> None:
    """Log a message with structured fields.

    The fields are prefixed with ``retry_`` so that they cannot clash
    with the attributes of ``logging.LogRecord``. Nothing is built when
    the logger is not enabled for ``level``.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        exc_info: Optional exception whose traceback is attached.
        **extra: Additional structured fields to include in the log.

    Example:
        ```pycon
        >>> import logging
        >>> from aretry.utils.structured_logging import log_structured
        >>> logger = logging.getLogger("aretry.example")
        >>> log_structured(logger, logging.DEBUG, "Backing off", operation="fetch", delay=1.0)

        ```
    """
    if not logger.isEnabledFor(level):
        return
    logger.log(
        level,
        message,
        exc_info=exc_info,
        extra={f"retry_{key}": value for key, value in extra.items()},
    )
