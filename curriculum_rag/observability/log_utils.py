"""
Structured logging helpers.

Context passed as keyword arguments becomes LogRecord attributes. Values
are flattened to short strings, and keys that collide with built-in
LogRecord attributes (filename, module, ...) are prefixed with ``ctx_``
since logging refuses to overwrite them.

Dependencies: logging (stdlib)
System role: Safe ``extra`` construction for pipeline and retrieval logs
"""

import logging
from typing import Any

_RESERVED_KEYS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value for a log record.

    Collections are summarized by size instead of dumped, and long strings
    are cut at ``max_length``.
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple, set)):
        rendered = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        rendered = f"dict({len(value)} keys)"
    else:
        try:
            rendered = value if isinstance(value, str) else str(value)
        except Exception as e:
            return f"<unrenderable {type(value).__name__}: {type(e).__name__}>"

    if len(rendered) <= max_length:
        return rendered
    return f"{rendered[:max_length]}... (truncated, {len(rendered)} total)"


def build_log_context(**context: Any) -> dict[str, str]:
    """Turn keyword context into a logging ``extra`` mapping."""
    return {
        (f"ctx_{key}" if key in _RESERVED_KEYS else key): safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    logger.log(level, message, extra=build_log_context(**context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log ``exc`` at ERROR with its traceback, type and message attached.

    Args:
        logger: Destination logger
        message: Human-readable summary
        exc: The exception being reported
        **context: Extra attributes (document_id, stage, ...)
    """
    extra = build_log_context(**context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
