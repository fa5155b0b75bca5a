"""
Logging helpers.

Message contents are user data, so values attached to log records are
summarized and length-bounded. Formatting a value never raises.

Dependencies: logging (stdlib)
System role: Structured context for error logs
"""

import logging
from typing import Any

MAX_LOG_VALUE_LENGTH = 200


def safe_log_value(value: Any, max_length: int = MAX_LOG_VALUE_LENGTH) -> str:
    """
    Render a value for a log record.

    Collections are reduced to their size; long strings are cut at
    max_length with the original length noted.
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, (list, tuple)):
            return f"{type(value).__name__}({len(value)} items)"
        if isinstance(value, dict):
            return f"dict({len(value)} keys)"
        text = value if isinstance(value, str) else str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an error with its traceback and key=value context.

    Used where a failure is absorbed (best-effort persistence) so the cause
    is still visible.

    Args:
        logger: Logger of the calling module
        message: Log message
        exc: The absorbed exception
        **context: Ids and sizes describing the failed operation
    """
    extra = {key: safe_log_value(value) for key, value in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
