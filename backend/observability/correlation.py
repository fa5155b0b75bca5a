"""
Request correlation ids.

CorrelationMiddleware stores the id of the current request in a contextvar;
CorrelationIdFilter reads it into every log record. Tasks spawned while
handling a request inherit the value.

Dependencies: contextvars
System role: Request tracing for log lines
"""

import uuid
from contextvars import ContextVar

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind an id to the current context, generating a UUID4 when none is given."""
    value = correlation_id or str(uuid.uuid4())
    _correlation_id.set(value)
    return value


def get_correlation_id() -> str:
    """Id bound to the current context, "" outside a request."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("")
