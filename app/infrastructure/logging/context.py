"""Operation context binding for structured logging.

Binds a correlation id (and any extra keys) to every log entry emitted
while a dispatch or a sweep is running, so all per-attempt log lines of
one operation can be grouped.

Usage:
    from infrastructure.logging import bind_log_context

    with bind_log_context(operation="dispatch", event_type="SHIFT_ASSIGNED"):
        logger.info("dispatch_started")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_log_context(
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind operation-scoped context to all logs within the block.

    Args:
        correlation_id: Operation identifier. Auto-generated if not provided.
        **extra_context: Additional key-value pairs; None values are skipped.

    Yields:
        The correlation id in effect for the block.

    Example:
        with bind_log_context(operation="retry_sweep") as correlation_id:
            stats = scheduler.retry_failed_notifications()
    """
    context: dict[str, Any] = {
        key: value for key, value in extra_context.items() if value is not None
    }
    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    # Keep an outer operation's values when nesting
    previous = structlog.contextvars.get_contextvars()
    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())
        restore = {key: previous[key] for key in context if key in previous}
        if restore:
            structlog.contextvars.bind_contextvars(**restore)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_log_context() -> None:
    """Clear all operation-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
