"""Correlation ID logging context for tracing queries across modules.

Provides a query_id-aware logger that attaches a correlation ID to every
log message, so a single ``execute`` call can be followed from dispatch
through suggestion generation.

Usage:
    from availability_engine.logging_context import get_query_logger, set_query_id

    set_query_id("Q-1a2b3c")
    logger = get_query_logger(__name__)
    logger.info("Executing query")  # record.query_id == "Q-1a2b3c"
"""

import logging
import uuid
from contextvars import ContextVar

_query_id: ContextVar[str] = ContextVar("query_id", default="NO_QUERY_ID")


def new_query_id() -> str:
    """Generate a short correlation ID for a single query."""
    return f"Q-{uuid.uuid4().hex[:6]}"


def set_query_id(query_id: str) -> None:
    """Set the correlation ID for the current context."""
    _query_id.set(query_id)


def get_query_id() -> str:
    """Retrieve the current correlation ID."""
    return _query_id.get()


class QueryIdFilter(logging.Filter):
    """Injects query_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.query_id = _query_id.get()  # type: ignore[attr-defined]
        return True


def get_query_logger(name: str) -> logging.Logger:
    """Return a logger with the QueryIdFilter attached.

    The filter adds ``query_id`` to each record so formatters can
    include ``%(query_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, QueryIdFilter) for f in logger.filters):
        logger.addFilter(QueryIdFilter())
    return logger
