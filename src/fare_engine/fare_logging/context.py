"""Thread-local logging context for fare and refund records."""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


class LogContext:
    """Per-thread fields copied onto every record that passes ContextFilter."""

    _local = threading.local()

    @classmethod
    def _fields(cls) -> dict[str, Any]:
        if not hasattr(cls._local, "fields"):
            cls._local.fields = {}
        fields: dict[str, Any] = cls._local.fields
        return fields

    @classmethod
    def set(cls, **kwargs: Any) -> None:
        cls._fields().update(kwargs)

    @classmethod
    def get(cls) -> dict[str, Any]:
        return cls._fields()

    @classmethod
    def snapshot(cls) -> dict[str, Any]:
        return dict(cls._fields())

    @classmethod
    def restore(cls, fields: dict[str, Any]) -> None:
        cls._local.fields = dict(fields)

    @classmethod
    def clear(cls) -> None:
        cls._local.fields = {}


class ContextFilter(logging.Filter):
    """Copies LogContext fields onto records; fields passed via extra= win."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in LogContext.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Set logging context fields for the duration of the block.

    ContextFilter must be attached to the handler (see setup_logging).
    Nested blocks add to the enclosing fields and put them back on exit.
    """
    saved = LogContext.snapshot()
    LogContext.set(**kwargs)
    try:
        yield
    finally:
        LogContext.restore(saved)


@contextmanager
def log_trip_context(
    trip_id: str, trip_status: str | None = None, **kwargs: Any
) -> Iterator[None]:
    """Tag records with one trip; the trip id doubles as correlation id."""
    kwargs.setdefault("correlation_id", trip_id)
    if trip_status is not None:
        kwargs["trip_status"] = trip_status
    with log_context(trip_id=trip_id, **kwargs):
        yield
