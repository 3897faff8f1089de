"""Session context for structured logging.

Provides context propagation using contextvars, enabling automatic
injection of the playback session id and the event being routed into
log records.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_session_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "session_id", default=None
)
_event_name: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "event_name", default=None
)


def set_session_context(session_id: str, event_name: str | None = None) -> None:
    """Set the current session context.

    Args:
        session_id: Playback session identifier.
        event_name: Name of the event being processed, or None.
    """
    _session_id.set(session_id)
    _event_name.set(event_name)


def clear_session_context() -> None:
    """Clear the current session context."""
    _session_id.set(None)
    _event_name.set(None)


@contextmanager
def session_context(
    session_id: str,
    event_name: str | None = None,
) -> Generator[None, None, None]:
    """Context manager for event processing context.

    Sets session context on entry, restores the previous values on exit.

    Example:
        with session_context("a1b2c3d4", "Video Playback Started"):
            logger.info("Routing event")  # Automatically includes context
    """
    old_session_id = _session_id.get()
    old_event_name = _event_name.get()
    try:
        set_session_context(session_id, event_name)
        yield
    finally:
        _session_id.set(old_session_id)
        _event_name.set(old_event_name)


def get_session_context() -> tuple[str | None, str | None]:
    """Get current session context.

    Returns:
        Tuple of (session_id, event_name), either may be None.
    """
    return _session_id.get(), _event_name.get()


class SessionContextFilter(logging.Filter):
    """Logging filter that injects session context into log records.

    Adds session_id and event_name attributes to LogRecord from
    contextvars. For text format, also adds a compact session_tag
    like [S:a1b2c3d4].
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject session context into log record.

        Returns:
            Always True (does not filter, only enriches).
        """
        session_id, event_name = get_session_context()

        record.session_id = session_id
        record.event_name = event_name

        if session_id:
            record.session_tag = f"[S:{session_id}] "
        else:
            record.session_tag = ""

        return True
