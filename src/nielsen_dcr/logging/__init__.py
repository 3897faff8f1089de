"""Structured logging module.

Provides configurable logging with JSON format support and file rotation.
Includes session context support for playback event processing.
"""

from nielsen_dcr.logging.config import configure_logging
from nielsen_dcr.logging.context import (
    SessionContextFilter,
    clear_session_context,
    get_session_context,
    session_context,
    set_session_context,
)
from nielsen_dcr.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "SessionContextFilter",
    "clear_session_context",
    "configure_logging",
    "get_session_context",
    "session_context",
    "set_session_context",
]
