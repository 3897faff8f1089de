"""Logging configuration.

Configures the root logger from a LoggingConfig: level, text or JSON
format, optional rotating log file and stderr output.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler

from nielsen_dcr.config.models import LoggingConfig
from nielsen_dcr.logging.context import SessionContextFilter
from nielsen_dcr.logging.handlers import JSONFormatter

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(session_tag)s%(name)s: %(message)s"

# Marker attribute so reconfiguration only removes our own handlers
_HANDLER_MARKER = "_nielsen_dcr_handler"


def _build_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT)


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger.

    Safe to call more than once; handlers installed by a previous call
    are replaced.

    Args:
        config: Logging configuration.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, config.level.upper()))

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    formatter = _build_formatter(config)
    context_filter = SessionContextFilter()
    handlers: list[logging.Handler] = []

    if config.file is not None:
        config.file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                config.file,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    if config.include_stderr or config.file is None:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        setattr(handler, _HANDLER_MARKER, True)
        root.addHandler(handler)
