"""CLI module for the Nielsen DCR destination."""

import logging
from pathlib import Path

import click

from nielsen_dcr.version import __version__

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from CLI options.

    Args:
        log_level: Override log level (debug, info, warning, error).
        log_file: Log file path, or None for stderr only.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    from nielsen_dcr.config.models import LoggingConfig
    from nielsen_dcr.logging.config import configure_logging

    configure_logging(
        LoggingConfig(
            level=log_level or "info",
            file=log_file,
            format="json" if log_json else "text",
        )
    )
    _logging_configured = True


@click.group()
@click.version_option(version=__version__, prog_name="nielsen-dcr")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write logs to this file.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Nielsen DCR destination - replay analytics events against the SDK mapping."""
    ctx.ensure_object(dict)
    _configure_logging(log_level, log_file, log_json)


# Defer import to avoid circular dependency
def _register_commands():
    from nielsen_dcr.cli.replay import replay_command
    from nielsen_dcr.cli.settings import validate_settings_command

    main.add_command(replay_command)
    main.add_command(validate_settings_command)


_register_commands()
