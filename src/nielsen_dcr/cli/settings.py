"""Settings validation command."""

from __future__ import annotations

import json
from pathlib import Path

import click

from nielsen_dcr.cli.exit_codes import ExitCode
from nielsen_dcr.config.loader import load_settings
from nielsen_dcr.exceptions import SettingsError


@click.command("validate-settings")
@click.argument(
    "settings_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=False,
)
def validate_settings_command(settings_file: Path | None) -> None:
    """Validate a settings payload and print the resolved settings.

    SETTINGS_FILE is a YAML or JSON settings payload. Defaults to
    $NIELSEN_DCR_SETTINGS_PATH.
    """
    try:
        settings, _ = load_settings(settings_file)
    except SettingsError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(ExitCode.SETTINGS_ERROR) from e

    click.echo(json.dumps(settings.model_dump(by_alias=True), indent=2))
