"""Replay recorded analytics events through the destination.

Events are read from a JSON-lines file, one pipeline message per line::

    {"type": "track", "event": "Video Playback Started", "properties": {...}}
    {"type": "screen", "name": "Home", "properties": {...}}

An optional ``"advance"`` key on a line simulates that many seconds of
playback after the event is handled. SDK calls are logged, not sent.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import click

from nielsen_dcr import metrics
from nielsen_dcr.cli.exit_codes import ExitCode
from nielsen_dcr.config.loader import load_settings
from nielsen_dcr.destination import NielsenDCRDestination
from nielsen_dcr.exceptions import SettingsError
from nielsen_dcr.playback.clock import VirtualScheduler
from nielsen_dcr.plugin.events import ScreenEvent, TrackEvent, UpdateType
from nielsen_dcr.sdk import LoggingMeasurementSDK

logger = logging.getLogger(__name__)


def iter_messages(path: Path) -> Iterator[tuple[int, dict[str, Any]]]:
    """Yield (line number, message) for each non-blank line.

    Raises:
        click.ClickException: If a line is not a JSON object.
    """
    with path.open(encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                message = json.loads(line)
            except json.JSONDecodeError as e:
                raise click.ClickException(
                    f"{path}:{line_no}: invalid JSON: {e}"
                ) from e
            if not isinstance(message, dict):
                raise click.ClickException(f"{path}:{line_no}: expected an object")
            yield line_no, message


@click.command("replay")
@click.argument(
    "events_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--settings",
    "settings_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Settings payload (YAML or JSON). Defaults to $NIELSEN_DCR_SETTINGS_PATH.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Print the summary as JSON.",
)
def replay_command(
    events_file: Path,
    settings_file: Path | None,
    json_output: bool,
) -> None:
    """Replay EVENTS_FILE (JSON lines) and log the resulting SDK calls."""
    try:
        _, payload = load_settings(settings_file)
    except SettingsError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(ExitCode.SETTINGS_ERROR) from e

    sdk: LoggingMeasurementSDK | None = None

    def sdk_factory(settings):
        nonlocal sdk
        sdk = LoggingMeasurementSDK.from_settings(settings)
        return sdk

    scheduler = VirtualScheduler()
    destination = NielsenDCRDestination(sdk_factory=sdk_factory, scheduler=scheduler)
    destination.update(payload, UpdateType.INITIAL)

    counts = {"track": 0, "screen": 0, "skipped": 0}
    try:
        for line_no, message in iter_messages(events_file):
            kind = message.get("type", "track")
            if kind == "track":
                destination.track(TrackEvent.from_dict(message))
            elif kind == "screen":
                destination.screen(ScreenEvent.from_dict(message))
            else:
                logger.warning("Line %d: unsupported message type %r", line_no, kind)
                counts["skipped"] += 1
                continue
            counts[kind] += 1

            advance = message.get("advance", 0)
            if isinstance(advance, int) and not isinstance(advance, bool):
                scheduler.advance(max(advance, 0))
    finally:
        destination.close()

    calls_by_method = metrics.get_metrics_store().counts_by_label(
        metrics.SDK_CALLS, "method"
    )
    summary = {
        "events": counts,
        "sdk_calls": sdk.call_count if sdk is not None else 0,
        "sdk_calls_by_method": calls_by_method,
        "final_playhead": destination.playhead_position,
        "playback_state": destination.playback_state.value,
        "counters": metrics.get_metrics_summary()["counters"],
    }
    if json_output:
        click.echo(json.dumps(summary, indent=2))
        return

    click.echo(
        f"Replayed {counts['track']} track and {counts['screen']} screen event(s)"
        f" ({counts['skipped']} skipped)"
    )
    by_method = ", ".join(
        f"{method}={count}" for method, count in calls_by_method.items()
    )
    click.echo(f"SDK calls: {summary['sdk_calls']} ({by_method})")
    click.echo(f"Final playhead: {summary['final_playhead']}")
    click.echo(f"Playback state: {summary['playback_state']}")
