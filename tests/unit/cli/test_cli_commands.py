"""Tests for the nielsen-dcr CLI commands."""

import json
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

import nielsen_dcr.cli as cli_module
from nielsen_dcr.cli import main
from nielsen_dcr.cli.exit_codes import ExitCode
from nielsen_dcr.cli.replay import iter_messages

SETTINGS_YAML = """\
integrations:
  Nielsen DCR:
    appId: APP-1
    customSectionProperty: page
"""

EVENTS = [
    {"type": "screen", "name": "Home", "properties": {"page": "Landing"}},
    {
        "type": "track",
        "event": "Video Playback Started",
        "properties": {"asset_id": "ep-1", "position": 0},
        "integrations": {"Nielsen DCR": {"channelName": "Channel 7"}},
        "advance": 10,
    },
    {"type": "track", "event": "Video Playback Paused"},
    {"type": "identify", "userId": "u-1"},
]


@pytest.fixture(autouse=True)
def skip_logging_setup(monkeypatch):
    """Keep CLI invocations from installing root logging handlers."""
    monkeypatch.setattr(cli_module, "_logging_configured", True)


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(SETTINGS_YAML)
    return path


@pytest.fixture
def events_file(tmp_path: Path) -> Path:
    path = tmp_path / "events.jsonl"
    lines = ["# recorded session", ""] + [json.dumps(e) for e in EVENTS]
    path.write_text("\n".join(lines) + "\n")
    return path


class TestReplayCommand:
    """Tests for the replay command."""

    def test_json_summary(self, settings_file, events_file):
        result = CliRunner().invoke(
            main,
            ["replay", str(events_file), "--settings", str(settings_file), "--json"],
        )

        assert result.exit_code == 0, result.output
        summary = json.loads(result.output)
        assert summary["events"] == {"track": 2, "screen": 1, "skipped": 1}
        # screen load, load+play, 10 ticks, stop+final position
        assert summary["sdk_calls"] == 15
        assert summary["sdk_calls_by_method"] == {
            "load_metadata": 2,
            "play": 1,
            "playhead_position": 11,
            "stop": 1,
        }
        assert summary["final_playhead"] == 9
        assert summary["playback_state"] == "stopped"

    def test_text_summary(self, settings_file, events_file):
        result = CliRunner().invoke(
            main, ["replay", str(events_file), "--settings", str(settings_file)]
        )

        assert result.exit_code == 0, result.output
        assert "Replayed 2 track and 1 screen event(s) (1 skipped)" in result.output
        assert "SDK calls: 15 (load_metadata=2, play=1" in result.output
        assert "Final playhead: 9" in result.output

    def test_settings_from_env(self, settings_file, events_file, monkeypatch):
        monkeypatch.setenv("NIELSEN_DCR_SETTINGS_PATH", str(settings_file))

        result = CliRunner().invoke(main, ["replay", str(events_file), "--json"])

        assert result.exit_code == 0, result.output

    def test_missing_integration_settings(self, tmp_path, events_file):
        settings = tmp_path / "settings.yaml"
        settings.write_text("integrations:\n  Other:\n    apiKey: x\n")

        result = CliRunner().invoke(
            main, ["replay", str(events_file), "--settings", str(settings)]
        )

        assert result.exit_code == ExitCode.SETTINGS_ERROR
        assert "Nielsen DCR" in result.output

    def test_invalid_events_file(self, tmp_path, settings_file):
        events = tmp_path / "events.jsonl"
        events.write_text('{"event": "Video Playback Started"}\nnot json\n')

        result = CliRunner().invoke(
            main, ["replay", str(events), "--settings", str(settings_file)]
        )

        assert result.exit_code == 1
        assert "events.jsonl:2: invalid JSON" in result.output


class TestIterMessages:
    """Tests for iter_messages."""

    def test_skips_blank_and_comment_lines(self, events_file):
        line_numbers = [line_no for line_no, _ in iter_messages(events_file)]
        assert line_numbers == [3, 4, 5, 6]

    def test_rejects_non_objects(self, tmp_path):
        path = tmp_path / "events.jsonl"
        path.write_text("[1, 2]\n")
        with pytest.raises(click.ClickException, match="expected an object"):
            list(iter_messages(path))


class TestValidateSettingsCommand:
    """Tests for the validate-settings command."""

    def test_valid(self, settings_file):
        result = CliRunner().invoke(main, ["validate-settings", str(settings_file)])

        assert result.exit_code == 0, result.output
        resolved = json.loads(result.output)
        assert resolved["appId"] == "APP-1"
        assert resolved["customSectionProperty"] == "page"
        assert resolved["sendCurrentTimeLivestream"] is False

    def test_invalid(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"integrations": {"Nielsen DCR": {}}}))

        result = CliRunner().invoke(main, ["validate-settings", str(path)])

        assert result.exit_code == ExitCode.SETTINGS_ERROR
        assert "appId" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "nielsen-dcr" in result.output
