"""Tests for the Nielsen DCR destination plugin."""

from unittest.mock import MagicMock

import pytest

from nielsen_dcr import DestinationPlugin, NielsenDCRDestination
from nielsen_dcr.metrics import EVENT_DURATION, get_metrics_store
from nielsen_dcr.playback.clock import VirtualScheduler
from nielsen_dcr.playback.router import PlaybackState
from nielsen_dcr.plugin.events import UpdateType
from nielsen_dcr.testing import (
    RecordingMeasurementSDK,
    create_destination,
    create_screen_event,
    create_track_event,
    settings_payload,
)


class TestUpdate:
    """Tests for NielsenDCRDestination.update."""

    def test_initial_update_builds_sdk(self):
        sdk = RecordingMeasurementSDK()
        factory = MagicMock(return_value=sdk)
        destination = NielsenDCRDestination(
            sdk_factory=factory, scheduler=VirtualScheduler()
        )
        payload = settings_payload(app_id="APP-1", customSectionProperty="page")

        destination.update(payload, UpdateType.INITIAL)

        assert destination.is_enabled
        assert destination.settings.app_id == "APP-1"
        assert destination.global_settings == payload
        factory.assert_called_once_with(destination.settings)

    def test_only_first_initial_update_acted_on(self):
        factory = MagicMock(return_value=RecordingMeasurementSDK())
        destination = NielsenDCRDestination(
            sdk_factory=factory, scheduler=VirtualScheduler()
        )

        destination.update(settings_payload(app_id="FIRST"), UpdateType.INITIAL)
        destination.update(settings_payload(app_id="SECOND"), UpdateType.INITIAL)

        assert destination.settings.app_id == "FIRST"
        assert factory.call_count == 1

    def test_refresh_update_ignored(self):
        factory = MagicMock(return_value=RecordingMeasurementSDK())
        destination = NielsenDCRDestination(
            sdk_factory=factory, scheduler=VirtualScheduler()
        )

        destination.update(settings_payload(), UpdateType.REFRESH)

        assert not destination.is_enabled
        assert destination.settings is None
        factory.assert_not_called()

    def test_missing_settings_disables(self, caplog):
        factory = MagicMock()
        destination = NielsenDCRDestination(
            sdk_factory=factory, scheduler=VirtualScheduler()
        )

        with caplog.at_level("WARNING"):
            destination.update({"integrations": {}}, UpdateType.INITIAL)

        assert not destination.is_enabled
        assert "disabled" in caplog.text
        factory.assert_not_called()

    def test_invalid_settings_disable(self):
        factory = MagicMock()
        destination = NielsenDCRDestination(
            sdk_factory=factory, scheduler=VirtualScheduler()
        )

        destination.update(settings_payload(app_id=""), UpdateType.INITIAL)

        assert not destination.is_enabled
        factory.assert_not_called()

    def test_factory_failure_disables(self, caplog):
        factory = MagicMock(side_effect=RuntimeError("no native module"))
        destination = NielsenDCRDestination(
            sdk_factory=factory, scheduler=VirtualScheduler()
        )

        with caplog.at_level("ERROR"):
            destination.update(settings_payload(), UpdateType.INITIAL)

        assert not destination.is_enabled
        assert destination.settings is not None
        assert "failed to initialize SDK" in caplog.text

    def test_no_factory(self):
        destination = NielsenDCRDestination(scheduler=VirtualScheduler())
        destination.update(settings_payload(), UpdateType.INITIAL)

        assert destination.settings is not None
        assert not destination.is_enabled


class TestTrack:
    """Tests for NielsenDCRDestination.track."""

    def test_returns_event_unchanged(self, destination):
        event = create_track_event(properties={"position": 1}, options={"segB": "b"})
        assert destination.track(event) is event
        assert event.properties == {"position": 1}

    def test_playback_session(
        self,
        destination,
        recording_sdk,
        virtual_scheduler,
        content_properties,
        content_options,
    ):
        destination.track(
            create_track_event(
                "Video Playback Started",
                dict(content_properties, position=42),
                content_options,
            )
        )
        virtual_scheduler.advance(3)
        destination.track(create_track_event("Video Playback Paused"))

        assert recording_sdk.methods[:2] == ["load_metadata", "play"]
        assert recording_sdk.positions == [42, 43, 44, 44]
        assert destination.playhead_position == 44
        assert destination.playback_state is PlaybackState.STOPPED

    def test_options_read_from_integration_key(self, destination, recording_sdk):
        event = create_track_event(
            "Video Playback Resumed", options={"channelName": "Channel 7"}
        )

        destination.track(event)

        assert recording_sdk.calls[0].arg["channelName"] == "Channel 7"

    def test_non_map_options_treated_as_empty(self, destination, recording_sdk):
        event = create_track_event("Video Playback Resumed")
        event.integrations["Nielsen DCR"] = True

        destination.track(event)

        assert recording_sdk.calls[0].arg["channelName"] == "defaultChannelName"

    def test_unknown_event_passes_through(self, destination, recording_sdk):
        event = create_track_event("Order Completed")
        assert destination.track(event) is event
        assert recording_sdk.calls == []

    def test_disabled_destination_passes_through(self, virtual_scheduler):
        destination = NielsenDCRDestination(scheduler=virtual_scheduler)
        event = create_track_event("Video Playback Started", {"position": 5})

        assert destination.track(event) is event
        virtual_scheduler.advance()
        assert destination.playhead_position == 5

    def test_sdk_exception_does_not_escape(self, virtual_scheduler, caplog):
        sdk = RecordingMeasurementSDK()
        sdk.play = MagicMock(side_effect=RuntimeError("boom"))
        destination = create_destination(sdk, virtual_scheduler)
        event = create_track_event("Video Playback Started", {"position": 1})

        with caplog.at_level("ERROR"):
            assert destination.track(event) is event

        assert "SDK call play failed" in caplog.text
        assert sdk.methods == ["load_metadata"]
        assert destination.playhead_position == 0

    def test_router_exception_does_not_escape(self, destination, caplog):
        destination._router.route = MagicMock(side_effect=ValueError("bad"))
        event = create_track_event("Video Playback Started")

        with caplog.at_level("ERROR"):
            assert destination.track(event) is event

        assert "Failed to handle track event" in caplog.text

    def test_records_duration(self, destination):
        destination.track(create_track_event("Video Ad Playing"))
        durations = get_metrics_store().get_summary()["durations"]
        assert durations[f"{EVENT_DURATION}{{kind=track}}"]["count"] == 1

    def test_custom_settings_applied(self, recording_sdk, virtual_scheduler):
        destination = create_destination(
            recording_sdk,
            virtual_scheduler,
            contentAssetIdPropertyName="content_id",
        )

        destination.track(
            create_track_event("Video Content Started", {"content_id": "c-1"})
        )

        assert recording_sdk.metadata[0]["assetid"] == "c-1"


class TestScreen:
    """Tests for NielsenDCRDestination.screen."""

    def test_loads_static_metadata(self, destination, recording_sdk):
        event = create_screen_event(
            "Home", {"asset_id": "home-1"}, {"segA": "a", "crossId1": "x"}
        )

        assert destination.screen(event) is event
        assert recording_sdk.metadata == [
            {
                "type": "static",
                "assetid": "home-1",
                "section": "Home",
                "segA": "a",
                "segB": "",
                "segC": "",
                "crossId1": "x",
            }
        ]

    def test_custom_section(self, recording_sdk, virtual_scheduler):
        destination = create_destination(
            recording_sdk, virtual_scheduler, customSectionProperty="page"
        )

        destination.screen(create_screen_event("Home", {"page": "Settings"}))

        assert recording_sdk.metadata[0]["section"] == "Settings"

    def test_unnamed_screen(self, destination, recording_sdk):
        destination.screen(create_screen_event(None))
        assert recording_sdk.metadata[0]["section"] == "Unknown"


class TestLifecycle:
    """Tests for destination identity and shutdown."""

    def test_implements_protocol(self, destination):
        assert isinstance(destination, DestinationPlugin)
        assert destination.key == "Nielsen DCR"

    def test_close_cancels_timer(self, destination, recording_sdk, virtual_scheduler):
        destination.track(create_track_event("Video Playback Resumed"))
        destination.close()

        assert virtual_scheduler.active_timers == []
        assert recording_sdk.positions == []

    @pytest.mark.parametrize("session_id", ["abc123", None])
    def test_session_id(self, session_id):
        destination = NielsenDCRDestination(
            scheduler=VirtualScheduler(), session_id=session_id
        )
        if session_id:
            assert destination.session_id == session_id
        else:
            assert len(destination.session_id) == 8
