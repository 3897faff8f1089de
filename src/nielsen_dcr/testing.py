"""Testing utilities for the destination.

Provides a recording SDK, a virtual scheduler, event factories
and pytest fixtures.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from nielsen_dcr.config.models import INTEGRATION_NAME, NielsenSettings
from nielsen_dcr.destination import NielsenDCRDestination
from nielsen_dcr.playback.clock import VirtualScheduler
from nielsen_dcr.plugin.events import ScreenEvent, TrackEvent, UpdateType

DEFAULT_APP_ID = "PDA7D5EE6-B1B8-4123-9277-2A788BC653CA"
FIXED_EPOCH_SECONDS = 1_700_000_000

# ==============================================================================
# Recording SDK
# ==============================================================================


@dataclass(frozen=True)
class SDKCall:
    """One recorded SDK call."""

    method: str
    args: tuple[Any, ...] = ()

    @property
    def arg(self) -> Any:
        """First argument, or None for argument-less calls."""
        return self.args[0] if self.args else None


@dataclass
class RecordingMeasurementSDK:
    """MeasurementSDK that records every call in order.

    Implements the MeasurementSDK protocol.
    """

    app_id: str = DEFAULT_APP_ID
    calls: list[SDKCall] = field(default_factory=list)

    def load_metadata(self, metadata: Mapping[str, str]) -> None:
        self.calls.append(SDKCall("load_metadata", (dict(metadata),)))

    def play(self, channel_info: Mapping[str, str]) -> None:
        self.calls.append(SDKCall("play", (dict(channel_info),)))

    def stop(self) -> None:
        self.calls.append(SDKCall("stop"))

    def end(self) -> None:
        self.calls.append(SDKCall("end"))

    def playhead_position(self, position: int) -> None:
        self.calls.append(SDKCall("playhead_position", (position,)))

    @property
    def methods(self) -> list[str]:
        """Names of the recorded calls, in order."""
        return [call.method for call in self.calls]

    def calls_to(self, method: str) -> list[SDKCall]:
        return [call for call in self.calls if call.method == method]

    @property
    def metadata(self) -> list[dict[str, str]]:
        """Metadata records loaded, in order."""
        return [call.arg for call in self.calls_to("load_metadata")]

    @property
    def positions(self) -> list[int]:
        """Playhead positions reported, in order."""
        return [call.arg for call in self.calls_to("playhead_position")]

    def reset(self) -> None:
        self.calls.clear()


# ==============================================================================
# Factories
# ==============================================================================


def settings_payload(
    app_id: str = DEFAULT_APP_ID,
    **integration_settings: Any,
) -> dict[str, Any]:
    """Create a pipeline settings payload for the Nielsen DCR integration.

    Args:
        app_id: Nielsen app id.
        **integration_settings: Extra settings keys (camelCase).

    Returns:
        Settings payload dict.
    """
    block: dict[str, Any] = {"appId": app_id}
    block.update(integration_settings)
    return {"integrations": {INTEGRATION_NAME: block}}


def create_settings(app_id: str = DEFAULT_APP_ID, **kwargs: Any) -> NielsenSettings:
    """Create validated NielsenSettings (camelCase keyword arguments)."""
    return NielsenSettings.model_validate({"appId": app_id, **kwargs})


def create_track_event(
    event: str | None = "Video Playback Started",
    properties: dict[str, Any] | None = None,
    options: dict[str, Any] | None = None,
) -> TrackEvent:
    """Create a TrackEvent for testing.

    Args:
        event: Event name.
        properties: Event properties.
        options: Nielsen DCR integration options.

    Returns:
        TrackEvent instance.
    """
    integrations: dict[str, Any] = {}
    if options is not None:
        integrations[INTEGRATION_NAME] = options
    return TrackEvent(
        event=event,
        properties=properties or {},
        integrations=integrations,
    )


def create_screen_event(
    name: str | None = "Home",
    properties: dict[str, Any] | None = None,
    options: dict[str, Any] | None = None,
) -> ScreenEvent:
    """Create a ScreenEvent for testing."""
    integrations: dict[str, Any] = {}
    if options is not None:
        integrations[INTEGRATION_NAME] = options
    return ScreenEvent(
        name=name,
        properties=properties or {},
        integrations=integrations,
    )


def create_destination(
    sdk: RecordingMeasurementSDK | None = None,
    scheduler: VirtualScheduler | None = None,
    *,
    now: Callable[[], int] = lambda: FIXED_EPOCH_SECONDS,
    **integration_settings: Any,
) -> NielsenDCRDestination:
    """Create an initialized destination wired to test doubles.

    Args:
        sdk: Recording SDK (created if None).
        scheduler: Virtual scheduler (created if None).
        now: Epoch-seconds clock for livestream positions.
        **integration_settings: Extra settings keys (camelCase).

    Returns:
        NielsenDCRDestination after its initial update.
    """
    recorder = sdk if sdk is not None else RecordingMeasurementSDK()
    destination = NielsenDCRDestination(
        sdk_factory=lambda settings: recorder,
        scheduler=scheduler or VirtualScheduler(),
        now=now,
        session_id="test",
    )
    destination.update(settings_payload(**integration_settings), UpdateType.INITIAL)
    return destination


# ==============================================================================
# Pytest Fixtures (for import in conftest.py)
# ==============================================================================


@pytest.fixture
def recording_sdk() -> RecordingMeasurementSDK:
    """Pytest fixture for a RecordingMeasurementSDK."""
    return RecordingMeasurementSDK()


@pytest.fixture
def virtual_scheduler() -> VirtualScheduler:
    """Pytest fixture for a VirtualScheduler."""
    return VirtualScheduler()


@pytest.fixture
def destination(
    recording_sdk: RecordingMeasurementSDK,
    virtual_scheduler: VirtualScheduler,
) -> NielsenDCRDestination:
    """Pytest fixture for an initialized destination using test doubles."""
    return create_destination(recording_sdk, virtual_scheduler)
