"""Plugin interface protocols.

This module defines the Protocol interfaces at the two seams of the
destination: the measurement SDK it drives, and the destination surface
the analytics pipeline calls.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from nielsen_dcr.config.models import NielsenSettings
    from nielsen_dcr.plugin.events import ScreenEvent, TrackEvent, UpdateType


@runtime_checkable
class MeasurementSDK(Protocol):
    """Protocol for the Nielsen measurement SDK sink.

    Treated as a black box: calls are fire-and-forget and return values
    are ignored. Metadata maps must contain only string values.
    """

    def load_metadata(self, metadata: Mapping[str, str]) -> None:
        """Load a content, ad or static metadata record."""
        ...

    def play(self, channel_info: Mapping[str, str]) -> None:
        """Signal that playback started or resumed on a channel."""
        ...

    def stop(self) -> None:
        """Signal that playback paused or was interrupted."""
        ...

    def end(self) -> None:
        """Signal that the content finished playing."""
        ...

    def playhead_position(self, position: int) -> None:
        """Report the current playhead position in seconds."""
        ...


# Builds an SDK instance from validated settings (e.g. the app id)
SDKFactory = Callable[["NielsenSettings"], MeasurementSDK]


@runtime_checkable
class DestinationPlugin(Protocol):
    """Protocol for analytics pipeline destination plugins.

    Required attributes:
        key: str - Integration name used to look up settings and options
        version: str - Plugin version (semver)
    """

    key: str
    version: str

    def update(self, settings: Mapping[str, Any], update_type: UpdateType) -> None:
        """Receive the settings payload from the pipeline."""
        ...

    def track(self, event: TrackEvent) -> TrackEvent | None:
        """Handle a track call and return the event for the next plugin."""
        ...

    def screen(self, event: ScreenEvent) -> ScreenEvent | None:
        """Handle a screen call and return the event for the next plugin."""
        ...
