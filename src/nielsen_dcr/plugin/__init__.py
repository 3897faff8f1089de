"""Destination plugin surface.

This package defines the events received from the analytics pipeline and
the protocols at the destination's seams.
"""

from nielsen_dcr.plugin.events import (
    INTERRUPT_EVENTS,
    RESUME_EVENTS,
    VALID_EVENTS,
    ScreenEvent,
    TrackEvent,
    UpdateType,
    VideoEvent,
    is_valid_event,
    options_for,
)
from nielsen_dcr.plugin.interfaces import (
    DestinationPlugin,
    MeasurementSDK,
    SDKFactory,
)

__all__ = [
    # Events
    "INTERRUPT_EVENTS",
    "RESUME_EVENTS",
    "VALID_EVENTS",
    "ScreenEvent",
    "TrackEvent",
    "UpdateType",
    "VideoEvent",
    "is_valid_event",
    "options_for",
    # Interfaces
    "DestinationPlugin",
    "MeasurementSDK",
    "SDKFactory",
]
