"""Nielsen DCR destination for analytics pipelines.

Translates video playback, content, ad and screen events into Nielsen
Digital Content Ratings metadata and lifecycle calls.
"""

from nielsen_dcr.config.models import INTEGRATION_NAME, NielsenSettings
from nielsen_dcr.destination import NielsenDCRDestination
from nielsen_dcr.plugin.events import ScreenEvent, TrackEvent, UpdateType, VideoEvent
from nielsen_dcr.plugin.interfaces import DestinationPlugin, MeasurementSDK
from nielsen_dcr.version import __version__

__all__ = [
    "INTEGRATION_NAME",
    "DestinationPlugin",
    "MeasurementSDK",
    "NielsenDCRDestination",
    "NielsenSettings",
    "ScreenEvent",
    "TrackEvent",
    "UpdateType",
    "VideoEvent",
    "__version__",
]
