"""Logging measurement SDK.

A MeasurementSDK that writes every call to the log instead of reporting
to Nielsen. Used for dry runs and event replays.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from nielsen_dcr.config.models import NielsenSettings

logger = logging.getLogger(__name__)


class LoggingMeasurementSDK:
    """MeasurementSDK that logs calls.

    Implements the MeasurementSDK protocol.
    """

    def __init__(self, app_id: str, level: int = logging.INFO) -> None:
        self.app_id = app_id
        self._level = level
        self.call_count = 0

    @classmethod
    def from_settings(cls, settings: NielsenSettings) -> LoggingMeasurementSDK:
        """SDK factory: build from validated settings."""
        return cls(settings.app_id)

    def _log(self, message: str, *args: object) -> None:
        self.call_count += 1
        logger.log(self._level, "[%s] " + message, self.app_id, *args)

    def load_metadata(self, metadata: Mapping[str, str]) -> None:
        self._log("loadMetadata type=%s %s", metadata.get("type"), dict(metadata))

    def play(self, channel_info: Mapping[str, str]) -> None:
        self._log("play %s", dict(channel_info))

    def stop(self) -> None:
        self._log("stop")

    def end(self) -> None:
        self._log("end")

    def playhead_position(self, position: int) -> None:
        self._log("playheadPosition %d", position)
