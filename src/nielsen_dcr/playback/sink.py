"""Guarded access to the measurement SDK.

The SDK only exists once settings have been delivered, and it is a black
box that may fail. Every outbound call goes through SDKSink, which skips
calls while no SDK is attached and logs failures instead of raising.

The event path and the playhead tick thread both call the SDK; one lock
serializes them so the SDK is never entered twice at once. PlayheadClock
takes its own lock before this one, never after.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping

from nielsen_dcr import metrics
from nielsen_dcr.plugin.interfaces import MeasurementSDK

logger = logging.getLogger(__name__)


class SDKSink:
    """Null-safe, failure-safe wrapper around a MeasurementSDK."""

    def __init__(self, sdk: MeasurementSDK | None = None) -> None:
        self._sdk = sdk
        self._lock = threading.Lock()

    @property
    def sdk(self) -> MeasurementSDK | None:
        return self._sdk

    @sdk.setter
    def sdk(self, sdk: MeasurementSDK | None) -> None:
        self._sdk = sdk

    @property
    def is_ready(self) -> bool:
        """True if an SDK is attached."""
        return self._sdk is not None

    def _call(self, method: str, *args: object) -> bool:
        sdk = self._sdk
        if sdk is None:
            logger.debug("SDK not initialized, skipping %s", method)
            metrics.increment_counter(metrics.SDK_CALLS_SKIPPED, method=method)
            return False
        try:
            with self._lock:
                getattr(sdk, method)(*args)
        except Exception:
            logger.exception("SDK call %s failed", method)
            metrics.increment_counter(metrics.SDK_ERRORS, method=method)
            return False
        metrics.increment_counter(metrics.SDK_CALLS, method=method)
        return True

    def load_metadata(self, metadata: Mapping[str, str]) -> bool:
        return self._call("load_metadata", metadata)

    def play(self, channel_info: Mapping[str, str]) -> bool:
        return self._call("play", channel_info)

    def stop(self) -> bool:
        return self._call("stop")

    def end(self) -> bool:
        return self._call("end")

    def playhead_position(self, position: int) -> bool:
        return self._call("playhead_position", position)
