"""Nielsen DCR destination plugin.

Receives track and screen calls from the analytics pipeline and drives
the Nielsen measurement SDK. Events always pass through unchanged; the
destination never raises into the pipeline.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from nielsen_dcr import metrics
from nielsen_dcr.config.loader import parse_settings
from nielsen_dcr.config.models import INTEGRATION_NAME, NielsenSettings
from nielsen_dcr.core.datetime_utils import current_epoch_seconds
from nielsen_dcr.logging.context import session_context
from nielsen_dcr.metadata.mapper import MetadataMapper
from nielsen_dcr.playback.clock import TICK_INTERVAL, PlayheadClock, Scheduler
from nielsen_dcr.playback.router import PlaybackRouter, PlaybackState
from nielsen_dcr.playback.sink import SDKSink
from nielsen_dcr.plugin.events import ScreenEvent, TrackEvent, UpdateType, VideoEvent
from nielsen_dcr.plugin.interfaces import SDKFactory
from nielsen_dcr.version import __version__

logger = logging.getLogger(__name__)


class NielsenDCRDestination:
    """Nielsen DCR destination plugin.

    One instance per playback session. The SDK is created from the first
    settings payload through ``sdk_factory``; until then (or if settings
    are missing or invalid) every SDK call is skipped.

    Implements the DestinationPlugin protocol.
    """

    key: str = INTEGRATION_NAME
    version: str = __version__

    def __init__(
        self,
        sdk_factory: SDKFactory | None = None,
        scheduler: Scheduler | None = None,
        *,
        tick_interval: float = TICK_INTERVAL,
        now: Callable[[], int] = current_epoch_seconds,
        session_id: str | None = None,
    ) -> None:
        """Initialize the destination.

        Args:
            sdk_factory: Builds the measurement SDK from validated settings.
                Without one the destination maps events but sends nothing.
            scheduler: Scheduler for playhead ticks (default: thread-based).
            tick_interval: Seconds between playhead ticks.
            now: Clock returning current UTC epoch seconds (livestreams).
            session_id: Identifier attached to log records.
        """
        self._sdk_factory = sdk_factory
        self._settings: NielsenSettings | None = None
        self._global_settings: dict[str, Any] = {}
        self._updated = False
        self.session_id = session_id or uuid.uuid4().hex[:8]

        self._sink = SDKSink()
        self._clock = PlayheadClock(self._sink, scheduler, interval=tick_interval)
        self._router = PlaybackRouter(MetadataMapper(), self._sink, self._clock, now)

    @property
    def settings(self) -> NielsenSettings | None:
        """Validated integration settings, or None before/without update."""
        return self._settings

    @property
    def global_settings(self) -> dict[str, Any]:
        """Full settings payload from the initial update."""
        return self._global_settings

    @property
    def is_enabled(self) -> bool:
        """True once an SDK is attached."""
        return self._sink.is_ready

    @property
    def playback_state(self) -> PlaybackState:
        return self._router.state

    @property
    def playhead_position(self) -> int:
        return self._clock.position

    def update(self, settings: Mapping[str, Any], update_type: UpdateType) -> None:
        """Receive settings from the pipeline.

        Only the first INITIAL update is acted on; later calls are ignored.
        Missing or invalid settings leave the destination disabled.

        Args:
            settings: Full settings payload.
            update_type: Why the settings are being delivered.
        """
        if update_type is not UpdateType.INITIAL or self._updated:
            logger.debug("Ignoring %s settings update", update_type.value)
            return
        self._updated = True
        self._global_settings = dict(settings)

        parsed = parse_settings(settings, self.key)
        if parsed is None:
            logger.warning("%s disabled: no valid settings", self.key)
            return

        self._settings = parsed
        self._router.mapper = MetadataMapper(parsed)

        if self._sdk_factory is None:
            logger.warning(
                "%s: no SDK factory configured, SDK calls disabled", self.key
            )
            return

        try:
            self._sink.sdk = self._sdk_factory(parsed)
        except Exception:
            logger.exception("%s: failed to initialize SDK", self.key)
            return

        logger.info("%s initialized (appId=%s)", self.key, parsed.app_id)

    def track(self, event: TrackEvent) -> TrackEvent:
        """Route a track event and pass it through unchanged."""
        options = event.options_for(self.key)
        with session_context(self.session_id, event.event):
            with metrics.record_duration(metrics.EVENT_DURATION, kind="track"):
                try:
                    routed = self._router.route(event.event, event.properties, options)
                except Exception:
                    logger.exception("Failed to handle track event %r", event.event)
                else:
                    if routed is VideoEvent.UNRECOGNIZED:
                        logger.debug("Ignoring event %r", event.event)
        return event

    def screen(self, event: ScreenEvent) -> ScreenEvent:
        """Load static metadata for a screen view and pass it through."""
        options = event.options_for(self.key)
        with session_context(self.session_id, event.name):
            with metrics.record_duration(metrics.EVENT_DURATION, kind="screen"):
                try:
                    metadata = self._router.mapper.static_metadata(
                        event.properties, options, event.name
                    )
                    self._sink.load_metadata(metadata.to_dict())
                except Exception:
                    logger.exception("Failed to handle screen event %r", event.name)
        return event

    def close(self) -> None:
        """Cancel the playhead timer without reporting."""
        self._clock.shutdown()
