"""Playback event routing.

Maps each recognized video event to the SDK calls Nielsen requires and
starts or stops the playhead clock to match. Every event triggers its
action regardless of what came before; the tracked PlaybackState is
informational only.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from nielsen_dcr import metrics
from nielsen_dcr.core.datetime_utils import current_epoch_seconds
from nielsen_dcr.metadata.mapper import MetadataMapper, channel_info, is_pre_roll
from nielsen_dcr.metadata.values import PropertyMap, get_map
from nielsen_dcr.playback.clock import PlayheadClock, derive_playhead_position
from nielsen_dcr.playback.sink import SDKSink
from nielsen_dcr.plugin.events import INTERRUPT_EVENTS, RESUME_EVENTS, VideoEvent

logger = logging.getLogger(__name__)


class PlaybackState(Enum):
    """Last known playback state."""

    IDLE = "idle"
    PLAYING_CONTENT = "playing_content"
    PLAYING_AD = "playing_ad"
    STOPPED = "stopped"


Handler = Callable[[PropertyMap, PropertyMap], None]


class PlaybackRouter:
    """Dispatches video events to the SDK and the playhead clock."""

    def __init__(
        self,
        mapper: MetadataMapper,
        sink: SDKSink,
        clock: PlayheadClock,
        now: Callable[[], int] = current_epoch_seconds,
    ) -> None:
        self._mapper = mapper
        self._sink = sink
        self._clock = clock
        self._now = now
        self._state = PlaybackState.IDLE

        self._handlers: dict[VideoEvent, Handler] = {
            VideoEvent.PLAYBACK_STARTED: self._on_playback_started,
            VideoEvent.PLAYBACK_COMPLETED: self._on_playback_completed,
            VideoEvent.CONTENT_STARTED: self._on_content_started,
            VideoEvent.CONTENT_PLAYING: self._on_content_playing,
            VideoEvent.CONTENT_COMPLETED: self._on_completed,
            VideoEvent.AD_STARTED: self._on_ad_started,
            VideoEvent.AD_PLAYING: self._on_ad_playing,
            VideoEvent.AD_COMPLETED: self._on_completed,
            VideoEvent.UNRECOGNIZED: self._on_unrecognized,
        }
        for event in RESUME_EVENTS:
            self._handlers[event] = self._on_playback_resumed
        for event in INTERRUPT_EVENTS:
            self._handlers[event] = self._on_playback_interrupted

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def mapper(self) -> MetadataMapper:
        return self._mapper

    @mapper.setter
    def mapper(self, mapper: MetadataMapper) -> None:
        self._mapper = mapper

    @property
    def clock(self) -> PlayheadClock:
        return self._clock

    @property
    def handled_events(self) -> frozenset[VideoEvent]:
        """Events with a handler (every VideoEvent member)."""
        return frozenset(self._handlers)

    def route(
        self,
        event_name: str | None,
        properties: PropertyMap,
        options: PropertyMap,
    ) -> VideoEvent:
        """Route one track event.

        Args:
            event_name: Track event name.
            properties: Event properties.
            options: This integration's options for the event.

        Returns:
            The VideoEvent the name classified as.
        """
        event = VideoEvent.from_name(event_name)
        self._handlers[event](properties, options)
        if event is VideoEvent.UNRECOGNIZED:
            metrics.increment_counter(metrics.EVENTS_IGNORED)
        else:
            metrics.increment_counter(metrics.EVENTS_ROUTED, event=event.value)
            logger.debug("Routed %s (state=%s)", event.value, self._state.value)
        return event

    # -- clock helpers -----------------------------------------------------

    def _start_clock(self, properties: PropertyMap) -> None:
        settings = self._mapper.settings
        position = derive_playhead_position(
            properties,
            send_current_time=(
                settings.send_current_time_livestream if settings else False
            ),
            now=self._now,
        )
        self._clock.start(position)

    def _stop_clock(self) -> None:
        self._clock.stop()

    def _load_content(self, properties: PropertyMap, options: PropertyMap) -> None:
        metadata = self._mapper.content_metadata(properties, options)
        self._sink.load_metadata(metadata.to_dict())

    # -- handlers ----------------------------------------------------------

    def _on_playback_started(
        self, properties: PropertyMap, options: PropertyMap
    ) -> None:
        # Content metadata must be loaded before play
        self._load_content(properties, options)
        self._sink.play(channel_info(options).to_dict())
        self._start_clock(properties)
        self._state = PlaybackState.PLAYING_CONTENT

    def _on_playback_resumed(
        self, properties: PropertyMap, options: PropertyMap
    ) -> None:
        self._sink.play(channel_info(options).to_dict())
        self._start_clock(properties)
        if self._state is not PlaybackState.PLAYING_AD:
            self._state = PlaybackState.PLAYING_CONTENT

    def _on_playback_interrupted(
        self, properties: PropertyMap, options: PropertyMap
    ) -> None:
        self._sink.stop()
        self._stop_clock()
        self._state = PlaybackState.STOPPED

    def _on_playback_completed(
        self, properties: PropertyMap, options: PropertyMap
    ) -> None:
        self._sink.end()
        self._stop_clock()
        self._state = PlaybackState.IDLE

    def _on_content_started(
        self, properties: PropertyMap, options: PropertyMap
    ) -> None:
        self._load_content(properties, options)
        self._start_clock(properties)
        self._state = PlaybackState.PLAYING_CONTENT

    def _on_content_playing(
        self, properties: PropertyMap, options: PropertyMap
    ) -> None:
        self._start_clock(properties)
        self._state = PlaybackState.PLAYING_CONTENT

    def _on_completed(self, properties: PropertyMap, options: PropertyMap) -> None:
        self._sink.stop()
        self._stop_clock()
        self._state = PlaybackState.STOPPED

    def _on_ad_started(self, properties: PropertyMap, options: PropertyMap) -> None:
        # Pre-roll: content metadata goes first, then the ad
        if is_pre_roll(properties):
            content = get_map(properties, "content")
            if content is None:
                logger.debug("Pre-roll ad without content properties, using ad's")
                content = dict(properties)
            self._load_content(content, options)

        self._sink.load_metadata(self._mapper.ad_metadata(properties).to_dict())
        self._start_clock(properties)
        self._state = PlaybackState.PLAYING_AD

    def _on_ad_playing(self, properties: PropertyMap, options: PropertyMap) -> None:
        self._start_clock(properties)
        self._state = PlaybackState.PLAYING_AD

    def _on_unrecognized(self, properties: PropertyMap, options: PropertyMap) -> None:
        pass
