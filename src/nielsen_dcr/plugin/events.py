"""Analytics event definitions.

This module defines the events the destination receives from the
analytics pipeline and the closed set of video event names it reacts to.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class UpdateType(Enum):
    """Why the pipeline is delivering settings."""

    INITIAL = "initial"
    REFRESH = "refresh"


class VideoEvent(Enum):
    """Recognized video spec event names.

    Names match exactly and case-sensitively. Anything else classifies as
    UNRECOGNIZED.
    """

    # Playback events
    PLAYBACK_STARTED = "Video Playback Started"
    PLAYBACK_RESUMED = "Video Playback Resumed"
    PLAYBACK_SEEK_STARTED = "Video Playback Seek Started"
    PLAYBACK_SEEK_COMPLETED = "Video Playback Seek Completed"
    PLAYBACK_BUFFER_STARTED = "Video Playback Buffer Started"
    PLAYBACK_BUFFER_COMPLETED = "Video Playback Buffer Completed"
    PLAYBACK_PAUSED = "Video Playback Paused"
    PLAYBACK_INTERRUPTED = "Video Playback Interrupted"
    PLAYBACK_EXITED = "Video Playback Exited"
    PLAYBACK_COMPLETED = "Video Playback Completed"

    # Content events
    CONTENT_STARTED = "Video Content Started"
    CONTENT_PLAYING = "Video Content Playing"
    CONTENT_COMPLETED = "Video Content Completed"

    # Ad events
    AD_STARTED = "Video Ad Started"
    AD_PLAYING = "Video Ad Playing"
    AD_COMPLETED = "Video Ad Completed"

    UNRECOGNIZED = ""

    @classmethod
    def from_name(cls, name: str | None) -> VideoEvent:
        """Classify an event name.

        Args:
            name: Event name as sent by the pipeline, or None.

        Returns:
            Matching VideoEvent, or UNRECOGNIZED.
        """
        if not name:
            return cls.UNRECOGNIZED
        try:
            return cls(name)
        except ValueError:
            return cls.UNRECOGNIZED


# Events that resume playback (issue play and start the clock)
RESUME_EVENTS = frozenset(
    [
        VideoEvent.PLAYBACK_RESUMED,
        VideoEvent.PLAYBACK_SEEK_COMPLETED,
        VideoEvent.PLAYBACK_BUFFER_COMPLETED,
    ]
)

# Events that halt playback (issue stop and stop the clock)
INTERRUPT_EVENTS = frozenset(
    [
        VideoEvent.PLAYBACK_PAUSED,
        VideoEvent.PLAYBACK_SEEK_STARTED,
        VideoEvent.PLAYBACK_BUFFER_STARTED,
        VideoEvent.PLAYBACK_INTERRUPTED,
        VideoEvent.PLAYBACK_EXITED,
    ]
)

# All recognized event names
VALID_EVENTS = frozenset(
    event.value for event in VideoEvent if event is not VideoEvent.UNRECOGNIZED
)


def _copy_map(value: Mapping[str, Any] | None) -> dict[str, Any]:
    return dict(value) if value else {}


@dataclass(frozen=True)
class TrackEvent:
    """A track call from the analytics pipeline.

    ``integrations`` holds per-destination options keyed by integration
    name (e.g. ``{"Nielsen DCR": {"segB": "..."}}``).
    """

    event: str | None
    properties: dict[str, Any] = field(default_factory=dict)
    integrations: dict[str, Any] = field(default_factory=dict)
    message_id: str | None = None
    timestamp: str | None = None

    @property
    def name(self) -> str | None:
        """Event name (alias of ``event``)."""
        return self.event

    def options_for(self, integration: str) -> dict[str, Any]:
        """Options addressed to one integration (empty if none or not a map)."""
        return options_for(self.integrations, integration)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TrackEvent:
        """Build from a pipeline message dict."""
        return cls(
            event=data.get("event"),
            properties=_copy_map(data.get("properties")),
            integrations=_copy_map(data.get("integrations")),
            message_id=data.get("messageId"),
            timestamp=data.get("timestamp"),
        )


@dataclass(frozen=True)
class ScreenEvent:
    """A screen call from the analytics pipeline."""

    name: str | None
    properties: dict[str, Any] = field(default_factory=dict)
    integrations: dict[str, Any] = field(default_factory=dict)
    message_id: str | None = None
    timestamp: str | None = None

    def options_for(self, integration: str) -> dict[str, Any]:
        """Options addressed to one integration (empty if none or not a map)."""
        return options_for(self.integrations, integration)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ScreenEvent:
        """Build from a pipeline message dict."""
        return cls(
            name=data.get("name"),
            properties=_copy_map(data.get("properties")),
            integrations=_copy_map(data.get("integrations")),
            message_id=data.get("messageId"),
            timestamp=data.get("timestamp"),
        )


def options_for(integrations: Mapping[str, Any], integration: str) -> dict[str, Any]:
    """Extract one integration's options from an integrations map.

    Pipelines send ``true``/``false`` to enable or disable a destination;
    only a nested map carries options.
    """
    value = integrations.get(integration)
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def is_valid_event(event_name: str) -> bool:
    """Check if an event name is a recognized video event.

    Args:
        event_name: Event name to check.

    Returns:
        True if recognized, False otherwise.

    """
    return event_name in VALID_EVENTS
