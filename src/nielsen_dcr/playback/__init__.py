"""Playback event routing and playhead tracking."""

from nielsen_dcr.playback.clock import (
    TICK_INTERVAL,
    PlayheadClock,
    Scheduler,
    ThreadScheduler,
    ThreadTimer,
    TimerHandle,
    VirtualScheduler,
    VirtualTimer,
    derive_playhead_position,
)
from nielsen_dcr.playback.router import PlaybackRouter, PlaybackState
from nielsen_dcr.playback.sink import SDKSink

__all__ = [
    "TICK_INTERVAL",
    "PlaybackRouter",
    "PlaybackState",
    "PlayheadClock",
    "SDKSink",
    "Scheduler",
    "ThreadScheduler",
    "ThreadTimer",
    "TimerHandle",
    "VirtualScheduler",
    "VirtualTimer",
    "derive_playhead_position",
]
