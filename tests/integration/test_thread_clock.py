"""Integration tests for the thread-backed playhead clock."""

import threading
import time
from contextlib import contextmanager

import pytest

from nielsen_dcr.destination import NielsenDCRDestination
from nielsen_dcr.logging.context import get_session_context, session_context
from nielsen_dcr.playback.clock import PlayheadClock, ThreadScheduler, ThreadTimer
from nielsen_dcr.playback.sink import SDKSink
from nielsen_dcr.plugin.events import UpdateType
from nielsen_dcr.testing import (
    RecordingMeasurementSDK,
    create_track_event,
    settings_payload,
)

pytestmark = pytest.mark.integration

INTERVAL = 0.02


def wait_for(predicate, timeout=2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(INTERVAL / 2)
    return predicate()


class ExclusiveSDK(RecordingMeasurementSDK):
    """Recording SDK that counts calls entering while another is in progress."""

    def __init__(self, hold: float = 0.0) -> None:
        super().__init__()
        self.hold = hold
        self.overlaps = 0
        self._guard = threading.Lock()

    @contextmanager
    def _exclusive(self):
        if not self._guard.acquire(blocking=False):
            self.overlaps += 1
            yield
            return
        try:
            time.sleep(self.hold)
            yield
        finally:
            self._guard.release()

    def load_metadata(self, metadata):
        with self._exclusive():
            super().load_metadata(metadata)

    def play(self, channel_info):
        with self._exclusive():
            super().play(channel_info)

    def stop(self):
        with self._exclusive():
            super().stop()

    def end(self):
        with self._exclusive():
            super().end()

    def playhead_position(self, position):
        with self._exclusive():
            super().playhead_position(position)


class TestThreadTimer:
    """Tests for ThreadTimer."""

    def test_fires_until_cancelled(self):
        fired = threading.Event()
        count = []

        def callback():
            count.append(1)
            if len(count) >= 3:
                fired.set()

        timer = ThreadScheduler().schedule_repeating(INTERVAL, callback)
        assert fired.wait(2.0)
        timer.cancel()

        seen = len(count)
        time.sleep(INTERVAL * 5)
        assert len(count) == seen
        assert not timer.is_alive

    def test_callback_exception_keeps_running(self):
        count = []

        def callback():
            count.append(1)
            raise RuntimeError("tick failed")

        timer = ThreadTimer(INTERVAL, callback)
        timer.start()
        try:
            assert wait_for(lambda: len(count) >= 2)
        finally:
            timer.cancel()

    def test_callback_runs_in_starting_context(self):
        seen = []
        done = threading.Event()

        def callback():
            seen.append(get_session_context())
            done.set()

        with session_context("s-42", "Video Playback Started"):
            timer = ThreadScheduler().schedule_repeating(INTERVAL, callback)
        try:
            assert done.wait(2.0)
        finally:
            timer.cancel()

        assert seen[0] == ("s-42", "Video Playback Started")
        assert get_session_context() == (None, None)

    def test_cancel_from_own_thread(self):
        holder = {}
        done = threading.Event()

        def callback():
            holder["timer"].cancel()
            done.set()

        holder["timer"] = timer = ThreadTimer(INTERVAL, callback)
        timer.start()

        assert done.wait(2.0)
        assert wait_for(lambda: not timer.is_alive)


class TestPlayheadClockThreaded:
    """Tests for PlayheadClock on real threads."""

    def test_ticks_and_stops(self):
        sdk = RecordingMeasurementSDK()
        clock = PlayheadClock(SDKSink(sdk), ThreadScheduler(), interval=INTERVAL)

        clock.start(10)
        assert wait_for(lambda: len(sdk.positions) >= 3)
        clock.stop()

        final = clock.position
        time.sleep(INTERVAL * 5)
        assert sdk.positions[:3] == [10, 11, 12]
        assert sdk.positions[-1] == final
        assert clock.position == final
        assert not clock.is_running

    def test_destination_session(self):
        sdk = RecordingMeasurementSDK()
        destination = NielsenDCRDestination(
            sdk_factory=lambda settings: sdk, tick_interval=INTERVAL
        )
        destination.update(settings_payload(), UpdateType.INITIAL)

        try:
            destination.track(
                create_track_event("Video Playback Started", {"position": 100})
            )
            assert wait_for(lambda: len(sdk.positions) >= 2)
            destination.track(create_track_event("Video Playback Paused"))
        finally:
            destination.close()

        assert sdk.methods[:2] == ["load_metadata", "play"]
        assert sdk.positions[:2] == [100, 101]
        assert "stop" in sdk.methods
        assert sdk.methods[-1] == "playhead_position"

    def test_event_and_tick_calls_never_overlap(self):
        sdk = ExclusiveSDK(hold=0.005)
        destination = NielsenDCRDestination(
            sdk_factory=lambda settings: sdk, tick_interval=0.002
        )
        destination.update(settings_payload(), UpdateType.INITIAL)

        try:
            destination.track(
                create_track_event("Video Playback Started", {"position": 0})
            )
            for _ in range(20):
                destination.track(create_track_event("Video Playback Resumed"))
                destination.track(create_track_event("Video Playback Paused"))
                destination.track(create_track_event("Video Content Playing"))
        finally:
            destination.close()

        assert sdk.overlaps == 0
        assert sdk.positions
