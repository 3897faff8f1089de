"""Synthetic playhead clock.

Nielsen expects a playhead update every second while content plays. The
clock keeps the current position, ticks it forward once per interval on a
scheduler, and reports each new value to the SDK.

Event handling and ticks run on different threads; a lock serializes
every change to the position and every playhead report.
"""

from __future__ import annotations

import contextvars
import logging
import threading
from collections.abc import Callable
from typing import Protocol

from nielsen_dcr.core.datetime_utils import current_epoch_seconds
from nielsen_dcr.metadata.values import PropertyMap, get_bool, get_int, has_value
from nielsen_dcr.playback.sink import SDKSink

logger = logging.getLogger(__name__)

TICK_INTERVAL = 1.0  # seconds
CANCEL_JOIN_TIMEOUT = 1.0  # seconds


class TimerHandle(Protocol):
    """Handle for a scheduled repeating callback."""

    def cancel(self) -> None:
        """Stop further callbacks."""
        ...


class Scheduler(Protocol):
    """Source of periodic callbacks."""

    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> TimerHandle:
        """Call callback every interval seconds until the handle is cancelled."""
        ...


class ThreadTimer:
    """Repeating timer backed by a daemon thread.

    The callback runs in a copy of the creating thread's context, so log
    records from ticks keep the session context of the event that started
    the clock.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], None],
        name: str = "playhead-clock",
    ) -> None:
        self._interval = interval
        self._callback = callback
        self._context = contextvars.copy_context()
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True, name=name)

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self._context.run(self._fire)

    def _fire(self) -> None:
        try:
            self._callback()
        except Exception:
            logger.exception("Playhead tick failed")

    def cancel(self) -> None:
        self._stop.set()
        if threading.current_thread() is self._thread:
            return
        self._thread.join(timeout=CANCEL_JOIN_TIMEOUT)
        if self._thread.is_alive():
            logger.warning(
                "Timer thread %s did not stop within timeout", self._thread.name
            )


class ThreadScheduler:
    """Scheduler that runs each repeating callback on its own daemon thread."""

    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> ThreadTimer:
        timer = ThreadTimer(interval, callback)
        timer.start()
        return timer


class VirtualTimer:
    """Timer handle driven by VirtualScheduler.advance()."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualScheduler:
    """Scheduler whose timers fire only when advanced explicitly.

    Used to replay recorded sessions faster than real time, and in tests.
    """

    def __init__(self) -> None:
        self.timers: list[VirtualTimer] = []

    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> VirtualTimer:
        timer = VirtualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self) -> list[VirtualTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def advance(self, ticks: int = 1) -> None:
        """Fire every active timer ``ticks`` times."""
        for _ in range(ticks):
            for timer in self.active_timers:
                timer.callback()


def derive_playhead_position(
    properties: PropertyMap,
    *,
    send_current_time: bool = False,
    now: Callable[[], int] = current_epoch_seconds,
) -> int:
    """Compute the playhead position an event asks for.

    Livestreams report wall-clock time: either the current UTC epoch
    seconds, or epoch seconds plus ``position`` (a negative offset meaning
    "seconds behind live"). Otherwise an explicit ``position`` overrides
    the running counter, and the default is 0.

    Args:
        properties: Event properties.
        send_current_time: Livestreams report the current time, ignoring
            the offset.
        now: Clock returning current UTC epoch seconds.

    Returns:
        Playhead position in whole seconds.
    """
    if get_bool(properties, "livestream") is True:
        current_time = now()
        if send_current_time:
            return current_time
        return current_time + (get_int(properties, "position") or 0)

    if has_value(properties, "position"):
        return get_int(properties, "position") or 0

    return 0


class PlayheadClock:
    """One-second playhead clock reporting to the SDK.

    At most one timer is active at a time. Starting a running clock does
    nothing; stopping always reports the last known position.
    """

    def __init__(
        self,
        sink: SDKSink,
        scheduler: Scheduler | None = None,
        interval: float = TICK_INTERVAL,
    ) -> None:
        self._sink = sink
        self._scheduler = scheduler or ThreadScheduler()
        self._interval = interval
        self._lock = threading.Lock()
        self._position = 0
        self._timer: TimerHandle | None = None
        # Bumped on every start/stop so ticks from a cancelled timer are dropped
        self._generation = 0

    @property
    def position(self) -> int:
        with self._lock:
            return self._position

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._timer is not None

    def start(self, position: int) -> bool:
        """Start ticking from position.

        The stored position is one less than requested because the first
        tick adds one back.

        Args:
            position: Playhead position the first tick should report.

        Returns:
            True if a timer was started, False if one was already running.
        """
        with self._lock:
            if self._timer is not None:
                logger.debug("Playhead clock already running at %d", self._position)
                return False
            self._position = position - 1
            self._generation += 1
            generation = self._generation
            self._timer = self._scheduler.schedule_repeating(
                self._interval, lambda: self._tick(generation)
            )
            logger.debug("Playhead clock started at %d", position)
            return True

    def _tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._timer is None:
                return
            self._position += 1
            self._sink.playhead_position(self._position)

    def stop(self) -> None:
        """Report the current position and cancel the timer if running."""
        with self._lock:
            position = self._position
            self._sink.playhead_position(position)
            timer = self._timer
            self._timer = None
            self._generation += 1
        if timer is not None:
            timer.cancel()
            logger.debug("Playhead clock stopped at %d", position)

    def shutdown(self) -> None:
        """Cancel the timer without reporting a final position."""
        with self._lock:
            timer = self._timer
            self._timer = None
            self._generation += 1
        if timer is not None:
            timer.cancel()
