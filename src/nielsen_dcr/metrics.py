"""Destination counters and timings.

Counts routed and ignored events and SDK calls per method, and times
event handling. Playhead ticks record from the clock thread, so the store
is locked. One process-wide store is shared by every destination.
"""

from __future__ import annotations

import threading
import time
from collections import Counter, deque
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

MAX_DURATION_SAMPLES = 1000  # Per metric key

# Metric names
EVENTS_ROUTED = "events.routed"
EVENTS_IGNORED = "events.ignored"
SDK_CALLS = "sdk.calls"
SDK_CALLS_SKIPPED = "sdk.calls_skipped"
SDK_ERRORS = "sdk.errors"
EVENT_DURATION = "event.duration"

Labels = tuple[tuple[str, str], ...]
MetricKey = tuple[str, Labels]


def _key(name: str, labels: dict[str, str]) -> MetricKey:
    return name, tuple(sorted(labels.items()))


def format_key(key: MetricKey) -> str:
    """Render a metric key as ``name{k=v,...}``, or the bare name."""
    name, labels = key
    if not labels:
        return name
    return name + "{" + ",".join(f"{k}={v}" for k, v in labels) + "}"


class MetricsStore:
    """Thread-safe in-memory counters and duration samples."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: Counter[MetricKey] = Counter()
        self._durations: dict[MetricKey, deque[float]] = {}

    def increment_counter(self, name: str, value: int = 1, **labels: str) -> None:
        """Increment a counter, e.g. ``increment_counter(SDK_CALLS, method="play")``."""
        key = _key(name, labels)
        with self._lock:
            self._counters[key] += value

    def get_counter(self, name: str, **labels: str) -> int:
        """Current value of one labelled counter (0 if never incremented)."""
        with self._lock:
            return self._counters[_key(name, labels)]

    def counts_by_label(self, name: str, label: str) -> dict[str, int]:
        """Totals of one counter broken down by one label.

        Example:
            >>> store.counts_by_label(SDK_CALLS, "method")
            {'load_metadata': 1, 'play': 1, 'playhead_position': 12}
        """
        totals: Counter[str] = Counter()
        with self._lock:
            for (key_name, labels), count in self._counters.items():
                value = dict(labels).get(label)
                if key_name == name and value is not None:
                    totals[value] += count
        return dict(sorted(totals.items()))

    def record_duration(
        self,
        name: str,
        duration_seconds: float,
        **labels: str,
    ) -> None:
        """Record one duration sample, keeping the most recent ones."""
        key = _key(name, labels)
        with self._lock:
            samples = self._durations.get(key)
            if samples is None:
                samples = deque(maxlen=MAX_DURATION_SAMPLES)
                self._durations[key] = samples
            samples.append(duration_seconds)

    def get_summary(self) -> dict[str, Any]:
        """Counters and duration stats, JSON-serializable."""
        with self._lock:
            counters = {
                format_key(key): count for key, count in self._counters.items()
            }
            durations = {
                format_key(key): {
                    "count": len(samples),
                    "avg_seconds": sum(samples) / len(samples),
                    "max_seconds": max(samples),
                }
                for key, samples in self._durations.items()
                if samples
            }
        return {"counters": counters, "durations": durations}

    def clear(self) -> None:
        """Drop all counters and samples (for testing)."""
        with self._lock:
            self._counters.clear()
            self._durations.clear()


_store = MetricsStore()


def get_metrics_store() -> MetricsStore:
    """Get the process-wide metrics store."""
    return _store


def increment_counter(name: str, value: int = 1, **labels: str) -> None:
    """Increment a counter in the process-wide store."""
    _store.increment_counter(name, value, **labels)


@contextmanager
def record_duration(name: str, **labels: str) -> Generator[None, None, None]:
    """Time the enclosed block into the process-wide store.

    Usage:
        with record_duration(EVENT_DURATION, kind="track"):
            router.route(event.event, event.properties, options)
    """
    start = time.monotonic()
    try:
        yield
    finally:
        _store.record_duration(name, time.monotonic() - start, **labels)


def get_metrics_summary() -> dict[str, Any]:
    """Get the summary of the process-wide store."""
    return _store.get_summary()
