"""
Monotonic clock abstractions for deterministic timing.

This module provides a simple, testable way to read a high-resolution
monotonic clock via a clock object rather than calling time.perf_counter_ns()
directly. Timed GCD calls depend on this abstraction, so tests can script the
readings and assert exact elapsed durations.

The key insight: wall-clock time (datetime.now) can jump backwards on NTP
adjustments; a monotonic clock never does, so the difference of two readings
is always a valid elapsed duration.
"""

import time
from typing import Iterable, Protocol


class MonotonicClock(Protocol):
    """
    Abstract monotonic time source protocol.

    **Conceptual**: A MonotonicClock answers "how many nanoseconds have passed
    since some fixed but arbitrary point?" Only differences between readings
    are meaningful.

    **Usage**: Consumers accept a MonotonicClock (injected via parameter) and
    call clock.now_ns() before and after the measured work. In production,
    pass a RealMonotonicClock; in tests, pass a SteppingClock.

    **Example**:
        def measure(work, clock: MonotonicClock):
            started = clock.now_ns()
            work()
            return clock.now_ns() - started
    """

    def now_ns(self) -> int:
        """
        Return the current reading of this clock in nanoseconds.
        """
        ...


class RealMonotonicClock:
    """
    Clock backed by the system's highest-resolution monotonic counter.

    **Usage**:
        clock = RealMonotonicClock()
        started = clock.now_ns()
    """

    def now_ns(self) -> int:
        """Return time.perf_counter_ns()."""
        return time.perf_counter_ns()


class SteppingClock:
    """
    Clock that replays a scripted sequence of readings (for deterministic tests).

    **Conceptual**: Each call to now_ns() returns the next scripted reading.
    Once the script is exhausted, the last reading repeats, so the clock
    never appears to run backwards.

    **Usage**:
        clock = SteppingClock([1_000, 4_500])
        clock.now_ns()  # 1000
        clock.now_ns()  # 4500
        clock.now_ns()  # 4500
    """

    def __init__(self, readings: Iterable[int]):
        """
        Initialize a SteppingClock with scripted readings.

        Args:
            readings: Non-decreasing nanosecond readings, at least one.

        Raises:
            ValueError: If readings is empty or decreases.
        """
        self._readings = [int(reading) for reading in readings]
        if not self._readings:
            raise ValueError("SteppingClock needs at least one reading")
        if any(later < earlier for earlier, later in zip(self._readings, self._readings[1:])):
            raise ValueError("SteppingClock readings must be non-decreasing")
        self._position = 0

    def now_ns(self) -> int:
        reading = self._readings[min(self._position, len(self._readings) - 1)]
        self._position += 1
        return reading


def get_real_clock() -> MonotonicClock:
    """
    Factory function to create a RealMonotonicClock instance.

    Returns:
        RealMonotonicClock instance.
    """
    return RealMonotonicClock()


def get_stepping_clock(readings: Iterable[int]) -> MonotonicClock:
    """
    Factory function to create a SteppingClock with scripted readings.

    Args:
        readings: Non-decreasing nanosecond readings.

    Returns:
        SteppingClock instance.
    """
    return SteppingClock(readings)
