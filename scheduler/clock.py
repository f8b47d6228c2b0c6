"""Defines the Clock classes that drive a Dispatcher."""

import abc
import time


class Clock(abc.ABC):
    """A source of time, measured in milliseconds."""

    @abc.abstractmethod
    def now(self) -> float:
        """Get the current time (ms)."""

    @abc.abstractmethod
    def sleep(self, duration: float) -> None:
        """
        Wait for some amount of time to pass.

        Parameters:
            duration: The time to wait (ms)

        """

    def sleep_until(self, when: float) -> None:
        """Wait until the given time (ms), if it is in the future."""
        delta = when - self.now()
        if delta > 0:
            self.sleep(delta)


class WallClock(Clock):
    """The real, monotonic clock."""

    def now(self) -> float:
        """Get the current time (ms)."""
        return time.monotonic() * 1000

    def sleep(self, duration: float) -> None:
        """Block the caller for the given duration (ms)."""
        if duration > 0:
            time.sleep(duration / 1000)


class VirtualClock(Clock):
    """
    A simulated clock that only moves when told to.

    Sleeping on a VirtualClock returns immediately, having moved the clock
    forward by the requested amount. This allows code that is written against
    the Clock interface to be run deterministically, and much faster than real
    time.
    """

    _now: float

    def __init__(self, start: float = 0.0) -> None:
        """
        Create a VirtualClock.

        Parameters:
            start: The initial time (ms)

        """
        self._now = start

    def now(self) -> float:
        """Get the current simulated time (ms)."""
        return self._now

    def sleep(self, duration: float) -> None:
        """Move simulated time forward by duration (ms)."""
        self.advance(duration)

    def sleep_until(self, when: float) -> None:
        """Move simulated time to exactly the given time (ms), if it is later."""
        self._now = max(self._now, when)

    def advance(self, duration: float) -> None:
        """
        Move simulated time forward.

        Parameters:
            duration: The amount of time to add (ms)

        Raises:
            ValueError: If duration is negative

        """
        if duration < 0:
            raise ValueError(f"cannot move the clock backwards ({duration}ms)")
        self._now += duration

    def __str__(self) -> str:
        """Return string representation of the clock."""
        return f"VirtualClock({self._now}ms)"
