"""
A metronome that emits events at a steady rate.

The Metronome emits a "tick" event once per beat, at a rate given in beats per
minute. It also emits "start" and "stop" events as it starts and stops. The
"start" and "tick" events carry the rate as their payload.

Time is provided by a Scheduler (see the scheduler package), so a Metronome can
be driven by the real clock or stepped through simulated time.
"""

import logging
import math
import numbers
from typing import Any, Optional  # pylint: disable=unused-import

import scheduler
from observer import Observer

LOGGER = logging.getLogger(__name__)


class Error(Exception):
    """Base class for exceptions from the metronome."""

class InvalidRateType(Error, TypeError):
    """The rate is not a number."""

class RateOutOfRange(Error, ValueError):
    """The rate is a number, but not one that can be used."""


def interval_for(rate: float) -> float:
    """
    Compute the time between beats.

    Parameters:
        rate: Beats per minute

    Returns:
        The time between beats (ms)

    """
    return 60000 / rate


class Metronome(Observer):
    """
    Emits a "tick" event at a regular interval, based on the current rate.

    Changing the rate of a running Metronome stops it and starts it again at
    the new rate, which emits "stop" and then "start". Starting a running
    Metronome, or stopping a stopped one, does nothing.

    A Metronome does not stop itself when it is discarded. Call stop() when
    finished with it.
    """

    DEFAULT_RATE = 60

    _rate: float
    _scheduler: scheduler.Scheduler
    _handle: Optional[scheduler.Handle]

    def __init__(self, sched: scheduler.Scheduler) -> None:
        """
        Create a stopped Metronome at the default rate.

        Parameters:
            sched: The Scheduler that will call back on each beat

        """
        super().__init__()
        self._rate = self.DEFAULT_RATE
        self._scheduler = sched
        self._handle = None

    @property
    def rate(self) -> float:
        """Get the current rate (beats per minute)."""
        return self._rate

    @rate.setter
    def rate(self, rate: Any) -> None:
        """
        Set the rate (beats per minute).

        Setting the current value again does nothing. If the Metronome is
        running, it is restarted at the new rate.

        Raises:
            InvalidRateType: If rate is not a real number
            RateOutOfRange: If rate is less than 1, or too large to give a
                usable interval

        """
        if rate == self._rate:
            return
        if isinstance(rate, bool) or not isinstance(rate, numbers.Real):
            raise InvalidRateType(f"rate must be a number, got: {rate!r}")
        if not rate >= 1:
            raise RateOutOfRange(f"rate must be at least 1, got: {rate!r}")
        try:
            interval = float(interval_for(rate))
        except OverflowError as ex:
            raise RateOutOfRange(f"rate is too large, got: {rate!r}") from ex
        if not (interval > 0 and math.isfinite(interval)):
            raise RateOutOfRange(f"rate is too large, got: {rate!r}")

        LOGGER.info("rate: %s -> %s", self._rate, rate)
        self._rate = rate
        if self.running:
            self.stop()
            self.start()

    @property
    def interval(self) -> float:
        """Get the time between ticks at the current rate (ms)."""
        return interval_for(self._rate)

    @property
    def running(self) -> bool:
        """Whether the Metronome is currently running."""
        return self._handle is not None

    def start(self) -> None:
        """
        Start the Metronome.

        Emits "start", then emits "tick" once per beat until stopped. Every
        tick of this run carries the rate at the time start() was called.
        """
        if self.running:
            return

        rate = self._rate

        def tick() -> None:
            LOGGER.debug("tick: %s bpm", rate)
            self.emit("tick", rate)

        # Running from here on, so "start" listeners see a running Metronome
        self._handle = self._scheduler.schedule_periodic(interval_for(rate), tick)
        LOGGER.info("start: %s bpm", rate)
        self.emit("start", rate)

    def stop(self) -> None:
        """
        Stop the Metronome.

        No more "tick" events are emitted until start() is called again.
        Emits "stop".
        """
        if not self.running:
            return

        assert self._handle is not None
        self._scheduler.cancel(self._handle)
        self._handle = None
        LOGGER.info("stop")
        self.emit("stop")
