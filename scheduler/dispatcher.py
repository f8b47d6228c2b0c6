"""Defines the Scheduler interface and the Dispatcher that implements it."""

import abc
import heapq
import logging
from typing import Callable, List, Optional, Set  # pylint: disable=unused-import

from .clock import Clock, WallClock
from .event import Event
from .periodic import Handle, OneShot, Periodic

LOGGER = logging.getLogger(__name__)


class Scheduler(abc.ABC):
    """Runs callbacks repeatedly at a fixed interval until cancelled."""

    @abc.abstractmethod
    def schedule_periodic(self, interval: float,
                          callback: 'Callable[[], None]') -> Handle:
        """
        Call a function every interval milliseconds.

        Parameters:
            interval: The time between calls (ms)
            callback: The function to call

        Returns:
            A Handle that can be used to cancel the calls

        """

    @abc.abstractmethod
    def cancel(self, handle: Handle) -> None:
        """
        Cancel a scheduled callback.

        Once cancelled, the callback will not be called again. Cancelling a
        Handle that is already cancelled has no effect.
        """


class Dispatcher(Scheduler):
    """
    Dispatcher tracks and runs events.

    Events will be executed at or after their scheduled time. In the normal
    case, they will be executed very close to the scheduled time. However, the
    dispatcher is single-threaded and runs each Event to completion. Therefore,
    if there are many events scheduled for around the same time, some may get
    delayed due to Event processing overhead. Events will be executed in order,
    however, and Events with the same timestamp run in the order they were
    scheduled.

    All times are in milliseconds on the Dispatcher's Clock. With a
    VirtualClock, time only passes while the Dispatcher is running events, so
    advance() and run_pending() can be used to step through a schedule
    deterministically.
    """

    # All scheduled Events are tracked in this heap, ordered by increasing
    # Event timestamp (Event.when). Cancelled Events stay in the heap until
    # they reach the front.
    _event_queue: List[Event]
    _clock: Clock

    def __init__(self, clock: Optional[Clock] = None) -> None:
        """
        Create a new Dispatcher.

        Parameters:
            clock: The source of time (defaults to a WallClock)

        """
        self._event_queue = []
        self._clock = clock if clock is not None else WallClock()

    @property
    def clock(self) -> Clock:
        """Get the Dispatcher's Clock."""
        return self._clock

    @property
    def now(self) -> float:
        """Get the current time (ms)."""
        return self._clock.now()

    @property
    def pending(self) -> int:
        """Get the number of Events that are waiting to run."""
        return sum(1 for event in self._event_queue if not event.cancelled)

    def add(self, *events: Event) -> None:
        """
        Add event(s) to the queue.

        Parameters:
            events: The events to be scheduled

        """
        for event in events:
            LOGGER.debug("enqueue: %s", event)
            heapq.heappush(self._event_queue, event)

    def schedule_periodic(self, interval: float,
                          callback: 'Callable[[], None]') -> Handle:
        """
        Call a function every interval milliseconds.

        The first call happens one interval from now.

        Raises:
            ValueError: If interval is not positive

        """
        if not interval > 0:
            raise ValueError(f"interval must be > 0, got: {interval}")
        handle = Handle(interval)
        self.add(Periodic(self.now, interval, callback, handle))
        LOGGER.debug("scheduled: %s", handle)
        return handle

    def schedule_once(self, delay: float,
                      callback: 'Callable[[], None]') -> Handle:
        """
        Call a function once, delay milliseconds from now.

        Parameters:
            delay: The time to wait before calling (ms)
            callback: The function to call

        Returns:
            A Handle that can be used to cancel the call

        Raises:
            ValueError: If delay is negative

        """
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got: {delay}")
        handle = Handle()
        self.add(OneShot(self.now + delay, callback, handle))
        LOGGER.debug("scheduled: %s", handle)
        return handle

    def cancel(self, handle: Handle) -> None:
        """Cancel a scheduled callback."""
        if not handle.cancelled:
            LOGGER.debug("cancel: %s", handle)
        handle.cancel()

    def advance(self, duration: float) -> None:
        """
        Let time pass, running the Events that come due.

        Every Event due at or before now + duration is run in time order, with
        the clock moved to each Event's time before it runs. Events that are
        scheduled along the way are also run if they come due in time.

        Parameters:
            duration: The amount of time to let pass (ms)

        Raises:
            ValueError: If duration is negative

        """
        if duration < 0:
            raise ValueError(f"duration must be >= 0, got: {duration}")
        self.run(until=self.now + duration)

    def run_pending(self) -> None:
        """
        Run only the Events that are currently scheduled.

        Each of them is run at its scheduled time. Events that they schedule
        in turn are left in the queue, even if already due.
        """
        pending: Set[Event] = {event for event in self._event_queue
                              if not event.cancelled}
        deferred: List[Event] = []
        try:
            while pending:
                event = self._next()
                if event is None:
                    break
                heapq.heappop(self._event_queue)
                if event not in pending:
                    deferred.append(event)
                    continue
                pending.discard(event)
                self._clock.sleep_until(event.when)
                self._execute(event)
        finally:
            for event in deferred:
                heapq.heappush(self._event_queue, event)

    def run(self, until: Optional[float] = None) -> None:
        """
        Process Events until the queue is empty.

        Parameters:
            until: If given, stop processing once this time (ms) is reached,
                leaving later Events in the queue. The clock is moved to this
                time before returning.

        """
        while True:
            event = self._next()
            if event is None:
                break
            if until is not None and event.when > until:
                break
            heapq.heappop(self._event_queue)
            self._clock.sleep_until(event.when)
            self._execute(event)
        if until is not None:
            self._clock.sleep_until(until)

    def _next(self) -> Optional[Event]:
        """Get the earliest Event that is still live, without removing it."""
        while self._event_queue and self._event_queue[0].cancelled:
            heapq.heappop(self._event_queue)
        if not self._event_queue:
            return None
        return self._event_queue[0]

    def _execute(self, event: Event) -> None:
        LOGGER.debug("execute: %s", event)
        self.add(*event.execute())
