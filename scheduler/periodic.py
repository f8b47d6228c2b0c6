"""Simple time-based events, and the Handles used to cancel them."""

import itertools
from typing import Callable, List, Optional  # pylint: disable=unused-import

from .event import Event

_HANDLE_IDS = itertools.count(1)


class Handle:
    """
    An opaque token for a scheduled action.

    A Handle is returned whenever an action is scheduled, and it is the only
    way to cancel that action. For periodic actions, the Handle follows the
    action from one firing to the next, so cancelling it stops all future
    firings.
    """

    _id: int
    _interval: Optional[float]
    _event: Optional[Event]
    _cancelled: bool

    def __init__(self, interval: Optional[float] = None) -> None:
        """
        Create a Handle.

        Parameters:
            interval: The repeat interval (ms) of a periodic action, or None
                for a one-shot action

        """
        self._id = next(_HANDLE_IDS)
        self._interval = interval
        self._event = None
        self._cancelled = False

    @property
    def interval(self) -> Optional[float]:
        """Get the repeat interval (ms), if any."""
        return self._interval

    @property
    def active(self) -> bool:
        """Whether the action is still due to fire again."""
        return self._event is not None

    @property
    def cancelled(self) -> bool:
        """Whether the Handle has been cancelled."""
        return self._cancelled

    def cancel(self) -> None:
        """Cancel the action. Cancelling more than once has no effect."""
        self._cancelled = True
        if self._event is not None:
            self._event.cancel()
            self._event = None

    def _track(self, event: Optional[Event]) -> None:
        self._event = event

    def __str__(self) -> str:
        """Return string representation of a Handle."""
        if self._interval is None:
            return f"Handle#{self._id}"
        return f"Handle#{self._id}({self._interval}ms)"


class OneShot(Event):
    """An event that calls a function at a specific time."""

    # The action function must be a list to work around 2 issues:
    #  - mypy doesn't like assignment to a function variable
    #  - The a bare function is assumed to be a method that would receive self
    # So, we just embed it in a single element list to avoid both problems.
    _action: List[Callable[[], None]]
    _handle: Handle

    def __init__(self, when: float, action: 'Callable[[], None]',
                 handle: Handle) -> None:
        """
        Define an event that executes at a specific time.

        Parameters:
            when: The time when the action should execute (ms)
            action: A function to call that performs the action
            handle: The Handle that can cancel this event

        """
        self._action = [action]
        self._handle = handle
        super().__init__(when=when)
        handle._track(self)  # pylint: disable=protected-access

    def execute(self) -> 'List[Event]':
        """Execute the supplied action."""
        self._handle._track(None)  # pylint: disable=protected-access
        self._action[0]()
        return []


class Periodic(Event):
    """
    An event that fires at a constant rate.

    Firing times are computed from the time of the first firing, rather than
    by repeatedly adding the interval, so they do not drift due to rounding.
    """

    # See OneShot._action
    _action: List[Callable[[], None]]
    _handle: Handle
    _origin: float
    _interval: float
    _count: int

    def __init__(self, origin: float,  # pylint: disable=too-many-arguments
                 interval: float,
                 action: 'Callable[[], None]',
                 handle: Handle,
                 count: int = 1) -> None:
        """
        Define an event that executes at a fixed interval.

        Parameters:
            origin: The time the action was scheduled (ms)
            interval: The time between executions (ms)
            action: A function to call with each execution
            handle: The Handle that can cancel this event (and its successors)
            count: Which execution this is; it is due at
                origin + count * interval

        """
        self._action = [action]
        self._handle = handle
        self._origin = origin
        self._interval = interval
        self._count = count
        super().__init__(when=origin + count * interval)
        handle._track(self)  # pylint: disable=protected-access

    def execute(self) -> 'List[Event]':
        """
        Execute the supplied periodic action.

        The next execution is scheduled only if the action returns normally
        and did not cancel the Handle.
        """
        self._handle._track(None)  # pylint: disable=protected-access
        self._action[0]()
        if self._handle.cancelled:
            return []
        return [Periodic(self._origin, self._interval, self._action[0],
                         self._handle, self._count + 1)]
