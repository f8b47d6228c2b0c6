"""Defines the Event class."""

import abc
import itertools
from typing import List, Tuple  # pylint: disable=unused-import

# Breaks ties between Events that are due at the same time, so that they run
# in the order they were created.
_SEQUENCE = itertools.count()


class Event(abc.ABC):
    """Event is some action that should be executed at a specific time."""

    # Time at which this event should be triggered
    _when: float
    # Creation order, used when two Events share the same time
    _seq: int
    _cancelled: bool

    def __init__(self, when: float) -> None:
        """
        Initialize an Event with its time.

        Parameters:
          when: The time of this event (ms, on the Dispatcher's clock)

        """
        self._when = when
        self._seq = next(_SEQUENCE)
        self._cancelled = False

    @abc.abstractmethod
    def execute(self) -> 'List[Event]':
        """
        Execute the event's action, returning a list of 0 or more new Events.

        Returns:
          A list of one or more new Events to be scheduled.

        """
        return []

    def cancel(self) -> None:
        """Prevent this Event from executing."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        """Whether this Event has been cancelled."""
        return self._cancelled

    @property
    def when(self) -> float:
        """Get the time for this Event."""
        return self._when

    def _key(self) -> Tuple[float, int]:
        return (self._when, self._seq)

    def __str__(self) -> str:
        """Return string representation of an Event."""
        return f"{type(self).__name__}@{self.when}"

    def __eq__(self, other: object) -> bool:
        """Equal."""
        if not isinstance(other, Event):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other: object) -> bool:
        """Not equal."""
        if not isinstance(other, Event):
            return NotImplemented
        return self._key() != other._key()

    def __lt__(self, other: object) -> bool:
        """Less."""
        if not isinstance(other, Event):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: object) -> bool:
        """Less or equal."""
        if not isinstance(other, Event):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: object) -> bool:
        """Greater."""
        if not isinstance(other, Event):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: object) -> bool:
        """Greater or equal."""
        if not isinstance(other, Event):
            return NotImplemented
        return self._key() >= other._key()

    __hash__ = object.__hash__
