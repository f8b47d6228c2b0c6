"""Test fixtures for pytest."""

from typing import Any, List, Tuple

import pytest

import scheduler
from metronome import Metronome

def pytest_addoption(parser):
    """Add command-line options to pytest."""
    parser.addoption(
        "--run-realtime", action="store_true", default=False,
        help="run tests that wait on the real clock"
    )

def pytest_configure(config):
    """Define realtime pytest mark."""
    config.addinivalue_line("markers", "realtime: mark test as waiting on the real clock")

def pytest_collection_modifyitems(config, items):
    """Only run realtime tests when --run-realtime is used."""
    if not config.getoption("--run-realtime"):
        skip_realtime = pytest.mark.skip(reason="need --run-realtime option to run")
        for item in items:
            if "realtime" in item.keywords:
                item.add_marker(skip_realtime)


class Recorder:
    """Collects the events emitted by a Metronome, in order."""

    events: List[Tuple[Any, ...]]

    def __init__(self, metro: Metronome) -> None:
        """Listen to all of the Metronome's events."""
        self.events = []
        for name in ("start", "tick", "stop"):
            metro.on(name, self._listener(name))

    def _listener(self, name: str):
        def handler(*args: Any) -> None:
            self.events.append((name,) + args)
        return handler

    def names(self) -> List[str]:
        """Get the names of the recorded events."""
        return [event[0] for event in self.events]

    def of(self, name: str) -> List[Tuple[Any, ...]]:  # pylint: disable=invalid-name
        """Get the recorded events with the given name."""
        return [event for event in self.events if event[0] == name]

    def clear(self) -> None:
        """Forget the events recorded so far."""
        self.events.clear()


@pytest.fixture
def clock():
    """A simulated clock, starting at 0."""
    return scheduler.VirtualClock()

@pytest.fixture
# pylint: disable=redefined-outer-name
def dispatch(clock):
    """A Dispatcher driven by simulated time."""
    return scheduler.Dispatcher(clock)

@pytest.fixture
# pylint: disable=redefined-outer-name
def metro(request, dispatch):
    """
    A stopped Metronome driven by simulated time.

    The Metronome is stopped at the end of the test.
    """
    instance = Metronome(dispatch)
    request.addfinalizer(instance.stop)
    return instance

@pytest.fixture
# pylint: disable=redefined-outer-name
def recorder(metro):
    """Records every event the metro fixture emits."""
    return Recorder(metro)
