"""
A simple event-based execution engine.

Events are actions that are to be executed at a specific time (in the future).
An instance of Dispatcher maintains a queue of pending future events that will
be executed when their time arrives. Time comes from a Clock: either the real
clock, or a VirtualClock that only moves when the Dispatcher is told to let
time pass.
"""

from .clock import Clock, VirtualClock, WallClock
from .dispatcher import Dispatcher, Scheduler
from .event import Event
from .periodic import Handle, OneShot, Periodic
