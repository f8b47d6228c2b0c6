"""
Synchronous named-event notification.

An Observer keeps, for each event name, an ordered list of handler functions.
Emitting an event calls each of its handlers in the order they were
registered, before emit() returns.
"""

import logging
from typing import Any, Callable, Dict, List  # pylint: disable=unused-import

LOGGER = logging.getLogger(__name__)

Handler = Callable[..., Any]


class _Once:  # pylint: disable=too-few-public-methods
    """Wraps a handler registered with Observer.once()."""

    def __init__(self, observer: 'Observer', event: str, handler: Handler) -> None:
        self.observer = observer
        self.event = event
        self.handler = handler

    def __call__(self, *args: Any) -> Any:
        self.observer.off(self.event, self)
        return self.handler(*args)


class Observer:
    """
    Registry of handlers for named events.

    A handler that raises does not prevent the remaining handlers from being
    called, and the exception does not reach the code that emitted the event.
    The failure is logged instead.
    """

    _handlers: Dict[str, List[Handler]]

    def __init__(self) -> None:
        """Create an Observer with no handlers."""
        self._handlers = {}

    def on(self, event: str, handler: Handler) -> 'Observer':  # pylint: disable=invalid-name
        """
        Register a handler for an event.

        The same handler may be registered more than once, in which case it is
        called once per registration.

        Parameters:
            event: The name of the event
            handler: The function to call when the event is emitted; it
                receives the event's payload as positional arguments

        Returns:
            This Observer, so calls can be chained

        """
        self._handlers.setdefault(event, []).append(handler)
        return self

    def once(self, event: str, handler: Handler) -> 'Observer':
        """Register a handler that is removed before it is first called."""
        return self.on(event, _Once(self, event, handler))

    def off(self, event: str, handler: Handler) -> 'Observer':
        """
        Unregister a handler.

        If the handler was registered more than once, only the most recent
        registration is removed. Unknown handlers are ignored.
        """
        handlers = self._handlers.get(event, [])
        for index in range(len(handlers) - 1, -1, -1):
            registered = handlers[index]
            if registered == handler or \
                    (isinstance(registered, _Once) and registered.handler == handler):
                del handlers[index]
                break
        if not handlers:
            self._handlers.pop(event, None)
        return self

    def listener_count(self, event: str) -> int:
        """Get the number of handlers registered for an event."""
        return len(self._handlers.get(event, []))

    def emit(self, event: str, *args: Any) -> bool:
        """
        Notify the handlers of an event.

        Handlers registered or removed while the event is being emitted do not
        affect this emission.

        Parameters:
            event: The name of the event
            args: The payload passed to each handler

        Returns:
            True if the event had any handlers

        """
        handlers = list(self._handlers.get(event, []))
        for handler in handlers:
            try:
                handler(*args)
            except Exception:  # pylint: disable=broad-except
                LOGGER.exception("handler %r for event '%s' failed", handler, event)
        return bool(handlers)
