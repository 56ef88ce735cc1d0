"""In-process notifications from the session to the presentation layer."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

SESSION_OPENED = "session.opened"
SESSION_READY = "session.ready"
SESSION_CHANGED = "session.changed"
SESSION_CLOSED = "session.closed"

EventHandler = Callable[[dict[str, Any]], None]


class EventBus:
    """Dispatches events to subscribers by event name, in subscription order."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> Callable[[], None]:
        """Register a callback; returns a function that removes it again."""
        self._handlers[event_name].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(event_name, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        for handler in list(self._handlers.get(event_name, [])):
            handler(payload)
