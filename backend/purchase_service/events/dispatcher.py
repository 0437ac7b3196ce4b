"""Event Dispatcher: publishes an event to every handler registered for its type.

Invariants:
    - Handlers run sequentially, in subscription order, each awaited to completion
    - Zero handlers for an event type is a no-op
    - A handler exception propagates to the publisher; later handlers do not run

Design Decisions:
    - No fault isolation between handlers: acceptable while fan-out is one or two
      in-process listeners; revisit (gather + per-handler logging) if it grows
    - Exact-type lookup, same as the mediator: no subclass fan-out
"""

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class EventHandler(Protocol):
    async def handle(self, event: Any) -> None: ...


class EventDispatcher:
    """Registry of event handlers, filled at startup."""

    def __init__(self):
        self._handlers: dict[type, list[EventHandler]] = {}

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def handlers_for(self, event_type: type) -> tuple[EventHandler, ...]:
        return tuple(self._handlers.get(event_type, ()))

    async def publish(self, event: Any) -> None:
        if event is None:
            raise ValueError("event must not be None")

        event_type = type(event).__name__
        handlers = self.handlers_for(type(event))
        if not handlers:
            logger.debug(
                f"No event handlers registered for {event_type}",
                extra={"event_type": event_type},
            )
            return

        for handler in handlers:
            await handler.handle(event)
