"""
In-memory event bus implementation.

Handlers are called in subscription order inside the publishing call.
A failing handler is logged and skipped so the operation that raised
the event still reports its own outcome.
"""

import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """Synchronous in-process event bus."""

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        handlers = self._handlers.get(type(event), [])
        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type)
            return

        for handler in handlers:
            self._handle_event(handler, event)

    def _handle_event(self, handler: EventHandler, event: DomainEvent) -> None:
        try:
            handler.handle(event)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Error handling %s with %s: %s",
                event.event_type,
                handler.__class__.__name__,
                e,
                exc_info=True,
            )
