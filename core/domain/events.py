"""
Domain events base classes and infrastructure.

Domain events represent something that happened in the domain.
They are used for decoupling the lifecycle engine from side effects
such as audit records and metrics.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional

from django.utils import timezone


class DomainEvent:
    """
    Base class for all domain events.

    Events are created once and never mutated afterwards.
    """

    def __init__(
        self,
        aggregate_id: str,
        actor_id: Optional[str] = None,
        actor_name: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ):
        self.event_id = uuid.uuid4()
        self.occurred_at = occurred_at or timezone.now()
        self.aggregate_id = aggregate_id
        self.actor_id = actor_id
        self.actor_name = actor_name

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def payload(self) -> Dict[str, Any]:
        """Event specific fields, overridden by subclasses."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            "actor_id": self.actor_id,
            **self.payload(),
        }


class EventHandler(ABC):
    """
    Base class for event handlers.

    Handlers run synchronously inside the publishing request.
    """

    @abstractmethod
    def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """
        pass


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        pass

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        pass
