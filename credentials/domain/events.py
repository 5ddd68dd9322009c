"""
API credential domain events.
"""
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class ApiCredentialIssued(DomainEvent):
    """Event raised when an admin issues an API credential."""

    def __init__(
        self,
        token_prefix: str,
        label: str,
        quota_per_window: int,
        actor_id: str,
        actor_name: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            aggregate_id=token_prefix,
            actor_id=actor_id,
            actor_name=actor_name,
            occurred_at=occurred_at,
        )
        self.label = label
        self.quota_per_window = quota_per_window

    def payload(self):
        return {"name": self.label, "rate_limit": self.quota_per_window}


class ApiCredentialRevoked(DomainEvent):
    """Event raised when an admin revokes an API credential."""

    def __init__(
        self,
        token_prefix: str,
        label: str,
        actor_id: str,
        actor_name: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            aggregate_id=token_prefix,
            actor_id=actor_id,
            actor_name=actor_name,
            occurred_at=occurred_at,
        )
        self.label = label

    def payload(self):
        return {"name": self.label}
