"""
License domain events.
"""
from datetime import datetime
from typing import List, Optional

from core.domain.events import DomainEvent


class LicensesGenerated(DomainEvent):
    """Event raised when an admin creates a batch of licenses."""

    def __init__(
        self,
        keys: List[str],
        tier_code: str,
        duration_hours: Optional[int],
        actor_id: str,
        actor_name: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            aggregate_id=keys[0] if keys else "",
            actor_id=actor_id,
            actor_name=actor_name,
            occurred_at=occurred_at,
        )
        self.keys = list(keys)
        self.tier_code = tier_code
        self.duration_hours = duration_hours

    def payload(self):
        return {
            "amount": len(self.keys),
            "tier": self.tier_code,
            "duration_hours": self.duration_hours,
        }


class LicenseRedeemed(DomainEvent):
    """Event raised when a license is bound to an account."""

    def __init__(
        self,
        key: str,
        owner_id: str,
        actor_name: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            aggregate_id=key,
            actor_id=owner_id,
            actor_name=actor_name,
            occurred_at=occurred_at,
        )
        self.key = key
        self.owner_id = owner_id

    def payload(self):
        return {"owner_id": self.owner_id}


class LicenseRevoked(DomainEvent):
    """Event raised when an admin revokes a license."""

    def __init__(
        self,
        key: str,
        reason: str,
        actor_id: str,
        actor_name: str,
        previous_status: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            aggregate_id=key,
            actor_id=actor_id,
            actor_name=actor_name,
            occurred_at=occurred_at,
        )
        self.key = key
        self.reason = reason
        self.previous_status = previous_status

    def payload(self):
        return {"reason": self.reason, "previous_status": self.previous_status}
