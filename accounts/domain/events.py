"""
Account domain events.
"""
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class AccountRegistered(DomainEvent):
    """Event raised when an account is created."""

    def __init__(
        self,
        external_id: str,
        display_name: str,
        license_key: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            aggregate_id=external_id,
            actor_id=external_id,
            actor_name=display_name,
            occurred_at=occurred_at,
        )
        self.display_name = display_name
        self.license_key = license_key

    def payload(self):
        return {"display_name": self.display_name}


class DownloadGranted(DomainEvent):
    """Event raised when an account is handed the download link."""

    def __init__(
        self,
        external_id: str,
        display_name: str,
        ip_address: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            aggregate_id=external_id,
            actor_id=external_id,
            actor_name=display_name,
            occurred_at=occurred_at,
        )
        self.display_name = display_name
        self.ip_address = ip_address
