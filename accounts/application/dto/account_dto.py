"""
Account DTOs returned by the application handlers.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from accounts.domain.account import Account


@dataclass
class AccountDTO:
    """Public view of an account; never carries the password hash."""

    external_id: str
    display_name: str
    license_key: str
    registered_at: datetime
    last_download_at: Optional[datetime]

    @classmethod
    def from_entity(cls, account: Account) -> "AccountDTO":
        return cls(
            external_id=account.external_id,
            display_name=account.display_name,
            license_key=account.license_key,
            registered_at=account.registered_at,
            last_download_at=account.last_download_at,
        )


@dataclass
class RegistrationDTO:
    account: AccountDTO
    expires_at: Optional[datetime]
    is_lifetime: bool


@dataclass
class DownloadDTO:
    download_url: str
    cooldown_minutes: int
    expires_at: Optional[datetime]
    is_lifetime: bool
