"""
Account domain entity.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class Account:
    """
    A registered chat identity.

    ``license_key`` is the license the account was created with and never
    changes. ``password_hash`` is opaque and never rendered.
    """

    external_id: str
    display_name: str
    password_hash: str
    license_key: str
    registered_at: datetime
    last_download_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate account entity."""
        if not self.external_id:
            raise ValueError("External ID is required")
        if not self.license_key:
            raise ValueError("Bound license key is required")

    def __repr__(self) -> str:
        return f"Account(external_id={self.external_id!r}, display_name={self.display_name!r})"

    @classmethod
    def create(
        cls,
        external_id: str,
        display_name: str,
        password_hash: str,
        license_key: str,
        registered_at: datetime,
    ) -> "Account":
        return cls(
            external_id=external_id,
            display_name=display_name,
            password_hash=password_hash,
            license_key=license_key,
            registered_at=registered_at,
        )

    def cooldown_remaining(self, now: datetime, cooldown: timedelta) -> Optional[timedelta]:
        """
        Time left before the next download is allowed.

        Measured from the last stored download only. None when a download
        is allowed now.
        """
        if self.last_download_at is None:
            return None
        elapsed = now - self.last_download_at
        if elapsed < cooldown:
            return cooldown - elapsed
        return None


def remaining_minutes(remaining: timedelta) -> int:
    """Whole minutes to wait, rounded up."""
    return math.ceil(remaining / timedelta(minutes=1))
