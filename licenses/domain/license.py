"""
License domain entity.

This is the core domain entity representing a license key and its
lifecycle: unused -> redeemed, and either state -> revoked.
Expiry is never stored; it is evaluated against the clock on read.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from core.domain.exceptions import (
    LicenseAlreadyRedeemedError,
    LicenseAlreadyRevokedError,
    LicenseExpiredError,
    LicenseRevokedError,
)
from core.domain.value_objects import LicenseKeyCode, LicenseStatus


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Immutable; every transition returns a new instance.
    """

    key: str
    status: LicenseStatus
    created_at: datetime
    expires_at: Optional[datetime] = None
    owner_id: Optional[str] = None
    redeemed_at: Optional[datetime] = None
    created_by: Optional[str] = None
    revoked_by: Optional[str] = None
    revoke_reason: Optional[str] = None
    revoked_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if self.status == LicenseStatus.REDEEMED and (
            self.owner_id is None or self.redeemed_at is None
        ):
            raise ValueError("Redeemed license requires owner and redemption time")
        if self.status == LicenseStatus.UNUSED and (
            self.owner_id is not None or self.redeemed_at is not None
        ):
            raise ValueError("Unused license cannot have owner or redemption time")

    @classmethod
    def create(
        cls,
        key: str,
        created_at: datetime,
        expires_at: Optional[datetime] = None,
        created_by: Optional[str] = None,
    ) -> "License":
        """
        Create a new unused License.

        Args:
            key: License key, normalized and checked against the grammar
            created_at: Creation time
            expires_at: Absolute expiry, None for lifetime
            created_by: Identity of the issuing admin

        Returns:
            License entity instance
        """
        return cls(
            key=LicenseKeyCode(key).value,
            status=LicenseStatus.UNUSED,
            created_at=created_at,
            expires_at=expires_at,
            created_by=created_by,
        )

    @property
    def is_lifetime(self) -> bool:
        return self.expires_at is None

    def is_expired(self, now: datetime) -> bool:
        """
        Check expiry against ``now``.

        The comparison is strict: a license whose expiry equals ``now``
        is still live for that instant.
        """
        return self.expires_at is not None and self.expires_at < now

    def time_remaining(self, now: datetime) -> Optional[timedelta]:
        """Time until expiry, negative once expired. None for lifetime licenses."""
        if self.expires_at is None:
            return None
        return self.expires_at - now

    def ensure_redeemable(self, account_id: str, now: datetime) -> None:
        """
        Raise the error that blocks redemption, if any.

        Order: already redeemed, revoked, expired.
        """
        if self.status == LicenseStatus.REDEEMED:
            raise LicenseAlreadyRedeemedError(
                redeemed_by_caller=self.owner_id == account_id,
                redeemed_at=self.redeemed_at,
            )
        if self.status == LicenseStatus.REVOKED:
            raise LicenseRevokedError(self.revoke_reason)
        if self.is_expired(now):
            raise LicenseExpiredError(self.expires_at)

    def redeem(self, account_id: str, now: datetime) -> "License":
        """
        Bind the license to ``account_id``.

        Raises:
            LicenseAlreadyRedeemedError, LicenseRevokedError, LicenseExpiredError
        """
        self.ensure_redeemable(account_id, now)
        return replace(
            self,
            status=LicenseStatus.REDEEMED,
            owner_id=account_id,
            redeemed_at=now,
        )

    def revoke(self, revoked_by: str, reason: str, now: datetime) -> "License":
        """
        Revoke the license, keeping owner and redemption time.

        Raises:
            LicenseAlreadyRevokedError: If the license is already revoked
        """
        if self.status == LicenseStatus.REVOKED:
            raise LicenseAlreadyRevokedError(
                revoked_by=self.revoked_by,
                revoke_reason=self.revoke_reason,
                revoked_at=self.revoked_at,
            )
        return replace(
            self,
            status=LicenseStatus.REVOKED,
            revoked_by=revoked_by,
            revoke_reason=reason,
            revoked_at=now,
        )
