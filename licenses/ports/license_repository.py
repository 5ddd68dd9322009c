"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    Status transitions are applied as conditional updates so that a
    check-then-set inside one operation cannot interleave with another
    writer on the same key.
    """

    @abstractmethod
    def add(self, license: License) -> License:
        """
        Insert a new license.

        Raises:
            DuplicateLicenseKeyError: If the key already exists
        """
        pass

    @abstractmethod
    def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by its (canonical) key.

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    def find_by_owner(self, owner_id: str) -> List[License]:
        """All licenses redeemed by an account, newest first."""
        pass

    @abstractmethod
    def mark_redeemed(self, key: str, owner_id: str, redeemed_at: datetime) -> bool:
        """
        Redeem the license if it is still unused.

        Returns:
            True if this call performed the transition
        """
        pass

    @abstractmethod
    def mark_revoked(
        self, key: str, revoked_by: str, reason: str, revoked_at: datetime
    ) -> bool:
        """
        Revoke the license if it is not revoked yet.

        Returns:
            True if this call performed the transition
        """
        pass

    @abstractmethod
    def list(
        self, status: Optional[LicenseStatus] = None, offset: int = 0, limit: int = 10
    ) -> List[License]:
        """Page through licenses, newest first."""
        pass

    @abstractmethod
    def count(self, status: Optional[LicenseStatus] = None) -> int:
        pass

    @abstractmethod
    def count_active(self, now: datetime) -> int:
        """Redeemed licenses that have not expired at ``now``."""
        pass

    @abstractmethod
    def count_expired(self, now: datetime) -> int:
        """Redeemed licenses past their expiry at ``now``."""
        pass
