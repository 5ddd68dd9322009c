"""
Account repository port (interface).
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from accounts.domain.account import Account


class AccountRepository(ABC):
    """
    Abstract repository for Account entities.

    Accounts are only created by registration and only mutated by the
    download operation.
    """

    @abstractmethod
    def find_by_external_id(self, external_id: str) -> Optional[Account]:
        pass

    @abstractmethod
    def display_name_taken(self, display_name: str) -> bool:
        pass

    @abstractmethod
    def create(self, account: Account) -> Account:
        """
        Insert a new account.

        Raises:
            AccountAlreadyRegisteredError: If the external id has an account
            UsernameTakenError: If the display name is in use
        """
        pass

    @abstractmethod
    def record_download(
        self,
        external_id: str,
        previous: Optional[datetime],
        downloaded_at: datetime,
        ip_address: Optional[str] = None,
    ) -> bool:
        """
        Set ``last_download_at`` if it still equals ``previous`` and
        append a download log entry.

        Returns:
            True if this call performed the update
        """
        pass

    @abstractmethod
    def list(self, offset: int = 0, limit: int = 10) -> List[Account]:
        """Page through accounts, newest registration first."""
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def count_registered_since(self, since: datetime) -> int:
        pass

    @abstractmethod
    def count_downloaded_since(self, since: datetime) -> int:
        """Accounts whose last download is at or after ``since``."""
        pass
