"""
API credential repository port (interface).
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from credentials.domain.api_credential import ApiCredential


class ApiCredentialRepository(ABC):
    """Abstract repository for ApiCredential entities."""

    @abstractmethod
    def add(self, credential: ApiCredential) -> ApiCredential:
        pass

    @abstractmethod
    def find_by_token_hash(self, token_hash: str) -> Optional[ApiCredential]:
        pass

    @abstractmethod
    def list_all(self) -> List[ApiCredential]:
        """All credentials, newest first."""
        pass

    @abstractmethod
    def deactivate(self, token_hash: str) -> bool:
        """
        Flip an active credential to inactive.

        Returns:
            True if this call performed the revocation
        """
        pass

    @abstractmethod
    def mark_used(self, token_hash: str, used_at: datetime) -> None:
        pass
