"""
Audit repository port (interface).

Read side of the admin store: recent admin actions, generation history
and cached statistic snapshots.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional


class AuditRepository(ABC):
    """Abstract repository for audit records."""

    @abstractmethod
    def recent_actions(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Most recent admin actions, newest first."""
        pass

    @abstractmethod
    def count_actions(self) -> int:
        pass

    @abstractmethod
    def generation_stats(self) -> List[Dict[str, Any]]:
        """
        Generation totals grouped by license type.

        Returns:
            One dict per type with ``license_type``, ``generation_count``,
            ``total_licenses`` and ``last_generated``
        """
        pass

    @abstractmethod
    def recent_batches(self, limit: int = 10) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def put_stat(self, stat_key: str, value: Dict[str, Any], updated_at: datetime) -> None:
        """Insert or replace a cached statistic snapshot."""
        pass

    @abstractmethod
    def get_stat(self, stat_key: str) -> Optional[Dict[str, Any]]:
        pass
