"""
Statistics DTOs.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List


@dataclass
class OverviewStatsDTO:
    """License and user totals."""

    total_licenses: int
    unused: int
    redeemed: int
    revoked: int
    active: int
    expired: int
    total_users: int
    recent_actions: List[Dict[str, Any]] = field(default_factory=list)

    def to_snapshot(self) -> Dict[str, int]:
        """JSON-safe counts, stored as the cached overview."""
        return {
            "total_licenses": self.total_licenses,
            "unused": self.unused,
            "redeemed": self.redeemed,
            "revoked": self.revoked,
            "active": self.active,
            "expired": self.expired,
            "total_users": self.total_users,
        }


@dataclass
class LicenseStatsDTO:
    """Generation totals by license type plus recent history."""

    by_type: List[Dict[str, Any]]
    history: List[Dict[str, Any]]


@dataclass
class ActionStatsDTO:
    total: int
    recent: List[Dict[str, Any]]


@dataclass
class UserStatsDTO:
    total_users: int
    registered_24h: int
    registered_7d: int
    registered_30d: int
    active_downloads_7d: int
    generated_at: datetime

    @property
    def activity_rate(self) -> float:
        """Share of users who downloaded in the last 7 days, in percent."""
        if not self.total_users:
            return 0.0
        return round(self.active_downloads_7d * 100 / self.total_users, 1)
