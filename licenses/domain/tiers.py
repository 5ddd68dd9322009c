"""
License tiers.

A tier is a named duration policy that fixes a license's expiry
relative to its creation time.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

from core.domain.exceptions import InvalidTierError

CUSTOM_TIER_CODE = "CUSTOM"


@dataclass(frozen=True)
class LicenseTier:
    """Named duration policy; ``hours=None`` means lifetime."""

    code: str
    name: str
    hours: Optional[int]

    @property
    def is_lifetime(self) -> bool:
        return self.hours is None

    def expires_at(self, created_at: datetime) -> Optional[datetime]:
        """Expiry for a license created at ``created_at``."""
        if self.hours is None:
            return None
        return created_at + timedelta(hours=self.hours)


TIERS: Dict[str, LicenseTier] = {
    tier.code: tier
    for tier in (
        LicenseTier("12H", "12 Hours", 12),
        LicenseTier("24H", "24 Hours", 24),
        LicenseTier("7D", "7 Days", 168),
        LicenseTier("1M", "1 Month", 720),
        LicenseTier("QUARTERLY", "Quarterly (3 Months)", 2160),
        LicenseTier("LIFETIME", "Lifetime", None),
    )
}


def get_tier(code: str) -> LicenseTier:
    """Look up a tier by code, case-insensitively."""
    tier = TIERS.get((code or "").strip().upper())
    if tier is None:
        raise InvalidTierError(code)
    return tier


def tier_code_for_hours(hours: Optional[int]) -> str:
    """Map a duration back to its tier code, or CUSTOM when none matches."""
    for tier in TIERS.values():
        if tier.hours == hours:
            return tier.code
    return CUSTOM_TIER_CODE
