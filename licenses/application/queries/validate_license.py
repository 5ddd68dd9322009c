"""
Validation queries used by the HTTP surface.
"""
from dataclasses import dataclass, field
from typing import List


@dataclass
class ValidateLicenseQuery:
    """Validate a single license key."""

    license_key: str


@dataclass
class BatchValidateLicensesQuery:
    """Validate up to 100 license keys, preserving input order."""

    license_keys: List[str] = field(default_factory=list)


@dataclass
class GetLicenseDetailQuery:
    """Full license detail with remaining time."""

    license_key: str
