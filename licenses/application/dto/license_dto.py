"""
License DTOs returned by the application handlers.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from licenses.domain.license import License
from licenses.domain.services import ValidationResult


@dataclass
class LicenseDTO:
    """DTO for license information."""

    key: str
    status: str
    owner_id: Optional[str]
    created_at: datetime
    redeemed_at: Optional[datetime]
    expires_at: Optional[datetime]
    created_by: Optional[str]
    revoked_by: Optional[str]
    revoke_reason: Optional[str]
    revoked_at: Optional[datetime]
    is_lifetime: bool

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        return cls(
            key=license.key,
            status=license.status.value,
            owner_id=license.owner_id,
            created_at=license.created_at,
            redeemed_at=license.redeemed_at,
            expires_at=license.expires_at,
            created_by=license.created_by,
            revoked_by=license.revoked_by,
            revoke_reason=license.revoke_reason,
            revoked_at=license.revoked_at,
            is_lifetime=license.is_lifetime,
        )


@dataclass
class CreatedLicensesDTO:
    """DTO for a created batch."""

    keys: List[str]
    tier_code: str
    tier_name: str
    duration_hours: Optional[int]
    expires_at: Optional[datetime]


@dataclass
class RedeemResultDTO:
    """DTO for a successful redemption."""

    license: LicenseDTO
    total_owned: int


@dataclass
class RevokeResultDTO:
    """DTO for a successful revocation."""

    license: LicenseDTO
    previous_status: str


@dataclass
class TimeRemainingDTO:
    milliseconds: int
    hours: int
    days: int


@dataclass
class LicenseDetailDTO:
    """DTO for the license detail lookup."""

    license: LicenseDTO
    is_valid: bool
    time_remaining: Optional[TimeRemainingDTO]


@dataclass
class BatchValidationDTO:
    """DTO for a batch validation."""

    total: int
    valid_count: int
    invalid_count: int
    results: List[ValidationResult]
