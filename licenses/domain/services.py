"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity. `LicenseValidator` is the single decision
function used by both the command surface and the HTTP surface.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from core.domain.exceptions import (
    LicenseAlreadyRedeemedError,
    LicenseAlreadyRevokedError,
    LicenseNotFoundError,
)
from core.domain.value_objects import LicenseStatus, ValidationOutcome
from licenses.domain.license import License

if TYPE_CHECKING:
    from licenses.ports.license_repository import LicenseRepository

MAX_BATCH_SIZE = 100

OUTCOME_MESSAGES = {
    ValidationOutcome.NONEXISTENT: "License key does not exist",
    ValidationOutcome.REVOKED: "License has been revoked",
    ValidationOutcome.NOT_ACTIVATED: "License has not been activated yet",
    ValidationOutcome.EXPIRED: "License has expired",
    ValidationOutcome.VALID: None,
}

BATCH_OUTCOME_MESSAGES = {
    ValidationOutcome.NONEXISTENT: "Does not exist",
    ValidationOutcome.REVOKED: "Revoked",
    ValidationOutcome.NOT_ACTIVATED: "Not activated",
    ValidationOutcome.EXPIRED: "Expired",
    ValidationOutcome.VALID: None,
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one license key."""

    key: str
    outcome: ValidationOutcome
    license: Optional[License] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.outcome == ValidationOutcome.VALID

    @property
    def reason(self) -> Optional[str]:
        return OUTCOME_MESSAGES[self.outcome]

    @property
    def short_reason(self) -> Optional[str]:
        return BATCH_OUTCOME_MESSAGES[self.outcome]


@dataclass(frozen=True)
class BatchValidationResult:
    """Per-key outcomes in input order plus aggregate counts."""

    results: List[ValidationResult]

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def valid_count(self) -> int:
        return sum(1 for result in self.results if result.is_valid)

    @property
    def invalid_count(self) -> int:
        return self.total - self.valid_count


class LicenseValidator:
    """Domain service for license validation."""

    @staticmethod
    def validate(key: str, license: Optional[License], now: datetime) -> ValidationResult:
        """
        Decide the validation outcome for a license.

        Precedence: existence, revoked, not redeemed, expired, valid.
        A license that is both revoked and past expiry reports revoked.

        Args:
            key: The key that was looked up
            license: The stored license, or None
            now: Evaluation time

        Returns:
            ValidationResult
        """
        if license is None:
            return ValidationResult(key=key, outcome=ValidationOutcome.NONEXISTENT)

        if license.status == LicenseStatus.REVOKED:
            return ValidationResult(
                key=key,
                outcome=ValidationOutcome.REVOKED,
                license=license,
                details={
                    "revoked_by": license.revoked_by,
                    "revoke_reason": license.revoke_reason,
                },
            )

        if license.status == LicenseStatus.UNUSED:
            return ValidationResult(
                key=key, outcome=ValidationOutcome.NOT_ACTIVATED, license=license
            )

        if license.is_expired(now):
            return ValidationResult(
                key=key,
                outcome=ValidationOutcome.EXPIRED,
                license=license,
                details={"expires_at": license.expires_at},
            )

        return ValidationResult(key=key, outcome=ValidationOutcome.VALID, license=license)


class LicenseLifecycleManager:
    """
    Applies lifecycle transitions through a repository.

    The entity decides whether a transition is allowed; the repository
    applies it with a precondition on the stored status. When the
    precondition fails another writer got there first, so the fresh
    state is re-read and the matching error raised.
    """

    @staticmethod
    def redeem(
        repository: "LicenseRepository", key: str, account_id: str, now: datetime
    ) -> License:
        license = repository.find_by_key(key)
        if license is None:
            raise LicenseNotFoundError()

        redeemed = license.redeem(account_id, now)
        if repository.mark_redeemed(key, account_id, now):
            return redeemed

        current = repository.find_by_key(key)
        if current is None:
            raise LicenseNotFoundError()
        current.ensure_redeemable(account_id, now)
        raise LicenseAlreadyRedeemedError(redeemed_by_caller=current.owner_id == account_id)

    @staticmethod
    def revoke(
        repository: "LicenseRepository",
        key: str,
        revoked_by: str,
        reason: str,
        now: datetime,
    ) -> Tuple[License, License]:
        """Returns the license before and after revocation."""
        license = repository.find_by_key(key)
        if license is None:
            raise LicenseNotFoundError()

        revoked = license.revoke(revoked_by, reason, now)
        if repository.mark_revoked(key, revoked_by, reason, now):
            return license, revoked

        current = repository.find_by_key(key)
        if current is None:
            raise LicenseNotFoundError()
        current.revoke(revoked_by, reason, now)
        raise LicenseAlreadyRevokedError()
