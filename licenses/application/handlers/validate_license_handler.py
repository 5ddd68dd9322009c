"""
Validation handlers for the HTTP surface.

All three handlers decide validity with `LicenseValidator`, so the
precedence (existence, revoked, not redeemed, expired) is the same
everywhere.
"""
from datetime import datetime
from typing import Callable

from django.utils import timezone

from core.domain.exceptions import LicenseNotFoundError, TooManyKeysError
from core.domain.value_objects import is_valid_license_key, normalize_license_key
from licenses.application.dto.license_dto import (
    BatchValidationDTO,
    LicenseDetailDTO,
    LicenseDTO,
    TimeRemainingDTO,
)
from licenses.application.queries.validate_license import (
    BatchValidateLicensesQuery,
    GetLicenseDetailQuery,
    ValidateLicenseQuery,
)
from licenses.domain.services import (
    MAX_BATCH_SIZE,
    BatchValidationResult,
    LicenseValidator,
    ValidationResult,
)
from licenses.ports.license_repository import LicenseRepository

MS_PER_HOUR = 60 * 60 * 1000
MS_PER_DAY = 24 * MS_PER_HOUR


class ValidateLicenseHandler:
    """Handler for ValidateLicenseQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.license_repository = license_repository
        self.clock = clock

    def validate_key(self, raw_key: str, now: datetime) -> ValidationResult:
        """Validate one key. Malformed keys cannot exist and skip the store."""
        key = normalize_license_key(raw_key)
        if not is_valid_license_key(key):
            return LicenseValidator.validate(key, None, now)
        return LicenseValidator.validate(key, self.license_repository.find_by_key(key), now)

    def handle(self, query: ValidateLicenseQuery) -> ValidationResult:
        return self.validate_key(query.license_key, self.clock())


class BatchValidateLicensesHandler(ValidateLicenseHandler):
    """Handler for BatchValidateLicensesQuery."""

    def handle(self, query: BatchValidateLicensesQuery) -> BatchValidationDTO:
        """
        Validate every key independently, in input order.

        Raises:
            TooManyKeysError: If more than 100 keys are submitted; the
                store is not touched in that case
        """
        if len(query.license_keys) > MAX_BATCH_SIZE:
            raise TooManyKeysError(MAX_BATCH_SIZE)

        now = self.clock()
        batch = BatchValidationResult(
            results=[self.validate_key(key, now) for key in query.license_keys]
        )
        return BatchValidationDTO(
            total=batch.total,
            valid_count=batch.valid_count,
            invalid_count=batch.invalid_count,
            results=batch.results,
        )


class GetLicenseDetailHandler(ValidateLicenseHandler):
    """Handler for GetLicenseDetailQuery."""

    def handle(self, query: GetLicenseDetailQuery) -> LicenseDetailDTO:
        """
        Raises:
            LicenseNotFoundError: If no license has that key
        """
        now = self.clock()
        result = self.validate_key(query.license_key, now)
        if result.license is None:
            raise LicenseNotFoundError()

        remaining = result.license.time_remaining(now)
        time_remaining = None
        if remaining is not None:
            milliseconds = int(remaining.total_seconds() * 1000)
            time_remaining = TimeRemainingDTO(
                milliseconds=milliseconds,
                hours=milliseconds // MS_PER_HOUR,
                days=milliseconds // MS_PER_DAY,
            )

        return LicenseDetailDTO(
            license=LicenseDTO.from_entity(result.license),
            is_valid=result.is_valid,
            time_remaining=time_remaining,
        )
