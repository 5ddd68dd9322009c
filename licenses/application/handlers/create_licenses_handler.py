"""
CreateLicensesHandler.

Handles the create licenses command for both admin entry points.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from django.db import transaction
from django.utils import timezone

from core.domain.events import EventBus
from core.domain.exceptions import DuplicateLicenseKeyError, InvalidAmountError
from core.infrastructure.database import PRIMARY_DB
from licenses.application.commands.create_licenses import CreateLicensesCommand
from licenses.application.dto.license_dto import CreatedLicensesDTO
from licenses.domain.events import LicensesGenerated
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key
from licenses.domain.tiers import TIERS, LicenseTier, get_tier, tier_code_for_hours
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

MAX_KEY_ATTEMPTS = 3
MAX_EXPIRY_DAYS = 3650


class CreateLicensesHandler:
    """Handler for CreateLicensesCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = timezone.now,
        key_generator: Callable[[], str] = generate_license_key,
    ):
        """Initialize handler with repository and collaborators."""
        self.license_repository = license_repository
        self.event_bus = event_bus
        self.clock = clock
        self.key_generator = key_generator

    def _resolve_tier(self, command: CreateLicensesCommand) -> LicenseTier:
        if command.tier_code:
            return get_tier(command.tier_code)
        if command.expiry_days is None:
            return TIERS["LIFETIME"]
        if not 1 <= command.expiry_days <= MAX_EXPIRY_DAYS:
            raise InvalidAmountError(f"Expiry must be between 1 and {MAX_EXPIRY_DAYS} days")
        hours = command.expiry_days * 24
        code = tier_code_for_hours(hours)
        name = TIERS[code].name if code in TIERS else f"{command.expiry_days} Days"
        return LicenseTier(code, name, hours)

    def handle(self, command: CreateLicensesCommand) -> CreatedLicensesDTO:
        """
        Handle create licenses command.

        Args:
            command: CreateLicensesCommand

        Returns:
            CreatedLicensesDTO with the new keys

        Raises:
            InvalidAmountError: If amount or expiry is out of range
            InvalidTierError: If the tier code is unknown
        """
        if not 1 <= command.amount <= command.max_amount:
            raise InvalidAmountError(f"Amount must be between 1 and {command.max_amount}")

        tier = self._resolve_tier(command)
        now = self.clock()
        expires_at = tier.expires_at(now)

        with transaction.atomic(using=PRIMARY_DB):
            keys = [
                self._create_one(now, expires_at, command.actor_id).key
                for _ in range(command.amount)
            ]

        logger.info(
            "Created %d license(s)",
            len(keys),
            extra={"tier": tier.code, "created_by": command.actor_id},
        )

        if self.event_bus:
            self.event_bus.publish(
                LicensesGenerated(
                    keys=keys,
                    tier_code=tier.code,
                    duration_hours=tier.hours,
                    actor_id=command.actor_id,
                    actor_name=command.actor_name,
                    occurred_at=now,
                )
            )

        return CreatedLicensesDTO(
            keys=keys,
            tier_code=tier.code,
            tier_name=tier.name,
            duration_hours=tier.hours,
            expires_at=expires_at,
        )

    def _create_one(
        self, now: datetime, expires_at: Optional[datetime], created_by: str
    ) -> License:
        attempts = 0
        while True:
            attempts += 1
            license = License.create(
                key=self.key_generator(),
                created_at=now,
                expires_at=expires_at,
                created_by=created_by,
            )
            try:
                return self.license_repository.add(license)
            except DuplicateLicenseKeyError:
                if attempts >= MAX_KEY_ATTEMPTS:
                    raise
                logger.warning("License key collision on attempt %d, regenerating", attempts)
