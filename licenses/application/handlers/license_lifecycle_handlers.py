"""
License lifecycle handlers.

Handlers for redeem and revoke license commands.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from django.utils import timezone

from core.domain.events import EventBus
from core.domain.value_objects import LicenseKeyCode
from licenses.application.commands.redeem_license import RedeemLicenseCommand
from licenses.application.commands.revoke_license import (
    DEFAULT_REVOKE_REASON,
    RevokeLicenseCommand,
)
from licenses.application.dto.license_dto import LicenseDTO, RedeemResultDTO, RevokeResultDTO
from licenses.domain.events import LicenseRedeemed, LicenseRevoked
from licenses.domain.services import LicenseLifecycleManager
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class RedeemLicenseHandler:
    """Handler for RedeemLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.event_bus = event_bus
        self.clock = clock

    def handle(self, command: RedeemLicenseCommand) -> RedeemResultDTO:
        """
        Handle redeem license command.

        Args:
            command: RedeemLicenseCommand

        Returns:
            RedeemResultDTO with the redeemed license

        Raises:
            InvalidLicenseKeyFormatError: If the key is malformed
            LicenseNotFoundError: If no license has that key
            LicenseAlreadyRedeemedError: If it was redeemed before, by anyone
            LicenseRevokedError: If it was revoked
            LicenseExpiredError: If it is past its expiry
        """
        key = LicenseKeyCode(command.license_key).value
        now = self.clock()

        redeemed = LicenseLifecycleManager.redeem(
            self.license_repository, key, command.account_id, now
        )
        total_owned = len(self.license_repository.find_by_owner(command.account_id))

        logger.info("License redeemed", extra={"owner_id": command.account_id})

        if self.event_bus:
            self.event_bus.publish(
                LicenseRedeemed(
                    key=key,
                    owner_id=command.account_id,
                    actor_name=command.account_name,
                    occurred_at=now,
                )
            )

        return RedeemResultDTO(license=LicenseDTO.from_entity(redeemed), total_owned=total_owned)


class RevokeLicenseHandler:
    """Handler for RevokeLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.event_bus = event_bus
        self.clock = clock

    def handle(self, command: RevokeLicenseCommand) -> RevokeResultDTO:
        """
        Handle revoke license command.

        Raises:
            LicenseNotFoundError: If license not found
            LicenseAlreadyRevokedError: If it is already revoked, with prior metadata
        """
        key = LicenseKeyCode(command.license_key).value
        reason = (command.reason or "").strip() or DEFAULT_REVOKE_REASON
        now = self.clock()

        previous, revoked = LicenseLifecycleManager.revoke(
            self.license_repository, key, command.revoked_by, reason, now
        )

        logger.info(
            "License revoked",
            extra={"revoked_by": command.revoked_by, "previous_status": previous.status.value},
        )

        if self.event_bus:
            self.event_bus.publish(
                LicenseRevoked(
                    key=key,
                    reason=reason,
                    actor_id=command.revoked_by,
                    actor_name=command.revoked_by_name,
                    previous_status=previous.status.value,
                    occurred_at=now,
                )
            )

        return RevokeResultDTO(
            license=LicenseDTO.from_entity(revoked),
            previous_status=previous.status.value,
        )
