"""
RequestDownloadHandler.

Gates the download link behind a matching key, a live license and a
per-account cooldown.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from django.utils import timezone

from accounts.application.commands.request_download import RequestDownloadCommand
from accounts.application.dto.account_dto import DownloadDTO
from accounts.domain.account import remaining_minutes
from accounts.domain.events import DownloadGranted
from accounts.ports.account_repository import AccountRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    AccountNotFoundError,
    DownloadCooldownError,
    LicenseExpiredError,
    LicenseKeyMismatchError,
    LicenseNotActiveError,
    LicenseRevokedError,
    NoLicenseError,
)
from core.domain.value_objects import LicenseKeyCode, ValidationOutcome
from licenses.domain.services import LicenseValidator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class RequestDownloadHandler:
    """Handler for RequestDownloadCommand."""

    def __init__(
        self,
        account_repository: AccountRepository,
        license_repository: LicenseRepository,
        download_url: str,
        cooldown: timedelta = timedelta(minutes=60),
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.account_repository = account_repository
        self.license_repository = license_repository
        self.download_url = download_url
        self.cooldown = cooldown
        self.event_bus = event_bus
        self.clock = clock

    def handle(self, command: RequestDownloadCommand) -> DownloadDTO:
        """
        Handle request download command.

        Raises:
            AccountNotFoundError: If the caller is not registered
            LicenseKeyMismatchError: If the key is not the account's key
            NoLicenseError, LicenseRevokedError, LicenseNotActiveError,
            LicenseExpiredError: From validating the bound license
            DownloadCooldownError: If the last download is too recent
        """
        key = LicenseKeyCode(command.license_key).value

        account = self.account_repository.find_by_external_id(command.account_id)
        if account is None:
            raise AccountNotFoundError()
        if key != account.license_key:
            raise LicenseKeyMismatchError()

        now = self.clock()
        result = LicenseValidator.validate(key, self.license_repository.find_by_key(key), now)
        if result.outcome == ValidationOutcome.NONEXISTENT:
            raise NoLicenseError()
        if result.outcome == ValidationOutcome.REVOKED:
            raise LicenseRevokedError(result.license.revoke_reason)
        if result.outcome == ValidationOutcome.NOT_ACTIVATED:
            raise LicenseNotActiveError()
        if result.outcome == ValidationOutcome.EXPIRED:
            raise LicenseExpiredError(result.license.expires_at)

        remaining = account.cooldown_remaining(now, self.cooldown)
        if remaining is not None:
            raise DownloadCooldownError(remaining_minutes(remaining))

        if not self.account_repository.record_download(
            account.external_id, account.last_download_at, now, command.ip_address
        ):
            # A concurrent download moved last_download_at since we read it.
            current = self.account_repository.find_by_external_id(account.external_id)
            remaining = current.cooldown_remaining(now, self.cooldown) if current else None
            raise DownloadCooldownError(remaining_minutes(remaining or self.cooldown))

        logger.info("Download granted", extra={"external_id": account.external_id})

        if self.event_bus:
            self.event_bus.publish(
                DownloadGranted(
                    external_id=account.external_id,
                    display_name=account.display_name,
                    ip_address=command.ip_address,
                    occurred_at=now,
                )
            )

        return DownloadDTO(
            download_url=self.download_url,
            cooldown_minutes=remaining_minutes(self.cooldown),
            expires_at=result.license.expires_at,
            is_lifetime=result.license.is_lifetime,
        )
