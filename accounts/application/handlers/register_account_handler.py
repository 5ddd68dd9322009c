"""
RegisterAccountHandler.

Creates an account and redeems its license as one unit: if the account
insert fails the redemption is rolled back and the license stays unused.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from django.contrib.auth.hashers import make_password
from django.db import transaction
from django.utils import timezone

from accounts.application.commands.register_account import RegisterAccountCommand
from accounts.application.dto.account_dto import AccountDTO, RegistrationDTO
from accounts.domain.account import Account
from accounts.domain.events import AccountRegistered
from accounts.ports.account_repository import AccountRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    AccountAlreadyRegisteredError,
    LicenseNotFoundError,
    UsernameTakenError,
)
from core.domain.value_objects import LicenseKeyCode, Password, Username
from core.infrastructure.database import PRIMARY_DB
from licenses.domain.events import LicenseRedeemed
from licenses.domain.services import LicenseLifecycleManager
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class RegisterAccountHandler:
    """Handler for RegisterAccountCommand."""

    def __init__(
        self,
        account_repository: AccountRepository,
        license_repository: LicenseRepository,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = timezone.now,
        password_hasher: Callable[[str], str] = make_password,
    ):
        """Initialize handler with repositories."""
        self.account_repository = account_repository
        self.license_repository = license_repository
        self.event_bus = event_bus
        self.clock = clock
        self.password_hasher = password_hasher

    def handle(self, command: RegisterAccountCommand) -> RegistrationDTO:
        """
        Handle register account command.

        Format checks run first and never reach the store.

        Raises:
            InvalidUsernameError, WeakPasswordError, InvalidLicenseKeyFormatError
            AccountAlreadyRegisteredError: If the caller already has an account
            UsernameTakenError: If the display name is in use
            LicenseNotFoundError, LicenseAlreadyRedeemedError,
            LicenseRevokedError, LicenseExpiredError: From the redeem checks
        """
        username = Username(command.username).value
        password = Password(command.password)
        key = LicenseKeyCode(command.license_key).value

        if self.account_repository.find_by_external_id(command.account_id):
            raise AccountAlreadyRegisteredError()
        if self.account_repository.display_name_taken(username):
            raise UsernameTakenError()

        now = self.clock()
        license = self.license_repository.find_by_key(key)
        if license is None:
            raise LicenseNotFoundError()
        license.ensure_redeemable(command.account_id, now)

        password_hash = self.password_hasher(password.value)

        with transaction.atomic(using=PRIMARY_DB):
            redeemed = LicenseLifecycleManager.redeem(
                self.license_repository, key, command.account_id, now
            )
            account = self.account_repository.create(
                Account.create(
                    external_id=command.account_id,
                    display_name=username,
                    password_hash=password_hash,
                    license_key=key,
                    registered_at=now,
                )
            )

        logger.info("Account registered", extra={"external_id": command.account_id})

        if self.event_bus:
            self.event_bus.publish(
                LicenseRedeemed(
                    key=key, owner_id=command.account_id, actor_name=username, occurred_at=now
                )
            )
            self.event_bus.publish(
                AccountRegistered(
                    external_id=command.account_id,
                    display_name=username,
                    license_key=key,
                    occurred_at=now,
                )
            )

        return RegistrationDTO(
            account=AccountDTO.from_entity(account),
            expires_at=redeemed.expires_at,
            is_lifetime=redeemed.is_lifetime,
        )
