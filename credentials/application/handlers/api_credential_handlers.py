"""
API credential handlers.

Issue, list, revoke and authenticate API tokens.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from django.utils import timezone

from core.domain.events import EventBus
from core.domain.exceptions import (
    ApiCredentialNotFoundError,
    InvalidAmountError,
    InvalidAPIKeyError,
    MissingAPIKeyError,
    ValidationError,
)
from credentials.application.commands.api_credential_commands import (
    AuthenticateApiCredentialCommand,
    IssueApiCredentialCommand,
    RevokeApiCredentialCommand,
)
from credentials.application.dto.api_credential_dto import (
    ApiCredentialDTO,
    IssuedApiCredentialDTO,
)
from credentials.domain.api_credential import (
    MAX_QUOTA,
    MIN_QUOTA,
    ApiCredential,
    hash_token,
)
from credentials.domain.events import ApiCredentialIssued, ApiCredentialRevoked
from credentials.ports.api_credential_repository import ApiCredentialRepository
from licenses.domain.license_key import generate_api_token

logger = logging.getLogger(__name__)


class IssueApiCredentialHandler:
    """Handler for IssueApiCredentialCommand."""

    def __init__(
        self,
        credential_repository: ApiCredentialRepository,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = timezone.now,
        token_generator: Callable[[], str] = generate_api_token,
    ):
        self.credential_repository = credential_repository
        self.event_bus = event_bus
        self.clock = clock
        self.token_generator = token_generator

    def handle(self, command: IssueApiCredentialCommand) -> IssuedApiCredentialDTO:
        """
        Raises:
            ValidationError: If the label is empty
            InvalidAmountError: If the quota is outside 10-1000
        """
        label = (command.label or "").strip()
        if not label:
            raise ValidationError("API key name is required", code="INVALID_NAME")
        if not MIN_QUOTA <= command.quota_per_window <= MAX_QUOTA:
            raise InvalidAmountError(f"Rate limit must be between {MIN_QUOTA} and {MAX_QUOTA}")

        now = self.clock()
        token = self.token_generator()
        credential = self.credential_repository.add(
            ApiCredential.issue(
                token=token,
                label=label,
                issued_by=command.issued_by,
                issued_at=now,
                quota_per_window=command.quota_per_window,
            )
        )

        logger.info(
            "API key issued: %s...",
            credential.token_prefix[:8],
            extra={"issued_by": command.issued_by},
        )

        if self.event_bus:
            self.event_bus.publish(
                ApiCredentialIssued(
                    token_prefix=credential.token_prefix,
                    label=credential.label,
                    quota_per_window=credential.quota_per_window,
                    actor_id=command.issued_by,
                    actor_name=command.issued_by_name,
                    occurred_at=now,
                )
            )

        return IssuedApiCredentialDTO(
            token=token, credential=ApiCredentialDTO.from_entity(credential)
        )


class ListApiCredentialsHandler:
    """Lists every credential, active or not."""

    def __init__(self, credential_repository: ApiCredentialRepository):
        self.credential_repository = credential_repository

    def handle(self) -> List[ApiCredentialDTO]:
        return [
            ApiCredentialDTO.from_entity(credential)
            for credential in self.credential_repository.list_all()
        ]


class RevokeApiCredentialHandler:
    """Handler for RevokeApiCredentialCommand."""

    def __init__(
        self,
        credential_repository: ApiCredentialRepository,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.credential_repository = credential_repository
        self.event_bus = event_bus
        self.clock = clock

    def handle(self, command: RevokeApiCredentialCommand) -> ApiCredentialDTO:
        """
        Raises:
            ApiCredentialNotFoundError: If the token is unknown or already revoked
        """
        token_hash = hash_token((command.token or "").strip())
        credential = self.credential_repository.find_by_token_hash(token_hash)
        if credential is None or not self.credential_repository.deactivate(token_hash):
            raise ApiCredentialNotFoundError()

        revoked = credential.revoke()
        logger.info(
            "API key revoked: %s...",
            revoked.token_prefix[:8],
            extra={"revoked_by": command.revoked_by},
        )

        if self.event_bus:
            self.event_bus.publish(
                ApiCredentialRevoked(
                    token_prefix=revoked.token_prefix,
                    label=revoked.label,
                    actor_id=command.revoked_by,
                    actor_name=command.revoked_by_name,
                    occurred_at=self.clock(),
                )
            )

        return ApiCredentialDTO.from_entity(revoked)


class AuthenticateApiCredentialHandler:
    """
    Checks a presented token.

    The token must exist and be active; every successful check updates
    ``last_used_at``.
    """

    def __init__(
        self,
        credential_repository: ApiCredentialRepository,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.credential_repository = credential_repository
        self.clock = clock

    def handle(self, command: AuthenticateApiCredentialCommand) -> ApiCredential:
        """
        Raises:
            MissingAPIKeyError: If no token was presented
            InvalidAPIKeyError: If the token is unknown or revoked
        """
        token = (command.token or "").strip()
        if not token:
            raise MissingAPIKeyError()

        token_hash = hash_token(token)
        credential = self.credential_repository.find_by_token_hash(token_hash)
        if credential is None or not credential.is_active:
            logger.warning("Invalid API key attempted: %s...", token[:8])
            raise InvalidAPIKeyError()

        self.credential_repository.mark_used(token_hash, self.clock())
        return credential
