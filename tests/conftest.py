"""
Pytest configuration and shared fixtures.
"""

from datetime import timedelta

import pytest

from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from audit.infrastructure.recorder import AuditRecorder
from audit.infrastructure.repositories.django_audit_repository import DjangoAuditRepository
from bot.interaction import Interaction
from bot.registry import default_registry
from core.context import build_app_context
from credentials.application.commands.api_credential_commands import IssueApiCredentialCommand
from credentials.application.handlers.api_credential_handlers import IssueApiCredentialHandler
from credentials.infrastructure.repositories.django_api_credential_repository import (
    DjangoApiCredentialRepository,
)
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from tests.support import ADMIN_ID, FIXED_NOW, KEY_UNUSED, USER_ID, FakeClock


@pytest.fixture
def clock():
    """Fixture for a settable clock starting at FIXED_NOW."""
    return FakeClock()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def account_repository():
    """Fixture for AccountRepository."""
    return DjangoAccountRepository()


@pytest.fixture
def credential_repository():
    """Fixture for ApiCredentialRepository."""
    return DjangoApiCredentialRepository()


@pytest.fixture
def audit_repository():
    """Fixture for AuditRepository."""
    return DjangoAuditRepository()


@pytest.fixture
def make_license(db):
    """Factory for License rows in any lifecycle state."""

    def _make(
        key: str = KEY_UNUSED,
        status: str = "unused",
        owner_id=None,
        expires_at=None,
        created_at=FIXED_NOW - timedelta(days=1),
        redeemed_at=None,
        **fields,
    ) -> LicenseModel:
        if status == "redeemed":
            owner_id = owner_id or USER_ID
            redeemed_at = redeemed_at or FIXED_NOW - timedelta(hours=1)
        return LicenseModel.objects.create(
            key=key,
            status=status,
            owner_id=owner_id,
            expires_at=expires_at,
            created_at=created_at,
            redeemed_at=redeemed_at,
            **fields,
        )

    return _make


@pytest.fixture
def app_context(clock):
    """Fixture for an AppContext on a fixed clock with its own recorder."""
    return build_app_context(clock=clock, audit_recorder=AuditRecorder(clock=clock))


@pytest.fixture
def registry():
    """Fixture for the full command registry."""
    return default_registry()


@pytest.fixture
def dispatch(registry, app_context):
    """Run one command and return the reply."""

    def _dispatch(command, caller_id=USER_ID, caller_name="alice", subcommand=None, **options):
        interaction = Interaction(
            command=command,
            user_id=caller_id,
            username=caller_name,
            options=options,
            subcommand=subcommand,
        )
        return registry.dispatch(interaction, app_context)

    return _dispatch


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def api_token(db, credential_repository):
    """Raw token of an active API credential."""
    issued = IssueApiCredentialHandler(credential_repository).handle(
        IssueApiCredentialCommand(label="Test Client", issued_by=ADMIN_ID, issued_by_name="admin")
    )
    return issued.token
