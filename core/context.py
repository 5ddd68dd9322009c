"""
Application context.

Bundles the repositories, event bus, audit recorder and configuration
values that handlers need. Built once per process from Django settings;
tests build their own with overrides.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Callable, FrozenSet

from django.conf import settings
from django.utils import timezone

from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from accounts.ports.account_repository import AccountRepository
from audit.infrastructure.recorder import AuditRecorder
from audit.infrastructure.repositories.django_audit_repository import DjangoAuditRepository
from audit.ports.audit_repository import AuditRepository
from core.authorization import is_admin
from core.domain.events import EventBus
from core.infrastructure.event_handlers import register_event_handlers
from core.infrastructure.events import InMemoryEventBus
from credentials.infrastructure.repositories.django_api_credential_repository import (
    DjangoApiCredentialRepository,
)
from credentials.ports.api_credential_repository import ApiCredentialRepository
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Collaborators shared by the command surface and the HTTP API."""

    license_repository: LicenseRepository
    account_repository: AccountRepository
    credential_repository: ApiCredentialRepository
    audit_repository: AuditRepository
    audit_recorder: AuditRecorder
    event_bus: EventBus
    admin_ids: FrozenSet[str] = field(default_factory=frozenset)
    download_url: str = ""
    download_cooldown: timedelta = timedelta(minutes=60)
    clock: Callable[[], datetime] = timezone.now

    def is_admin(self, user_id: str) -> bool:
        return is_admin(user_id, self.admin_ids)


def build_app_context(**overrides) -> AppContext:
    """
    Build a context from settings.

    Args:
        **overrides: AppContext fields to use instead of the defaults

    Returns:
        AppContext with event handlers registered on its bus
    """
    recorder = overrides.pop("audit_recorder", None) or AuditRecorder(
        buffer_size=settings.AUDIT_FALLBACK_BUFFER_SIZE
    )
    event_bus = overrides.pop("event_bus", None)
    if event_bus is None:
        event_bus = InMemoryEventBus()
        register_event_handlers(event_bus, recorder)

    values = {
        "license_repository": DjangoLicenseRepository(),
        "account_repository": DjangoAccountRepository(),
        "credential_repository": DjangoApiCredentialRepository(),
        "audit_repository": DjangoAuditRepository(),
        "admin_ids": frozenset(settings.ADMIN_IDS),
        "download_url": settings.DOWNLOAD_URL,
        "download_cooldown": timedelta(minutes=settings.DOWNLOAD_COOLDOWN_MINUTES),
    }
    values.update(overrides)
    return AppContext(audit_recorder=recorder, event_bus=event_bus, **values)


@lru_cache(maxsize=None)
def get_app_context() -> AppContext:
    """Process-wide context."""
    context = build_app_context()
    logger.info("Application context built", extra={"admins": len(context.admin_ids)})
    return context
