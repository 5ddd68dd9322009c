"""
AdminStatsHandler.

Computes the statistics shown by the ``admin_stats`` command and caches
the overview snapshot in the admin store.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, Union

from django.utils import timezone

from accounts.ports.account_repository import AccountRepository
from audit.application.dto.stats_dto import (
    ActionStatsDTO,
    LicenseStatsDTO,
    OverviewStatsDTO,
    UserStatsDTO,
)
from audit.application.queries.admin_stats import STAT_CATEGORIES, AdminStatsQuery
from audit.ports.audit_repository import AuditRepository
from core.domain.exceptions import ValidationError
from core.domain.value_objects import LicenseStatus
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

OVERVIEW_STAT_KEY = "overview"

StatsDTO = Union[OverviewStatsDTO, LicenseStatsDTO, ActionStatsDTO, UserStatsDTO]


class AdminStatsHandler:
    """Handler for AdminStatsQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        account_repository: AccountRepository,
        audit_repository: AuditRepository,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.license_repository = license_repository
        self.account_repository = account_repository
        self.audit_repository = audit_repository
        self.clock = clock

    def handle(self, query: AdminStatsQuery) -> StatsDTO:
        """
        Raises:
            ValidationError: If the category is unknown
        """
        category = (query.category or "overview").lower()
        if category not in STAT_CATEGORIES:
            raise ValidationError(
                f"Unknown statistics category: {query.category}", code="INVALID_CATEGORY"
            )
        return getattr(self, f"_{category}")()

    def _overview(self) -> OverviewStatsDTO:
        now = self.clock()
        stats = OverviewStatsDTO(
            total_licenses=self.license_repository.count(),
            unused=self.license_repository.count(LicenseStatus.UNUSED),
            redeemed=self.license_repository.count(LicenseStatus.REDEEMED),
            revoked=self.license_repository.count(LicenseStatus.REVOKED),
            active=self.license_repository.count_active(now),
            expired=self.license_repository.count_expired(now),
            total_users=self.account_repository.count(),
            recent_actions=self.audit_repository.recent_actions(limit=5),
        )
        self.audit_repository.put_stat(OVERVIEW_STAT_KEY, stats.to_snapshot(), now)
        return stats

    def _licenses(self) -> LicenseStatsDTO:
        return LicenseStatsDTO(
            by_type=self.audit_repository.generation_stats(),
            history=self.audit_repository.recent_batches(limit=10),
        )

    def _actions(self) -> ActionStatsDTO:
        return ActionStatsDTO(
            total=self.audit_repository.count_actions(),
            recent=self.audit_repository.recent_actions(limit=20),
        )

    def _users(self) -> UserStatsDTO:
        now = self.clock()
        return UserStatsDTO(
            total_users=self.account_repository.count(),
            registered_24h=self.account_repository.count_registered_since(
                now - timedelta(hours=24)
            ),
            registered_7d=self.account_repository.count_registered_since(now - timedelta(days=7)),
            registered_30d=self.account_repository.count_registered_since(
                now - timedelta(days=30)
            ),
            active_downloads_7d=self.account_repository.count_downloaded_since(
                now - timedelta(days=7)
            ),
            generated_at=now,
        )
