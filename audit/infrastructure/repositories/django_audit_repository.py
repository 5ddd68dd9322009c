"""
Django implementation of AuditRepository port.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from django.db.models import Count, Max, Sum

from audit.infrastructure.models import AdminAction, LicenseGenerationBatch, SystemStat
from audit.ports.audit_repository import AuditRepository


class DjangoAuditRepository(AuditRepository):
    """Django ORM implementation of AuditRepository."""

    def recent_actions(self, limit: int = 10) -> List[Dict[str, Any]]:
        return [
            {
                "admin_id": action.admin_id,
                "admin_username": action.admin_username,
                "action_type": action.action_type,
                "target_type": action.target_type,
                "target_id": action.target_id,
                "details": action.details,
                "created_at": action.created_at,
            }
            for action in AdminAction.objects.all()[:limit]
        ]

    def count_actions(self) -> int:
        return AdminAction.objects.count()

    def generation_stats(self) -> List[Dict[str, Any]]:
        rows = (
            LicenseGenerationBatch.objects.values("license_type")
            .annotate(
                generation_count=Count("id"),
                total_licenses=Sum("amount"),
                last_generated=Max("created_at"),
            )
            .order_by("-total_licenses", "license_type")
        )
        return [dict(row) for row in rows]

    def recent_batches(self, limit: int = 10) -> List[Dict[str, Any]]:
        return [
            {
                "admin_username": batch.admin_username,
                "license_type": batch.license_type,
                "amount": batch.amount,
                "duration_hours": batch.duration_hours,
                "created_at": batch.created_at,
            }
            for batch in LicenseGenerationBatch.objects.all()[:limit]
        ]

    def put_stat(self, stat_key: str, value: Dict[str, Any], updated_at: datetime) -> None:
        SystemStat.objects.update_or_create(
            stat_key=stat_key,
            defaults={"stat_value": value, "last_updated": updated_at},
        )

    def get_stat(self, stat_key: str) -> Optional[Dict[str, Any]]:
        stat = SystemStat.objects.filter(stat_key=stat_key).first()
        return stat.stat_value if stat else None
