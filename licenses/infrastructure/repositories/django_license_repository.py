"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import List, Optional

from django.db import IntegrityError, transaction
from django.db.models import Q

from core.domain.exceptions import DuplicateLicenseKeyError
from core.domain.value_objects import LicenseStatus
from core.infrastructure.database import PRIMARY_DB
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Maps the status enum to its stored string
    3. Applies transitions as conditional UPDATE statements
    """

    status_map = {status.value: status for status in LicenseStatus}

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            key=model.key,
            status=self.status_map[model.status],
            created_at=model.created_at,
            expires_at=model.expires_at,
            owner_id=model.owner_id,
            redeemed_at=model.redeemed_at,
            created_by=model.created_by,
            revoked_by=model.revoked_by,
            revoke_reason=model.revoke_reason,
            revoked_at=model.revoked_at,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to an unsaved Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        return LicenseModel(
            key=license.key,
            status=license.status.value,
            owner_id=license.owner_id,
            created_at=license.created_at,
            redeemed_at=license.redeemed_at,
            expires_at=license.expires_at,
            created_by=license.created_by,
            revoked_by=license.revoked_by,
            revoke_reason=license.revoke_reason,
            revoked_at=license.revoked_at,
        )

    def add(self, license: License) -> License:
        model = self._to_model(license)
        try:
            with transaction.atomic(using=PRIMARY_DB):
                model.save(force_insert=True, using=PRIMARY_DB)
        except IntegrityError as e:
            raise DuplicateLicenseKeyError(license.key) from e
        return self._to_domain(model)

    def find_by_key(self, key: str) -> Optional[License]:
        model = LicenseModel.objects.filter(key=key).first()
        return self._to_domain(model) if model else None

    def find_by_owner(self, owner_id: str) -> List[License]:
        models = LicenseModel.objects.filter(owner_id=owner_id).order_by("-redeemed_at")
        return [self._to_domain(model) for model in models]

    def mark_redeemed(self, key: str, owner_id: str, redeemed_at: datetime) -> bool:
        updated = LicenseModel.objects.filter(key=key, status="unused").update(
            status="redeemed",
            owner_id=owner_id,
            redeemed_at=redeemed_at,
        )
        return updated == 1

    def mark_revoked(
        self, key: str, revoked_by: str, reason: str, revoked_at: datetime
    ) -> bool:
        updated = (
            LicenseModel.objects.filter(key=key)
            .exclude(status="revoked")
            .update(
                status="revoked",
                revoked_by=revoked_by,
                revoke_reason=reason,
                revoked_at=revoked_at,
            )
        )
        return updated == 1

    def _filtered(self, status: Optional[LicenseStatus]):
        queryset = LicenseModel.objects.all()
        if status is not None:
            queryset = queryset.filter(status=status.value)
        return queryset

    def list(
        self, status: Optional[LicenseStatus] = None, offset: int = 0, limit: int = 10
    ) -> List[License]:
        models = self._filtered(status)[offset : offset + limit]
        return [self._to_domain(model) for model in models]

    def count(self, status: Optional[LicenseStatus] = None) -> int:
        return self._filtered(status).count()

    def count_active(self, now: datetime) -> int:
        return LicenseModel.objects.filter(
            Q(expires_at__isnull=True) | Q(expires_at__gte=now),
            status="redeemed",
        ).count()

    def count_expired(self, now: datetime) -> int:
        return LicenseModel.objects.filter(status="redeemed", expires_at__lt=now).count()
