"""
Django implementation of ApiCredentialRepository port.
"""
from datetime import datetime
from typing import List, Optional

from credentials.domain.api_credential import ApiCredential
from credentials.infrastructure.models import ApiCredential as ApiCredentialModel
from credentials.ports.api_credential_repository import ApiCredentialRepository


class DjangoApiCredentialRepository(ApiCredentialRepository):
    """Django ORM implementation of ApiCredentialRepository."""

    def _to_domain(self, model: ApiCredentialModel) -> ApiCredential:
        return ApiCredential(
            token_hash=model.token_hash,
            token_prefix=model.token_prefix,
            label=model.label,
            issued_by=model.issued_by,
            issued_at=model.issued_at,
            quota_per_window=model.quota_per_window,
            permissions=model.permissions,
            is_active=model.is_active,
            last_used_at=model.last_used_at,
        )

    def add(self, credential: ApiCredential) -> ApiCredential:
        model = ApiCredentialModel.objects.create(
            token_hash=credential.token_hash,
            token_prefix=credential.token_prefix,
            label=credential.label,
            issued_by=credential.issued_by,
            issued_at=credential.issued_at,
            quota_per_window=credential.quota_per_window,
            permissions=credential.permissions,
            is_active=credential.is_active,
        )
        return self._to_domain(model)

    def find_by_token_hash(self, token_hash: str) -> Optional[ApiCredential]:
        model = ApiCredentialModel.objects.filter(token_hash=token_hash).first()
        return self._to_domain(model) if model else None

    def list_all(self) -> List[ApiCredential]:
        return [self._to_domain(model) for model in ApiCredentialModel.objects.all()]

    def deactivate(self, token_hash: str) -> bool:
        updated = ApiCredentialModel.objects.filter(
            token_hash=token_hash, is_active=True
        ).update(is_active=False)
        return updated == 1

    def mark_used(self, token_hash: str, used_at: datetime) -> None:
        ApiCredentialModel.objects.filter(token_hash=token_hash).update(last_used_at=used_at)
