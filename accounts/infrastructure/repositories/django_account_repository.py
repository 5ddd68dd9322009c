"""
Django implementation of AccountRepository port.
"""
from datetime import datetime
from typing import List, Optional

from django.db import IntegrityError, transaction

from accounts.domain.account import Account
from accounts.infrastructure.models import Account as AccountModel
from accounts.infrastructure.models import DownloadLog
from accounts.ports.account_repository import AccountRepository
from core.domain.exceptions import AccountAlreadyRegisteredError, UsernameTakenError
from core.infrastructure.database import PRIMARY_DB


class DjangoAccountRepository(AccountRepository):
    """Django ORM implementation of AccountRepository."""

    def _to_domain(self, model: AccountModel) -> Account:
        return Account(
            external_id=model.external_id,
            display_name=model.display_name,
            password_hash=model.password_hash,
            license_key=model.license_id,
            registered_at=model.registered_at,
            last_download_at=model.last_download_at,
        )

    def find_by_external_id(self, external_id: str) -> Optional[Account]:
        model = AccountModel.objects.filter(external_id=external_id).first()
        return self._to_domain(model) if model else None

    def display_name_taken(self, display_name: str) -> bool:
        return AccountModel.objects.filter(display_name=display_name).exists()

    def create(self, account: Account) -> Account:
        model = AccountModel(
            external_id=account.external_id,
            display_name=account.display_name,
            password_hash=account.password_hash,
            license_id=account.license_key,
            registered_at=account.registered_at,
        )
        try:
            with transaction.atomic(using=PRIMARY_DB):
                model.save(force_insert=True, using=PRIMARY_DB)
        except IntegrityError as e:
            if AccountModel.objects.filter(external_id=account.external_id).exists():
                raise AccountAlreadyRegisteredError() from e
            raise UsernameTakenError() from e
        return self._to_domain(model)

    def record_download(
        self,
        external_id: str,
        previous: Optional[datetime],
        downloaded_at: datetime,
        ip_address: Optional[str] = None,
    ) -> bool:
        with transaction.atomic(using=PRIMARY_DB):
            updated = AccountModel.objects.filter(
                external_id=external_id, last_download_at=previous
            ).update(last_download_at=downloaded_at)
            if updated != 1:
                return False
            model = AccountModel.objects.only("display_name").get(external_id=external_id)
            DownloadLog.objects.create(
                external_id=external_id,
                display_name=model.display_name,
                ip_address=ip_address,
                created_at=downloaded_at,
            )
        return True

    def list(self, offset: int = 0, limit: int = 10) -> List[Account]:
        models = AccountModel.objects.all()[offset : offset + limit]
        return [self._to_domain(model) for model in models]

    def count(self) -> int:
        return AccountModel.objects.count()

    def count_registered_since(self, since: datetime) -> int:
        return AccountModel.objects.filter(registered_at__gte=since).count()

    def count_downloaded_since(self, since: datetime) -> int:
        return AccountModel.objects.filter(last_download_at__gte=since).count()
