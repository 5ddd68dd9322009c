"""
Database utilities: store aliases and routing.

The primary store holds end-user data (licenses, accounts, download
and command logs). The admin store holds administrative and audit data.
"""

PRIMARY_DB = "default"
ADMIN_DB = "admin"

ADMIN_STORE_APPS = frozenset({"audit", "credentials"})


class StoreRouter:
    """Route admin-store apps to the admin database, everything else to default."""

    def _db_for(self, app_label: str) -> str:
        return ADMIN_DB if app_label in ADMIN_STORE_APPS else PRIMARY_DB

    def db_for_read(self, model, **hints):
        return self._db_for(model._meta.app_label)

    def db_for_write(self, model, **hints):
        return self._db_for(model._meta.app_label)

    def allow_relation(self, obj1, obj2, **hints):
        return self._db_for(obj1._meta.app_label) == self._db_for(obj2._meta.app_label)

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        return self._db_for(app_label) == db
