from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """User store: accounts, download and command logs."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
