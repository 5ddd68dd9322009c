from django.apps import AppConfig


class CredentialsConfig(AppConfig):
    """API credentials, kept in the admin store."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "credentials"
