from django.apps import AppConfig


class AuditConfig(AppConfig):
    """Audit trail and statistics, kept in the admin store."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "audit"
