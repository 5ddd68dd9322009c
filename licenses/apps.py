from django.apps import AppConfig


class LicensesConfig(AppConfig):
    """License store and lifecycle engine."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "licenses"
