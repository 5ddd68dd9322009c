from django.apps import AppConfig


class BotConfig(AppConfig):
    """Command registry and connector-facing management commands."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "bot"
