"""
Celery configuration for background tasks.

Used for periodic statistics snapshots.
"""
import os

from celery import Celery
from celery.schedules import crontab

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseBotService.settings.base")

app = Celery("LicenseBotService")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()

app.conf.beat_schedule = {
    "refresh-system-stats": {
        "task": "audit.tasks.refresh_system_stats",
        "schedule": crontab(minute="*/15"),
    },
}
