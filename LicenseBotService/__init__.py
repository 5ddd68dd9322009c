"""
License Bot Service Django project.
"""
# This will make sure the app is always imported when
# Django starts so that shared_task will use this app.
from .celery import app as celery_app

__version__ = "1.0.0"

__all__ = ("celery_app", "__version__")
