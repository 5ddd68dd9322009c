"""
Development settings for LicenseBotService.
"""

import os

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Local memory cache unless Redis is configured
if not os.environ.get("REDIS_URL"):
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        }
    }

# Fewer bcrypt rounds keep local signups fast
BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", 10))

LOGGING = get_logging_config("development", LOG_DIR or None)  # noqa: F405
