"""
Test settings for LicenseBotService.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

# In-memory SQLite for both stores
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    },
    "admin": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    },
}

# Use in-memory cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

ADMIN_IDS = ["100000000000000001"]
DOWNLOAD_URL = "https://downloads.test/client.zip"
DOWNLOAD_COOLDOWN_MINUTES = 60
API_RATE_LIMIT = 1000

# Disable logging during tests
LOGGING_CONFIG = None
