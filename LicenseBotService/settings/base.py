"""
Base Django settings for LicenseBotService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from core.authorization import parse_admin_ids

from .logging import get_logging_config


def env_bool(name: str, default: bool = False) -> bool:
    return os.environ.get(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


def env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, default))


# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "DJANGO_SECRET_KEY", "django-insecure-license-bot-service-development-only-key"
)

ALLOWED_HOSTS = ["*"]

# Application definition
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "core",
    "licenses.apps.LicensesConfig",
    "accounts.apps.AccountsConfig",
    "credentials.apps.CredentialsConfig",
    "audit.apps.AuditConfig",
    "bot",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    # Custom middleware, outermost first
    "core.middleware.observability.ApiAccessLogMiddleware",
    "core.middleware.rate_limit.RateLimitMiddleware",
    "core.middleware.auth.APIKeyAuthenticationMiddleware",
]

ROOT_URLCONF = "LicenseBotService.urls"

# Routes never get a trailing-slash redirect
APPEND_SLASH = False

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": []},
    },
]

WSGI_APPLICATION = "LicenseBotService.wsgi.application"

# Database
# Two stores: primary (licenses, accounts, download/command logs) and
# admin (audit records, API credentials).
DATA_DIR = BASE_DIR / "data"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DATABASE_PATH", str(DATA_DIR / "bot.db")),
    },
    "admin": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("ADMIN_DATABASE_PATH", str(DATA_DIR / "admin.db")),
    },
}

DATABASE_ROUTERS = ["core.infrastructure.database.StoreRouter"]

# Password hashing
PASSWORD_HASHERS = [
    "accounts.infrastructure.hashers.ConfiguredBCryptPasswordHasher",
]

BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 12)

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "License Bot Service API",
    "DESCRIPTION": (
        "License validation API for third-party integrations. "
        "Every endpoint except /health requires an X-API-Key token."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api",
    "TAGS": [
        {"name": "Validation API", "description": "License validation"},
    ],
}

# Redis Cache (rate limit counters)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.environ.get("REDIS_URL", "redis://127.0.0.1:6379/1"),
        "OPTIONS": {
            "socket_connect_timeout": 5,
            "socket_timeout": 5,
        },
    }
}

# Celery
CELERY_BROKER_URL = os.environ.get("REDIS_URL", "redis://127.0.0.1:6379/0")
CELERY_TASK_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]

# License API
LICENSE_API_ENABLED = env_bool("API_ENABLED", False)
LICENSE_API_PORT = env_int("API_PORT", 3000)
API_RATE_LIMIT = env_int("API_RATE_LIMIT", 100)
API_RATE_LIMIT_WINDOW = env_int("API_RATE_LIMIT_WINDOW", 15 * 60)

# Downloads
DOWNLOAD_COOLDOWN_MINUTES = env_int("DOWNLOAD_COOLDOWN_MINUTES", 60)
DOWNLOAD_URL = os.environ.get("DOWNLOAD_URL", "https://example.com/download")

# Command surface
ADMIN_IDS = sorted(parse_admin_ids(os.environ.get("ADMIN_IDS")))
CHAT_PLATFORM_TOKEN = os.environ.get("DISCORD_TOKEN", "")
CHAT_PLATFORM_CLIENT_ID = os.environ.get("CLIENT_ID", "")

# Audit
AUDIT_FALLBACK_BUFFER_SIZE = env_int("AUDIT_FALLBACK_BUFFER_SIZE", 1000)

# Observability
LOG_DIR = os.environ.get("LOG_DIR", "")
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "production"), LOG_DIR or None)
