"""
Logging configuration for structured JSON logs.

Console output is always JSON; a daily rotating file is added when a
log directory is configured.
"""

import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

LOCAL_APPS = ("core", "api", "licenses", "accounts", "credentials", "audit", "bot")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that always carries the service name."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["service"] = "license-bot-service"
        log_record.setdefault("level", record.levelname)


def get_logging_config(environment: str = "development", log_dir: Optional[str] = None) -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production, test)
        log_dir: Directory for the rotating file log, or None

    Returns:
        Django logging configuration dictionary
    """
    log_level = "DEBUG" if environment == "development" else "INFO"
    handlers = ["console"]

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": handlers,
            "level": log_level,
        },
        "loggers": {
            "django": {
                "handlers": handlers,
                "level": "INFO",
                "propagate": False,
            },
            "django.db.backends": {
                "handlers": handlers,
                "level": "WARNING",
                "propagate": False,
            },
        },
    }

    if log_dir:
        config["handlers"]["file"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "formatter": "json",
            "filename": os.path.join(log_dir, "license-bot.log"),
            "when": "midnight",
            "backupCount": 14,
        }
        handlers.append("file")

    for app in LOCAL_APPS:
        config["loggers"][app] = {"handlers": handlers, "level": log_level, "propagate": False}

    return config
