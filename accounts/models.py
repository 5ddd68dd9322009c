"""Model registration for the accounts app."""
from accounts.infrastructure.models import Account, CommandLog, DownloadLog  # noqa: F401
