"""Model registration for the credentials app."""
from credentials.infrastructure.models import ApiCredential  # noqa: F401
