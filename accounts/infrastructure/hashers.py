"""
Password hasher with a configurable bcrypt cost factor.
"""
from django.conf import settings
from django.contrib.auth.hashers import BCryptSHA256PasswordHasher


class ConfiguredBCryptPasswordHasher(BCryptSHA256PasswordHasher):
    """bcrypt-sha256 whose cost factor comes from ``settings.BCRYPT_ROUNDS``."""

    @property
    def rounds(self):
        return getattr(settings, "BCRYPT_ROUNDS", 12)
