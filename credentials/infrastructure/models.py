"""
ApiCredential model for the admin store.
"""
from django.db import models
from django.utils import timezone


class ApiCredential(models.Model):
    """
    API token for the validation API.

    Only the SHA-256 hash of the token is stored, plus a prefix for listing.
    """

    token_hash = models.CharField(max_length=64, unique=True)
    token_prefix = models.CharField(max_length=20)
    label = models.CharField(max_length=100)
    issued_by = models.CharField(max_length=64)
    issued_at = models.DateTimeField(default=timezone.now)
    is_active = models.BooleanField(default=True)
    permissions = models.CharField(max_length=20, default="read")
    quota_per_window = models.PositiveIntegerField(default=100)
    last_used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "api_credentials"
        ordering = ["-issued_at", "-id"]

    def __str__(self):
        return f"{self.label} ({self.token_prefix}...)"
