"""
License model for the primary store.
"""
from django.db import models
from django.utils import timezone


class License(models.Model):
    """
    A license key and its lifecycle state.

    Expiry is not a status: a redeemed license past ``expires_at`` keeps
    ``status="redeemed"`` and is reported as expired on read.
    """

    STATUS_CHOICES = [
        ("unused", "Unused"),
        ("redeemed", "Redeemed"),
        ("revoked", "Revoked"),
    ]

    key = models.CharField(max_length=19, unique=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="unused")
    owner_id = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)
    redeemed_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_by = models.CharField(max_length=64, null=True, blank=True)
    revoked_by = models.CharField(max_length=64, null=True, blank=True)
    revoke_reason = models.TextField(null=True, blank=True)
    revoked_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="licenses_status_idx"),
            models.Index(fields=["status", "expires_at"], name="licenses_status_expiry_idx"),
        ]

    def __str__(self):
        return f"{self.key} ({self.status})"
