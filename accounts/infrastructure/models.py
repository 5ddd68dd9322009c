"""
Account, DownloadLog and CommandLog models for the primary store.
"""
from django.db import models
from django.utils import timezone


class Account(models.Model):
    """
    A registered chat identity bound to the license it signed up with.
    """

    external_id = models.CharField(max_length=64, unique=True)
    display_name = models.CharField(max_length=20, unique=True)
    password_hash = models.CharField(max_length=255)
    license = models.OneToOneField(
        "licenses.License",
        to_field="key",
        db_column="license_key",
        on_delete=models.PROTECT,
        related_name="account",
    )
    registered_at = models.DateTimeField(default=timezone.now)
    last_download_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "accounts"
        ordering = ["-registered_at", "-id"]

    def __str__(self):
        return self.display_name


class DownloadLog(models.Model):
    """Append-only record of granted downloads."""

    external_id = models.CharField(max_length=64, db_index=True)
    display_name = models.CharField(max_length=20)
    ip_address = models.CharField(max_length=45, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "download_logs"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.display_name} @ {self.created_at:%Y-%m-%d %H:%M}"


class CommandLog(models.Model):
    """Append-only record of every command dispatch and its outcome."""

    external_id = models.CharField(max_length=64, db_index=True)
    username = models.CharField(max_length=100)
    command = models.CharField(max_length=50)
    success = models.BooleanField(default=True)
    error_message = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "command_logs"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.command} by {self.username}"
