"""
AdminAction, LicenseGenerationBatch, ApiAccessLog and SystemStat models.

All but SystemStat are append-only.
"""
from django.db import models
from django.utils import timezone


class AdminAction(models.Model):
    """An administrative action such as generating or revoking licenses."""

    admin_id = models.CharField(max_length=64, db_index=True)
    admin_username = models.CharField(max_length=100)
    action_type = models.CharField(max_length=50, db_index=True)
    target_type = models.CharField(max_length=50, null=True, blank=True)
    target_id = models.CharField(max_length=100, null=True, blank=True)
    details = models.JSONField(default=dict, blank=True)
    ip_address = models.CharField(max_length=45, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "admin_actions"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.action_type} by {self.admin_username}"


class LicenseGenerationBatch(models.Model):
    """One admin request that created a batch of licenses."""

    admin_id = models.CharField(max_length=64)
    admin_username = models.CharField(max_length=100)
    license_type = models.CharField(max_length=20, db_index=True)
    amount = models.PositiveIntegerField()
    duration_hours = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "license_generation_history"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.amount} x {self.license_type}"


class ApiAccessLog(models.Model):
    """One HTTP request to the validation API, whatever its outcome."""

    endpoint = models.CharField(max_length=255)
    method = models.CharField(max_length=10)
    license_key = models.CharField(max_length=64, null=True, blank=True)
    ip_address = models.CharField(max_length=45, null=True, blank=True)
    user_agent = models.TextField(null=True, blank=True)
    response_status = models.PositiveSmallIntegerField()
    response_time_ms = models.PositiveIntegerField()
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "api_access_logs"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.method} {self.endpoint} -> {self.response_status}"


class SystemStat(models.Model):
    """Cached statistics snapshot."""

    stat_key = models.CharField(max_length=50, unique=True)
    stat_value = models.JSONField(default=dict)
    last_updated = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "system_stats"

    def __str__(self):
        return self.stat_key
