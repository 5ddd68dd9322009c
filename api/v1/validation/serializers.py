"""
Serializers for the license validation API.

Timestamps go out twice: epoch milliseconds in ``*_date`` fields and
ISO-8601 strings in ``*_at`` fields.
"""

from datetime import datetime
from typing import Optional

from rest_framework import serializers


def to_epoch_ms(value: Optional[datetime]) -> Optional[int]:
    if value is None:
        return None
    return int(value.timestamp() * 1000)


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for single validation request."""

    license_key = serializers.CharField(required=True, allow_blank=False, max_length=64)


class BatchValidateRequestSerializer(serializers.Serializer):
    """Serializer for batch validation request."""

    license_keys = serializers.ListField(
        child=serializers.CharField(allow_blank=True, max_length=64), allow_empty=True
    )


class ValidLicenseSerializer(serializers.Serializer):
    """License block of a successful validation (LicenseDTO)."""

    key = serializers.CharField()
    status = serializers.CharField()
    owner_id = serializers.CharField(allow_null=True)
    redemption_date = serializers.SerializerMethodField()
    expiry_date = serializers.SerializerMethodField()
    expires_at = serializers.DateTimeField(allow_null=True)
    is_lifetime = serializers.BooleanField()

    def get_redemption_date(self, obj) -> Optional[int]:
        return to_epoch_ms(obj.redeemed_at)

    def get_expiry_date(self, obj) -> Optional[int]:
        return to_epoch_ms(obj.expires_at)


class TimeRemainingSerializer(serializers.Serializer):
    milliseconds = serializers.IntegerField()
    hours = serializers.IntegerField()
    days = serializers.IntegerField()


class LicenseDetailSerializer(serializers.Serializer):
    """Serializer for LicenseDetailDTO."""

    key = serializers.CharField(source="license.key")
    status = serializers.CharField(source="license.status")
    owner_id = serializers.CharField(source="license.owner_id", allow_null=True)
    creation_date = serializers.SerializerMethodField()
    redemption_date = serializers.SerializerMethodField()
    expiry_date = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(source="license.created_at")
    redeemed_at = serializers.DateTimeField(source="license.redeemed_at", allow_null=True)
    expires_at = serializers.DateTimeField(source="license.expires_at", allow_null=True)
    is_lifetime = serializers.BooleanField(source="license.is_lifetime")
    time_remaining = TimeRemainingSerializer(allow_null=True)
    is_valid = serializers.BooleanField()

    def get_creation_date(self, obj) -> Optional[int]:
        return to_epoch_ms(obj.license.created_at)

    def get_redemption_date(self, obj) -> Optional[int]:
        return to_epoch_ms(obj.license.redeemed_at)

    def get_expiry_date(self, obj) -> Optional[int]:
        return to_epoch_ms(obj.license.expires_at)
