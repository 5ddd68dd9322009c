"""
Unit tests for License domain entity.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import (
    InvalidLicenseKeyFormatError,
    LicenseAlreadyRedeemedError,
    LicenseAlreadyRevokedError,
    LicenseExpiredError,
    LicenseRevokedError,
)
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def unused(expires_at=None):
    return License.create(key="ABCD-EFGH-IJKL-MNOP", created_at=NOW, expires_at=expires_at)


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_license(self):
        """Test creating a license entity."""
        expires_at = NOW + timedelta(days=30)

        license = License.create(
            key="abcd-efgh-ijkl-mnop", created_at=NOW, expires_at=expires_at, created_by="42"
        )

        assert license.key == "ABCD-EFGH-IJKL-MNOP"
        assert license.status == LicenseStatus.UNUSED
        assert license.owner_id is None
        assert license.expires_at == expires_at
        assert license.created_by == "42"
        assert license.is_lifetime is False

    def test_create_license_rejects_malformed_key(self):
        """Test creating a license with a key outside the grammar."""
        with pytest.raises(InvalidLicenseKeyFormatError):
            License.create(key="ABCD-EFGH-IJKL", created_at=NOW)

    def test_lifetime_license_never_expires(self):
        """Test lifetime licenses are never expired."""
        license = unused()

        assert license.is_lifetime is True
        assert license.is_expired(NOW + timedelta(days=36500)) is False
        assert license.time_remaining(NOW) is None

    def test_expiry_is_strict(self):
        """Test a license whose expiry equals now is still live."""
        license = unused(expires_at=NOW)

        assert license.is_expired(NOW) is False
        assert license.is_expired(NOW + timedelta(milliseconds=1)) is True

    def test_time_remaining_negative_after_expiry(self):
        """Test time remaining tells how long ago the license expired."""
        license = unused(expires_at=NOW - timedelta(hours=1))

        assert license.time_remaining(NOW) == -timedelta(hours=1)

    def test_redeem_binds_owner(self):
        """Test redeeming an unused license."""
        redeemed = unused().redeem("user-1", NOW)

        assert redeemed.status == LicenseStatus.REDEEMED
        assert redeemed.owner_id == "user-1"
        assert redeemed.redeemed_at == NOW

    def test_redeem_twice_by_same_user(self):
        """Test redeeming a license the caller already owns."""
        redeemed = unused().redeem("user-1", NOW)

        with pytest.raises(LicenseAlreadyRedeemedError) as exc_info:
            redeemed.redeem("user-1", NOW)

        assert exc_info.value.redeemed_by_caller is True
        assert exc_info.value.redeemed_at == NOW
        assert "by you" in exc_info.value.message

    def test_redeem_owned_by_another_user(self):
        """Test redeeming a license someone else owns."""
        redeemed = unused().redeem("user-1", NOW)

        with pytest.raises(LicenseAlreadyRedeemedError) as exc_info:
            redeemed.redeem("user-2", NOW)

        assert exc_info.value.redeemed_by_caller is False
        assert "another user" in exc_info.value.message

    def test_redeem_revoked_license(self):
        """Test redeeming a revoked license reports the reason."""
        revoked = unused().revoke("admin", "Chargeback", NOW)

        with pytest.raises(LicenseRevokedError, match="Chargeback"):
            revoked.redeem("user-1", NOW)

    def test_redeem_expired_license(self):
        """Test redeeming an unused license past its expiry."""
        license = unused(expires_at=NOW - timedelta(seconds=1))

        with pytest.raises(LicenseExpiredError):
            license.redeem("user-1", NOW)

    def test_revoke_keeps_owner(self):
        """Test revoking a redeemed license keeps owner and redemption time."""
        redeemed = unused().redeem("user-1", NOW)

        revoked = redeemed.revoke("admin", "Abuse", NOW + timedelta(hours=1))

        assert revoked.status == LicenseStatus.REVOKED
        assert revoked.owner_id == "user-1"
        assert revoked.redeemed_at == NOW
        assert revoked.revoked_by == "admin"
        assert revoked.revoke_reason == "Abuse"
        assert revoked.revoked_at == NOW + timedelta(hours=1)

    def test_revoke_twice(self):
        """Test revoking an already revoked license carries prior metadata."""
        revoked = unused().revoke("admin", "Abuse", NOW)

        with pytest.raises(LicenseAlreadyRevokedError) as exc_info:
            revoked.revoke("other-admin", "Again", NOW + timedelta(days=1))

        assert exc_info.value.revoked_by == "admin"
        assert exc_info.value.revoke_reason == "Abuse"
        assert exc_info.value.revoked_at == NOW

    def test_redeemed_license_requires_owner(self):
        """Test entity invariants for redeemed licenses."""
        with pytest.raises(ValueError, match="owner"):
            License(key="ABCD-EFGH-IJKL-MNOP", status=LicenseStatus.REDEEMED, created_at=NOW)
