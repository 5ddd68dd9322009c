"""
Unit tests for core value objects.
"""
import pytest

from core.domain.exceptions import (
    InvalidLicenseKeyFormatError,
    InvalidUsernameError,
    ValidationError,
    WeakPasswordError,
)
from core.domain.value_objects import (
    LicenseKeyCode,
    LicenseStatus,
    Password,
    Username,
    is_valid_license_key,
    normalize_license_key,
    sanitize_input,
)


class TestLicenseKeyCode:
    """Tests for LicenseKeyCode value object."""

    def test_normalizes_case_and_whitespace(self):
        """Test keys are trimmed and upper-cased."""
        key = LicenseKeyCode("  abcd-1234-efgh-5678 ")

        assert key.value == "ABCD-1234-EFGH-5678"
        assert str(key) == "ABCD-1234-EFGH-5678"

    @pytest.mark.parametrize(
        "raw",
        ["", "ABCD1234EFGH5678", "ABCD-1234-EFGH", "ABCD-1234-EFGH-567!", "ABCDE-123-EFGH-5678"],
    )
    def test_rejects_malformed_keys(self, raw):
        """Test keys outside the grammar are rejected."""
        with pytest.raises(InvalidLicenseKeyFormatError):
            LicenseKeyCode(raw)

    def test_format_error_is_validation(self):
        """Test the format error belongs to the validation category."""
        with pytest.raises(ValidationError):
            LicenseKeyCode("nope")

    def test_equality_by_value(self):
        """Test value objects compare by value."""
        assert LicenseKeyCode("abcd-1234-efgh-5678") == LicenseKeyCode("ABCD-1234-EFGH-5678")

    def test_helpers(self):
        """Test the normalize and grammar helpers."""
        assert normalize_license_key(" <abcd-1234-efgh-5678> ") == "ABCD-1234-EFGH-5678"
        assert is_valid_license_key("abcd-1234-efgh-5678") is True
        assert is_valid_license_key(None) is False


class TestUsername:
    """Tests for Username value object."""

    @pytest.mark.parametrize("raw", ["abc", "player_one", "A" * 20, "User123"])
    def test_valid_usernames(self, raw):
        """Test usernames within the rule."""
        assert Username(raw).value == raw

    @pytest.mark.parametrize("raw", ["ab", "A" * 21, "bad name", "dash-name", ""])
    def test_invalid_usernames(self, raw):
        """Test usernames outside the rule."""
        with pytest.raises(InvalidUsernameError):
            Username(raw)

    def test_sanitizes_input(self):
        """Test surrounding whitespace and angle brackets are dropped."""
        assert Username(" <alice> ").value == "alice"
        assert sanitize_input("  a<b>c ") == "abc"


class TestPassword:
    """Tests for Password value object."""

    def test_valid_password(self):
        """Test a password meeting every rule."""
        assert Password("Secret123").value == "Secret123"

    @pytest.mark.parametrize("raw", ["Short1A", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere"])
    def test_weak_passwords(self, raw):
        """Test passwords failing one rule each."""
        with pytest.raises(WeakPasswordError):
            Password(raw)

    def test_never_rendered(self):
        """Test the raw value never appears in repr or str."""
        password = Password("Secret123")

        assert "Secret123" not in repr(password)
        assert "Secret123" not in str(password)


class TestLicenseStatus:
    """Tests for LicenseStatus enum."""

    def test_status_values(self):
        """Test stored status strings."""
        assert str(LicenseStatus.UNUSED) == "unused"
        assert LicenseStatus("redeemed") is LicenseStatus.REDEEMED
        assert LicenseStatus.REVOKED.value == "revoked"
