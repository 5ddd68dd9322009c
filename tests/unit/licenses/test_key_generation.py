"""
Unit tests for key generation and license tiers.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import InvalidTierError
from core.domain.value_objects import is_valid_license_key
from licenses.domain.license_key import API_TOKEN_PREFIX, generate_api_token, generate_license_key
from licenses.domain.tiers import CUSTOM_TIER_CODE, TIERS, get_tier, tier_code_for_hours


class TestKeyGeneration:
    """Tests for license key and API token generation."""

    def test_license_key_matches_grammar(self):
        """Test generated keys are four groups of four [A-Z0-9]."""
        for _ in range(50):
            key = generate_license_key()
            assert is_valid_license_key(key)
            assert key == key.upper()
            assert len(key) == 19

    def test_license_keys_are_unique(self):
        """Test keys do not repeat across a batch."""
        keys = {generate_license_key() for _ in range(10_000)}

        assert len(keys) == 10_000

    def test_api_token_format(self):
        """Test API tokens carry the marker and 32 characters."""
        token = generate_api_token()

        assert token.startswith(API_TOKEN_PREFIX)
        assert len(token) == len(API_TOKEN_PREFIX) + 32
        assert "-" not in token


class TestLicenseTiers:
    """Tests for the tier table."""

    @pytest.mark.parametrize(
        "code,hours",
        [
            ("12H", 12),
            ("24H", 24),
            ("7D", 168),
            ("1M", 720),
            ("QUARTERLY", 2160),
            ("LIFETIME", None),
        ],
    )
    def test_tier_durations(self, code, hours):
        """Test each tier's duration."""
        assert TIERS[code].hours == hours

    def test_get_tier_is_case_insensitive(self):
        """Test tier lookup ignores case and whitespace."""
        assert get_tier(" quarterly ").code == "QUARTERLY"

    def test_get_unknown_tier(self):
        """Test looking up an unknown tier."""
        with pytest.raises(InvalidTierError):
            get_tier("2W")

    def test_expires_at(self):
        """Test expiry is creation time plus the tier duration."""
        created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)

        assert TIERS["7D"].expires_at(created_at) == created_at + timedelta(days=7)
        assert TIERS["LIFETIME"].expires_at(created_at) is None

    def test_tier_code_for_hours(self):
        """Test mapping durations back to tier codes."""
        assert tier_code_for_hours(720) == "1M"
        assert tier_code_for_hours(None) == "LIFETIME"
        assert tier_code_for_hours(240) == CUSTOM_TIER_CODE
