"""
Integration tests for the license validation API.
"""

from datetime import timedelta

import pytest
from django.core.cache import cache
from django.urls import reverse
from django.utils import timezone

from audit.infrastructure.models import ApiAccessLog
from tests.support import KEY_SECOND, KEY_THIRD, KEY_UNUSED, USER_ID


@pytest.fixture(autouse=True)
def clear_rate_limits():
    cache.clear()
    yield
    cache.clear()


def validate(api_client, token, body):
    return api_client.post(reverse("validate-license"), body, HTTP_X_API_KEY=token, format="json")


def validate_batch(api_client, token, body):
    return api_client.post(
        reverse("validate-license-batch"), body, HTTP_X_API_KEY=token, format="json"
    )


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestApiKeyAuthentication:
    """Integration tests for API key checks."""

    def test_missing_api_key(self, api_client):
        """Test requests without a key are refused."""
        response = api_client.post(
            reverse("validate-license"), {"license_key": KEY_UNUSED}, format="json"
        )

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "API key required",
            "code": "API_KEY_REQUIRED",
        }

    def test_invalid_api_key(self, api_client):
        """Test unknown keys are refused."""
        response = validate(api_client, "sk_not_a_real_key", {"license_key": KEY_UNUSED})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_API_KEY"

    def test_revoked_api_key(self, api_client, api_token):
        """Test revoked keys are refused."""
        from credentials.infrastructure.models import ApiCredential

        ApiCredential.objects.update(is_active=False)

        response = validate(api_client, api_token, {"license_key": KEY_UNUSED})

        assert response.status_code == 401

    @pytest.mark.parametrize("revoked", [False, True])
    def test_refused_request_is_logged(self, api_client, api_token, revoked):
        """Test a 401 still leaves an access log row."""
        token = api_token
        if revoked:
            from credentials.infrastructure.models import ApiCredential

            ApiCredential.objects.update(is_active=False)
        else:
            token = "sk_not_a_real_key"

        validate(api_client, token, {"license_key": KEY_UNUSED})

        log = ApiAccessLog.objects.get(endpoint="/api/validate")
        assert log.response_status == 401
        assert log.license_key == KEY_UNUSED

    def test_health_needs_no_key(self, api_client):
        """Test the health endpoint is public."""
        response = api_client.get(reverse("health"))

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["status"] == "operational"
        assert isinstance(data["timestamp"], int)
        assert "X-Correlation-ID" in response


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestValidateLicense:
    """Integration tests for POST /api/validate."""

    def test_valid_license(self, api_client, api_token, make_license):
        """Test a live redeemed license."""
        expires_at = timezone.now() + timedelta(days=3)
        make_license(
            status="redeemed", expires_at=expires_at, redeemed_at=timezone.now() - timedelta(days=1)
        )

        response = validate(api_client, api_token, {"license_key": KEY_UNUSED.lower()})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["valid"] is True
        assert data["license"]["key"] == KEY_UNUSED
        assert data["license"]["owner_id"] == USER_ID
        assert data["license"]["expiry_date"] == int(expires_at.timestamp() * 1000)
        assert data["license"]["is_lifetime"] is False

    def test_unused_license(self, api_client, api_token, make_license):
        """Test unused licenses are not activated."""
        make_license()

        data = validate(api_client, api_token, {"license_key": KEY_UNUSED}).json()

        assert data == {
            "success": True,
            "valid": False,
            "reason": "License has not been activated yet",
        }

    def test_unknown_and_malformed_keys(self, api_client, api_token):
        """Test unknown and malformed keys both report nonexistence."""
        for key in (KEY_UNUSED, "definitely-not-a-key"):
            data = validate(api_client, api_token, {"license_key": key}).json()

            assert data["valid"] is False
            assert data["reason"] == "License key does not exist"

    def test_revoked_license(self, api_client, api_token, make_license):
        """Test revoked licenses carry revocation details."""
        make_license(status="revoked", revoked_by="admin-1", revoke_reason="Chargeback")

        data = validate(api_client, api_token, {"license_key": KEY_UNUSED}).json()

        assert data["reason"] == "License has been revoked"
        assert data["details"] == {"revoked_by": "admin-1", "revoke_reason": "Chargeback"}

    def test_expired_license(self, api_client, api_token, make_license):
        """Test expired licenses carry the expiry in both formats."""
        expires_at = timezone.now() - timedelta(hours=2)
        make_license(
            status="redeemed", expires_at=expires_at, redeemed_at=expires_at - timedelta(days=1)
        )

        data = validate(api_client, api_token, {"license_key": KEY_UNUSED}).json()

        assert data["reason"] == "License has expired"
        assert data["details"]["expiry_date"] == int(expires_at.timestamp() * 1000)
        assert data["details"]["expired_at"] == expires_at.isoformat()

    def test_missing_license_key(self, api_client, api_token):
        """Test a body without license_key."""
        response = validate(api_client, api_token, {})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing license_key"

    def test_access_is_logged(self, api_client, api_token, make_license):
        """Test each request leaves an access log row with the key."""
        make_license()

        validate(api_client, api_token, {"license_key": KEY_UNUSED.lower()})

        log = ApiAccessLog.objects.get(endpoint="/api/validate")
        assert log.license_key == KEY_UNUSED
        assert log.method == "POST"
        assert log.response_status == 200


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestBatchValidate:
    """Integration tests for POST /api/validate/batch."""

    def test_batch(self, api_client, api_token, make_license):
        """Test per-key results keep input order and submitted form."""
        make_license(KEY_UNUSED, status="redeemed")
        make_license(KEY_SECOND)

        response = validate_batch(
            api_client,
            api_token,
            {"license_keys": [KEY_SECOND, KEY_UNUSED.lower(), KEY_THIRD]},
        )

        assert response.status_code == 200
        data = response.json()
        assert (data["total"], data["valid_count"], data["invalid_count"]) == (3, 1, 2)
        assert data["results"] == [
            {"key": KEY_SECOND, "valid": False, "reason": "Not activated"},
            {"key": KEY_UNUSED.lower(), "valid": True},
            {"key": KEY_THIRD, "valid": False, "reason": "Does not exist"},
        ]

    def test_empty_batch(self, api_client, api_token):
        """Test an empty list is a valid empty batch."""
        data = validate_batch(api_client, api_token, {"license_keys": []}).json()

        assert (data["total"], data["valid_count"], data["invalid_count"]) == (0, 0, 0)
        assert data["results"] == []

    def test_not_a_list(self, api_client, api_token):
        """Test license_keys must be an array."""
        response = validate_batch(api_client, api_token, {"license_keys": "ABCD"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    def test_too_many_keys(self, api_client, api_token):
        """Test the 100-key limit."""
        response = validate_batch(api_client, api_token, {"license_keys": [KEY_UNUSED] * 101})

        assert response.status_code == 400
        assert response.json()["error"] == "Too many keys"


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestLicenseDetail:
    """Integration tests for GET /api/license/<key>."""

    def test_detail(self, api_client, api_token, make_license):
        """Test detail for a live license with remaining time."""
        make_license(
            status="redeemed",
            expires_at=timezone.now() + timedelta(days=2, hours=1),
            redeemed_at=timezone.now(),
        )

        response = api_client.get(
            reverse("license-detail", args=[KEY_UNUSED.lower()]), HTTP_X_API_KEY=api_token
        )

        assert response.status_code == 200
        data = response.json()["license"]
        assert data["key"] == KEY_UNUSED
        assert data["status"] == "redeemed"
        assert data["is_valid"] is True
        assert data["time_remaining"]["days"] == 2
        assert data["time_remaining"]["hours"] in (48, 49)
        assert isinstance(data["creation_date"], int)

    def test_detail_lifetime(self, api_client, api_token, make_license):
        """Test lifetime licenses have no remaining time."""
        make_license(status="redeemed")

        data = api_client.get(
            reverse("license-detail", args=[KEY_UNUSED]), HTTP_X_API_KEY=api_token
        ).json()["license"]

        assert data["time_remaining"] is None
        assert data["expiry_date"] is None

    def test_detail_not_found(self, api_client, api_token):
        """Test unknown keys are 404."""
        response = api_client.get(
            reverse("license-detail", args=[KEY_UNUSED]), HTTP_X_API_KEY=api_token
        )

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["code"] == "LICENSE_NOT_FOUND"


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestUnmatchedRoutesAndLimits:
    """Integration tests for 404s and rate limiting."""

    def test_unknown_route(self, api_client):
        """Test unmatched routes answer with a JSON 404."""
        response = api_client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json()["error"] == "Endpoint not found"

    def test_wrong_method(self, api_client, api_token):
        """Test unsupported methods answer like unmatched routes."""
        response = api_client.get(reverse("validate-license"), HTTP_X_API_KEY=api_token)

        assert response.status_code == 404
        assert response.json()["error"] == "Endpoint not found"

    def test_rate_limit_per_address(self, api_client, api_token, settings):
        """Test the per-address limit returns 429 with headers."""
        settings.API_RATE_LIMIT = 2
        statuses = [
            validate(api_client, api_token, {"license_key": KEY_UNUSED}).status_code
            for _ in range(3)
        ]

        assert statuses == [200, 200, 429]
        response = validate(api_client, api_token, {"license_key": KEY_UNUSED})
        assert response.json()["code"] == "RATE_LIMIT_EXCEEDED"
        assert response["X-RateLimit-Remaining"] == "0"
        assert "Retry-After" in response

    def test_rate_limit_covers_every_route(self, api_client, settings):
        """Test health checks and unmatched paths share the per-address budget."""
        settings.API_RATE_LIMIT = 2

        first = api_client.get(reverse("health"))
        second = api_client.get("/nowhere")
        third = api_client.get(reverse("health"))

        assert (first.status_code, second.status_code, third.status_code) == (200, 404, 429)
        assert third.json()["code"] == "RATE_LIMIT_EXCEEDED"

    def test_metrics_not_rate_limited(self, api_client, settings):
        """Test metrics scrapes do not count against the limit."""
        settings.API_RATE_LIMIT = 1

        statuses = [api_client.get(reverse("metrics")).status_code for _ in range(3)]

        assert statuses == [200, 200, 200]
