"""
Rate limiting middleware.

Fixed-window counters kept in the Django cache: one per client address
across every route, and one per API credential (applied by the auth
middleware) sized by the credential's own quota.
"""

import hashlib
import time
from dataclasses import dataclass
from typing import Callable

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.domain.exceptions import RateLimitExceededError
from core.metrics import errors_total
from core.middleware.observability import get_client_ip

# Scrapes and API docs are not client traffic
SKIPPED_PREFIXES = ("/metrics", "/api/schema", "/api/docs")


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_time: int

    def apply_headers(self, response: HttpResponse) -> HttpResponse:
        """Add rate limit headers (RFC 6585)."""
        response["X-RateLimit-Limit"] = str(self.limit)
        response["X-RateLimit-Remaining"] = str(self.remaining)
        response["X-RateLimit-Reset"] = str(self.reset_time)
        if not self.allowed:
            response["Retry-After"] = str(max(0, self.reset_time - int(time.time())))
        return response


def check_rate_limit(identity: str, limit: int, window: int) -> RateLimitDecision:
    """
    Count one hit for ``identity`` in the current window.

    Args:
        identity: Client address or credential hash
        limit: Allowed hits per window
        window: Window length in seconds

    Returns:
        RateLimitDecision for this hit
    """
    # Hash identity for cache key (don't store raw values)
    identity_hash = hashlib.sha256(identity.encode()).hexdigest()[:16]
    window_start = int(time.time() / window)
    reset_time = (window_start + 1) * window
    full_key = f"rate_limit:{identity_hash}:{window_start}"

    if cache.get(full_key, 0) >= limit:
        return RateLimitDecision(False, limit, 0, reset_time)

    try:
        new_count = cache.incr(full_key, 1)
    except ValueError:
        # Key doesn't exist, create it with initial value of 1
        cache.set(full_key, 1, timeout=window)
        new_count = 1

    return RateLimitDecision(True, limit, max(0, limit - new_count), reset_time)


def rate_limited_response(request: HttpRequest, decision: RateLimitDecision) -> JsonResponse:
    error = RateLimitExceededError()
    errors_total.labels(error_type="rate_limit_exceeded", endpoint=request.path).inc()
    response = JsonResponse(
        {"success": False, "error": error.message, "code": error.code},
        status=429,
    )
    return decision.apply_headers(response)


class RateLimitMiddleware:
    """
    Rate limiting middleware per client address.

    Limits: ``API_RATE_LIMIT`` requests per ``API_RATE_LIMIT_WINDOW``
    seconds on every route, health checks and unmatched paths included.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if request.path.startswith(SKIPPED_PREFIXES):
            return self.get_response(request)

        decision = check_rate_limit(
            f"addr:{get_client_ip(request) or 'unknown'}",
            settings.API_RATE_LIMIT,
            settings.API_RATE_LIMIT_WINDOW,
        )
        if not decision.allowed:
            return rate_limited_response(request, decision)

        return decision.apply_headers(self.get_response(request))
