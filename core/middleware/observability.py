"""
Observability middleware.

Records one ApiAccessLog row, one structured log line and the HTTP
Prometheus metrics for every request.
"""

import json
import logging
import re
import time
import uuid
from typing import Callable, Optional

from django.http import HttpRequest, HttpResponse

from core.context import get_app_context
from core.domain.value_objects import normalize_license_key
from core.metrics import http_request_duration_seconds, http_requests_total

logger = logging.getLogger(__name__)

# Prometheus scrapes are not API traffic
EXCLUDED_PATHS = ("/metrics",)

LICENSE_PATH_PATTERN = re.compile(r"^/api/license/(?P<key>[^/]+)/?$")


def get_client_ip(request: HttpRequest) -> Optional[str]:
    """First X-Forwarded-For hop, else the socket peer address."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


def extract_license_key(request: HttpRequest) -> Optional[str]:
    """
    Find the license key a request is about.

    Looks at the JSON body, then the query string, then the
    ``/api/license/<key>`` path.
    """
    if request.method == "POST" and request.content_type == "application/json":
        try:
            body = json.loads(request.body or b"{}")
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("license_key"), str):
            return normalize_license_key(body["license_key"])

    key = request.GET.get("license_key")
    if key:
        return normalize_license_key(key)

    match = LICENSE_PATH_PATTERN.match(request.path)
    if match:
        return normalize_license_key(match.group("key"))
    return None


def normalize_endpoint(path: str) -> str:
    """Collapse key path segments so metric labels stay bounded."""
    return LICENSE_PATH_PATTERN.sub("/api/license/{key}", path)


class ApiAccessLogMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Generates correlation IDs for request tracing
    2. Writes the access log row through the audit recorder
    3. Records request count and duration metrics
    4. Logs request/response information
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if request.path.startswith(EXCLUDED_PATHS):
            return self.get_response(request)

        correlation_id = str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore
        license_key = extract_license_key(request)

        start_time = time.monotonic()
        response = self.get_response(request)
        duration = time.monotonic() - start_time
        duration_ms = int(round(duration * 1000))

        endpoint = normalize_endpoint(request.path)
        http_requests_total.labels(
            method=request.method, endpoint=endpoint, status_code=response.status_code
        ).inc()
        http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(
            duration
        )

        ip_address = get_client_ip(request)
        get_app_context().audit_recorder.record_api_access(
            endpoint=request.path,
            method=request.method,
            license_key=license_key[:64] if license_key else None,
            ip_address=ip_address,
            user_agent=request.META.get("HTTP_USER_AGENT", ""),
            response_status=response.status_code,
            response_time_ms=duration_ms,
        )

        self._log_response(request, response, correlation_id, ip_address, duration_ms)
        response["X-Correlation-ID"] = correlation_id
        return response

    def _log_response(self, request, response, correlation_id, ip_address, duration_ms):
        """Log structured response information."""
        log_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "remote_addr": ip_address,
        }
        credential = getattr(request, "api_credential", None)
        if credential:
            log_extra["api_key_prefix"] = credential.token_prefix[:8]

        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=log_extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=log_extra)
        else:
            logger.info("Request completed successfully", extra=log_extra)
