"""
Prometheus metrics for the license bot service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["tier"],
)

licenses_redeemed_total = Counter(
    "licenses_redeemed_total",
    "Total licenses redeemed",
)

licenses_revoked_total = Counter(
    "licenses_revoked_total",
    "Total licenses revoked",
    ["previous_status"],
)

license_validations_total = Counter(
    "license_validations_total",
    "License validations served over HTTP",
    ["outcome"],
)

# Account metrics
accounts_registered_total = Counter(
    "accounts_registered_total",
    "Total accounts registered",
)

downloads_total = Counter(
    "downloads_total",
    "Total download links granted",
)

# Command surface
commands_total = Counter(
    "bot_commands_total",
    "Command dispatches",
    ["command", "success"],
)

# Audit sink
audit_write_failures_total = Counter(
    "audit_write_failures_total",
    "Audit writes that fell back to the in-memory buffer",
    ["kind"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
