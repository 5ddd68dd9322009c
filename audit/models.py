"""Model registration for the audit app."""
from audit.infrastructure.models import (  # noqa: F401
    AdminAction,
    ApiAccessLog,
    LicenseGenerationBatch,
    SystemStat,
)
