"""
Event handlers for domain events.

These handlers run the side effects of lifecycle operations: admin
audit records and Prometheus counters.
"""

import logging

from accounts.domain.events import AccountRegistered, DownloadGranted
from audit.infrastructure.recorder import AuditRecorder
from core.domain.events import DomainEvent, EventBus, EventHandler
from core.metrics import (
    accounts_registered_total,
    downloads_total,
    licenses_created_total,
    licenses_redeemed_total,
    licenses_revoked_total,
)
from credentials.domain.events import ApiCredentialIssued, ApiCredentialRevoked
from licenses.domain.events import LicenseRedeemed, LicensesGenerated, LicenseRevoked

logger = logging.getLogger(__name__)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes one AdminAction row per administrative event, plus a
    generation batch row for license creation.
    """

    def __init__(self, recorder: AuditRecorder):
        self.recorder = recorder

    def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )

        if isinstance(event, LicensesGenerated):
            self.recorder.record_admin_action(
                admin_id=event.actor_id,
                admin_username=event.actor_name,
                action_type="LICENSE_GENERATION",
                target_type="license",
                target_id=None,
                details=event.payload(),
            )
            self.recorder.record_generation_batch(
                admin_id=event.actor_id,
                admin_username=event.actor_name,
                license_type=event.tier_code,
                amount=len(event.keys),
                duration_hours=event.duration_hours,
            )
        elif isinstance(event, LicenseRevoked):
            self.recorder.record_admin_action(
                admin_id=event.actor_id,
                admin_username=event.actor_name,
                action_type="LICENSE_REVOKED",
                target_type="license",
                target_id=event.key,
                details=event.payload(),
            )
        elif isinstance(event, ApiCredentialIssued):
            self.recorder.record_admin_action(
                admin_id=event.actor_id,
                admin_username=event.actor_name,
                action_type="API_KEY_CREATED",
                target_type="api_key",
                target_id=event.aggregate_id,
                details=event.payload(),
            )
        elif isinstance(event, ApiCredentialRevoked):
            self.recorder.record_admin_action(
                admin_id=event.actor_id,
                admin_username=event.actor_name,
                action_type="API_KEY_REVOKED",
                target_type="api_key",
                target_id=event.aggregate_id,
                details=event.payload(),
            )


class MetricsEventHandler(EventHandler):
    """Bumps business counters for lifecycle events."""

    def handle(self, event: DomainEvent) -> None:
        if isinstance(event, LicensesGenerated):
            licenses_created_total.labels(tier=event.tier_code).inc(len(event.keys))
        elif isinstance(event, LicenseRedeemed):
            licenses_redeemed_total.inc()
        elif isinstance(event, LicenseRevoked):
            licenses_revoked_total.labels(previous_status=event.previous_status).inc()
        elif isinstance(event, AccountRegistered):
            accounts_registered_total.inc()
        elif isinstance(event, DownloadGranted):
            downloads_total.inc()


# Register event handlers
def register_event_handlers(event_bus: EventBus, recorder: AuditRecorder) -> None:
    """Register all event handlers with the event bus."""
    audit_handler = AuditLogEventHandler(recorder)
    metrics_handler = MetricsEventHandler()

    for event_type in (
        LicensesGenerated,
        LicenseRevoked,
        ApiCredentialIssued,
        ApiCredentialRevoked,
    ):
        event_bus.subscribe(event_type, audit_handler)

    for event_type in (
        LicensesGenerated,
        LicenseRedeemed,
        LicenseRevoked,
        AccountRegistered,
        DownloadGranted,
    ):
        event_bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
