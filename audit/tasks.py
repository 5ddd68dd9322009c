"""
Celery tasks for the audit store.
"""
import logging

from LicenseBotService.celery import app

logger = logging.getLogger(__name__)


@app.task
def refresh_system_stats():
    """Recompute the cached overview snapshot."""
    from audit.application.handlers.admin_stats_handler import AdminStatsHandler
    from audit.application.queries.admin_stats import AdminStatsQuery
    from core.context import get_app_context

    context = get_app_context()
    stats = AdminStatsHandler(
        license_repository=context.license_repository,
        account_repository=context.account_repository,
        audit_repository=context.audit_repository,
        clock=context.clock,
    ).handle(AdminStatsQuery(category="overview"))
    logger.info("System stats refreshed", extra=stats.to_snapshot())
    return stats.to_snapshot()

