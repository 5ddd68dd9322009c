"""
Integration tests for API credentials, the audit recorder and admin stats.
"""

from datetime import timedelta
from types import SimpleNamespace

import pytest

from accounts.infrastructure.models import CommandLog
from audit.application.dto.stats_dto import OverviewStatsDTO, UserStatsDTO
from audit.application.handlers.admin_stats_handler import AdminStatsHandler
from audit.application.queries.admin_stats import AdminStatsQuery
from audit.infrastructure import recorder as recorder_module
from audit.infrastructure.models import AdminAction, SystemStat
from audit.infrastructure.recorder import AuditRecorder
from core.domain.exceptions import (
    ApiCredentialNotFoundError,
    InvalidAmountError,
    InvalidAPIKeyError,
    MissingAPIKeyError,
    ValidationError,
)
from credentials.application.commands.api_credential_commands import (
    AuthenticateApiCredentialCommand,
    IssueApiCredentialCommand,
    RevokeApiCredentialCommand,
)
from credentials.application.handlers.api_credential_handlers import (
    AuthenticateApiCredentialHandler,
    IssueApiCredentialHandler,
    ListApiCredentialsHandler,
    RevokeApiCredentialHandler,
)
from credentials.infrastructure.models import ApiCredential as ApiCredentialModel
from tests.support import ADMIN_ID, FIXED_NOW, KEY_SECOND, KEY_THIRD, KEY_UNUSED, USER_ID


def issue(app_context, label="Partner", quota=100):
    handler = IssueApiCredentialHandler(
        credential_repository=app_context.credential_repository,
        event_bus=app_context.event_bus,
        clock=app_context.clock,
    )
    return handler.handle(
        IssueApiCredentialCommand(
            label=label, issued_by=ADMIN_ID, issued_by_name="admin", quota_per_window=quota
        )
    )


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestApiCredentialHandlers:
    """Integration tests for API credential handlers."""

    def test_issue_stores_only_hash(self, app_context):
        """Test the raw token is returned once and never stored."""
        issued = issue(app_context)

        model = ApiCredentialModel.objects.get()
        assert issued.token.startswith("sk_")
        assert model.token_hash != issued.token
        assert issued.token not in (model.token_hash, model.token_prefix)
        assert issued.credential.token_prefix == issued.token[:20]
        assert AdminAction.objects.get().action_type == "API_KEY_CREATED"

    def test_issue_requires_label(self, app_context):
        """Test an empty label is rejected."""
        with pytest.raises(ValidationError):
            issue(app_context, label="  ")

    @pytest.mark.parametrize("quota", [9, 1001])
    def test_issue_quota_bounds(self, app_context, quota):
        """Test quotas are limited to 10-1000."""
        with pytest.raises(InvalidAmountError):
            issue(app_context, quota=quota)

    def test_authenticate(self, app_context):
        """Test an active token authenticates and is marked used."""
        issued = issue(app_context)
        handler = AuthenticateApiCredentialHandler(
            app_context.credential_repository, clock=app_context.clock
        )

        credential = handler.handle(AuthenticateApiCredentialCommand(token=issued.token))

        assert credential.label == "Partner"
        assert ApiCredentialModel.objects.get().last_used_at == FIXED_NOW

    def test_authenticate_failures(self, app_context):
        """Test missing, unknown and revoked tokens."""
        issued = issue(app_context)
        handler = AuthenticateApiCredentialHandler(app_context.credential_repository)

        with pytest.raises(MissingAPIKeyError):
            handler.handle(AuthenticateApiCredentialCommand(token=""))
        with pytest.raises(InvalidAPIKeyError):
            handler.handle(AuthenticateApiCredentialCommand(token="sk_unknown"))

        ApiCredentialModel.objects.update(is_active=False)
        with pytest.raises(InvalidAPIKeyError):
            handler.handle(AuthenticateApiCredentialCommand(token=issued.token))

    def test_revoke(self, app_context):
        """Test revoking deactivates the credential once."""
        issued = issue(app_context)
        handler = RevokeApiCredentialHandler(
            app_context.credential_repository, event_bus=app_context.event_bus
        )
        command = RevokeApiCredentialCommand(
            token=issued.token, revoked_by=ADMIN_ID, revoked_by_name="admin"
        )

        revoked = handler.handle(command)

        assert revoked.is_active is False
        assert AdminAction.objects.filter(action_type="API_KEY_REVOKED").count() == 1
        with pytest.raises(ApiCredentialNotFoundError):
            handler.handle(command)

    def test_list(self, app_context):
        """Test listing includes revoked credentials."""
        issue(app_context, label="One")
        issue(app_context, label="Two")
        ApiCredentialModel.objects.filter(label="One").update(is_active=False)

        credentials = ListApiCredentialsHandler(app_context.credential_repository).handle()

        assert {(c.label, c.is_active) for c in credentials} == {("One", False), ("Two", True)}


class BrokenManager:
    def create(self, **fields):
        raise RuntimeError("admin store unavailable")


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestAuditRecorder:
    """Integration tests for best-effort audit writes."""

    def test_write(self):
        """Test a command log is written to the primary store."""
        recorder = AuditRecorder()

        assert recorder.record_command(USER_ID, "alice", "redeem", success=True) is True
        assert CommandLog.objects.get().command == "redeem"

    def test_failed_write_is_buffered_and_replayed(self, monkeypatch):
        """Test failures never raise and can be replayed later."""
        recorder = AuditRecorder(buffer_size=10)
        monkeypatch.setitem(
            recorder_module.RECORD_MODELS,
            "admin_action",
            SimpleNamespace(objects=BrokenManager()),
        )

        written = recorder.record_admin_action(ADMIN_ID, "admin", "LICENSE_REVOKED")

        assert written is False
        assert [record.kind for record in recorder.fallback_records] == ["admin_action"]
        assert "unavailable" in recorder.fallback_records[0].error

        monkeypatch.undo()
        assert recorder.replay_fallback() == 1
        assert recorder.fallback_records == []
        assert AdminAction.objects.get().action_type == "LICENSE_REVOKED"

    def test_next_write_drains_buffer(self, monkeypatch):
        """Test a successful write flushes earlier failures in the same process."""
        recorder = AuditRecorder(buffer_size=10)
        monkeypatch.setitem(
            recorder_module.RECORD_MODELS,
            "admin_action",
            SimpleNamespace(objects=BrokenManager()),
        )
        recorder.record_admin_action(ADMIN_ID, "admin", "LICENSE_REVOKED")
        monkeypatch.undo()

        assert recorder.record_command(USER_ID, "alice", "redeem", success=True) is True

        assert recorder.fallback_records == []
        assert AdminAction.objects.get().action_type == "LICENSE_REVOKED"
        assert CommandLog.objects.get().command == "redeem"

    def test_drain_keeps_records_that_fail_again(self, monkeypatch):
        """Test records whose store is still down stay buffered."""
        recorder = AuditRecorder(buffer_size=10)
        monkeypatch.setitem(
            recorder_module.RECORD_MODELS,
            "admin_action",
            SimpleNamespace(objects=BrokenManager()),
        )
        recorder.record_admin_action(ADMIN_ID, "admin", "LICENSE_REVOKED")

        assert recorder.record_command(USER_ID, "alice", "redeem", success=True) is True

        assert [record.kind for record in recorder.fallback_records] == ["admin_action"]

    def test_buffer_is_bounded(self, monkeypatch):
        """Test the fallback buffer keeps only the newest records."""
        recorder = AuditRecorder(buffer_size=2)
        monkeypatch.setitem(
            recorder_module.RECORD_MODELS, "command", SimpleNamespace(objects=BrokenManager())
        )

        for command in ("a", "b", "c"):
            recorder.record_command(USER_ID, "alice", command, success=True)

        assert [r.fields["command"] for r in recorder.fallback_records] == ["b", "c"]


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestAdminStatsHandler:
    """Integration tests for admin statistics."""

    @pytest.fixture
    def handler(self, app_context):
        return AdminStatsHandler(
            license_repository=app_context.license_repository,
            account_repository=app_context.account_repository,
            audit_repository=app_context.audit_repository,
            clock=app_context.clock,
        )

    def test_overview(self, handler, make_license):
        """Test overview totals are computed and cached."""
        make_license(KEY_UNUSED)
        make_license(KEY_SECOND, status="redeemed", expires_at=FIXED_NOW - timedelta(hours=1))
        make_license(KEY_THIRD, status="revoked")

        stats = handler.handle(AdminStatsQuery())

        assert isinstance(stats, OverviewStatsDTO)
        assert (stats.total_licenses, stats.unused, stats.redeemed, stats.revoked) == (3, 1, 1, 1)
        assert (stats.active, stats.expired) == (0, 1)
        assert SystemStat.objects.get(stat_key="overview").stat_value["total_licenses"] == 3

    def test_users(self, handler):
        """Test user statistics on an empty store."""
        stats = handler.handle(AdminStatsQuery(category="users"))

        assert isinstance(stats, UserStatsDTO)
        assert stats.total_users == 0
        assert stats.activity_rate == 0.0

    def test_unknown_category(self, handler):
        """Test unknown categories are rejected."""
        with pytest.raises(ValidationError):
            handler.handle(AdminStatsQuery(category="finance"))

    def test_activity_rate(self):
        """Test the activity rate is a rounded percentage."""
        stats = UserStatsDTO(
            total_users=3,
            registered_24h=0,
            registered_7d=0,
            registered_30d=0,
            active_downloads_7d=1,
            generated_at=FIXED_NOW,
        )

        assert stats.activity_rate == 33.3
