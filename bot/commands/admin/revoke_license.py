"""
/revoke_license: permanently revoke a license.
"""
from bot.registry import CommandOption, SlashCommand
from bot.replies import ReplyField, admin_reply, format_date, format_status, mention, warning_reply
from core.domain.exceptions import LicenseAlreadyRevokedError
from licenses.application.commands.revoke_license import (
    DEFAULT_REVOKE_REASON,
    RevokeLicenseCommand as RevokeLicense,
)
from licenses.application.handlers.license_lifecycle_handlers import RevokeLicenseHandler


class RevokeLicenseCommand(SlashCommand):
    name = "revoke_license"
    description = "Revoke a license key"
    admin_only = True
    options = (
        CommandOption("license_key", "The license key to revoke", required=True),
        CommandOption("reason", "Reason for revocation (optional)"),
    )
    failure_title = "Revocation Failed"

    def run(self, interaction, options, context):
        result = RevokeLicenseHandler(
            license_repository=context.license_repository,
            event_bus=context.event_bus,
            clock=context.clock,
        ).handle(
            RevokeLicense(
                license_key=options["license_key"],
                revoked_by=interaction.user_id,
                revoked_by_name=interaction.username,
                reason=options["reason"] or DEFAULT_REVOKE_REASON,
            )
        )
        license = result.license
        return admin_reply(
            "License Revoked",
            "The license key has been permanently revoked.",
            [
                ReplyField("🔑 License Key", license.key, inline=True),
                ReplyField("📊 Previous Status", format_status(result.previous_status), inline=True),
                ReplyField("👤 Bound To", mention(license.owner_id), inline=True),
                ReplyField("🚫 Revoked By", interaction.username, inline=True),
                ReplyField("📅 Revoked On", format_date(license.revoked_at), inline=True),
                ReplyField("📝 Reason", license.revoke_reason or DEFAULT_REVOKE_REASON),
            ],
        )

    def render_error(self, error, interaction):
        if isinstance(error, LicenseAlreadyRevokedError):
            return warning_reply(
                "Already Revoked",
                "This license key has already been revoked.",
                [
                    ReplyField("🚫 Revoked By", mention(error.revoked_by), inline=True),
                    ReplyField("📅 Revoked On", format_date(error.revoked_at), inline=True),
                    ReplyField("📝 Reason", error.revoke_reason or DEFAULT_REVOKE_REASON),
                ],
            )
        return super().render_error(error, interaction)
