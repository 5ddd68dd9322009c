"""
/redeem: bind a license key to the caller.
"""
from bot.registry import CommandOption, SlashCommand, error_title
from bot.replies import ReplyField, error_reply, format_date, format_expiry, lines, success_reply
from core.domain.exceptions import LicenseAlreadyRedeemedError
from licenses.application.commands.redeem_license import RedeemLicenseCommand
from licenses.application.handlers.license_lifecycle_handlers import RedeemLicenseHandler


class RedeemCommand(SlashCommand):
    name = "redeem"
    description = "Redeem a license key to your account"
    options = (
        CommandOption(
            "license_key", "The license key to redeem (format: XXXX-XXXX-XXXX-XXXX)", required=True
        ),
    )
    failure_title = "Redemption Failed"

    def run(self, interaction, options, context):
        result = RedeemLicenseHandler(
            license_repository=context.license_repository,
            event_bus=context.event_bus,
            clock=context.clock,
        ).handle(
            RedeemLicenseCommand(
                license_key=options["license_key"],
                account_id=interaction.user_id,
                account_name=interaction.username,
            )
        )
        license = result.license
        return success_reply(
            "License Redeemed Successfully!",
            "Your license key has been activated and bound to your account.",
            [
                ReplyField("🔑 License Key", license.key, inline=True),
                ReplyField("📅 Redeemed On", format_date(license.redeemed_at), inline=True),
                ReplyField("📊 Total Licenses", str(result.total_owned), inline=True),
                ReplyField("⏰ Expiry", format_expiry(license.expires_at), inline=True),
                ReplyField(
                    "📥 Next Steps",
                    "If you haven't signed up yet, use `/signup` to create your account!",
                ),
            ],
        )

    def render_error(self, error, interaction):
        if isinstance(error, LicenseAlreadyRedeemedError):
            return error_reply(
                error_title(error),
                lines(
                    f"{error.message}.",
                    error.redeemed_at and f"\n**Redeemed on:** {format_date(error.redeemed_at)}",
                ),
            )
        return super().render_error(error, interaction)
