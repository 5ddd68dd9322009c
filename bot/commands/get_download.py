"""
/get_download: hand out the download link to a registered account.
"""
from accounts.application.commands.request_download import RequestDownloadCommand
from accounts.application.handlers.request_download_handler import RequestDownloadHandler
from bot.registry import CommandOption, SlashCommand
from bot.replies import ReplyField, format_expiry, success_reply


class GetDownloadCommand(SlashCommand):
    name = "get_download"
    description = "Get the download link for the software"
    options = (CommandOption("license_key", "Your license key to verify access", required=True),)
    failure_title = "Download Failed"

    def run(self, interaction, options, context):
        download = RequestDownloadHandler(
            account_repository=context.account_repository,
            license_repository=context.license_repository,
            download_url=context.download_url,
            cooldown=context.download_cooldown,
            event_bus=context.event_bus,
            clock=context.clock,
        ).handle(
            RequestDownloadCommand(
                account_id=interaction.user_id, license_key=options["license_key"]
            )
        )
        return success_reply(
            "Download Ready!",
            "Here's your download link!",
            [
                ReplyField("📥 Download Link", f"[Click here to download]({download.download_url})"),
                ReplyField("⏰ Cooldown", f"{download.cooldown_minutes} minutes", inline=True),
                ReplyField("📅 License Expiry", format_expiry(download.expires_at), inline=True),
                ReplyField(
                    "⚠️ Important", "Keep your download link private. Do not share it with others."
                ),
            ],
        )
