"""
/api_key: issue, list and revoke validation API tokens.

The raw token appears once, in the reply to ``create``.
"""
from bot.registry import INTEGER, CommandOption, SlashCommand
from bot.replies import ReplyField, admin_reply, format_date, info_reply, lines
from credentials.application.commands.api_credential_commands import (
    IssueApiCredentialCommand,
    RevokeApiCredentialCommand,
)
from credentials.application.handlers.api_credential_handlers import (
    IssueApiCredentialHandler,
    ListApiCredentialsHandler,
    RevokeApiCredentialHandler,
)
from credentials.domain.api_credential import DEFAULT_QUOTA, MAX_QUOTA, MIN_QUOTA


class ApiKeyCommand(SlashCommand):
    name = "api_key"
    description = "Manage API keys for license validation"
    admin_only = True
    subcommands = {
        "create": (
            "Create a new API key",
            (
                CommandOption("name", "Name for this API key", required=True),
                CommandOption(
                    "rate_limit",
                    f"Requests per 15 minutes (default: {DEFAULT_QUOTA})",
                    type=INTEGER,
                    min_value=MIN_QUOTA,
                    max_value=MAX_QUOTA,
                ),
            ),
        ),
        "list": ("List all API keys", ()),
        "revoke": (
            "Revoke an API key",
            (CommandOption("key", "The API key to revoke", required=True),),
        ),
    }
    failure_title = "API Key Command Failed"

    def run(self, interaction, options, context):
        return getattr(self, f"_{interaction.subcommand}")(interaction, options, context)

    def _create(self, interaction, options, context):
        issued = IssueApiCredentialHandler(
            credential_repository=context.credential_repository,
            event_bus=context.event_bus,
            clock=context.clock,
        ).handle(
            IssueApiCredentialCommand(
                label=options["name"],
                issued_by=interaction.user_id,
                issued_by_name=interaction.username,
                quota_per_window=options["rate_limit"] or DEFAULT_QUOTA,
            )
        )
        credential = issued.credential
        return admin_reply(
            "API Key Created",
            "Store this key securely. It will not be shown again.",
            [
                ReplyField("🔑 API Key", f"```\n{issued.token}\n```"),
                ReplyField("📛 Name", credential.label, inline=True),
                ReplyField(
                    "⏱️ Rate Limit",
                    f"{credential.quota_per_window} requests / 15 min",
                    inline=True,
                ),
                ReplyField(
                    "📖 Usage",
                    "Send the key in the `X-API-Key` header when calling the validation API.",
                ),
            ],
        )

    def _list(self, interaction, options, context):
        credentials = ListApiCredentialsHandler(context.credential_repository).handle()
        if not credentials:
            return info_reply("No API Keys", "No API keys have been created yet.")

        fields = [
            ReplyField(
                credential.label,
                lines(
                    f"**Key:** `{credential.token_prefix}...`",
                    f"**Status:** {'🟢 Active' if credential.is_active else '🔴 Revoked'}",
                    f"**Rate Limit:** {credential.quota_per_window} / 15 min",
                    f"**Created:** {format_date(credential.issued_at)}",
                    f"**Last Used:** {format_date(credential.last_used_at)}",
                ),
                inline=True,
            )
            for credential in credentials
        ]
        return admin_reply("API Keys", f"{len(credentials)} key(s) on record.", fields)

    def _revoke(self, interaction, options, context):
        revoked = RevokeApiCredentialHandler(
            credential_repository=context.credential_repository,
            event_bus=context.event_bus,
            clock=context.clock,
        ).handle(
            RevokeApiCredentialCommand(
                token=options["key"],
                revoked_by=interaction.user_id,
                revoked_by_name=interaction.username,
            )
        )
        return admin_reply(
            "API Key Revoked",
            "The API key has been permanently revoked.",
            [
                ReplyField("📛 Name", revoked.label, inline=True),
                ReplyField("🔑 Key", f"`{revoked.token_prefix}...`", inline=True),
            ],
        )
