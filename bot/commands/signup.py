"""
/signup: create an account with a license key.
"""
from accounts.application.commands.register_account import RegisterAccountCommand
from accounts.application.handlers.register_account_handler import RegisterAccountHandler
from bot.registry import CommandOption, SlashCommand
from bot.replies import ReplyField, format_expiry, success_reply


class SignupCommand(SlashCommand):
    name = "signup"
    description = "Create a new account with a license key"
    options = (
        CommandOption(
            "username",
            "Your desired username (3-20 characters, alphanumeric and underscores)",
            required=True,
        ),
        CommandOption(
            "password",
            "Your password (min 8 chars, must include uppercase, lowercase, and number)",
            required=True,
        ),
        CommandOption(
            "license_key", "Your license key (format: XXXX-XXXX-XXXX-XXXX)", required=True
        ),
    )
    failure_title = "Registration Failed"

    def run(self, interaction, options, context):
        registration = RegisterAccountHandler(
            account_repository=context.account_repository,
            license_repository=context.license_repository,
            event_bus=context.event_bus,
            clock=context.clock,
        ).handle(
            RegisterAccountCommand(
                account_id=interaction.user_id,
                username=options["username"],
                password=options["password"],
                license_key=options["license_key"],
            )
        )
        account = registration.account
        return success_reply(
            "Account Created Successfully!",
            f"Welcome, **{account.display_name}**! Your account has been created "
            "and your license has been activated.",
            [
                ReplyField("👤 Username", account.display_name, inline=True),
                ReplyField("🔑 License Key", account.license_key, inline=True),
                ReplyField("⏰ Expiry", format_expiry(registration.expires_at), inline=True),
                ReplyField("📥 Next Steps", "Use `/get_download` to access your software!"),
            ],
        )
