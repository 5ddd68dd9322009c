"""
Command registry.

Dispatches interactions to slash commands, enforcing the admin gate,
option rules and error rendering in one place. Every dispatch leaves a
command log entry.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bot.interaction import Interaction
from bot.replies import UNEXPECTED_ERROR, Reply, error_reply
from core.context import AppContext
from core.domain.exceptions import (
    AccountAlreadyRegisteredError,
    AccountNotFoundError,
    AdminRequiredError,
    ApiCredentialNotFoundError,
    DomainException,
    DownloadCooldownError,
    InvalidAmountError,
    InvalidLicenseKeyFormatError,
    InvalidPageError,
    InvalidTierError,
    InvalidUsernameError,
    LicenseAlreadyRedeemedError,
    LicenseAlreadyRevokedError,
    LicenseExpiredError,
    LicenseKeyMismatchError,
    LicenseNotActiveError,
    LicenseNotFoundError,
    LicenseRevokedError,
    NoLicenseError,
    UsernameTakenError,
    ValidationError,
    WeakPasswordError,
)
from core.metrics import commands_total

logger = logging.getLogger(__name__)

STRING = "string"
INTEGER = "integer"

ERROR_TITLES = {
    InvalidLicenseKeyFormatError: "Invalid License Key Format",
    InvalidUsernameError: "Invalid Username",
    WeakPasswordError: "Weak Password",
    InvalidTierError: "Invalid Tier",
    InvalidAmountError: "Invalid Amount",
    InvalidPageError: "Invalid Page",
    LicenseNotFoundError: "Invalid License Key",
    AccountNotFoundError: "Not Registered",
    NoLicenseError: "No Valid License",
    ApiCredentialNotFoundError: "Not Found",
    LicenseAlreadyRedeemedError: "License Already Redeemed",
    LicenseAlreadyRevokedError: "Already Revoked",
    LicenseRevokedError: "License Revoked",
    LicenseExpiredError: "License Expired",
    LicenseNotActiveError: "License Not Active",
    UsernameTakenError: "Username Taken",
    AccountAlreadyRegisteredError: "Already Registered",
    AdminRequiredError: "Access Denied",
    LicenseKeyMismatchError: "Invalid Key Verification",
    DownloadCooldownError: "Download Cooldown Active",
    ValidationError: "Invalid Input",
}


def error_title(error: DomainException) -> str:
    for cls in type(error).__mro__:
        if cls in ERROR_TITLES:
            return ERROR_TITLES[cls]
    return "Request Failed"


@dataclass(frozen=True)
class CommandOption:
    """One declared option of a command."""

    name: str
    description: str
    type: str = STRING
    required: bool = False
    choices: Tuple[Tuple[str, str], ...] = ()
    min_value: Optional[int] = None
    max_value: Optional[int] = None

    def coerce(self, value: Any) -> Any:
        """
        Convert and range-check a raw option value.

        Raises:
            ValidationError: If a required option is missing or a choice is unknown
            InvalidAmountError: If an integer is malformed or out of range
        """
        if value is None or value == "":
            if self.required:
                raise ValidationError(f"Option '{self.name}' is required", code="MISSING_OPTION")
            return None

        if self.type == INTEGER:
            try:
                value = int(value)
            except (TypeError, ValueError) as e:
                raise InvalidAmountError(f"'{self.name}' must be a whole number") from e
            if (self.min_value is not None and value < self.min_value) or (
                self.max_value is not None and value > self.max_value
            ):
                raise InvalidAmountError(
                    f"'{self.name}' must be between {self.min_value} and {self.max_value}"
                )
        else:
            value = str(value)

        if self.choices and value not in {choice for _, choice in self.choices}:
            raise ValidationError(
                f"'{value}' is not a valid choice for '{self.name}'", code="INVALID_CHOICE"
            )
        return value

    def describe(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "required": self.required,
        }
        if self.choices:
            data["choices"] = [{"name": name, "value": value} for name, value in self.choices]
        if self.min_value is not None:
            data["min_value"] = self.min_value
        if self.max_value is not None:
            data["max_value"] = self.max_value
        return data


class SlashCommand:
    """
    Base class for commands.

    Subclasses declare ``name``, ``description`` and ``options`` (or
    ``subcommands`` mapping each subcommand to its options) and
    implement ``run``.
    """

    name: str = ""
    description: str = ""
    options: Sequence[CommandOption] = ()
    subcommands: Dict[str, Tuple[str, Sequence[CommandOption]]] = {}
    admin_only: bool = False
    failure_title: str = "Command Failed"

    def parse_options(self, interaction: Interaction) -> Dict[str, Any]:
        options = self.options
        if self.subcommands:
            if interaction.subcommand not in self.subcommands:
                raise ValidationError(
                    f"Unknown subcommand: {interaction.subcommand}", code="INVALID_SUBCOMMAND"
                )
            options = self.subcommands[interaction.subcommand][1]
        return {
            option.name: option.coerce(interaction.options.get(option.name)) for option in options
        }

    def run(self, interaction: Interaction, options: Dict[str, Any], context: AppContext) -> Reply:
        raise NotImplementedError

    def render_error(self, error: DomainException, interaction: Interaction) -> Reply:
        """Reply for an expected failure; commands override for richer detail."""
        return error_reply(error_title(error), error.message)

    def describe(self) -> Dict[str, Any]:
        """Option schema a connector registers with the platform."""
        description = f"[ADMIN] {self.description}" if self.admin_only else self.description
        data: Dict[str, Any] = {"name": self.name, "description": description}
        if self.subcommands:
            data["subcommands"] = [
                {
                    "name": name,
                    "description": sub_description,
                    "options": [option.describe() for option in options],
                }
                for name, (sub_description, options) in self.subcommands.items()
            ]
        else:
            data["options"] = [option.describe() for option in self.options]
        return data


@dataclass
class CommandRegistry:
    """Name-to-command map with a single dispatch entry point."""

    commands: Dict[str, SlashCommand] = field(default_factory=dict)

    def register(self, command: SlashCommand) -> SlashCommand:
        if command.name in self.commands:
            raise ValueError(f"Command already registered: {command.name}")
        self.commands[command.name] = command
        return command

    def get(self, name: str) -> Optional[SlashCommand]:
        return self.commands.get(name)

    def describe(self) -> List[Dict[str, Any]]:
        return [command.describe() for command in self.commands.values()]

    def dispatch(self, interaction: Interaction, context: AppContext) -> Reply:
        """
        Run one interaction and always return a reply.

        Args:
            interaction: The invocation from the connector
            context: Application context

        Returns:
            Reply to render; never raises
        """
        command = self.get(interaction.command)
        if command is None:
            reply = error_reply("Unknown Command", f"Unknown command: /{interaction.command}")
            self._record(interaction, context, False, reply.description)
            return reply

        error_message = None
        try:
            if command.admin_only and not context.is_admin(interaction.user_id):
                logger.warning(
                    "Admin command denied",
                    extra={"command": command.name, "user_id": interaction.user_id},
                )
                raise AdminRequiredError("Admin only command.")
            options = command.parse_options(interaction)
            reply = command.run(interaction, options, context)
        except DomainException as e:
            error_message = e.message
            reply = command.render_error(e, interaction)
        except Exception as e:  # pylint: disable=broad-exception-caught
            error_message = str(e)
            logger.error(
                "Command %s failed: %s",
                command.name,
                e,
                extra={"user_id": interaction.user_id},
                exc_info=True,
            )
            reply = error_reply(command.failure_title, UNEXPECTED_ERROR)

        self._record(interaction, context, error_message is None, error_message)
        return reply

    def _record(
        self,
        interaction: Interaction,
        context: AppContext,
        success: bool,
        error_message: Optional[str],
    ) -> None:
        command = interaction.command
        if interaction.subcommand:
            command = f"{command} {interaction.subcommand}"
        commands_total.labels(command=interaction.command, success=str(success).lower()).inc()
        context.audit_recorder.record_command(
            external_id=interaction.user_id,
            username=interaction.username,
            command=command,
            success=success,
            error_message=error_message,
        )


def default_registry() -> CommandRegistry:
    """Registry holding every command."""
    from bot.commands.admin.admin_stats import AdminStatsCommand
    from bot.commands.admin.api_key import ApiKeyCommand
    from bot.commands.admin.create_license import CreateLicenseCommand, GenerateKeysCommand
    from bot.commands.admin.list_commands import ListLicensesCommand, ListUsersCommand
    from bot.commands.admin.revoke_license import RevokeLicenseCommand
    from bot.commands.get_download import GetDownloadCommand
    from bot.commands.redeem import RedeemCommand
    from bot.commands.signup import SignupCommand

    registry = CommandRegistry()
    for command in (
        SignupCommand(),
        RedeemCommand(),
        GetDownloadCommand(),
        CreateLicenseCommand(),
        GenerateKeysCommand(),
        RevokeLicenseCommand(),
        ListLicensesCommand(),
        ListUsersCommand(),
        AdminStatsCommand(),
        ApiKeyCommand(),
    ):
        registry.register(command)
    return registry
