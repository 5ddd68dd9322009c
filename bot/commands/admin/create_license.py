"""
/create_license and /generate_keys: admin license creation.

Both create an all-or-nothing batch and reply with the keys grouped ten
per field.
"""
from bot.registry import INTEGER, CommandOption, SlashCommand
from bot.replies import ReplyField, admin_reply, format_date, key_fields, lines
from licenses.application.commands.create_licenses import CreateLicensesCommand
from licenses.application.handlers.create_licenses_handler import CreateLicensesHandler
from licenses.domain.tiers import TIERS

MAX_CREATE_AMOUNT = 50
MAX_GENERATE_AMOUNT = 100


def create_licenses(context, interaction, **kwargs):
    return CreateLicensesHandler(
        license_repository=context.license_repository,
        event_bus=context.event_bus,
        clock=context.clock,
    ).handle(
        CreateLicensesCommand(
            actor_id=interaction.user_id, actor_name=interaction.username, **kwargs
        )
    )


class CreateLicenseCommand(SlashCommand):
    name = "create_license"
    description = "Generate new license keys"
    admin_only = True
    options = (
        CommandOption(
            "amount",
            f"Number of licenses to generate (1-{MAX_CREATE_AMOUNT})",
            type=INTEGER,
            required=True,
            min_value=1,
            max_value=MAX_CREATE_AMOUNT,
        ),
        CommandOption(
            "expiry_days",
            "Days until expiry (optional, leave empty for lifetime)",
            type=INTEGER,
            min_value=1,
            max_value=3650,
        ),
    )
    failure_title = "Generation Failed"

    def run(self, interaction, options, context):
        expiry_days = options["expiry_days"]
        created = create_licenses(
            context,
            interaction,
            amount=options["amount"],
            expiry_days=expiry_days,
            max_amount=MAX_CREATE_AMOUNT,
        )
        expiry = "Lifetime"
        if expiry_days:
            expiry = f"{expiry_days} days ({format_date(created.expires_at)})"
        summary = ReplyField(
            "📊 Summary",
            lines(
                f"**Total Generated:** {len(created.keys)}",
                f"**Expiry:** {expiry}",
                f"**Created By:** {interaction.username}",
            ),
        )
        return admin_reply(
            "Licenses Generated",
            f"Successfully generated {len(created.keys)} license key(s).",
            key_fields(created.keys) + [summary],
        )


class GenerateKeysCommand(SlashCommand):
    name = "generate_keys"
    description = "Generate license keys with specific tier"
    admin_only = True
    options = (
        CommandOption(
            "tier",
            "License tier/duration",
            required=True,
            choices=tuple((tier.name, tier.code) for tier in TIERS.values()),
        ),
        CommandOption(
            "amount",
            f"Number of licenses to generate (1-{MAX_GENERATE_AMOUNT})",
            type=INTEGER,
            required=True,
            min_value=1,
            max_value=MAX_GENERATE_AMOUNT,
        ),
    )
    failure_title = "Generation Failed"

    def run(self, interaction, options, context):
        created = create_licenses(
            context,
            interaction,
            amount=options["amount"],
            tier_code=options["tier"],
            max_amount=MAX_GENERATE_AMOUNT,
        )
        summary = ReplyField(
            "📊 Generation Summary",
            lines(
                f"**Tier:** {created.tier_name}",
                f"**Amount:** {len(created.keys)}",
                f"**Duration:** {created.duration_hours} hours"
                if created.duration_hours
                else "**Duration:** Lifetime",
                f"**Expires:** {format_date(created.expires_at)}" if created.expires_at else None,
                f"**Generated By:** {interaction.username}",
            ),
        )
        return admin_reply(
            f"{created.tier_name} Keys Generated",
            f"Successfully generated {len(created.keys)} {created.tier_name} license key(s).",
            key_fields(created.keys) + [summary],
        )
