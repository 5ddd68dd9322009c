"""
/admin_stats: system statistics by category.
"""
from audit.application.dto.stats_dto import (
    ActionStatsDTO,
    LicenseStatsDTO,
    OverviewStatsDTO,
    UserStatsDTO,
)
from audit.application.handlers.admin_stats_handler import AdminStatsHandler
from audit.application.queries.admin_stats import AdminStatsQuery
from bot.registry import CommandOption, SlashCommand
from bot.replies import ReplyField, admin_reply, bullet_list, format_date, lines
from licenses.domain.tiers import TIERS

CATEGORIES = (
    ("Overview", "overview"),
    ("Licenses", "licenses"),
    ("Actions", "actions"),
    ("Users", "users"),
)


def tier_label(code):
    tier = TIERS.get(code)
    return tier.name if tier else code


def describe_action(action) -> str:
    target = f" `{action['target_id']}`" if action.get("target_id") else ""
    return (
        f"{action['action_type']}{target} by {action['admin_username']} "
        f"({format_date(action['created_at'])})"
    )


class AdminStatsCommand(SlashCommand):
    name = "admin_stats"
    description = "View system statistics"
    admin_only = True
    options = (CommandOption("category", "Statistics category", choices=CATEGORIES),)
    failure_title = "Statistics Failed"

    def run(self, interaction, options, context):
        stats = AdminStatsHandler(
            license_repository=context.license_repository,
            account_repository=context.account_repository,
            audit_repository=context.audit_repository,
            clock=context.clock,
        ).handle(AdminStatsQuery(category=options["category"] or "overview"))

        if isinstance(stats, OverviewStatsDTO):
            return self._overview(stats)
        if isinstance(stats, LicenseStatsDTO):
            return self._licenses(stats)
        if isinstance(stats, ActionStatsDTO):
            return self._actions(stats)
        return self._users(stats)

    @staticmethod
    def _overview(stats: OverviewStatsDTO):
        fields = [
            ReplyField(
                "🔑 Licenses",
                lines(
                    f"**Total:** {stats.total_licenses}",
                    f"**Unused:** {stats.unused}",
                    f"**Redeemed:** {stats.redeemed}",
                    f"**Revoked:** {stats.revoked}",
                ),
                inline=True,
            ),
            ReplyField(
                "📈 Status",
                lines(f"**Active:** {stats.active}", f"**Expired:** {stats.expired}"),
                inline=True,
            ),
            ReplyField("👥 Users", f"**Registered:** {stats.total_users}", inline=True),
        ]
        if stats.recent_actions:
            fields.append(
                ReplyField(
                    "🕒 Recent Actions", bullet_list(map(describe_action, stats.recent_actions))
                )
            )
        return admin_reply("System Overview", "Current license and user totals.", fields)

    @staticmethod
    def _licenses(stats: LicenseStatsDTO):
        fields = [
            ReplyField(
                tier_label(row["license_type"]),
                lines(
                    f"**Batches:** {row['generation_count']}",
                    f"**Licenses:** {row['total_licenses']}",
                    f"**Last Generated:** {format_date(row['last_generated'])}",
                ),
                inline=True,
            )
            for row in stats.by_type
        ]
        if stats.history:
            fields.append(
                ReplyField(
                    "🕒 Recent Batches",
                    bullet_list(
                        f"{batch['amount']} x {tier_label(batch['license_type'])} "
                        f"by {batch['admin_username']} ({format_date(batch['created_at'])})"
                        for batch in stats.history
                    ),
                )
            )
        description = (
            "Generation totals by license type." if fields else "No licenses generated yet."
        )
        return admin_reply("License Statistics", description, fields)

    @staticmethod
    def _actions(stats: ActionStatsDTO):
        fields = []
        if stats.recent:
            fields.append(
                ReplyField("🕒 Recent Actions", bullet_list(map(describe_action, stats.recent)))
            )
        return admin_reply("Admin Actions", f"**Total actions logged:** {stats.total}", fields)

    @staticmethod
    def _users(stats: UserStatsDTO):
        return admin_reply(
            "User Statistics",
            f"Generated {format_date(stats.generated_at)}",
            [
                ReplyField("👥 Total Users", str(stats.total_users), inline=True),
                ReplyField(
                    "🆕 Registrations",
                    lines(
                        f"**Last 24h:** {stats.registered_24h}",
                        f"**Last 7d:** {stats.registered_7d}",
                        f"**Last 30d:** {stats.registered_30d}",
                    ),
                    inline=True,
                ),
                ReplyField(
                    "📥 Activity",
                    lines(
                        f"**Downloads (7d):** {stats.active_downloads_7d}",
                        f"**Activity Rate:** {stats.activity_rate}%",
                    ),
                    inline=True,
                ),
            ],
        )
