"""
/list_licenses and /list_users: paged admin listings, ten per page.
"""
from accounts.application.handlers.list_accounts_handler import ListAccountsHandler
from accounts.application.queries.list_accounts import ListAccountsQuery
from bot.registry import INTEGER, CommandOption, SlashCommand
from bot.replies import (
    ReplyField,
    admin_reply,
    format_date,
    format_expiry,
    format_status,
    info_reply,
    lines,
    mention,
)
from licenses.application.handlers.list_licenses_handler import ListLicensesHandler
from licenses.application.queries.list_licenses import ListLicensesQuery

PAGE_OPTION = CommandOption("page", "Page number (10 per page)", type=INTEGER, min_value=1)

STATUS_FILTERS = (
    ("All", "all"),
    ("Unused", "unused"),
    ("Redeemed", "redeemed"),
    ("Revoked", "revoked"),
)


def page_footer(page) -> str:
    return f"Page {page.page} of {max(page.total_pages, 1)} | {page.total} total"


class ListLicensesCommand(SlashCommand):
    name = "list_licenses"
    description = "List license keys with their status"
    admin_only = True
    options = (
        CommandOption("status", "Filter by status", choices=STATUS_FILTERS),
        PAGE_OPTION,
    )
    failure_title = "List Failed"

    def run(self, interaction, options, context):
        status = options["status"] or "all"
        page = ListLicensesHandler(context.license_repository).handle(
            ListLicensesQuery(status=status, page=options["page"] or 1)
        )
        if not page.items:
            return info_reply(
                "No Licenses Found",
                f"There are no licenses matching the filter `{status}`.",
            )

        fields = [
            ReplyField(
                license.key,
                lines(
                    f"**Status:** {format_status(license.status)}",
                    f"**Owner:** {mention(license.owner_id)}",
                    f"**Created:** {format_date(license.created_at)}",
                    f"**Redeemed:** {format_date(license.redeemed_at)}"
                    if license.redeemed_at
                    else None,
                    f"**Expires:** {format_expiry(license.expires_at)}",
                ),
            )
            for license in page.items
        ]
        return admin_reply(
            "License List",
            lines(f"Filter: `{status}`", page_footer(page)),
            fields,
        )


class ListUsersCommand(SlashCommand):
    name = "list_users"
    description = "List registered users"
    admin_only = True
    options = (PAGE_OPTION,)
    failure_title = "List Failed"

    def run(self, interaction, options, context):
        page = ListAccountsHandler(context.account_repository).handle(
            ListAccountsQuery(page=options["page"] or 1)
        )
        if not page.items:
            return info_reply("No Users Found", "No users have registered yet.")

        fields = [
            ReplyField(
                account.display_name,
                lines(
                    f"**User:** {mention(account.external_id)}",
                    f"**License:** `{account.license_key}`",
                    f"**Registered:** {format_date(account.registered_at)}",
                    f"**Last Download:** {format_date(account.last_download_at)}",
                ),
            )
            for account in page.items
        ]
        return admin_reply("Registered Users", page_footer(page), fields)
