"""
ListAccountsHandler.
"""
from accounts.application.dto.account_dto import AccountDTO
from accounts.application.queries.list_accounts import ListAccountsQuery
from accounts.ports.account_repository import AccountRepository
from core.domain.pagination import Page, PageRequest


class ListAccountsHandler:
    """Handler for ListAccountsQuery."""

    def __init__(self, account_repository: AccountRepository):
        self.account_repository = account_repository

    def handle(self, query: ListAccountsQuery) -> Page[AccountDTO]:
        total = self.account_repository.count()
        request = PageRequest(page=query.page, page_size=query.page_size, total=total)
        accounts = self.account_repository.list(offset=request.offset, limit=request.page_size)
        return Page(
            items=[AccountDTO.from_entity(account) for account in accounts],
            page=request.page,
            total_pages=request.total_pages,
            total=total,
        )
