"""
ListAccountsQuery.
"""
from dataclasses import dataclass

from core.domain.pagination import DEFAULT_PAGE_SIZE


@dataclass
class ListAccountsQuery:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
