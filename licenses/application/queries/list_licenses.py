"""
ListLicensesQuery.
"""
from dataclasses import dataclass
from typing import Optional

from core.domain.pagination import DEFAULT_PAGE_SIZE


@dataclass
class ListLicensesQuery:
    """Page through licenses, optionally filtered by status."""

    status: Optional[str] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
