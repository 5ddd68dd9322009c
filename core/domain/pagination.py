"""
Page arithmetic shared by the list commands.
"""
import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar

from core.domain.exceptions import InvalidPageError

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class PageRequest:
    """A 1-based page over ``total`` items."""

    page: int
    page_size: int
    total: int

    def __post_init__(self):
        if self.page < 1:
            raise InvalidPageError(self.page, self.total_pages)
        if self.total_pages and self.page > self.total_pages:
            raise InvalidPageError(self.page, self.total_pages)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class Page(Generic[T]):
    items: List[T]
    page: int
    total_pages: int
    total: int
