"""
Search filter and paginated result models
"""
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar
import math

T = TypeVar('T')

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
# Keeps OFFSET well inside a Postgres bigint
MAX_PAGE = 1_000_000


def clamp_page(page: Optional[int]) -> int:
    """Absent or < 1 means the first page; pages past MAX_PAGE are served as MAX_PAGE"""
    if page is None or page < 1:
        return DEFAULT_PAGE
    return min(page, MAX_PAGE)


def clamp_page_size(page_size: Optional[int]) -> int:
    """Absent means the default; anything else is clamped to [1, 100]"""
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, page_size))


@dataclass
class SearchFilter:
    """
    Request-scoped contract search parameters. Never persisted.

    All fields are optional; pagination is normalized on read through
    effective_page / effective_page_size so callers can pass raw input.
    """
    query: Optional[str] = None
    verified_only: Optional[bool] = None
    category: Optional[str] = None
    network: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None

    @property
    def effective_page(self) -> int:
        return clamp_page(self.page)

    @property
    def effective_page_size(self) -> int:
        return clamp_page_size(self.page_size)

    @property
    def offset(self) -> int:
        return (self.effective_page - 1) * self.effective_page_size

    @property
    def search_term(self) -> Optional[str]:
        """Free-text term, or None when blank"""
        if self.query is None or not self.query.strip():
            return None
        return self.query.strip()


@dataclass
class PaginatedResult(Generic[T]):
    """Bounded slice of an ordered result set plus the total match count"""
    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if len(self.items) > self.page_size:
            raise ValueError("PaginatedResult holds more items than page_size")
        if self.total < len(self.items):
            raise ValueError("PaginatedResult total is smaller than its page")

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0
