"""Paging value objects shared by the data-access layer and the facades."""

import math
from dataclasses import dataclass, field

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def clamp_page_window(page: int, limit: int) -> tuple[int, int]:
    """Bring a requested page / limit into range before a query runs.

    Pages start at 1. A limit below 1 falls back to the default, and no
    limit exceeds ``MAX_LIMIT``.
    """
    if page < 1:
        page = DEFAULT_PAGE
    if limit < 1:
        limit = DEFAULT_LIMIT
    return page, min(limit, MAX_LIMIT)


@dataclass(frozen=True)
class PageResult:
    """Pagination metadata describing one page of a listing."""

    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    total_pages: int = 0
    has_next: bool = False
    has_prev: bool = False

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageResult":
        """Derive page count and navigation flags from a total and a window."""
        total_pages = math.ceil(total / limit) if limit > 0 else 1
        if total_pages == 0:
            total_pages = 1
        return cls(
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


@dataclass
class QueryOptions:
    """Normalized paged / sorted / filtered query handed to repositories.

    The ``with_*`` setters return ``self`` so calls can be chained; applying
    the same setter twice with the same value leaves the options unchanged.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    search: str = ""
    order_field: str = ""
    order_descending: bool = False
    filters: dict[str, str] = field(default_factory=dict)
    fetch_all: bool = False

    def with_page(self, page: int | None, limit: int | None) -> "QueryOptions":
        if page is not None:
            self.page = page
        if limit is not None:
            self.limit = limit
        return self

    def with_search(self, search: str) -> "QueryOptions":
        self.search = search
        return self

    def with_order(self, field_name: str, descending: bool) -> "QueryOptions":
        # An empty field name carries no ordering; keep whatever is set.
        if field_name:
            self.order_field = field_name
            self.order_descending = descending
        return self

    def with_filter(self, key: str, value: str) -> "QueryOptions":
        self.filters[key] = value
        return self

    def with_fetch_all(self, fetch_all: bool) -> "QueryOptions":
        self.fetch_all = fetch_all
        return self
