"""Page/limit handling shared by every paginated list endpoint."""

import math
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Query

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 4
# Upper bound for page and limit; keeps the offset inside a 64-bit integer
MAX_VALUE = 2**31 - 1


def _positive_int(value: Any, default: int) -> int:
    """Coerce ``value`` to a positive int, capped at ``MAX_VALUE``, else ``default``."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number <= 0:
        return default
    return min(number, MAX_VALUE)


def total_pages(total_count: int, limit: int) -> int:
    """Number of pages needed to show ``total_count`` items ``limit`` at a time."""
    return math.ceil(total_count / limit)


@dataclass(frozen=True)
class Pagination:
    """A validated page request."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def parse(cls, page: Any = None, limit: Any = None) -> "Pagination":
        """Build from raw query values; absent, non-numeric or non-positive values use defaults."""
        return cls(page=_positive_int(page, DEFAULT_PAGE), limit=_positive_int(limit, DEFAULT_LIMIT))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def is_past_end(self, total_count: int) -> bool:
        """True when this page starts after the last of ``total_count`` items."""
        return self.offset >= total_count

    def total_pages(self, total_count: int) -> int:
        return total_pages(total_count, self.limit)


@dataclass
class PageResult:
    """One page of items plus the size of the full result set.

    ``items`` may be empty while ``total_count`` is positive: the page lies
    past the end. ``total_count == 0`` means nothing matched at all.
    """

    items: list
    total_count: int
    pagination: Pagination

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages(self.total_count)


def get_pagination(
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> Pagination:
    """Dependency reading ``page`` and ``limit`` query parameters leniently."""
    return Pagination.parse(page, limit)
