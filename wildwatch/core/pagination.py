"""Pagination — list parameters and the {data, pagination} envelope.

Invariants:
    - page >= 1 and 1 <= limit <= MAX_LIMIT after normalization
    - offset == (page - 1) * limit
    - totalPages == ceil(totalCount / limit); hasNextPage iff currentPage < totalPages
    - hasPrevPage iff currentPage > 1
"""

import math
from dataclasses import dataclass

from wildwatch.core.domain_types import SortOrder

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


@dataclass(frozen=True)
class ListParams:
    """Validated page/limit/sort request for a list endpoint."""
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str | None = None
    order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def normalize_order(value: str | None) -> SortOrder:
    """Case-insensitive asc/desc; anything else falls back to desc."""
    if value and value.lower() == SortOrder.ASC.value:
        return SortOrder.ASC
    return SortOrder.DESC


def make_list_params(
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    sort_by: str | None = None,
    order: str | None = None,
) -> ListParams:
    """Cap limit at MAX_LIMIT; page/limit lower bounds are checked by the caller."""
    return ListParams(
        page=page,
        limit=min(limit, MAX_LIMIT),
        sort_by=sort_by,
        order=normalize_order(order),
    )


def build_pagination(total_count: int, page: int, limit: int) -> dict:
    total_pages = math.ceil(total_count / limit) if limit else 0
    return {
        "currentPage": page,
        "totalPages": total_pages,
        "totalCount": total_count,
        "hasNextPage": page < total_pages,
        "hasPrevPage": page > 1,
    }


def paginated(records: list, total_count: int, params: ListParams) -> dict:
    return {
        "data": records,
        "pagination": build_pagination(total_count, params.page, params.limit),
    }
