"""Query Builder — filter / sort / paginate SELECT plus a matching COUNT.

Invariants:
    - Row and count statements share one FROM clause and one WHERE predicate
    - Absent filters contribute no condition; present ones are AND-ed in order
    - Every user value is a bound parameter (SQLAlchemy expressions, never text)
    - ORDER BY only ever uses a column taken from the allow-list mapping
    - OFFSET == (page - 1) * limit

Design Decisions:
    - Resources pass filters in as a list of optional conditions, built by a pure
      function from a typed filter dataclass (see services/)
    - Primary key appended as a tiebreaker so pages never overlap on equal sort keys
"""

from dataclasses import dataclass
from typing import Mapping, Sequence

from sqlalchemy import Select, and_, func, select
from sqlalchemy.sql.elements import ColumnElement

from wildwatch.core.domain_types import SortOrder
from wildwatch.core.pagination import ListParams


@dataclass(frozen=True)
class ListQuery:
    rows: Select
    count: Select


def combine_conditions(
    conditions: Sequence[ColumnElement | None],
) -> ColumnElement | None:
    """AND together the present conditions; None when nothing filters."""
    present = [c for c in conditions if c is not None]
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return and_(*present)


def resolve_sort_column(
    requested: str | None,
    allowed: Mapping[str, ColumnElement],
    default: str,
) -> ColumnElement:
    """Allow-listed column for `requested`, else the default column."""
    if requested is not None and requested in allowed:
        return allowed[requested]
    return allowed[default]


def build_list_query(
    columns: Sequence,
    from_clause,
    conditions: Sequence[ColumnElement | None],
    params: ListParams,
    sort_columns: Mapping[str, ColumnElement],
    default_sort: str,
    tiebreaker: ColumnElement | None = None,
) -> ListQuery:
    where = combine_conditions(conditions)
    sort_column = resolve_sort_column(params.sort_by, sort_columns, default_sort)

    if params.order is SortOrder.ASC:
        order_by = [sort_column.asc()]
        if tiebreaker is not None and tiebreaker is not sort_column:
            order_by.append(tiebreaker.asc())
    else:
        order_by = [sort_column.desc()]
        if tiebreaker is not None and tiebreaker is not sort_column:
            order_by.append(tiebreaker.desc())

    rows = select(*columns).select_from(from_clause)
    count = select(func.count()).select_from(from_clause)
    if where is not None:
        rows = rows.where(where)
        count = count.where(where)

    rows = rows.order_by(*order_by).limit(params.limit).offset(params.offset)
    return ListQuery(rows=rows, count=count)


LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so a substring filter matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
