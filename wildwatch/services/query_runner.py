"""Query Runner — executes a ListQuery's count and row statements on one session."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from wildwatch.core.query_builder import ListQuery

logger = logging.getLogger(__name__)


async def fetch_page(
    db: AsyncSession, query: ListQuery, *, scalars: bool = False,
) -> tuple[list, int]:
    """Return (rows, totalCount). Rows are mappings, or ORM objects with scalars=True."""
    total = (await db.execute(query.count)).scalar_one()
    result = await db.execute(query.rows)
    rows = result.scalars().all() if scalars else result.mappings().all()
    logger.debug("Fetched page", extra={"total_count": total})
    return list(rows), int(total)
