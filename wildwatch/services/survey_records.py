"""Survey Records — shared persistence for field observations and submissions.

Both record kinds are a parent row owned by one user plus any number of
sighting rows. SurveyRecordKind describes a concrete pair of tables; every
operation here is written once against that description.

Invariants:
    - Parent + inline sightings are inserted in one transaction
    - Detail reads run one statement for the parent and one for its sightings
    - A page of records loads its sightings with a single IN query
    - Only the owner (user_id == subject) may delete or add sightings;
      any mismatch looks exactly like an absent record
    - Sightings are deleted before their parent
"""

import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from wildwatch.core.domain_types import AuthenticatedUser
from wildwatch.core.pagination import ListParams
from wildwatch.core.query_builder import build_list_query
from wildwatch.schemas.common import SightingCreate
from wildwatch.services.query_runner import fetch_page

logger = logging.getLogger(__name__)

SIGHTING_FIELDS = (
    "id", "group_name", "estimated_count", "behavior",
    "location_seen", "notes", "photo_url", "created_at",
)


@dataclass(frozen=True)
class SurveyRecordKind:
    """A parent table, its sighting table, and how to render a parent row."""
    label: str
    parent: type
    sighting: type
    parent_key: str
    sort_columns: Mapping[str, Any]
    default_sort: str
    serialize: Callable[[Any], dict]

    @property
    def sighting_parent_column(self):
        return getattr(self.sighting, self.parent_key)


def serialize_sighting(kind: SurveyRecordKind, sighting) -> dict:
    record = {name: getattr(sighting, name) for name in SIGHTING_FIELDS}
    record[kind.parent_key] = getattr(sighting, kind.parent_key)
    return record


def _new_sighting(kind: SurveyRecordKind, record_id: uuid.UUID, data: SightingCreate):
    return kind.sighting(**data.model_dump(), **{kind.parent_key: record_id})


async def _load_sightings(
    db: AsyncSession, kind: SurveyRecordKind, record_ids: list[uuid.UUID],
) -> dict[uuid.UUID, list[dict]]:
    grouped: dict[uuid.UUID, list[dict]] = defaultdict(list)
    if not record_ids:
        return grouped
    parent_column = kind.sighting_parent_column
    stmt = (
        select(kind.sighting)
        .where(parent_column.in_(record_ids))
        .order_by(kind.sighting.id)
    )
    for sighting in (await db.execute(stmt)).scalars():
        grouped[getattr(sighting, kind.parent_key)].append(
            serialize_sighting(kind, sighting),
        )
    return grouped


async def create_record(
    db: AsyncSession,
    kind: SurveyRecordKind,
    values: dict,
    sightings: list[SightingCreate],
    user: AuthenticatedUser,
) -> dict:
    """Insert a record owned by `user` together with its inline sightings."""
    async with db.begin():
        record = kind.parent(**values, user_id=user.sub)
        db.add(record)
        await db.flush()
        db.add_all(_new_sighting(kind, record.id, s) for s in sightings)
    logger.info(
        f"{kind.label} {record.id} created with {len(sightings)} sightings",
        extra={"user_id": user.sub, "resource_id": str(record.id)},
    )
    return await fetch_record(db, kind, record.id)


async def fetch_record(
    db: AsyncSession, kind: SurveyRecordKind, record_id: uuid.UUID,
) -> dict | None:
    record = await db.scalar(select(kind.parent).where(kind.parent.id == record_id))
    if record is None:
        return None
    sightings = await _load_sightings(db, kind, [record.id])
    return {**kind.serialize(record), "sightings": sightings.get(record.id, [])}


async def list_user_records(
    db: AsyncSession, kind: SurveyRecordKind, user_id: str, params: ListParams,
) -> tuple[list[dict], int]:
    query = build_list_query(
        (kind.parent,),
        kind.parent,
        [kind.parent.user_id == user_id],
        params,
        kind.sort_columns,
        kind.default_sort,
        tiebreaker=kind.parent.id,
    )
    records, total = await fetch_page(db, query, scalars=True)
    sightings = await _load_sightings(db, kind, [r.id for r in records])
    return [
        {**kind.serialize(r), "sightings": sightings.get(r.id, [])}
        for r in records
    ], total


async def _owned_record_id(
    db: AsyncSession, kind: SurveyRecordKind, record_id: uuid.UUID, user_id: str,
) -> uuid.UUID | None:
    return await db.scalar(
        select(kind.parent.id).where(
            kind.parent.id == record_id, kind.parent.user_id == user_id,
        ),
    )


async def delete_owned_record(
    db: AsyncSession, kind: SurveyRecordKind, record_id: uuid.UUID, user_id: str,
) -> bool:
    async with db.begin():
        if await _owned_record_id(db, kind, record_id, user_id) is None:
            return False
        await db.execute(
            delete(kind.sighting)
            .where(kind.sighting_parent_column == record_id)
            .execution_options(synchronize_session=False),
        )
        result = await db.execute(
            delete(kind.parent)
            .where(kind.parent.id == record_id)
            .execution_options(synchronize_session=False),
        )
    logger.info(
        f"{kind.label} {record_id} deleted",
        extra={"user_id": user_id, "resource_id": str(record_id)},
    )
    return result.rowcount > 0


async def add_sighting(
    db: AsyncSession,
    kind: SurveyRecordKind,
    record_id: uuid.UUID,
    user_id: str,
    data: SightingCreate,
) -> dict | None:
    """Attach a sighting to an owned record; None when absent or not owned."""
    async with db.begin():
        if await _owned_record_id(db, kind, record_id, user_id) is None:
            return None
        sighting = _new_sighting(kind, record_id, data)
        db.add(sighting)
    return serialize_sighting(kind, sighting)
