"""Event Queries — paginated listing, detail, verification and deletion of events.

Invariants:
    - Listing and count share event_conditions(); filters are AND-ed
    - hasMedia=False means: no media AND at least one sensor reading with value > 0
    - regions (with nested labels), sensorData and media are always JSON arrays
    - Child rows (region labels, regions, sensor data, media) are deleted before events
    - Device id arrays are bound as IN parameters, never interpolated
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import Select, delete, exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from wildwatch.core.pagination import ListParams
from wildwatch.core.query_builder import build_list_query
from wildwatch.db.json_agg import child_array
from wildwatch.models.device import Device, DeviceOwner, Sensor, SensorType
from wildwatch.models.event import Event, EventMedia, Region, RegionLabel, SensorData
from wildwatch.services.query_runner import fetch_page

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "time": Event.time,
    "type": Event.type,
    "deviceId": Event.device_id,
    "createdAt": Event.created_at,
    "updatedAt": Event.updated_at,
}
DEFAULT_SORT = "time"

_EVENTS_WITH_DEVICE = Event.__table__.outerjoin(
    Device.__table__, Event.device_id == Device.id,
)


@dataclass(frozen=True)
class EventFilters:
    device_id: int | None = None
    device_name: str | None = None
    owner_id: str | None = None
    has_media: bool | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


def _has_media() -> ColumnElement[bool]:
    return exists().where(EventMedia.event_id == Event.id)


def _has_positive_reading() -> ColumnElement[bool]:
    return exists().where(SensorData.event_id == Event.id, SensorData.value > 0)


def event_conditions(filters: EventFilters) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if filters.device_id is not None:
        conditions.append(Event.device_id == filters.device_id)
    elif filters.device_name is not None:
        conditions.append(Device.name == filters.device_name)
    if filters.owner_id is not None:
        conditions.append(
            exists().where(
                DeviceOwner.device_id == Event.device_id,
                DeviceOwner.user_id == filters.owner_id,
            ),
        )
    if filters.has_media is True:
        conditions.append(_has_media())
    elif filters.has_media is False:
        conditions.append(~_has_media())
        conditions.append(_has_positive_reading())
    if filters.start_date is not None:
        conditions.append(Event.time >= filters.start_date)
    if filters.end_date is not None:
        conditions.append(Event.time <= filters.end_date)
    return conditions


def _event_columns() -> tuple:
    labels = child_array(
        {
            "id": RegionLabel.id,
            "name": RegionLabel.name,
            "latinName": RegionLabel.latin_name,
            "count": RegionLabel.count,
        },
        RegionLabel.region_id == Region.id,
    )
    regions = child_array(
        {
            "id": Region.id,
            "w": Region.w,
            "h": Region.h,
            "x": Region.x,
            "y": Region.y,
            "labels": labels,
        },
        Region.event_id == Event.id,
    )
    sensor_data = child_array(
        {
            "id": SensorData.id,
            "sensorId": SensorData.sensor_id,
            "value": SensorData.value,
            "name": SensorType.name,
        },
        SensorData.event_id == Event.id,
        select_from=SensorData.__table__
        .outerjoin(Sensor.__table__, SensorData.sensor_id == Sensor.id)
        .outerjoin(SensorType.__table__, Sensor.type_id == SensorType.id),
    )
    media = child_array(
        {
            "id": EventMedia.id,
            "fileId": EventMedia.file_id,
            "source": EventMedia.source,
        },
        EventMedia.event_id == Event.id,
    )
    return (
        Event.id,
        Event.time,
        Event.type,
        Event.device_id.label("deviceId"),
        Device.name.label("deviceName"),
        Event.latitude,
        Event.longitude,
        Event.verified_by.label("verifiedBy"),
        Event.verified_at.label("verifiedAt"),
        Event.created_at.label("createdAt"),
        Event.updated_at.label("updatedAt"),
        Event.updated_by.label("updatedBy"),
        regions.label("regions"),
        sensor_data.label("sensorData"),
        media.label("media"),
    )


def _row_to_event(row) -> dict:
    record = dict(row)
    latitude = record.pop("latitude")
    longitude = record.pop("longitude")
    record["location"] = (
        {"type": "Point", "coordinates": [longitude, latitude]}
        if latitude is not None and longitude is not None
        else None
    )
    return record


async def list_events(
    db: AsyncSession, filters: EventFilters, params: ListParams,
) -> tuple[list[dict], int]:
    query = build_list_query(
        _event_columns(),
        _EVENTS_WITH_DEVICE,
        event_conditions(filters),
        params,
        SORT_COLUMNS,
        DEFAULT_SORT,
        tiebreaker=Event.id,
    )
    rows, total = await fetch_page(db, query)
    return [_row_to_event(r) for r in rows], total


async def fetch_event_by_id(db: AsyncSession, event_id: int) -> dict | None:
    stmt = (
        select(*_event_columns())
        .select_from(_EVENTS_WITH_DEVICE)
        .where(Event.id == event_id)
    )
    row = (await db.execute(stmt)).mappings().first()
    if row is None:
        return None
    return _row_to_event(row)


async def delete_event_children(
    db: AsyncSession, event_ids: Sequence[int] | Select,
) -> None:
    """Delete region labels, regions, sensor data and media of the given events."""
    region_ids = select(Region.id).where(Region.event_id.in_(event_ids))
    for stmt in (
        delete(RegionLabel).where(RegionLabel.region_id.in_(region_ids)),
        delete(Region).where(Region.event_id.in_(event_ids)),
        delete(SensorData).where(SensorData.event_id.in_(event_ids)),
        delete(EventMedia).where(EventMedia.event_id.in_(event_ids)),
    ):
        await db.execute(stmt.execution_options(synchronize_session=False))


async def purge_device_events(db: AsyncSession, device_ids: Sequence[int]) -> int:
    """Delete every event (and its children) recorded by the given devices."""
    if not device_ids:
        return 0
    event_ids = select(Event.id).where(Event.device_id.in_(list(device_ids)))
    await delete_event_children(db, event_ids)
    result = await db.execute(
        delete(Event)
        .where(Event.device_id.in_(list(device_ids)))
        .execution_options(synchronize_session=False),
    )
    return result.rowcount


async def delete_owned_event(
    db: AsyncSession, event_id: int, user_id: str,
) -> bool:
    """Delete an event whose device is owned by user_id. False when absent or not owned."""
    async with db.begin():
        owned = await db.scalar(
            select(Event.id).where(
                Event.id == event_id,
                exists().where(
                    DeviceOwner.device_id == Event.device_id,
                    DeviceOwner.user_id == user_id,
                ),
            ),
        )
        if owned is None:
            return False
        await delete_event_children(db, [event_id])
        result = await db.execute(
            delete(Event)
            .where(Event.id == event_id)
            .execution_options(synchronize_session=False),
        )
    logger.info(
        f"Event {event_id} deleted", extra={"user_id": user_id, "resource_id": event_id},
    )
    return result.rowcount > 0


async def verify_event(
    db: AsyncSession, event_id: int, user_id: str,
) -> dict | None:
    """Mark an event verified by user_id; None when the event does not exist."""
    now = datetime.now(timezone.utc)
    async with db.begin():
        result = await db.execute(
            update(Event)
            .where(Event.id == event_id)
            .values(
                verified_by=user_id, verified_at=now,
                updated_by=user_id, updated_at=now,
            )
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            return None
    return await fetch_event_by_id(db, event_id)
