"""Device Queries — listing, detail, owner-scoped creation and deletion.

Invariants:
    - Device + owner-link inserts commit together or not at all
    - A typeId naming no device type is rejected before anything is inserted
    - Only the creator (created_by == subject) can delete a device
    - Deleting a device removes its owner links, project links, events and event children
    - sensors is always a JSON array ([] for devices without a type or sensors)
"""

import logging
from dataclasses import dataclass
from uuid import uuid4

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from wildwatch.core.domain_types import AuthenticatedUser
from wildwatch.core.errors import InputValidationError
from wildwatch.core.pagination import ListParams
from wildwatch.core.query_builder import LIKE_ESCAPE, build_list_query, escape_like
from wildwatch.db.json_agg import child_array
from wildwatch.models.device import (
    Device, DeviceOwner, DeviceType, DeviceTypeSensor, Sensor, SensorType,
)
from wildwatch.models.project import ProjectDevice
from wildwatch.schemas.device import DeviceCreate
from wildwatch.services.events import purge_device_events
from wildwatch.services.query_runner import fetch_page

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "id": Device.id,
    "name": Device.name,
    "typeId": Device.type_id,
    "createdAt": Device.created_at,
    "updatedAt": Device.updated_at,
    "lastSeen": Device.last_seen,
}
DEFAULT_SORT = "createdAt"


@dataclass(frozen=True)
class DeviceFilters:
    owner_id: str | None = None
    name: str | None = None
    type_id: int | None = None


def device_conditions(filters: DeviceFilters) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if filters.owner_id is not None:
        conditions.append(
            exists().where(
                DeviceOwner.device_id == Device.id,
                DeviceOwner.user_id == filters.owner_id,
            ),
        )
    if filters.name:
        conditions.append(
            Device.name.ilike(f"%{escape_like(filters.name)}%", escape=LIKE_ESCAPE),
        )
    if filters.type_id is not None:
        conditions.append(Device.type_id == filters.type_id)
    return conditions


def device_fields() -> dict:
    """Public camelCase device keys → columns; shared with nested project devices."""
    return {
        "id": Device.id,
        "typeId": Device.type_id,
        "name": Device.name,
        "serial": Device.serial,
        "notes": Device.notes,
        "updatedBy": Device.updated_by,
        "createdAt": Device.created_at,
        "createdBy": Device.created_by,
        "updatedAt": Device.updated_at,
        "ip": Device.ip,
    }


def _device_columns() -> tuple:
    sensors = child_array(
        {
            "id": Sensor.id,
            "type": SensorType.name,
            "lastUpdated": Sensor.updated_at,
        },
        DeviceTypeSensor.device_type_id == Device.type_id,
        select_from=DeviceTypeSensor.__table__
        .join(Sensor.__table__, DeviceTypeSensor.sensor_id == Sensor.id)
        .outerjoin(SensorType.__table__, Sensor.type_id == SensorType.id),
    )
    return (
        *(column.label(key) for key, column in device_fields().items()),
        Device.last_seen.label("lastSeen"),
        sensors.label("sensors"),
    )


async def list_devices(
    db: AsyncSession, filters: DeviceFilters, params: ListParams,
) -> tuple[list[dict], int]:
    query = build_list_query(
        _device_columns(),
        Device,
        device_conditions(filters),
        params,
        SORT_COLUMNS,
        DEFAULT_SORT,
        tiebreaker=Device.id,
    )
    rows, total = await fetch_page(db, query)
    return [dict(r) for r in rows], total


async def fetch_device_by_id(db: AsyncSession, device_id: int) -> dict | None:
    stmt = select(*_device_columns()).where(Device.id == device_id)
    row = (await db.execute(stmt)).mappings().first()
    return dict(row) if row is not None else None


async def create_device(
    db: AsyncSession, data: DeviceCreate, user: AuthenticatedUser,
) -> dict:
    """Insert the device and its owner-link in one transaction."""
    async with db.begin():
        if data.type_id is not None and await db.get(DeviceType, data.type_id) is None:
            raise InputValidationError("Unknown device type", "typeId")
        device = Device(
            name=data.name,
            type_id=data.type_id,
            serial=data.serial or str(uuid4()),
            notes=data.notes,
            ip=data.ip,
            created_by=user.sub,
            updated_by=user.sub,
        )
        db.add(device)
        await db.flush()
        db.add(DeviceOwner(device_id=device.id, user_id=user.sub))
    logger.info(
        f"Device {device.id} created",
        extra={"user_id": user.sub, "resource_id": device.id},
    )
    return await fetch_device_by_id(db, device.id)


async def delete_owned_device(
    db: AsyncSession, device_id: int, user_id: str,
) -> bool:
    """Delete a device created by user_id. False when absent or not the creator."""
    async with db.begin():
        owned = await db.scalar(
            select(Device.id).where(
                Device.id == device_id, Device.created_by == user_id,
            ),
        )
        if owned is None:
            return False
        purged = await purge_device_events(db, [device_id])
        for stmt in (
            delete(DeviceOwner).where(DeviceOwner.device_id == device_id),
            delete(ProjectDevice).where(ProjectDevice.device_id == device_id),
        ):
            await db.execute(stmt.execution_options(synchronize_session=False))
        result = await db.execute(
            delete(Device)
            .where(Device.id == device_id)
            .execution_options(synchronize_session=False),
        )
    logger.info(
        f"Device {device_id} deleted with {purged} events",
        extra={"user_id": user_id, "resource_id": device_id},
    )
    return result.rowcount > 0
