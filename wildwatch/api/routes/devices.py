"""Device Routes — public device listing and detail.

Invariants:
    - Lists are paginated and filtered with the same predicate as their count
    - Missing devices are 404 with the {error, details} envelope
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from wildwatch.api.dependencies import get_list_params
from wildwatch.core.errors import ResourceNotFoundError
from wildwatch.core.pagination import ListParams, paginated
from wildwatch.infrastructure.database import get_db
from wildwatch.services.devices import (
    DeviceFilters, fetch_device_by_id, list_devices,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["devices"])


@router.get("/devices")
async def get_devices(
    name: str | None = Query(None),
    type_id: int | None = Query(None, alias="typeId"),
    params: ListParams = Depends(get_list_params),
    db: AsyncSession = Depends(get_db),
):
    filters = DeviceFilters(name=name, type_id=type_id)
    records, total = await list_devices(db, filters, params)
    return paginated(records, total, params)


@router.get("/devices/user/{user_id}")
async def get_user_devices(
    user_id: str,
    name: str | None = Query(None),
    type_id: int | None = Query(None, alias="typeId"),
    params: ListParams = Depends(get_list_params),
    db: AsyncSession = Depends(get_db),
):
    """Devices owned by `user_id`."""
    filters = DeviceFilters(owner_id=user_id, name=name, type_id=type_id)
    records, total = await list_devices(db, filters, params)
    return paginated(records, total, params)


@router.get("/devices/{device_id}")
async def get_device(device_id: int, db: AsyncSession = Depends(get_db)):
    device = await fetch_device_by_id(db, device_id)
    if device is None:
        raise ResourceNotFoundError("Device", device_id)
    return {"data": device}
