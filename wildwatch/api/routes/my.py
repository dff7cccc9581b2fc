"""Caller-scoped Routes — the authenticated user's identity and devices.

Invariants:
    - Every route requires a verified bearer token
    - get_current_user is declared before get_db: a 401 never opens a session
    - Deleting a device the caller did not create is 404, same as a missing one
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from wildwatch.api.dependencies import get_current_user, get_list_params
from wildwatch.core.domain_types import AuthenticatedUser
from wildwatch.core.errors import ResourceNotFoundError
from wildwatch.core.pagination import ListParams, paginated
from wildwatch.infrastructure.database import get_db
from wildwatch.schemas.device import DeviceCreate
from wildwatch.services.devices import (
    DeviceFilters, create_device, delete_owned_device, list_devices,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["my"])


@router.get("/me")
async def get_me(user: AuthenticatedUser = Depends(get_current_user)):
    return {
        "message": "Authenticated",
        "user": {"sub": user.sub, "email": user.email},
    }


@router.get("/my/devices")
async def get_my_devices(
    user: AuthenticatedUser = Depends(get_current_user),
    name: str | None = Query(None),
    type_id: int | None = Query(None, alias="typeId"),
    params: ListParams = Depends(get_list_params),
    db: AsyncSession = Depends(get_db),
):
    filters = DeviceFilters(owner_id=user.sub, name=name, type_id=type_id)
    records, total = await list_devices(db, filters, params)
    return paginated(records, total, params)


@router.post("/my/device", status_code=status.HTTP_201_CREATED)
async def post_my_device(
    body: DeviceCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a device owned by the caller."""
    device = await create_device(db, body, user)
    return {"data": device}


@router.delete("/my/devices/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_device(
    device_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await delete_owned_device(db, device_id, user.sub):
        raise ResourceNotFoundError("Device", device_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
