"""Event Routes — listing, detail, verification and owner-scoped deletion.

Invariants:
    - deviceId takes precedence over a device name when both could apply
    - DELETE requires the caller to own the event's device; otherwise 404
    - PATCH verify is open to any authenticated caller
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from wildwatch.api.dependencies import get_current_user, get_list_params
from wildwatch.core.domain_types import AuthenticatedUser
from wildwatch.core.errors import ResourceNotFoundError
from wildwatch.core.pagination import ListParams, paginated
from wildwatch.infrastructure.database import get_db
from wildwatch.services.events import (
    EventFilters, delete_owned_event, fetch_event_by_id, list_events, verify_event,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["events"])


class EventQuery:
    """Event filters shared by every event listing route."""

    def __init__(
        self,
        has_media: bool | None = Query(None, alias="hasMedia"),
        start_date: datetime | None = Query(None, alias="startDate"),
        end_date: datetime | None = Query(None, alias="endDate"),
    ):
        self.has_media = has_media
        self.start_date = start_date
        self.end_date = end_date

    def filters(self, **scope) -> EventFilters:
        return EventFilters(
            has_media=self.has_media,
            start_date=self.start_date,
            end_date=self.end_date,
            **scope,
        )


@router.get("/events")
async def get_events(
    device_id: int | None = Query(None, alias="deviceId"),
    query: EventQuery = Depends(),
    params: ListParams = Depends(get_list_params),
    db: AsyncSession = Depends(get_db),
):
    records, total = await list_events(db, query.filters(device_id=device_id), params)
    return paginated(records, total, params)


@router.get("/events/user/{user_id}")
async def get_user_events(
    user_id: str,
    query: EventQuery = Depends(),
    params: ListParams = Depends(get_list_params),
    db: AsyncSession = Depends(get_db),
):
    """Events recorded by devices that `user_id` owns."""
    records, total = await list_events(db, query.filters(owner_id=user_id), params)
    return paginated(records, total, params)


@router.get("/device/{device_name}")
async def get_device_events(
    device_name: str,
    query: EventQuery = Depends(),
    params: ListParams = Depends(get_list_params),
    db: AsyncSession = Depends(get_db),
):
    records, total = await list_events(
        db, query.filters(device_name=device_name), params,
    )
    return paginated(records, total, params)


@router.get("/event/{event_id}")
async def get_event(event_id: int, db: AsyncSession = Depends(get_db)):
    event = await fetch_event_by_id(db, event_id)
    if event is None:
        raise ResourceNotFoundError("Event", event_id)
    return {"data": event}


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await delete_owned_event(db, event_id, user.sub):
        raise ResourceNotFoundError("Event", event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/events/{event_id}/verify")
async def patch_verify_event(
    event_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    event = await verify_event(db, event_id, user.sub)
    if event is None:
        raise ResourceNotFoundError("Event", event_id)
    return {"data": event}
