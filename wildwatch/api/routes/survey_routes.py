"""Survey Record Routes — one router factory for field observations and submissions.

Invariants:
    - Reads are public; create, delete and add-sighting require a bearer token
    - Records the caller does not own are reported as 404 on every write
"""

import logging
from typing import Callable
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from wildwatch.api.dependencies import get_current_user, get_list_params
from wildwatch.core.domain_types import AuthenticatedUser
from wildwatch.core.errors import ResourceNotFoundError
from wildwatch.core.pagination import ListParams, paginated
from wildwatch.infrastructure.database import get_db
from wildwatch.schemas.common import SightingCreate
from wildwatch.services.survey_records import (
    SurveyRecordKind, add_sighting, create_record, delete_owned_record,
    fetch_record, list_user_records,
)

logger = logging.getLogger(__name__)


def build_survey_router(
    prefix: str,
    kind: SurveyRecordKind,
    create_schema: type[BaseModel],
    to_values: Callable[[BaseModel], dict],
) -> APIRouter:
    """Routes for one survey record kind mounted under `prefix`."""
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create(
        body: create_schema,
        user: AuthenticatedUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        record = await create_record(db, kind, to_values(body), body.sightings, user)
        return {"data": record}

    @router.get("/user/{user_id}")
    async def list_for_user(
        user_id: str,
        params: ListParams = Depends(get_list_params),
        db: AsyncSession = Depends(get_db),
    ):
        records, total = await list_user_records(db, kind, user_id, params)
        return paginated(records, total, params)

    @router.get("/{record_id}")
    async def get_one(record_id: UUID, db: AsyncSession = Depends(get_db)):
        record = await fetch_record(db, kind, record_id)
        if record is None:
            raise ResourceNotFoundError(kind.label, record_id)
        return {"data": record}

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_one(
        record_id: UUID,
        user: AuthenticatedUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        if not await delete_owned_record(db, kind, record_id, user.sub):
            raise ResourceNotFoundError(kind.label, record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.post("/{record_id}/sightings", status_code=status.HTTP_201_CREATED)
    async def post_sighting(
        record_id: UUID,
        body: SightingCreate,
        user: AuthenticatedUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        sighting = await add_sighting(db, kind, record_id, user.sub, body)
        if sighting is None:
            raise ResourceNotFoundError(kind.label, record_id)
        return {"data": sighting}

    return router
