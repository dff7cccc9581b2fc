"""Project Routes — public reads, authenticated writes.

Invariants:
    - PUT is a partial update: absent body fields keep their stored value
    - Writes require a verified bearer token
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from wildwatch.api.dependencies import get_current_user, get_list_params
from wildwatch.core.domain_types import AuthenticatedUser
from wildwatch.core.errors import ResourceNotFoundError
from wildwatch.core.pagination import ListParams, paginated
from wildwatch.infrastructure.database import get_db
from wildwatch.schemas.project import ProjectCreate, ProjectUpdate
from wildwatch.services.projects import (
    create_project, delete_project, fetch_project_by_id, list_projects,
    update_project,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("")
async def get_projects(
    params: ListParams = Depends(get_list_params),
    db: AsyncSession = Depends(get_db),
):
    records, total = await list_projects(db, params)
    return paginated(records, total, params)


@router.get("/{project_id}")
async def get_project(project_id: int, db: AsyncSession = Depends(get_db)):
    project = await fetch_project_by_id(db, project_id)
    if project is None:
        raise ResourceNotFoundError("Project", project_id)
    return {"data": project}


@router.post("", status_code=status.HTTP_201_CREATED)
async def post_project(
    body: ProjectCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    project = await create_project(db, body, user)
    return {"data": project}


@router.put("/{project_id}")
async def put_project(
    project_id: int,
    body: ProjectUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    project = await update_project(db, project_id, body)
    if project is None:
        raise ResourceNotFoundError("Project", project_id)
    return {"data": project}


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project_route(
    project_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await delete_project(db, project_id):
        raise ResourceNotFoundError("Project", project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
