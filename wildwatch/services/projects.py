"""Project Queries — paginated listing, detail and full CRUD.

Invariants:
    - devices is always a JSON array of the project's linked devices,
      keyed like the top-level device resource (camelCase)
    - Updates write only the fields present in the request body
    - Project-device links are deleted before the project row
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from wildwatch.core.domain_types import AuthenticatedUser
from wildwatch.core.pagination import ListParams
from wildwatch.core.query_builder import build_list_query
from wildwatch.db.base import utcnow
from wildwatch.db.json_agg import child_array
from wildwatch.models.device import Device
from wildwatch.models.project import Project, ProjectDevice
from wildwatch.schemas.project import ProjectCreate, ProjectUpdate
from wildwatch.services.devices import device_fields
from wildwatch.services.query_runner import fetch_page

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "id": Project.id,
    "title": Project.title,
    "created_at": Project.created_at,
    "updated_at": Project.updated_at,
}
DEFAULT_SORT = "created_at"


def _project_columns() -> tuple:
    devices = child_array(
        device_fields(),
        ProjectDevice.project_id == Project.id,
        select_from=ProjectDevice.__table__.join(
            Device.__table__, ProjectDevice.device_id == Device.id,
        ),
    )
    return (
        Project.id,
        Project.title,
        Project.short_description,
        Project.long_description,
        Project.latitude,
        Project.longitude,
        Project.created_at,
        Project.updated_at,
        devices.label("devices"),
    )


def _location_values(location) -> dict:
    if location is None:
        return {"latitude": None, "longitude": None}
    return {"latitude": location.latitude, "longitude": location.longitude}


async def list_projects(
    db: AsyncSession, params: ListParams,
) -> tuple[list[dict], int]:
    query = build_list_query(
        _project_columns(),
        Project,
        [],
        params,
        SORT_COLUMNS,
        DEFAULT_SORT,
        tiebreaker=Project.id,
    )
    rows, total = await fetch_page(db, query)
    return [dict(r) for r in rows], total


async def fetch_project_by_id(db: AsyncSession, project_id: int) -> dict | None:
    stmt = select(*_project_columns()).where(Project.id == project_id)
    row = (await db.execute(stmt)).mappings().first()
    return dict(row) if row is not None else None


async def create_project(
    db: AsyncSession, data: ProjectCreate, user: AuthenticatedUser,
) -> dict:
    async with db.begin():
        project = Project(
            title=data.title,
            short_description=data.short_description,
            long_description=data.long_description,
            **_location_values(data.location),
        )
        db.add(project)
    logger.info(
        f"Project {project.id} created",
        extra={"user_id": user.sub, "resource_id": project.id},
    )
    return await fetch_project_by_id(db, project.id)


async def update_project(
    db: AsyncSession, project_id: int, data: ProjectUpdate,
) -> dict | None:
    """Apply a partial update; None when the project does not exist."""
    changes = data.model_dump(exclude_unset=True, exclude={"location"})
    if "location" in data.model_fields_set:
        changes.update(_location_values(data.location))
    async with db.begin():
        result = await db.execute(
            update(Project)
            .where(Project.id == project_id)
            .values(**changes, updated_at=utcnow())
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            return None
    return await fetch_project_by_id(db, project_id)


async def delete_project(db: AsyncSession, project_id: int) -> bool:
    async with db.begin():
        await db.execute(
            delete(ProjectDevice)
            .where(ProjectDevice.project_id == project_id)
            .execution_options(synchronize_session=False),
        )
        result = await db.execute(
            delete(Project)
            .where(Project.id == project_id)
            .execution_options(synchronize_session=False),
        )
    if result.rowcount:
        logger.info(f"Project {project_id} deleted", extra={"resource_id": project_id})
    return result.rowcount > 0
