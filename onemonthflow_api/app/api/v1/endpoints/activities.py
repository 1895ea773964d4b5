"""Project team activity endpoints for API v1."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from onemonthflow_api.app.api.deps import get_sql, unwrap
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.schemas.activity import ActivityRead, ActivityRequest
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.services.activity_service import ActivityService

router = APIRouter()


def get_service(sql: SqlService = Depends(get_sql)) -> ActivityService:
    return ActivityService(sql)


@router.get("/", response_model=Page[ActivityRead])
async def list_activities(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=1000),
    team_code: Optional[str] = None,
    project_code: Optional[str] = None,
    q: Optional[str] = Query(None, description="Substring of tasks, project name or team name"),
    service: ActivityService = Depends(get_service),
) -> Page[ActivityRead]:
    """Return activities newest first."""
    return unwrap(await service.list_activities(page, page_size, team_code, project_code, q))


@router.get("/{activity_id}", response_model=ActivityRead)
async def get_activity(activity_id: str, service: ActivityService = Depends(get_service)) -> ActivityRead:
    return unwrap(await service.get_activity_by_id(activity_id))


@router.post("/", response_model=ActivityRead, status_code=status.HTTP_201_CREATED)
async def add_activity(body: ActivityRequest, service: ActivityService = Depends(get_service)) -> ActivityRead:
    return unwrap(await service.add_activity(body))


@router.put("/{activity_id}", response_model=ActivityRead)
async def update_activity(
    activity_id: str, body: ActivityRequest, service: ActivityService = Depends(get_service)
) -> ActivityRead:
    return unwrap(await service.update_activity(activity_id, body))


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(activity_id: str, service: ActivityService = Depends(get_service)) -> None:
    unwrap(await service.delete_activity(activity_id))
    return None
