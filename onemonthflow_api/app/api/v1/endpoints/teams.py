"""Team endpoints for API v1."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from onemonthflow_api.app.api.deps import get_sql, unwrap
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.project import ProjectRead
from onemonthflow_api.app.schemas.team import TeamDetail, TeamRead, TeamRequest
from onemonthflow_api.app.services.activity_service import ActivityService
from onemonthflow_api.app.services.project_service import ProjectService
from onemonthflow_api.app.services.team_service import TeamService

router = APIRouter()


def get_service(sql: SqlService = Depends(get_sql)) -> TeamService:
    return TeamService(sql)


@router.get("/", response_model=Page[TeamRead])
async def list_teams(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=1000),
    filter_column: Optional[str] = Query(None, description="TeamName or TeamCode"),
    filter_value: Optional[str] = None,
    sort_column: Optional[str] = None,
    sort_order: str = Query("asc", pattern="^(asc|desc|ASC|DESC)$"),
    service: TeamService = Depends(get_service),
) -> Page[TeamRead]:
    return unwrap(
        await service.list_teams(page, page_size, filter_column, filter_value, sort_column, sort_order.lower() == "desc")
    )


@router.get("/all", response_model=List[TeamRead])
async def all_teams(sql: SqlService = Depends(get_sql)) -> List[TeamRead]:
    return unwrap(await ProjectService(sql).get_all_teams())


@router.get("/search", response_model=List[TeamRead])
async def search_teams(query: str = "", service: TeamService = Depends(get_service)) -> List[TeamRead]:
    return unwrap(await service.search_teams(query))


@router.get("/code/{team_code}", response_model=TeamDetail)
async def get_team_by_code(team_code: str, service: TeamService = Depends(get_service)) -> TeamDetail:
    return unwrap(await service.get_team_by_code(team_code))


@router.get("/code/{team_code}/tech-stacks", response_model=List[str])
async def get_team_tech_stacks(team_code: str, service: TeamService = Depends(get_service)) -> List[str]:
    return unwrap(await service.get_tech_stack_codes_by_team_code(team_code))


@router.get("/code/{team_code}/projects", response_model=List[ProjectRead])
async def get_team_projects(team_code: str, sql: SqlService = Depends(get_sql)) -> List[ProjectRead]:
    return unwrap(await ActivityService(sql).get_projects_by_team_code(team_code))


@router.get("/{team_id}", response_model=TeamDetail)
async def get_team(team_id: str, service: TeamService = Depends(get_service)) -> TeamDetail:
    return unwrap(await service.get_team_by_id(team_id))


@router.post("/", response_model=TeamDetail, status_code=status.HTTP_201_CREATED)
async def create_team(team_in: TeamRequest, service: TeamService = Depends(get_service)) -> TeamDetail:
    return unwrap(await service.create_team(team_in))


@router.put("/{team_id}", response_model=TeamDetail)
async def update_team(team_id: str, team_in: TeamRequest, service: TeamService = Depends(get_service)) -> TeamDetail:
    """Rename a team and replace its tech stacks.  The team code cannot change."""
    return unwrap(await service.update_team(team_id, team_in))


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team(team_id: str, service: TeamService = Depends(get_service)) -> None:
    unwrap(await service.delete_team(team_id))
    return None
