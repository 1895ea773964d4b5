"""
Project endpoints for API v1.

Projects are addressed by their generated id for CRUD and by their
business code for team assignments.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from onemonthflow_api.app.api.deps import get_sql, unwrap
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.project import (
    ProjectDetail,
    ProjectRead,
    ProjectRequest,
    ProjectTeamRead,
    ProjectTeamRequest,
)
from onemonthflow_api.app.schemas.team import TeamRead
from onemonthflow_api.app.services.project_service import ProjectService

router = APIRouter()


def get_service(sql: SqlService = Depends(get_sql)) -> ProjectService:
    return ProjectService(sql)


@router.get("/", response_model=Page[ProjectRead])
async def list_projects(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=1000),
    filter_column: Optional[str] = Query(None, description="ProjectName, ProjectCode or Status"),
    filter_value: Optional[str] = None,
    sort_column: Optional[str] = Query(None, description="ProjectCode, ProjectName, Status, StartDate or EndDate"),
    sort_order: str = Query("asc", pattern="^(asc|desc|ASC|DESC)$"),
    service: ProjectService = Depends(get_service),
) -> Page[ProjectRead]:
    """Return a page of projects with the total number of matches."""
    return unwrap(
        await service.list_projects(
            page, page_size, filter_column, filter_value, sort_column, sort_order.lower() == "desc"
        )
    )


@router.get("/search", response_model=List[ProjectRead])
async def search_projects(keyword: str = "", service: ProjectService = Depends(get_service)) -> List[ProjectRead]:
    return unwrap(await service.search_projects(keyword))


@router.get("/code/{project_code}", response_model=ProjectDetail)
async def get_project_by_code(project_code: str, service: ProjectService = Depends(get_service)) -> ProjectDetail:
    return unwrap(await service.get_project_by_code(project_code))


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(project_id: str, service: ProjectService = Depends(get_service)) -> ProjectDetail:
    """Retrieve a project and its teams.  Returns 404 if it does not exist."""
    return unwrap(await service.get_project_by_id(project_id))


@router.post("/", response_model=ProjectDetail, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectRequest, service: ProjectService = Depends(get_service)
) -> ProjectDetail:
    return unwrap(await service.create_project(project_in))


@router.put("/{project_id}", response_model=ProjectDetail)
async def update_project(
    project_id: str, project_in: ProjectRequest, service: ProjectService = Depends(get_service)
) -> ProjectDetail:
    return unwrap(await service.update_project(project_id, project_in))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: str, service: ProjectService = Depends(get_service)) -> None:
    unwrap(await service.delete_project(project_id))
    return None


@router.get("/code/{project_code}/teams", response_model=List[TeamRead])
async def get_project_teams(project_code: str, service: ProjectService = Depends(get_service)) -> List[TeamRead]:
    return unwrap(await service.get_teams_by_project(project_code))


@router.post("/code/{project_code}/teams", response_model=List[ProjectTeamRead], status_code=status.HTTP_201_CREATED)
async def add_project_teams(
    project_code: str,
    teams: List[ProjectTeamRequest],
    service: ProjectService = Depends(get_service),
) -> List[ProjectTeamRead]:
    return unwrap(await service.add_teams_to_project(project_code, teams))


@router.delete("/code/{project_code}/teams/{team_code}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_project_team(
    project_code: str, team_code: str, service: ProjectService = Depends(get_service)
) -> None:
    unwrap(await service.remove_team_from_project(project_code, team_code))
    return None
