"""
Team membership endpoints for API v1.

Memberships are created and removed by team and user code; the
generated ``team_user_id`` addresses a single row for rating updates.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from onemonthflow_api.app.api.deps import get_sql, unwrap
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.team_user import TeamUserRead, TeamUserRequest, TeamWithUsers
from onemonthflow_api.app.schemas.user import UserRead
from onemonthflow_api.app.services.team_user_service import TeamUserService

router = APIRouter()


class RatingUpdate(BaseModel):
    user_rating: Optional[float] = Field(None, ge=0)


def get_service(sql: SqlService = Depends(get_sql)) -> TeamUserService:
    return TeamUserService(sql)


@router.get("/", response_model=Page[TeamUserRead])
async def list_team_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=1000),
    filter_column: Optional[str] = Query(None, description="TeamCode, TeamName, UserCode or UserName"),
    filter_value: Optional[str] = None,
    sort_column: Optional[str] = None,
    sort_order: str = Query("asc", pattern="^(asc|desc|ASC|DESC)$"),
    service: TeamUserService = Depends(get_service),
) -> Page[TeamUserRead]:
    return unwrap(
        await service.list_team_users(
            page, page_size, filter_column, filter_value, sort_column, sort_order.lower() == "desc"
        )
    )


@router.post("/", response_model=TeamUserRead, status_code=status.HTTP_201_CREATED)
async def add_team_user(body: TeamUserRequest, service: TeamUserService = Depends(get_service)) -> TeamUserRead:
    return unwrap(await service.add_team_user(body))


@router.get("/team/{team_code}", response_model=TeamWithUsers)
async def get_team_with_users(team_code: str, service: TeamUserService = Depends(get_service)) -> TeamWithUsers:
    return unwrap(await service.get_team_with_users(team_code))


@router.get("/team/{team_code}/members", response_model=List[TeamUserRead])
async def get_team_members(team_code: str, service: TeamUserService = Depends(get_service)) -> List[TeamUserRead]:
    return unwrap(await service.get_team_users_by_team(team_code))


@router.get("/team/{team_code}/users", response_model=List[UserRead])
async def get_team_user_records(team_code: str, service: TeamUserService = Depends(get_service)) -> List[UserRead]:
    return unwrap(await service.get_users_by_team_code(team_code))


@router.delete("/team/{team_code}/users/{user_code}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_user_from_team(
    team_code: str, user_code: str, service: TeamUserService = Depends(get_service)
) -> None:
    unwrap(await service.remove_user_from_team(team_code, user_code))
    return None


@router.patch("/{team_user_id}/rating", response_model=TeamUserRead)
async def update_rating(
    team_user_id: str, body: RatingUpdate, service: TeamUserService = Depends(get_service)
) -> TeamUserRead:
    return unwrap(await service.update_team_user_rating(team_user_id, body.user_rating))


@router.delete("/{team_user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_team_user(team_user_id: str, service: TeamUserService = Depends(get_service)) -> None:
    unwrap(await service.remove_team_user(team_user_id))
    return None
