"""User endpoints for API v1."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from onemonthflow_api.app.api.deps import get_sql, unwrap
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.user import UserDetail, UserRead, UserRequest
from onemonthflow_api.app.services.user_service import UserService

router = APIRouter()


def get_service(sql: SqlService = Depends(get_sql)) -> UserService:
    return UserService(sql)


@router.get("/", response_model=Page[UserDetail])
async def list_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=1000),
    filter_column: Optional[str] = Query(None, description="UserName, UserCode or GitHubAccountName"),
    filter_value: Optional[str] = None,
    sort_column: Optional[str] = None,
    sort_order: str = Query("asc", pattern="^(asc|desc|ASC|DESC)$"),
    service: UserService = Depends(get_service),
) -> Page[UserDetail]:
    return unwrap(
        await service.list_users(page, page_size, filter_column, filter_value, sort_column, sort_order.lower() == "desc")
    )


@router.get("/search", response_model=List[UserRead])
async def search_users(query: str = "", service: UserService = Depends(get_service)) -> List[UserRead]:
    return unwrap(await service.search_users(query))


@router.get("/code/{user_code}", response_model=UserDetail)
async def get_user_by_code(user_code: str, service: UserService = Depends(get_service)) -> UserDetail:
    return unwrap(await service.get_user_by_code(user_code))


@router.get("/{user_id}", response_model=UserDetail)
async def get_user(user_id: str, service: UserService = Depends(get_service)) -> UserDetail:
    return unwrap(await service.get_user_by_id(user_id))


@router.post("/", response_model=UserDetail, status_code=status.HTTP_201_CREATED)
async def create_user(user_in: UserRequest, service: UserService = Depends(get_service)) -> UserDetail:
    """Create a user.  A user code is generated when none is supplied."""
    return unwrap(await service.create_user(user_in))


@router.post("/batch", response_model=List[UserDetail], status_code=status.HTTP_201_CREATED)
async def create_users(users_in: List[UserRequest], service: UserService = Depends(get_service)) -> List[UserDetail]:
    return unwrap(await service.add_users(users_in))


@router.put("/{user_id}", response_model=UserDetail)
async def update_user(user_id: str, user_in: UserRequest, service: UserService = Depends(get_service)) -> UserDetail:
    return unwrap(await service.update_user(user_id, user_in))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, service: UserService = Depends(get_service)) -> None:
    unwrap(await service.delete_user(user_id))
    return None
