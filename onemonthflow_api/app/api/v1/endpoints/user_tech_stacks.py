"""Endpoints for the tech stacks known by each user."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from onemonthflow_api.app.api.deps import get_sql, unwrap
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.user_tech_stack import UserTechStackRead, UserTechStackRequest
from onemonthflow_api.app.services.user_tech_stack_service import UserTechStackService

router = APIRouter()


def get_service(sql: SqlService = Depends(get_sql)) -> UserTechStackService:
    return UserTechStackService(sql)


@router.get("/", response_model=Page[UserTechStackRead])
async def list_user_tech_stacks(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=1000),
    filter_column: Optional[str] = None,
    filter_value: Optional[str] = None,
    sort_column: Optional[str] = None,
    sort_order: str = Query("asc", pattern="^(asc|desc|ASC|DESC)$"),
    service: UserTechStackService = Depends(get_service),
) -> Page[UserTechStackRead]:
    return unwrap(
        await service.list_user_tech_stacks(
            page, page_size, filter_column, filter_value, sort_column, sort_order.lower() == "desc"
        )
    )


@router.get("/search", response_model=List[UserTechStackRead])
async def search_by_github_account(
    account: str = "", service: UserTechStackService = Depends(get_service)
) -> List[UserTechStackRead]:
    return unwrap(await service.search_by_github_account(account))


@router.get("/user/{user_code}", response_model=List[UserTechStackRead])
async def get_by_user(user_code: str, service: UserTechStackService = Depends(get_service)) -> List[UserTechStackRead]:
    return unwrap(await service.get_by_user(user_code))


@router.post("/", response_model=UserTechStackRead, status_code=status.HTTP_201_CREATED)
async def add_user_tech_stack(
    body: UserTechStackRequest, service: UserTechStackService = Depends(get_service)
) -> UserTechStackRead:
    return unwrap(await service.add_user_tech_stack(body))


@router.put("/{user_tech_stack_id}", response_model=UserTechStackRead)
async def update_user_tech_stack(
    user_tech_stack_id: str, body: UserTechStackRequest, service: UserTechStackService = Depends(get_service)
) -> UserTechStackRead:
    return unwrap(await service.update_user_tech_stack(user_tech_stack_id, body))


@router.delete("/{user_tech_stack_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_user_tech_stack(user_tech_stack_id: str, service: UserTechStackService = Depends(get_service)) -> None:
    unwrap(await service.remove_user_tech_stack(user_tech_stack_id))
    return None
