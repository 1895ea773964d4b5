"""Tech stack catalogue endpoints for API v1."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from onemonthflow_api.app.api.deps import get_sql, unwrap
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.tech_stack import TechStackRead, TechStackRequest
from onemonthflow_api.app.services.tech_stack_service import TechStackService

router = APIRouter()


def get_service(sql: SqlService = Depends(get_sql)) -> TechStackService:
    return TechStackService(sql)


@router.get("/", response_model=Page[TechStackRead])
async def list_tech_stacks(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=1000),
    filter_column: Optional[str] = None,
    filter_value: Optional[str] = None,
    sort_column: Optional[str] = None,
    sort_order: str = Query("asc", pattern="^(asc|desc|ASC|DESC)$"),
    service: TechStackService = Depends(get_service),
) -> Page[TechStackRead]:
    return unwrap(
        await service.list_tech_stacks(
            page, page_size, filter_column, filter_value, sort_column, sort_order.lower() == "desc"
        )
    )


@router.get("/all", response_model=List[TechStackRead])
async def all_tech_stacks(service: TechStackService = Depends(get_service)) -> List[TechStackRead]:
    return unwrap(await service.get_all_tech_stacks())


@router.get("/code/{tech_stack_code}", response_model=TechStackRead)
async def get_tech_stack_by_code(tech_stack_code: str, service: TechStackService = Depends(get_service)) -> TechStackRead:
    return unwrap(await service.get_tech_stack_by_code(tech_stack_code))


@router.get("/{tech_stack_id}", response_model=TechStackRead)
async def get_tech_stack(tech_stack_id: str, service: TechStackService = Depends(get_service)) -> TechStackRead:
    return unwrap(await service.get_tech_stack_by_id(tech_stack_id))


@router.post("/", response_model=TechStackRead, status_code=status.HTTP_201_CREATED)
async def create_tech_stack(body: TechStackRequest, service: TechStackService = Depends(get_service)) -> TechStackRead:
    return unwrap(await service.create_tech_stack(body))


@router.put("/{tech_stack_id}", response_model=TechStackRead)
async def update_tech_stack(
    tech_stack_id: str, body: TechStackRequest, service: TechStackService = Depends(get_service)
) -> TechStackRead:
    return unwrap(await service.update_tech_stack(tech_stack_id, body))


@router.delete("/{tech_stack_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tech_stack(tech_stack_id: str, service: TechStackService = Depends(get_service)) -> None:
    unwrap(await service.delete_tech_stack(tech_stack_id))
    return None
