"""Endpoints for the tech stacks linked to a project (by project code)."""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from onemonthflow_api.app.api.deps import get_sql, unwrap
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.schemas.common import Message, Page
from onemonthflow_api.app.schemas.project_tech_stack import (
    ProjectTechStackRead,
    ProjectTechStackRequest,
    ProjectTechStackUpdate,
)
from onemonthflow_api.app.services.project_tech_stack_service import ProjectTechStackService

router = APIRouter()


def get_service(sql: SqlService = Depends(get_sql)) -> ProjectTechStackService:
    return ProjectTechStackService(sql)


@router.get("/", response_model=Page[ProjectTechStackRead])
async def list_project_tech_stacks(
    project_code: str,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=1000),
    service: ProjectTechStackService = Depends(get_service),
) -> Page[ProjectTechStackRead]:
    return unwrap(await service.get_paged_by_project(project_code, page, page_size))


@router.post("/", response_model=List[str], status_code=status.HTTP_201_CREATED)
async def assign_tech_stacks(
    project_code: str,
    body: ProjectTechStackRequest,
    service: ProjectTechStackService = Depends(get_service),
) -> List[str]:
    """Link tech stacks to the project and return the codes actually added."""
    return unwrap(await service.create_project_tech_stacks(project_code, body.tech_stack_codes))


@router.put("/", response_model=Message)
async def replace_tech_stack(
    project_code: str,
    body: ProjectTechStackUpdate,
    service: ProjectTechStackService = Depends(get_service),
) -> Message:
    result = await service.update_project_tech_stack(
        project_code, body.old_tech_stack_code, body.new_tech_stack_code
    )
    unwrap(result)
    return Message(message=result.message)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def remove_all_tech_stacks(project_code: str, service: ProjectTechStackService = Depends(get_service)) -> None:
    unwrap(await service.delete_by_project_code(project_code))
    return None


@router.delete("/{tech_stack_code}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_tech_stack(
    project_code: str, tech_stack_code: str, service: ProjectTechStackService = Depends(get_service)
) -> None:
    unwrap(await service.delete_project_tech_stack(project_code, tech_stack_code))
    return None
