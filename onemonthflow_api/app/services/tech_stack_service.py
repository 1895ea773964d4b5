"""Service layer for the technology stack catalogue (``Tbl_TechStack``)."""

from __future__ import annotations

import logging
from typing import List, Optional

from onemonthflow_api.app.core.pagination import PageRequest
from onemonthflow_api.app.core.result import Result, service_call
from onemonthflow_api.app.queries import tech_stack as queries
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.tech_stack import TechStackRead, TechStackRequest
from onemonthflow_api.app.services.base import BaseService, is_blank, new_id


logger = logging.getLogger(__name__)


class TechStackService(BaseService):

    @service_call("Error creating tech stack")
    async def create_tech_stack(self, request: TechStackRequest) -> Result[TechStackRead]:
        if is_blank(request.tech_stack_code) or is_blank(request.tech_stack_name):
            return Result.validation_error("TechStackCode and TechStackName are required.")
        if self.sql.query_first_or_default(queries.GET_TECH_STACK_BY_CODE, {"TechStackCode": request.tech_stack_code}):
            return Result.validation_error(f"Tech stack with Code '{request.tech_stack_code}' already exists.")

        tech_stack_id = new_id()
        self.sql.execute(
            queries.INSERT_TECH_STACK,
            {
                "TechStackId": tech_stack_id,
                "TechStackCode": request.tech_stack_code,
                "TechStackShortCode": request.tech_stack_short_code,
                "TechStackName": request.tech_stack_name,
            },
        )
        logger.info("Created tech stack %s", request.tech_stack_code)
        row = self.sql.query_single(queries.GET_TECH_STACK_BY_ID, {"TechStackId": tech_stack_id})
        return Result.success(TechStackRead(**dict(row)), "Tech stack created successfully.")

    @service_call("Error retrieving tech stack")
    async def get_tech_stack_by_id(self, tech_stack_id: str) -> Result[TechStackRead]:
        if is_blank(tech_stack_id):
            return Result.validation_error("Tech stack ID is required.")
        row = self.sql.query_first_or_default(queries.GET_TECH_STACK_BY_ID, {"TechStackId": tech_stack_id})
        if row is None:
            return Result.not_found(f"Tech stack with ID {tech_stack_id} not found.")
        return Result.success(TechStackRead(**dict(row)))

    @service_call("Error retrieving tech stack")
    async def get_tech_stack_by_code(self, tech_stack_code: str) -> Result[TechStackRead]:
        if is_blank(tech_stack_code):
            return Result.validation_error("TechStackCode is required.")
        row = self.sql.query_first_or_default(queries.GET_TECH_STACK_BY_CODE, {"TechStackCode": tech_stack_code})
        if row is None:
            return Result.not_found(f"Tech stack with code {tech_stack_code} not found.")
        return Result.success(TechStackRead(**dict(row)))

    @service_call("Error retrieving tech stacks")
    async def list_tech_stacks(
        self,
        page: int = 1,
        page_size: int = 10,
        filter_column: Optional[str] = None,
        filter_value: Optional[str] = None,
        sort_column: Optional[str] = None,
        sort_descending: bool = False,
    ) -> Result[Page[TechStackRead]]:
        request = PageRequest(page, page_size, filter_column, filter_value, sort_column, sort_descending)
        return self._paged(queries.LIST_TECH_STACKS, TechStackRead, request)

    @service_call("Error retrieving tech stacks")
    async def get_all_tech_stacks(self) -> Result[List[TechStackRead]]:
        rows = self.sql.query(queries.GET_ALL_TECH_STACKS)
        return Result.success([TechStackRead(**dict(row)) for row in rows])

    @service_call("Error updating tech stack")
    async def update_tech_stack(self, tech_stack_id: str, request: TechStackRequest) -> Result[TechStackRead]:
        """Update name and short code; the code itself is immutable."""
        if is_blank(request.tech_stack_name):
            return Result.validation_error("TechStackName is required.")
        affected = self.sql.execute(
            queries.UPDATE_TECH_STACK,
            {
                "TechStackId": tech_stack_id,
                "TechStackShortCode": request.tech_stack_short_code,
                "TechStackName": request.tech_stack_name,
            },
        )
        if affected == 0:
            return Result.not_found(f"Tech stack with ID {tech_stack_id} not found.")
        logger.info("Updated tech stack %s", tech_stack_id)
        row = self.sql.query_single(queries.GET_TECH_STACK_BY_ID, {"TechStackId": tech_stack_id})
        return Result.success(TechStackRead(**dict(row)), "Tech stack updated successfully.")

    @service_call("Error deleting tech stack")
    async def delete_tech_stack(self, tech_stack_id: str) -> Result[bool]:
        existing = self.sql.query_first_or_default(queries.GET_TECH_STACK_BY_ID, {"TechStackId": tech_stack_id})
        if existing is None:
            return Result.not_found(f"Tech stack with ID {tech_stack_id} not found.")
        with self.sql.transaction() as tx:
            for statement in queries.DELETE_TECH_STACK_LINKS:
                tx.execute(statement, {"TechStackCode": existing["tech_stack_code"]})
            tx.execute(queries.DELETE_TECH_STACK, {"TechStackId": tech_stack_id})
        logger.info("Deleted tech stack %s", existing["tech_stack_code"])
        return Result.success(True, "Tech stack deleted successfully.")
