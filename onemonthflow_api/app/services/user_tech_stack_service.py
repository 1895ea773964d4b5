"""Service layer for the tech stacks a user knows (``Tbl_UserTechStack``)."""

from __future__ import annotations

import logging
from typing import List, Optional

from onemonthflow_api.app.core.pagination import PageRequest, like_pattern
from onemonthflow_api.app.core.result import Result, service_call
from onemonthflow_api.app.queries import tech_stack as tech_stack_queries
from onemonthflow_api.app.queries import user as user_queries
from onemonthflow_api.app.queries import user_tech_stack as queries
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.user_tech_stack import UserTechStackRead, UserTechStackRequest
from onemonthflow_api.app.services.base import BaseService, is_blank, new_id


logger = logging.getLogger(__name__)


class UserTechStackService(BaseService):

    def _read(self, user_tech_stack_id: str) -> UserTechStackRead:
        row = self.sql.query_single(queries.GET_USER_TECH_STACK_BY_ID, {"UserTechStackId": user_tech_stack_id})
        return UserTechStackRead(**dict(row))

    def _check_references(self, request: UserTechStackRequest) -> Optional[Result]:
        if self.sql.query_first_or_default(user_queries.GET_USER_BY_CODE, {"UserCode": request.user_code}) is None:
            return Result.not_found(f"User with code {request.user_code} not found.")
        tech_stack = self.sql.query_first_or_default(
            tech_stack_queries.GET_TECH_STACK_BY_CODE, {"TechStackCode": request.tech_stack_code}
        )
        if tech_stack is None:
            return Result.not_found(f"Tech stack with code {request.tech_stack_code} not found.")
        return None

    @service_call("Error adding user tech stack")
    async def add_user_tech_stack(self, request: UserTechStackRequest) -> Result[UserTechStackRead]:
        if is_blank(request.user_code) or is_blank(request.tech_stack_code):
            return Result.validation_error("UserCode and TechStackCode are required.")
        missing = self._check_references(request)
        if missing is not None:
            return missing
        codes = {"UserCode": request.user_code, "TechStackCode": request.tech_stack_code}
        if self.sql.query_first_or_default(queries.USER_TECH_STACK_EXISTS, codes) is not None:
            return Result.validation_error(
                f"User {request.user_code} already has tech stack {request.tech_stack_code}."
            )

        user_tech_stack_id = new_id()
        self.sql.execute(
            queries.INSERT_USER_TECH_STACK,
            {"UserTechStackId": user_tech_stack_id, "ProficiencyLevel": request.proficiency_level, **codes},
        )
        logger.info("Linked tech stack %s to user %s", request.tech_stack_code, request.user_code)
        return Result.success(self._read(user_tech_stack_id), "Tech stack added to user.")

    @service_call("Error retrieving user tech stacks")
    async def get_by_user(self, user_code: str) -> Result[List[UserTechStackRead]]:
        if is_blank(user_code):
            return Result.validation_error("UserCode is required.")
        rows = self.sql.query(queries.GET_BY_USER, {"UserCode": user_code})
        return Result.success([UserTechStackRead(**dict(row)) for row in rows])

    @service_call("Error retrieving user tech stacks")
    async def list_user_tech_stacks(
        self,
        page: int = 1,
        page_size: int = 10,
        filter_column: Optional[str] = None,
        filter_value: Optional[str] = None,
        sort_column: Optional[str] = None,
        sort_descending: bool = False,
    ) -> Result[Page[UserTechStackRead]]:
        request = PageRequest(page, page_size, filter_column, filter_value, sort_column, sort_descending)
        return self._paged(queries.LIST_USER_TECH_STACKS, UserTechStackRead, request)

    @service_call("Error updating user tech stack")
    async def update_user_tech_stack(
        self, user_tech_stack_id: str, request: UserTechStackRequest
    ) -> Result[UserTechStackRead]:
        if is_blank(request.tech_stack_code):
            return Result.validation_error("TechStackCode is required.")
        existing = self.sql.query_first_or_default(
            queries.GET_USER_TECH_STACK_BY_ID, {"UserTechStackId": user_tech_stack_id}
        )
        if existing is None:
            return Result.not_found(f"User tech stack with ID {user_tech_stack_id} not found.")
        if self.sql.query_first_or_default(
            tech_stack_queries.GET_TECH_STACK_BY_CODE, {"TechStackCode": request.tech_stack_code}
        ) is None:
            return Result.not_found(f"Tech stack with code {request.tech_stack_code} not found.")
        taken = self.sql.query_first_or_default(
            queries.USER_TECH_STACK_EXISTS,
            {"UserCode": existing["user_code"], "TechStackCode": request.tech_stack_code},
        )
        if taken is not None and taken["user_tech_stack_id"] != user_tech_stack_id:
            return Result.validation_error(
                f"User {existing['user_code']} already has tech stack {request.tech_stack_code}."
            )

        self.sql.execute(
            queries.UPDATE_USER_TECH_STACK,
            {
                "UserTechStackId": user_tech_stack_id,
                "TechStackCode": request.tech_stack_code,
                "ProficiencyLevel": request.proficiency_level,
            },
        )
        return Result.success(self._read(user_tech_stack_id), "User tech stack updated successfully.")

    @service_call("Error removing user tech stack")
    async def remove_user_tech_stack(self, user_tech_stack_id: str) -> Result[bool]:
        if is_blank(user_tech_stack_id):
            return Result.validation_error("UserTechStackId is required.")
        if self.sql.execute(queries.DELETE_USER_TECH_STACK, {"UserTechStackId": user_tech_stack_id}) == 0:
            return Result.not_found(f"User tech stack with ID {user_tech_stack_id} not found.")
        return Result.success(True, "Tech stack removed from user.")

    @service_call("Error searching user tech stacks")
    async def search_by_github_account(self, account: Optional[str]) -> Result[List[UserTechStackRead]]:
        rows = self.sql.query(queries.SEARCH_BY_GITHUB_ACCOUNT, {"Account": like_pattern((account or "").strip())})
        return Result.success([UserTechStackRead(**dict(row)) for row in rows])
