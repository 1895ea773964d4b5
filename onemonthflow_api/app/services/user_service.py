"""
Service layer for users.

Users are returned together with the tech stacks they know
(``Tbl_UserTechStack`` joined with ``Tbl_TechStack``).  A user code is
generated when the caller does not supply one and never changes
afterwards.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional, Sequence

from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.core.pagination import PageRequest, like_pattern
from onemonthflow_api.app.core.result import Result, service_call
from onemonthflow_api.app.queries import user as queries
from onemonthflow_api.app.queries import user_tech_stack as link_queries
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.user import UserDetail, UserRead, UserRequest, UserTechStackInfo
from onemonthflow_api.app.services.base import BaseService, clean_codes, is_blank, new_id


logger = logging.getLogger(__name__)


def generate_user_code() -> str:
    return "USR" + uuid.uuid4().hex[:12].upper()


class UserService(BaseService):
    """CRUD for ``Tbl_User``."""

    @staticmethod
    def _insert_tech_stacks(sql: SqlService, user_code: str, codes: Sequence[str]) -> None:
        for code in clean_codes(codes):
            sql.execute(
                link_queries.INSERT_USER_TECH_STACK,
                {"UserTechStackId": new_id(), "UserCode": user_code, "TechStackCode": code, "ProficiencyLevel": None},
            )

    @staticmethod
    def _user_params(user_id: str, user_code: str, request: UserRequest) -> dict:
        return {
            "UserId": user_id,
            "UserCode": user_code,
            "UserName": request.user_name,
            "GitHubAccountName": request.github_account_name,
            "Nrc": request.nrc,
            "MobileNo": request.mobile_no,
        }

    def _detail(self, row) -> UserDetail:
        stacks = self.sql.query(queries.GET_USER_TECH_STACKS, {"UserCode": row["user_code"]})
        return UserDetail(**dict(row), tech_stacks=[UserTechStackInfo(**dict(stack)) for stack in stacks])

    @service_call("Error creating user")
    async def create_user(self, request: UserRequest) -> Result[UserDetail]:
        if is_blank(request.user_name):
            return Result.validation_error("UserName is required.")
        user_code = request.user_code if not is_blank(request.user_code) else generate_user_code()
        if self.sql.query_first_or_default(queries.GET_USER_BY_CODE, {"UserCode": user_code}):
            return Result.validation_error(f"User with Code '{user_code}' already exists.")

        user_id = new_id()
        with self.sql.transaction() as tx:
            tx.execute(queries.INSERT_USER, self._user_params(user_id, user_code, request))
            self._insert_tech_stacks(tx, user_code, request.tech_stack_codes)
        logger.info("Created user %s", user_code)

        row = self.sql.query_single(queries.GET_USER_BY_ID, {"UserId": user_id})
        return Result.success(self._detail(row), "User created successfully.")

    async def add_users(self, requests: Sequence[UserRequest]) -> Result[List[UserDetail]]:
        """Create several users, stopping at the first failure.

        Users created before the failing one are kept.
        """
        created: List[UserDetail] = []
        for request in requests:
            result = await self.create_user(request)
            if not result.is_success:
                return result
            created.append(result.data)
        return Result.success(created, f"{len(created)} user(s) created successfully.")

    @service_call("Error retrieving user")
    async def get_user_by_id(self, user_id: str) -> Result[UserDetail]:
        if is_blank(user_id):
            return Result.validation_error("User ID is required.")
        row = self.sql.query_first_or_default(queries.GET_USER_BY_ID, {"UserId": user_id})
        if row is None:
            return Result.not_found(f"User with ID {user_id} not found.")
        return Result.success(self._detail(row))

    @service_call("Error retrieving user")
    async def get_user_by_code(self, user_code: str) -> Result[UserDetail]:
        if is_blank(user_code):
            return Result.validation_error("UserCode is required.")
        row = self.sql.query_first_or_default(queries.GET_USER_BY_CODE, {"UserCode": user_code})
        if row is None:
            return Result.not_found(f"User with code {user_code} not found.")
        return Result.success(self._detail(row))

    @service_call("Error retrieving users")
    async def list_users(
        self,
        page: int = 1,
        page_size: int = 10,
        filter_column: Optional[str] = None,
        filter_value: Optional[str] = None,
        sort_column: Optional[str] = None,
        sort_descending: bool = False,
    ) -> Result[Page[UserDetail]]:
        request = PageRequest(page, page_size, filter_column, filter_value, sort_column, sort_descending)
        result = self._paged(queries.LIST_USERS, UserRead, request)
        if not result.is_success:
            return result
        page_of_users = result.data
        hydrated = [self._detail(user.model_dump()) for user in page_of_users.items]
        return Result.success(
            Page[UserDetail](
                items=hydrated,
                total_count=page_of_users.total_count,
                page=page_of_users.page,
                page_size=page_of_users.page_size,
            )
        )

    @service_call("Error updating user")
    async def update_user(self, user_id: str, request: UserRequest) -> Result[UserDetail]:
        if is_blank(request.user_name):
            return Result.validation_error("UserName is required.")
        existing = self.sql.query_first_or_default(queries.GET_USER_BY_ID, {"UserId": user_id})
        if existing is None:
            return Result.not_found(f"User with ID {user_id} not found.")

        user_code = existing["user_code"]
        with self.sql.transaction() as tx:
            tx.execute(queries.UPDATE_USER, self._user_params(user_id, user_code, request))
            tx.execute(link_queries.DELETE_USER_TECH_STACKS_BY_USER, {"UserCode": user_code})
            self._insert_tech_stacks(tx, user_code, request.tech_stack_codes)
        logger.info("Updated user %s", user_code)

        row = self.sql.query_single(queries.GET_USER_BY_ID, {"UserId": user_id})
        return Result.success(self._detail(row), "User updated successfully.")

    @service_call("Error deleting user")
    async def delete_user(self, user_id: str) -> Result[bool]:
        existing = self.sql.query_first_or_default(queries.GET_USER_BY_ID, {"UserId": user_id})
        if existing is None:
            return Result.not_found(f"User with ID {user_id} not found.")
        code = {"UserCode": existing["user_code"]}
        with self.sql.transaction() as tx:
            tx.execute(link_queries.DELETE_USER_TECH_STACKS_BY_USER, code)
            tx.execute(queries.DELETE_USER_MEMBERSHIPS, code)
            tx.execute(queries.DELETE_USER, {"UserId": user_id})
        logger.info("Deleted user %s", existing["user_code"])
        return Result.success(True, "User deleted successfully.")

    @service_call("Error searching users")
    async def search_users(self, query: Optional[str]) -> Result[List[UserRead]]:
        rows = self.sql.query(queries.SEARCH_USERS, {"Query": like_pattern((query or "").strip())})
        return Result.success([UserRead(**dict(row)) for row in rows])
