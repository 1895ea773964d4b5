"""
Service layer for team membership (``Tbl_TeamUser``).

Memberships are keyed by team code and user code.  Adding a user who
is already a member is not an error; the existing membership is
returned with an explanatory message.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from onemonthflow_api.app.core.pagination import PageRequest
from onemonthflow_api.app.core.result import Result, service_call
from onemonthflow_api.app.queries import team as team_queries
from onemonthflow_api.app.queries import team_user as queries
from onemonthflow_api.app.queries import user as user_queries
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.team import TeamRead
from onemonthflow_api.app.schemas.team_user import TeamUserRead, TeamUserRequest, TeamWithUsers
from onemonthflow_api.app.schemas.user import UserRead
from onemonthflow_api.app.services.base import BaseService, is_blank, new_id


logger = logging.getLogger(__name__)


class TeamUserService(BaseService):

    def _membership(self, team_user_id: str) -> TeamUserRead:
        row = self.sql.query_single(queries.GET_TEAM_USER_BY_ID, {"TeamUserId": team_user_id})
        return TeamUserRead(**dict(row))

    @service_call("Error adding user to team")
    async def add_team_user(self, request: TeamUserRequest) -> Result[TeamUserRead]:
        if is_blank(request.team_code) or is_blank(request.user_code):
            return Result.validation_error("TeamCode and UserCode are required.")
        if self.sql.query_first_or_default(team_queries.GET_TEAM_BY_CODE, {"TeamCode": request.team_code}) is None:
            return Result.not_found(f"Team with code {request.team_code} not found.")
        if self.sql.query_first_or_default(user_queries.GET_USER_BY_CODE, {"UserCode": request.user_code}) is None:
            return Result.not_found(f"User with code {request.user_code} not found.")

        codes = {"TeamCode": request.team_code, "UserCode": request.user_code}
        existing = self.sql.query_first_or_default(queries.GET_MEMBERSHIP, codes)
        if existing is not None:
            return Result.success(self._membership(existing["team_user_id"]), "User is already a member of this team.")

        team_user_id = new_id()
        self.sql.execute(
            queries.INSERT_TEAM_USER, {"TeamUserId": team_user_id, "UserRating": request.user_rating, **codes}
        )
        logger.info("Added user %s to team %s", request.user_code, request.team_code)
        return Result.success(self._membership(team_user_id), "User added to team successfully.")

    @service_call("Error retrieving team members")
    async def get_team_users_by_team(self, team_code: str) -> Result[List[TeamUserRead]]:
        if is_blank(team_code):
            return Result.validation_error("TeamCode is required.")
        rows = self.sql.query(queries.GET_TEAM_USERS_BY_TEAM, {"TeamCode": team_code})
        return Result.success([TeamUserRead(**dict(row)) for row in rows])

    @service_call("Error retrieving team members")
    async def get_users_by_team_code(self, team_code: str) -> Result[List[UserRead]]:
        if is_blank(team_code):
            return Result.validation_error("TeamCode is required.")
        rows = self.sql.query(team_queries.GET_TEAM_MEMBERS, {"TeamCode": team_code})
        return Result.success([UserRead(**dict(row)) for row in rows])

    @service_call("Error retrieving team members")
    async def list_team_users(
        self,
        page: int = 1,
        page_size: int = 10,
        filter_column: Optional[str] = None,
        filter_value: Optional[str] = None,
        sort_column: Optional[str] = None,
        sort_descending: bool = False,
    ) -> Result[Page[TeamUserRead]]:
        request = PageRequest(page, page_size, filter_column, filter_value, sort_column, sort_descending)
        return self._paged(queries.LIST_TEAM_USERS, TeamUserRead, request)

    @service_call("Error updating team member")
    async def update_team_user_rating(self, team_user_id: str, user_rating: Optional[float]) -> Result[TeamUserRead]:
        if user_rating is not None and user_rating < 0:
            return Result.validation_error("UserRating cannot be negative.")
        affected = self.sql.execute(
            queries.UPDATE_USER_RATING, {"TeamUserId": team_user_id, "UserRating": user_rating}
        )
        if affected == 0:
            return Result.not_found(f"Team member with ID {team_user_id} not found.")
        return Result.success(self._membership(team_user_id), "Rating updated successfully.")

    @service_call("Error removing team member")
    async def remove_team_user(self, team_user_id: str) -> Result[bool]:
        if is_blank(team_user_id):
            return Result.validation_error("TeamUserId is required.")
        if self.sql.execute(queries.DELETE_TEAM_USER, {"TeamUserId": team_user_id}) == 0:
            return Result.not_found(f"Team member with ID {team_user_id} not found.")
        logger.info("Removed team membership %s", team_user_id)
        return Result.success(True, "User removed from team.")

    @service_call("Error removing user from team")
    async def remove_user_from_team(self, team_code: str, user_code: str) -> Result[bool]:
        if is_blank(team_code) or is_blank(user_code):
            return Result.validation_error("TeamCode and UserCode are required.")
        codes = {"TeamCode": team_code, "UserCode": user_code}
        if self.sql.execute(queries.DELETE_USER_FROM_TEAM, codes) == 0:
            return Result.not_found(f"User {user_code} is not a member of team {team_code}.")
        logger.info("Removed user %s from team %s", user_code, team_code)
        return Result.success(True, "User removed from team.")

    @service_call("Error retrieving team")
    async def get_team_with_users(self, team_code: str) -> Result[TeamWithUsers]:
        if is_blank(team_code):
            return Result.validation_error("TeamCode is required.")
        team = self.sql.query_first_or_default(team_queries.GET_TEAM_BY_CODE, {"TeamCode": team_code})
        if team is None:
            return Result.not_found(f"Team with code {team_code} not found.")
        rows = self.sql.query(queries.GET_TEAM_USERS_BY_TEAM, {"TeamCode": team_code})
        return Result.success(
            TeamWithUsers(team=TeamRead(**dict(team)), members=[TeamUserRead(**dict(row)) for row in rows])
        )
