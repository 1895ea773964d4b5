"""
Service layer for teams.

A team's tech stacks live in ``Tbl_TeamTechStack`` and its members in
``Tbl_TeamUser``.  The team code is fixed at creation; updates change
the name and replace the tech stack links.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.core.pagination import PageRequest, like_pattern
from onemonthflow_api.app.core.result import Result, service_call
from onemonthflow_api.app.queries import team as queries
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.team import TeamDetail, TeamRead, TeamRequest
from onemonthflow_api.app.schemas.user import UserRead
from onemonthflow_api.app.services.base import BaseService, clean_codes, is_blank, new_id


logger = logging.getLogger(__name__)


class TeamService(BaseService):
    """CRUD for ``Tbl_Team``."""

    @staticmethod
    def _insert_tech_stacks(sql: SqlService, team_code: str, codes: List[str]) -> None:
        for code in clean_codes(codes):
            sql.execute(
                queries.INSERT_TEAM_TECH_STACK,
                {"TeamTechStackId": new_id(), "TeamCode": team_code, "TechStackCode": code},
            )

    def _detail(self, row) -> TeamDetail:
        code = {"TeamCode": row["team_code"]}
        stacks = self.sql.query(queries.GET_TECH_STACK_CODES_BY_TEAM, code)
        members = self.sql.query(queries.GET_TEAM_MEMBERS, code)
        return TeamDetail(
            **dict(row),
            tech_stack_codes=[stack["tech_stack_code"] for stack in stacks],
            users=[UserRead(**dict(member)) for member in members],
        )

    @service_call("Error creating team")
    async def create_team(self, request: TeamRequest) -> Result[TeamDetail]:
        if is_blank(request.team_code) or is_blank(request.team_name):
            return Result.validation_error("TeamCode and TeamName are required.")
        if self.sql.query_first_or_default(queries.GET_TEAM_BY_CODE, {"TeamCode": request.team_code}):
            return Result.validation_error(f"Team with Code '{request.team_code}' already exists.")

        team_id = new_id()
        with self.sql.transaction() as tx:
            tx.execute(
                queries.INSERT_TEAM,
                {"TeamId": team_id, "TeamCode": request.team_code, "TeamName": request.team_name},
            )
            self._insert_tech_stacks(tx, request.team_code, request.tech_stack_codes)
        logger.info("Created team %s", request.team_code)

        row = self.sql.query_single(queries.GET_TEAM_BY_ID, {"TeamId": team_id})
        return Result.success(self._detail(row), "Team created successfully.")

    @service_call("Error retrieving team")
    async def get_team_by_id(self, team_id: str) -> Result[TeamDetail]:
        if is_blank(team_id):
            return Result.validation_error("Team ID is required.")
        row = self.sql.query_first_or_default(queries.GET_TEAM_BY_ID, {"TeamId": team_id})
        if row is None:
            return Result.not_found(f"Team with ID {team_id} not found.")
        return Result.success(self._detail(row))

    @service_call("Error retrieving team")
    async def get_team_by_code(self, team_code: str) -> Result[TeamDetail]:
        if is_blank(team_code):
            return Result.validation_error("TeamCode is required.")
        row = self.sql.query_first_or_default(queries.GET_TEAM_BY_CODE, {"TeamCode": team_code})
        if row is None:
            return Result.not_found(f"Team with code {team_code} not found.")
        return Result.success(self._detail(row))

    @service_call("Error retrieving teams")
    async def list_teams(
        self,
        page: int = 1,
        page_size: int = 10,
        filter_column: Optional[str] = None,
        filter_value: Optional[str] = None,
        sort_column: Optional[str] = None,
        sort_descending: bool = False,
    ) -> Result[Page[TeamRead]]:
        request = PageRequest(page, page_size, filter_column, filter_value, sort_column, sort_descending)
        return self._paged(queries.LIST_TEAMS, TeamRead, request)

    @service_call("Error updating team")
    async def update_team(self, team_id: str, request: TeamRequest) -> Result[TeamDetail]:
        if is_blank(request.team_name):
            return Result.validation_error("TeamName is required.")
        existing = self.sql.query_first_or_default(queries.GET_TEAM_BY_ID, {"TeamId": team_id})
        if existing is None:
            return Result.not_found(f"Team with ID {team_id} not found.")

        team_code = existing["team_code"]
        with self.sql.transaction() as tx:
            tx.execute(queries.UPDATE_TEAM, {"TeamId": team_id, "TeamName": request.team_name})
            tx.execute(queries.DELETE_TEAM_TECH_STACKS, {"TeamCode": team_code})
            self._insert_tech_stacks(tx, team_code, request.tech_stack_codes)
        logger.info("Updated team %s", team_code)

        row = self.sql.query_single(queries.GET_TEAM_BY_ID, {"TeamId": team_id})
        return Result.success(self._detail(row), "Team updated successfully.")

    @service_call("Error deleting team")
    async def delete_team(self, team_id: str) -> Result[bool]:
        existing = self.sql.query_first_or_default(queries.GET_TEAM_BY_ID, {"TeamId": team_id})
        if existing is None:
            return Result.not_found(f"Team with ID {team_id} not found.")
        code = {"TeamCode": existing["team_code"]}
        with self.sql.transaction() as tx:
            tx.execute(queries.DELETE_TEAM_TECH_STACKS, code)
            tx.execute(queries.DELETE_TEAM_MEMBERS, code)
            tx.execute(queries.DELETE_TEAM_PROJECTS, code)
            tx.execute(queries.DELETE_TEAM, {"TeamId": team_id})
        logger.info("Deleted team %s", existing["team_code"])
        return Result.success(True, "Team deleted successfully.")

    @service_call("Error retrieving team tech stacks")
    async def get_tech_stack_codes_by_team_code(self, team_code: str) -> Result[List[str]]:
        if is_blank(team_code):
            return Result.validation_error("TeamCode is required.")
        rows = self.sql.query(queries.GET_TECH_STACK_CODES_BY_TEAM, {"TeamCode": team_code})
        return Result.success([row["tech_stack_code"] for row in rows])

    @service_call("Error searching teams")
    async def search_teams(self, query: Optional[str]) -> Result[List[TeamRead]]:
        rows = self.sql.query(queries.SEARCH_TEAMS, {"Query": like_pattern((query or "").strip())})
        return Result.success([TeamRead(**dict(row)) for row in rows])
