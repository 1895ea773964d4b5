"""
Service layer for projects.

A project is identified by a generated ``ProjectId`` and a unique
business ``ProjectCode``.  Teams are attached through
``Tbl_ProjectTeam`` rows keyed by the two codes; when a team is attached
together with a tech stack code, the stack is also linked to the team
(``Tbl_TeamTechStack``) unless that link already exists.

Writing a project and its team rows happens in one transaction.
Updates replace the team rows wholesale (delete, then insert again).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.core.pagination import PageRequest, like_pattern
from onemonthflow_api.app.core.result import Result, service_call
from onemonthflow_api.app.queries import project as queries
from onemonthflow_api.app.queries import team as team_queries
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.project import (
    ProjectDetail,
    ProjectRead,
    ProjectRequest,
    ProjectTeamRead,
    ProjectTeamRequest,
)
from onemonthflow_api.app.schemas.team import TeamRead
from onemonthflow_api.app.services.base import BaseService, is_blank, new_id


logger = logging.getLogger(__name__)


def validate_project_teams(teams: Sequence[ProjectTeamRequest]) -> Optional[str]:
    """Return an error message for an unusable team list, else ``None``."""
    if any(is_blank(team.team_code) for team in teams):
        return "TeamCode is required for every team."
    codes = [team.team_code for team in teams]
    duplicates = sorted({code for code in codes if codes.count(code) > 1})
    if duplicates:
        return f"Duplicate team(s) found in request: {', '.join(duplicates)}"
    return None


class ProjectService(BaseService):
    """CRUD and team assignment for ``Tbl_Project``."""

    @staticmethod
    def _validate(request: ProjectRequest) -> Optional[str]:
        if is_blank(request.project_code) or is_blank(request.project_name):
            return "ProjectCode and ProjectName are required."
        if request.start_date and request.end_date and request.end_date < request.start_date:
            return "EndDate cannot be earlier than StartDate."
        return validate_project_teams(request.teams)

    @staticmethod
    def _project_params(project_id: str, request: ProjectRequest) -> dict:
        return {
            "ProjectId": project_id,
            "ProjectCode": request.project_code,
            "ProjectName": request.project_name,
            "RepoUrl": request.repo_url,
            "StartDate": request.start_date,
            "EndDate": request.end_date,
            "ProjectDescription": request.project_description,
            "Status": request.status or "Active",
        }

    @staticmethod
    def _insert_teams(sql: SqlService, project_code: str, teams: Sequence[ProjectTeamRequest]) -> None:
        for team in teams:
            sql.execute(
                queries.INSERT_PROJECT_TEAM,
                {
                    "ProjectTeamId": new_id(),
                    "ProjectCode": project_code,
                    "TeamCode": team.team_code,
                    "ProjectTeamRating": team.project_team_rating,
                    "Duration": team.duration,
                },
            )
            if is_blank(team.tech_stack_code):
                continue
            link = {"TeamCode": team.team_code, "TechStackCode": team.tech_stack_code}
            if sql.query_first_or_default(queries.TEAM_TECH_STACK_EXISTS, link) is None:
                sql.execute(team_queries.INSERT_TEAM_TECH_STACK, {"TeamTechStackId": new_id(), **link})

    def _detail(self, row) -> ProjectDetail:
        teams = self.sql.query(queries.GET_PROJECT_TEAMS, {"ProjectCode": row["project_code"]})
        return ProjectDetail(**dict(row), teams=[ProjectTeamRead(**dict(team)) for team in teams])

    def _code_taken(self, project_code: str) -> bool:
        return self.sql.query_first_or_default(queries.GET_PROJECT_BY_CODE, {"ProjectCode": project_code}) is not None

    @service_call("Error creating project")
    async def create_project(self, request: ProjectRequest) -> Result[ProjectDetail]:
        """Insert a project together with its team assignments."""
        error = self._validate(request)
        if error:
            return Result.validation_error(error)
        if self._code_taken(request.project_code):
            return Result.validation_error(f"Project with Code '{request.project_code}' already exists.")

        project_id = new_id()
        with self.sql.transaction() as tx:
            tx.execute(queries.INSERT_PROJECT, self._project_params(project_id, request))
            self._insert_teams(tx, request.project_code, request.teams)
        logger.info("Created project %s with %d team(s)", request.project_code, len(request.teams))

        row = self.sql.query_single(queries.GET_PROJECT_BY_ID, {"ProjectId": project_id})
        return Result.success(self._detail(row), "Project and teams created successfully.")

    @service_call("Error retrieving project")
    async def get_project_by_id(self, project_id: str) -> Result[ProjectDetail]:
        if is_blank(project_id):
            return Result.validation_error("Project ID is required.")
        row = self.sql.query_first_or_default(queries.GET_PROJECT_BY_ID, {"ProjectId": project_id})
        if row is None:
            return Result.not_found(f"Project with ID {project_id} not found.")
        return Result.success(self._detail(row))

    @service_call("Error retrieving project")
    async def get_project_by_code(self, project_code: str) -> Result[ProjectDetail]:
        if is_blank(project_code):
            return Result.validation_error("ProjectCode is required.")
        row = self.sql.query_first_or_default(queries.GET_PROJECT_BY_CODE, {"ProjectCode": project_code})
        if row is None:
            return Result.not_found(f"Project with Code '{project_code}' not found.")
        return Result.success(self._detail(row))

    @service_call("Error retrieving projects")
    async def list_projects(
        self,
        page: int = 1,
        page_size: int = 10,
        filter_column: Optional[str] = None,
        filter_value: Optional[str] = None,
        sort_column: Optional[str] = None,
        sort_descending: bool = False,
    ) -> Result[Page[ProjectRead]]:
        """Return one page of projects.

        ``filter_column`` must be ProjectName, ProjectCode or Status.  A
        ``filter_value`` without a column searches all three.  Sorting
        accepts ProjectCode, ProjectName, Status, StartDate and EndDate
        and defaults to ProjectName.
        """
        request = PageRequest(page, page_size, filter_column, filter_value, sort_column, sort_descending)
        return self._paged(queries.LIST_PROJECTS, ProjectRead, request)

    @service_call("Error updating project")
    async def update_project(self, project_id: str, request: ProjectRequest) -> Result[ProjectDetail]:
        """Replace a project and its team assignments.

        When the code changes, tech stack links and activities are moved
        to the new code.
        """
        error = self._validate(request)
        if error:
            return Result.validation_error(error)
        existing = self.sql.query_first_or_default(queries.GET_PROJECT_BY_ID, {"ProjectId": project_id})
        if existing is None:
            return Result.not_found(f"Project with ID {project_id} not found.")
        old_code = existing["project_code"]
        if request.project_code != old_code and self._code_taken(request.project_code):
            return Result.validation_error(f"Project with Code '{request.project_code}' already exists.")

        with self.sql.transaction() as tx:
            tx.execute(queries.UPDATE_PROJECT, self._project_params(project_id, request))
            if request.project_code != old_code:
                rename = {"ProjectCode": old_code, "NewProjectCode": request.project_code}
                tx.execute(queries.RENAME_PROJECT_TECH_STACKS, rename)
                tx.execute(queries.RENAME_PROJECT_ACTIVITIES, rename)
            tx.execute(queries.DELETE_PROJECT_TEAMS, {"ProjectCode": old_code})
            self._insert_teams(tx, request.project_code, request.teams)
        logger.info("Updated project %s", project_id)

        row = self.sql.query_single(queries.GET_PROJECT_BY_ID, {"ProjectId": project_id})
        return Result.success(self._detail(row), "Project updated successfully.")

    @service_call("Error deleting project")
    async def delete_project(self, project_id: str) -> Result[bool]:
        existing = self.sql.query_first_or_default(queries.GET_PROJECT_BY_ID, {"ProjectId": project_id})
        if existing is None:
            return Result.not_found(f"Project with ID {project_id} not found.")
        code = {"ProjectCode": existing["project_code"]}
        with self.sql.transaction() as tx:
            tx.execute(queries.DELETE_PROJECT_TEAMS, code)
            tx.execute(queries.DELETE_PROJECT_TECH_STACKS, code)
            tx.execute(queries.DELETE_PROJECT_ACTIVITIES, code)
            tx.execute(queries.DELETE_PROJECT, {"ProjectId": project_id})
        logger.info("Deleted project %s (%s)", project_id, existing["project_code"])
        return Result.success(True, "Project deleted successfully.")

    @service_call("Error searching projects")
    async def search_projects(self, keyword: Optional[str]) -> Result[List[ProjectRead]]:
        """Case-insensitive substring search over code and name."""
        rows = self.sql.query(queries.SEARCH_PROJECTS, {"Keyword": like_pattern((keyword or "").strip())})
        return Result.success([ProjectRead(**dict(row)) for row in rows])

    @service_call("Error adding teams to project")
    async def add_teams_to_project(
        self, project_code: str, teams: Sequence[ProjectTeamRequest]
    ) -> Result[List[ProjectTeamRead]]:
        if is_blank(project_code):
            return Result.validation_error("ProjectCode is required.")
        if not teams:
            return Result.validation_error("At least one team is required.")
        error = validate_project_teams(teams)
        if error:
            return Result.validation_error(error)
        if not self._code_taken(project_code):
            return Result.not_found(f"Project with Code '{project_code}' not found.")

        assigned = [
            team.team_code
            for team in teams
            if self.sql.query_first_or_default(
                queries.PROJECT_TEAM_EXISTS, {"ProjectCode": project_code, "TeamCode": team.team_code}
            )
            is not None
        ]
        if assigned:
            return Result.validation_error(
                f"Team(s) already assigned to project: {', '.join(assigned)}"
            )

        with self.sql.transaction() as tx:
            self._insert_teams(tx, project_code, teams)
        rows = self.sql.query(queries.GET_PROJECT_TEAMS, {"ProjectCode": project_code})
        return Result.success(
            [ProjectTeamRead(**dict(row)) for row in rows], f"{len(teams)} team(s) added to project."
        )

    @service_call("Error retrieving project teams")
    async def get_teams_by_project(self, project_code: str) -> Result[List[TeamRead]]:
        if is_blank(project_code):
            return Result.validation_error("ProjectCode is required.")
        rows = self.sql.query(queries.GET_TEAMS_BY_PROJECT, {"ProjectCode": project_code})
        return Result.success([TeamRead(**dict(row)) for row in rows])

    @service_call("Error removing team from project")
    async def remove_team_from_project(self, project_code: str, team_code: str) -> Result[bool]:
        if is_blank(project_code) or is_blank(team_code):
            return Result.validation_error("ProjectCode and TeamCode are required.")
        affected = self.sql.execute(
            queries.DELETE_PROJECT_TEAM, {"ProjectCode": project_code, "TeamCode": team_code}
        )
        if affected == 0:
            return Result.not_found(f"Team '{team_code}' is not assigned to project '{project_code}'.")
        logger.info("Removed team %s from project %s", team_code, project_code)
        return Result.success(True, "Team removed from project.")

    @service_call("Error retrieving teams")
    async def get_all_teams(self) -> Result[List[TeamRead]]:
        rows = self.sql.query(queries.GET_ALL_TEAMS)
        return Result.success([TeamRead(**dict(row)) for row in rows])
