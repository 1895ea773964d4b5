"""
Service layer for project team activities (``Tbl_ProjectTeamActivity``).

Activities reference a project and a team by code, both of which must
exist when the activity is written.  The user and tech stack codes are
optional.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from onemonthflow_api.app.core.pagination import PageRequest
from onemonthflow_api.app.core.result import Result, service_call
from onemonthflow_api.app.queries import activity as queries
from onemonthflow_api.app.queries import project as project_queries
from onemonthflow_api.app.queries import team as team_queries
from onemonthflow_api.app.schemas.activity import ActivityRead, ActivityRequest
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.project import ProjectRead
from onemonthflow_api.app.services.base import BaseService, is_blank, new_id


logger = logging.getLogger(__name__)


class ActivityService(BaseService):

    def _check(self, request: ActivityRequest) -> Optional[Result]:
        if (
            is_blank(request.project_code)
            or is_blank(request.team_code)
            or request.activity_date is None
            or is_blank(request.tasks)
        ):
            return Result.validation_error("ProjectCode, TeamCode, ActivityDate and Tasks are required.")
        if self.sql.query_first_or_default(project_queries.GET_PROJECT_BY_CODE, {"ProjectCode": request.project_code}) is None:
            return Result.not_found(f"Project with Code '{request.project_code}' not found.")
        if self.sql.query_first_or_default(team_queries.GET_TEAM_BY_CODE, {"TeamCode": request.team_code}) is None:
            return Result.not_found(f"Team with code {request.team_code} not found.")
        return None

    @staticmethod
    def _params(activity_id: str, request: ActivityRequest) -> dict:
        return {
            "ProjectTeamActivityId": activity_id,
            "ProjectCode": request.project_code,
            "TeamCode": request.team_code,
            "UserCode": request.user_code or None,
            "TechStackCode": request.tech_stack_code or None,
            "ActivityDate": request.activity_date,
            "Tasks": request.tasks,
        }

    def _read(self, activity_id: str) -> ActivityRead:
        row = self.sql.query_single(queries.GET_ACTIVITY_BY_ID, {"ProjectTeamActivityId": activity_id})
        return ActivityRead(**dict(row))

    @service_call("Error adding activity")
    async def add_activity(self, request: ActivityRequest) -> Result[ActivityRead]:
        problem = self._check(request)
        if problem is not None:
            return problem
        activity_id = new_id()
        self.sql.execute(queries.INSERT_ACTIVITY, self._params(activity_id, request))
        logger.info("Recorded activity %s for %s/%s", activity_id, request.project_code, request.team_code)
        return Result.success(self._read(activity_id), "Activity added successfully.")

    @service_call("Error updating activity")
    async def update_activity(self, activity_id: str, request: ActivityRequest) -> Result[ActivityRead]:
        if is_blank(activity_id):
            return Result.validation_error("ProjectTeamActivityId is required for update.")
        problem = self._check(request)
        if problem is not None:
            return problem
        if self.sql.execute(queries.UPDATE_ACTIVITY, self._params(activity_id, request)) == 0:
            return Result.not_found(f"Activity with ID {activity_id} not found.")
        return Result.success(self._read(activity_id), "Activity updated successfully.")

    @service_call("Error fetching activity")
    async def get_activity_by_id(self, activity_id: str) -> Result[ActivityRead]:
        if is_blank(activity_id):
            return Result.validation_error("Activity ID is required.")
        row = self.sql.query_first_or_default(queries.GET_ACTIVITY_BY_ID, {"ProjectTeamActivityId": activity_id})
        if row is None:
            return Result.not_found(f"Activity with ID {activity_id} not found.")
        return Result.success(ActivityRead(**dict(row)))

    @service_call("Error retrieving activities")
    async def list_activities(
        self,
        page: int = 1,
        page_size: int = 10,
        team_code: Optional[str] = None,
        project_code: Optional[str] = None,
        filter_value: Optional[str] = None,
    ) -> Result[Page[ActivityRead]]:
        """Return activities newest first, optionally for one team and/or project."""
        conditions: List[str] = []
        params = {}
        if not is_blank(team_code):
            conditions.append("a.TeamCode = :TeamCode")
            params["TeamCode"] = team_code
        if not is_blank(project_code):
            conditions.append("a.ProjectCode = :ProjectCode")
            params["ProjectCode"] = project_code
        request = PageRequest(page=page, page_size=page_size, filter_value=filter_value, sort_descending=True)
        return self._paged(queries.LIST_ACTIVITIES, ActivityRead, request, conditions, params)

    @service_call("Error deleting activity")
    async def delete_activity(self, activity_id: str) -> Result[bool]:
        if is_blank(activity_id):
            return Result.validation_error("ProjectTeamActivityId is required.")
        if self.sql.execute(queries.DELETE_ACTIVITY, {"ProjectTeamActivityId": activity_id}) == 0:
            return Result.not_found(f"Activity with ID {activity_id} not found or already deleted.")
        return Result.success(True, "Activity deleted successfully.")

    @service_call("Error fetching projects for team")
    async def get_projects_by_team_code(self, team_code: str) -> Result[List[ProjectRead]]:
        if is_blank(team_code):
            return Result.validation_error("TeamCode is required to fetch projects.")
        rows = self.sql.query(queries.GET_PROJECTS_BY_TEAM, {"TeamCode": team_code})
        return Result.success([ProjectRead(**dict(row)) for row in rows])
