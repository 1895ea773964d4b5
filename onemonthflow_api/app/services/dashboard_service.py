"""Aggregated figures for the dashboard."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from onemonthflow_api.app.core.result import Result, service_call
from onemonthflow_api.app.queries import dashboard as queries
from onemonthflow_api.app.schemas.activity import ActivityRead
from onemonthflow_api.app.schemas.dashboard import DashboardSummary
from onemonthflow_api.app.schemas.project import ProjectRead
from onemonthflow_api.app.services.base import BaseService


class DashboardService(BaseService):

    @service_call("Error building dashboard")
    async def get_summary(
        self, days: int = 30, latest: int = 5, today: Optional[dt.date] = None
    ) -> Result[DashboardSummary]:
        """Counts plus projects ending within ``days`` and the ``latest`` activities."""
        if days < 0 or latest < 1:
            return Result.validation_error("days must be >= 0 and latest must be >= 1.")
        today = today or dt.date.today()
        ending = self.sql.query(
            queries.PROJECTS_ENDING_SOON, {"Today": today, "Until": today + dt.timedelta(days=days)}
        )
        activities = self.sql.query(queries.LATEST_ACTIVITIES, {"Count": latest})
        summary = DashboardSummary(
            total_projects=self.sql.scalar(queries.COUNT_PROJECTS),
            active_projects=self.sql.scalar(queries.COUNT_ACTIVE_PROJECTS),
            total_users=self.sql.scalar(queries.COUNT_USERS),
            total_teams=self.sql.scalar(queries.COUNT_TEAMS),
            projects_ending_soon=[ProjectRead(**dict(row)) for row in ending],
            latest_activities=[ActivityRead(**dict(row)) for row in activities],
        )
        return Result.success(summary)
