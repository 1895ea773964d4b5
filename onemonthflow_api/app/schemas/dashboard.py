"""Pydantic schema for the dashboard summary."""

from typing import List

from pydantic import BaseModel, Field

from .activity import ActivityRead
from .project import ProjectRead


class DashboardSummary(BaseModel):
    total_projects: int = 0
    active_projects: int = 0
    total_users: int = 0
    total_teams: int = 0
    projects_ending_soon: List[ProjectRead] = Field(default_factory=list)
    latest_activities: List[ActivityRead] = Field(default_factory=list)
