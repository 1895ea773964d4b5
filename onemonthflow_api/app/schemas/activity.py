"""
Pydantic schemas for project team activities.

An activity records what a team (optionally a single member, working
with a given tech stack) did on a project on a given day.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ActivityRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    project_code: Optional[str] = None
    team_code: Optional[str] = None
    user_code: Optional[str] = None
    tech_stack_code: Optional[str] = None
    activity_date: Optional[date] = None
    tasks: Optional[str] = None


class ActivityRead(BaseModel):
    project_team_activity_id: str
    project_code: str
    team_code: str
    user_code: Optional[str] = None
    tech_stack_code: Optional[str] = None
    activity_date: date
    tasks: str
    project_name: Optional[str] = None
    team_name: Optional[str] = None
    user_name: Optional[str] = None
