"""
Pydantic schemas for projects and their team assignments.

Request models leave the business fields optional on purpose: the
service validates them and answers with a ``ValidationError`` result,
so the CLI and the HTTP API report missing fields the same way.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProjectTeamRequest(BaseModel):
    """A team to attach to a project."""

    model_config = ConfigDict(str_strip_whitespace=True)

    team_code: Optional[str] = Field(None, description="Business code of the team")
    project_team_rating: Optional[float] = Field(None, description="Rating of the team on this project")
    duration: Optional[int] = Field(None, ge=0, description="Time the team spent on the project, in days")
    tech_stack_code: Optional[str] = Field(
        None, description="If set, the tech stack is also linked to the team"
    )


class ProjectRequest(BaseModel):
    """Schema for creating or replacing a project."""

    model_config = ConfigDict(str_strip_whitespace=True)

    project_code: Optional[str] = Field(None, description="Unique business code, e.g. PROJ_FLOW")
    project_name: Optional[str] = Field(None, description="Display name")
    repo_url: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    project_description: Optional[str] = None
    status: Optional[str] = Field("Active", description="Active, In Progress, Completed or Archived")
    teams: List[ProjectTeamRequest] = Field(default_factory=list)


class ProjectRead(BaseModel):
    project_id: str
    project_code: str
    project_name: str
    repo_url: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    project_description: Optional[str] = None
    status: str = "Active"


class ProjectTeamRead(BaseModel):
    project_team_id: str
    project_code: str
    team_code: str
    team_name: Optional[str] = None
    project_team_rating: Optional[float] = None
    duration: Optional[int] = None


class ProjectDetail(ProjectRead):
    """A project with its team assignments."""

    teams: List[ProjectTeamRead] = Field(default_factory=list)
