"""Pydantic schemas for teams."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .user import UserRead


class TeamRequest(BaseModel):
    """Schema for creating or updating a team.

    ``team_code`` is ignored on update; a team keeps its code for life.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    team_code: Optional[str] = None
    team_name: Optional[str] = None
    tech_stack_codes: List[str] = Field(default_factory=list)


class TeamRead(BaseModel):
    team_id: str
    team_code: str
    team_name: str


class TeamDetail(TeamRead):
    tech_stack_codes: List[str] = Field(default_factory=list)
    users: List[UserRead] = Field(default_factory=list)
