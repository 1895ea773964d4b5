"""Pydantic schemas for team membership rows (``Tbl_TeamUser``)."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .team import TeamRead


class TeamUserRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    team_code: Optional[str] = None
    user_code: Optional[str] = None
    user_rating: Optional[float] = Field(None, ge=0)


class TeamUserRead(BaseModel):
    """A membership row joined with team and user details."""

    team_user_id: str
    team_code: str
    user_code: str
    user_rating: Optional[float] = None
    team_name: Optional[str] = None
    user_name: Optional[str] = None
    github_account_name: Optional[str] = None


class TeamWithUsers(BaseModel):
    team: TeamRead
    members: List[TeamUserRead] = Field(default_factory=list)
