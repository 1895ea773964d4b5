"""Pydantic schemas for users and the tech stacks they know."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRequest(BaseModel):
    """Schema for creating or updating a user.

    When ``user_code`` is blank on create a code is generated.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    user_code: Optional[str] = None
    user_name: Optional[str] = None
    github_account_name: Optional[str] = None
    nrc: Optional[str] = Field(None, description="National registration card number")
    mobile_no: Optional[str] = None
    tech_stack_codes: List[str] = Field(default_factory=list)


class UserRead(BaseModel):
    user_id: str
    user_code: str
    user_name: str
    github_account_name: Optional[str] = None
    nrc: Optional[str] = None
    mobile_no: Optional[str] = None


class UserTechStackInfo(BaseModel):
    tech_stack_code: str
    tech_stack_name: Optional[str] = None
    tech_stack_short_code: Optional[str] = None
    proficiency_level: Optional[str] = None


class UserDetail(UserRead):
    tech_stacks: List[UserTechStackInfo] = Field(default_factory=list)
