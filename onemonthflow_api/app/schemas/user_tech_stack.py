"""Pydantic schemas for ``Tbl_UserTechStack`` rows."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserTechStackRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    user_code: Optional[str] = None
    tech_stack_code: Optional[str] = None
    proficiency_level: Optional[str] = None


class UserTechStackRead(BaseModel):
    user_tech_stack_id: str
    user_code: str
    tech_stack_code: str
    proficiency_level: Optional[str] = None
    user_name: Optional[str] = None
    github_account_name: Optional[str] = None
    tech_stack_name: Optional[str] = None
