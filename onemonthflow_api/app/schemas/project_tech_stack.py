"""Pydantic schemas for ``Tbl_ProjectTechStack`` rows."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ProjectTechStackRequest(BaseModel):
    tech_stack_codes: List[str] = Field(default_factory=list)


class ProjectTechStackUpdate(BaseModel):
    old_tech_stack_code: Optional[str] = None
    new_tech_stack_code: Optional[str] = None


class ProjectTechStackRead(BaseModel):
    project_tech_stack_id: str
    project_code: str
    tech_stack_code: str
    tech_stack_name: Optional[str] = None
