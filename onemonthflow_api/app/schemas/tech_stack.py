"""Pydantic schemas for technology stacks."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class TechStackRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    tech_stack_code: Optional[str] = None
    tech_stack_short_code: Optional[str] = None
    tech_stack_name: Optional[str] = None


class TechStackRead(BaseModel):
    tech_stack_id: str
    tech_stack_code: str
    tech_stack_short_code: Optional[str] = None
    tech_stack_name: str
