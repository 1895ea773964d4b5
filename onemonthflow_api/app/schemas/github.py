"""
Pydantic schemas for the GitHub import.

``GitHubRepository`` mirrors the subset of the REST API repository
object the importer needs; unknown keys are ignored.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class GitHubRepository(BaseModel):
    id: int
    name: str
    full_name: str
    description: Optional[str] = None
    html_url: Optional[str] = None
    clone_url: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    pushed_at: Optional[datetime] = None
    topics: List[str] = Field(default_factory=list)
    archived: bool = False
    private: bool = False


class ImportRequest(BaseModel):
    organization: Optional[str] = Field(None, description="Defaults to the configured organisation")


class ImportResult(BaseModel):
    organization: str
    total_repositories: int = 0
    imported: int = 0
    failed: int = 0
    skipped_existing: int = 0
    skipped_archived: int = 0
    imported_projects: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    stop_reason: Optional[str] = Field(
        None, description="Why fetching ended: exhausted, not_found, forbidden or error"
    )
