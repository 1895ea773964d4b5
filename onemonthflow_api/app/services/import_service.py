"""
Import the repositories of a GitHub organisation as projects.

Each non-archived repository becomes one project.  Its code is derived
from the repository name (``my-app`` becomes ``PROJ_MY_APP``); if a
project with that code already exists the repository is skipped.  The
primary language and a few well-known topics are mapped onto tech stack
codes, and the stacks that exist in ``Tbl_TechStack`` are linked to the
new project.

A failing repository is recorded in ``ImportResult.errors`` and the
import moves on.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from typing import Callable, List, Optional

from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.core.result import ErrorKind, Result, service_call
from onemonthflow_api.app.schemas.github import GitHubRepository, ImportResult
from onemonthflow_api.app.schemas.project import ProjectRequest
from onemonthflow_api.app.services.github_service import NOT_FOUND, GitHubService
from onemonthflow_api.app.services.project_service import ProjectService
from onemonthflow_api.app.services.project_tech_stack_service import ProjectTechStackService
from onemonthflow_api.app.services.tech_stack_service import TechStackService


logger = logging.getLogger(__name__)

MAX_PROJECT_CODE_LENGTH = 50

LANGUAGE_TECH_STACKS = {
    "c#": "TS001",
    "csharp": "TS001",
    "javascript": "TS002",
    "typescript": "TS002",
    "python": "TS003",
    "java": "TS004",
    "react": "TS005",
    "angular": "TS006",
    "sql": "TS007",
    "node.js": "TS008",
    "php": "TS009",
    "dart": "TS010",
    "go": "TS011",
    "vue": "TS012",
    "svelte": "TS013",
}

# Checked in order; a topic contributes at most one code.
TOPIC_TECH_STACKS = (
    ("react", "TS005"),
    ("angular", "TS006"),
    ("vue", "TS012"),
    ("svelte", "TS013"),
    ("node", "TS008"),
)


def generate_project_code(repository_name: str) -> str:
    code = repository_name.replace("-", "_").replace(".", "_").upper()
    if not code.startswith("PROJ_"):
        code = f"PROJ_{code}"
    return code[:MAX_PROJECT_CODE_LENGTH]


def format_project_name(repository_name: str) -> str:
    words = repository_name.replace("_", "-").split("-")
    return " ".join(word[:1].upper() + word[1:].lower() for word in words if word)


def determine_status(repository: GitHubRepository, now: dt.datetime) -> str:
    if repository.archived:
        return "Archived"
    last_push = repository.pushed_at or repository.updated_at
    if last_push is None:
        return "Completed"
    if last_push.tzinfo is None:
        last_push = last_push.replace(tzinfo=dt.timezone.utc)
    age = now - last_push
    if age < dt.timedelta(days=30):
        return "Active"
    if age < dt.timedelta(days=90):
        return "In Progress"
    return "Completed"


def map_tech_stacks(repository: GitHubRepository) -> List[str]:
    """Tech stack codes suggested by the language and topics, without duplicates."""
    codes: List[str] = []
    if repository.language:
        code = LANGUAGE_TECH_STACKS.get(repository.language.strip().lower())
        if code:
            codes.append(code)
    for topic in repository.topics:
        topic = topic.lower()
        for keyword, code in TOPIC_TECH_STACKS:
            if keyword in topic:
                if code not in codes:
                    codes.append(code)
                break
    return codes


def build_project_request(repository: GitHubRepository, now: dt.datetime) -> ProjectRequest:
    return ProjectRequest(
        project_code=generate_project_code(repository.name),
        project_name=format_project_name(repository.name) or repository.name,
        repo_url=repository.html_url,
        start_date=repository.created_at.date() if repository.created_at else None,
        end_date=repository.updated_at.date() if repository.updated_at else None,
        project_description=repository.description or f"Repository: {repository.full_name}",
        status=determine_status(repository, now),
    )


class GitHubImportService:
    """Turns an organisation's repositories into projects."""

    def __init__(
        self,
        sql: SqlService,
        client: GitHubService,
        clock: Optional[Callable[[], dt.datetime]] = None,
    ) -> None:
        self.client = client
        self.projects = ProjectService(sql)
        self.tech_stacks = TechStackService(sql)
        self.project_tech_stacks = ProjectTechStackService(sql)
        self._clock = clock or (lambda: dt.datetime.now(dt.timezone.utc))

    @service_call("Error importing repositories")
    async def import_organization(self, organization: str) -> Result[ImportResult]:
        if not organization or not organization.strip():
            return Result.validation_error("Organization name is required.")
        organization = organization.strip()

        # The client blocks on requests and on the delay between pages.
        fetch = await asyncio.to_thread(self.client.get_organization_repositories, organization)
        if fetch.stop_reason == NOT_FOUND and not fetch.repositories:
            return Result.not_found(fetch.error or f"Organization '{organization}' not found.")

        stacks = await self.tech_stacks.get_all_tech_stacks()
        if not stacks.is_success:
            return stacks
        known_codes = {stack.tech_stack_code for stack in stacks.data}

        result = ImportResult(
            organization=organization,
            total_repositories=len(fetch.repositories),
            stop_reason=fetch.stop_reason,
        )
        if fetch.error:
            result.errors.append(fetch.error)

        now = self._clock()
        for repository in fetch.repositories:
            if repository.archived:
                result.skipped_archived += 1
                continue

            code = generate_project_code(repository.name)
            existing = await self.projects.get_project_by_code(code)
            if existing.is_success:
                logger.info("Skipping %s: project %s already exists", repository.full_name, code)
                result.skipped_existing += 1
                continue
            if existing.error_kind != ErrorKind.NOT_FOUND:
                result.failed += 1
                result.errors.append(f"{repository.name}: {existing.message}")
                continue

            created = await self.projects.create_project(build_project_request(repository, now))
            if not created.is_success:
                result.failed += 1
                result.errors.append(f"{repository.name}: {created.message}")
                continue
            result.imported += 1
            result.imported_projects.append(code)

            codes = [stack for stack in map_tech_stacks(repository) if stack in known_codes]
            if codes:
                linked = await self.project_tech_stacks.create_project_tech_stacks(code, codes)
                if not linked.is_success:
                    result.errors.append(f"{repository.name}: {linked.message}")

        logger.info(
            "Import of %s finished: %d imported, %d failed, %d existing, %d archived",
            organization,
            result.imported,
            result.failed,
            result.skipped_existing,
            result.skipped_archived,
        )
        return Result.success(
            result, f"Imported {result.imported} of {result.total_repositories} repositories."
        )
