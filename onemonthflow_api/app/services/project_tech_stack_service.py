"""Service layer for the tech stacks used by a project (``Tbl_ProjectTechStack``)."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from onemonthflow_api.app.core.pagination import PageRequest
from onemonthflow_api.app.core.result import Result, service_call
from onemonthflow_api.app.queries import project_tech_stack as queries
from onemonthflow_api.app.schemas.common import Page
from onemonthflow_api.app.schemas.project_tech_stack import ProjectTechStackRead
from onemonthflow_api.app.services.base import BaseService, clean_codes, is_blank, new_id


logger = logging.getLogger(__name__)


class ProjectTechStackService(BaseService):

    @service_call("Error assigning tech stacks")
    async def create_project_tech_stacks(
        self, project_code: str, tech_stack_codes: Sequence[Optional[str]]
    ) -> Result[List[str]]:
        """Link tech stacks to a project, skipping links that already exist.

        The payload lists the codes that were actually inserted.
        """
        if is_blank(project_code):
            return Result.validation_error("ProjectCode is required.")
        codes = clean_codes(tech_stack_codes)
        if not codes:
            return Result.validation_error("At least one tech stack code is required.")

        existing = {
            row["tech_stack_code"]
            for row in self.sql.query(queries.GET_CODES_BY_PROJECT, {"ProjectCode": project_code})
        }
        new_codes = [code for code in codes if code not in existing]
        if not new_codes:
            return Result.validation_error("All provided tech stacks already exist.")

        with self.sql.transaction() as tx:
            for code in new_codes:
                tx.execute(
                    queries.INSERT_PROJECT_TECH_STACK,
                    {"ProjectTechStackId": new_id(), "ProjectCode": project_code, "TechStackCode": code},
                )
        logger.info("Assigned %d tech stack(s) to project %s", len(new_codes), project_code)
        return Result.success(new_codes, f"{len(new_codes)} tech stack(s) assigned.")

    @service_call("Error retrieving project tech stacks")
    async def get_paged_by_project(
        self, project_code: str, page: int = 1, page_size: int = 10
    ) -> Result[Page[ProjectTechStackRead]]:
        if is_blank(project_code):
            return Result.validation_error("ProjectCode is required.")
        return self._paged(
            queries.LIST_BY_PROJECT,
            ProjectTechStackRead,
            PageRequest(page=page, page_size=page_size),
            params={"ProjectCode": project_code},
        )

    @service_call("Error updating project tech stack")
    async def update_project_tech_stack(
        self, project_code: str, old_tech_stack_code: str, new_tech_stack_code: str
    ) -> Result[bool]:
        if is_blank(project_code) or is_blank(old_tech_stack_code) or is_blank(new_tech_stack_code):
            return Result.validation_error("ProjectCode, old and new TechStackCode are required.")
        linked = {
            row["tech_stack_code"]
            for row in self.sql.query(queries.GET_CODES_BY_PROJECT, {"ProjectCode": project_code})
        }
        if new_tech_stack_code != old_tech_stack_code and new_tech_stack_code in linked:
            return Result.validation_error(
                f"Tech stack {new_tech_stack_code} is already linked to project {project_code}."
            )
        affected = self.sql.execute(
            queries.UPDATE_PROJECT_TECH_STACK,
            {
                "ProjectCode": project_code,
                "OldTechStackCode": old_tech_stack_code,
                "NewTechStackCode": new_tech_stack_code,
            },
        )
        if affected == 0:
            return Result.not_found(f"Tech stack {old_tech_stack_code} is not linked to project {project_code}.")
        return Result.success(True, "Tech stack updated.")

    @service_call("Error deleting project tech stacks")
    async def delete_by_project_code(self, project_code: str) -> Result[int]:
        if is_blank(project_code):
            return Result.validation_error("ProjectCode is required.")
        affected = self.sql.execute(queries.DELETE_BY_PROJECT, {"ProjectCode": project_code})
        if affected == 0:
            return Result.not_found(f"No tech stacks found for project {project_code}.")
        logger.info("Removed %d tech stack(s) from project %s", affected, project_code)
        return Result.success(affected, f"{affected} tech stack(s) removed.")

    @service_call("Error deleting project tech stack")
    async def delete_project_tech_stack(self, project_code: str, tech_stack_code: str) -> Result[bool]:
        if is_blank(project_code) or is_blank(tech_stack_code):
            return Result.validation_error("ProjectCode and TechStackCode are required.")
        affected = self.sql.execute(
            queries.DELETE_ONE, {"ProjectCode": project_code, "TechStackCode": tech_stack_code}
        )
        if affected == 0:
            return Result.not_found(f"Tech stack {tech_stack_code} is not linked to project {project_code}.")
        return Result.success(True, "Tech stack removed.")
