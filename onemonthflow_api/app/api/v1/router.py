"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.  When
a new domain is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import (
    activities,
    dashboard,
    imports,
    project_tech_stacks,
    projects,
    team_users,
    teams,
    tech_stacks,
    user_tech_stacks,
    users,
)

router = APIRouter()

router.include_router(projects.router, prefix="/projects", tags=["projects"])
# Nested under a project code; the code is a path parameter of every route.
router.include_router(
    project_tech_stacks.router,
    prefix="/projects/code/{project_code}/tech-stacks",
    tags=["project tech stacks"],
)
router.include_router(teams.router, prefix="/teams", tags=["teams"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(tech_stacks.router, prefix="/tech-stacks", tags=["tech stacks"])
router.include_router(team_users.router, prefix="/team-users", tags=["team users"])
router.include_router(user_tech_stacks.router, prefix="/user-tech-stacks", tags=["user tech stacks"])
router.include_router(activities.router, prefix="/activities", tags=["activities"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
router.include_router(imports.router, prefix="/import", tags=["import"])
