import asyncio

import pytest
from fastapi.testclient import TestClient

from onemonthflow_api.app.core.config import Settings
from onemonthflow_api.app.core.db import SqlService, init_db
from onemonthflow_api.app.main import create_app
from onemonthflow_api.app.schemas.project import ProjectRequest, ProjectTeamRequest
from onemonthflow_api.app.schemas.team import TeamRequest
from onemonthflow_api.app.schemas.user import UserRequest
from onemonthflow_api.app.services.project_service import ProjectService
from onemonthflow_api.app.services.team_service import TeamService
from onemonthflow_api.app.services.user_service import UserService


@pytest.fixture
def sql(tmp_path):
    """A migrated database in a temporary directory."""
    service = SqlService(str(tmp_path / "onemonthflow-test.db"))
    init_db(service)
    return service


@pytest.fixture
def client(tmp_path):
    app = create_app(Settings(database_url=str(tmp_path / "api-test.db"), import_page_delay=0))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded(sql):
    """Two teams, two users and one project assigned to team T1."""
    teams = TeamService(sql)
    users = UserService(sql)
    asyncio.run(teams.create_team(TeamRequest(team_code="T1", team_name="Alpha", tech_stack_codes=["TS003"])))
    asyncio.run(teams.create_team(TeamRequest(team_code="T2", team_name="Beta")))
    asyncio.run(users.create_user(UserRequest(user_code="U1", user_name="Aung", github_account_name="aung-dev")))
    asyncio.run(users.create_user(UserRequest(user_code="U2", user_name="Su", github_account_name="su-codes")))
    project = asyncio.run(
        ProjectService(sql).create_project(
            ProjectRequest(
                project_code="P1",
                project_name="Flow Tracker",
                teams=[ProjectTeamRequest(team_code="T1")],
            )
        )
    )
    return project.data


@pytest.fixture
def count_rows(sql):
    def count(table):
        return sql.scalar(f"SELECT COUNT(*) FROM {table}")

    return count
