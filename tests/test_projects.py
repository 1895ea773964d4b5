import asyncio
import datetime as dt

from onemonthflow_api.app.core.result import ErrorKind
from onemonthflow_api.app.schemas.activity import ActivityRequest
from onemonthflow_api.app.schemas.project import ProjectRequest, ProjectTeamRequest
from onemonthflow_api.app.services.activity_service import ActivityService
from onemonthflow_api.app.services.project_service import ProjectService
from onemonthflow_api.app.services.project_tech_stack_service import ProjectTechStackService


def test_create_project_with_teams(sql, seeded):
    assert seeded.project_code == "P1"
    assert seeded.status == "Active"
    assert [team.team_code for team in seeded.teams] == ["T1"]
    assert seeded.teams[0].team_name == "Alpha"


def test_create_project_requires_code_and_name(sql, count_rows):
    result = asyncio.run(ProjectService(sql).create_project(ProjectRequest(project_code="P9")))
    assert result.error_kind == ErrorKind.VALIDATION
    assert result.message == "ProjectCode and ProjectName are required."
    assert count_rows("Tbl_Project") == 0


def test_duplicate_team_codes_write_nothing(sql, count_rows):
    request = ProjectRequest(
        project_code="P2",
        project_name="Twice",
        teams=[ProjectTeamRequest(team_code="T1"), ProjectTeamRequest(team_code="T1")],
    )
    result = asyncio.run(ProjectService(sql).create_project(request))
    assert result.error_kind == ErrorKind.VALIDATION
    assert result.message == "Duplicate team(s) found in request: T1"
    assert count_rows("Tbl_Project") == 0
    assert count_rows("Tbl_ProjectTeam") == 0


def test_duplicate_project_code(sql, seeded):
    result = asyncio.run(
        ProjectService(sql).create_project(ProjectRequest(project_code="P1", project_name="Again"))
    )
    assert result.error_kind == ErrorKind.VALIDATION
    assert result.message == "Project with Code 'P1' already exists."


def test_end_date_before_start_date(sql):
    request = ProjectRequest(
        project_code="P3", project_name="Backwards", start_date=dt.date(2024, 2, 1), end_date=dt.date(2024, 1, 1)
    )
    result = asyncio.run(ProjectService(sql).create_project(request))
    assert result.error_kind == ErrorKind.VALIDATION


def test_get_project(sql, seeded):
    service = ProjectService(sql)
    assert asyncio.run(service.get_project_by_id(seeded.project_id)).data.project_name == "Flow Tracker"
    assert asyncio.run(service.get_project_by_code("P1")).data.project_id == seeded.project_id

    missing = asyncio.run(service.get_project_by_id("nope"))
    assert missing.error_kind == ErrorKind.NOT_FOUND
    assert missing.message == "Project with ID nope not found."


def test_update_replaces_teams_and_moves_links(sql, seeded):
    service = ProjectService(sql)
    asyncio.run(ProjectTechStackService(sql).create_project_tech_stacks("P1", ["TS003"]))
    asyncio.run(
        ActivityService(sql).add_activity(
            ActivityRequest(project_code="P1", team_code="T1", activity_date=dt.date(2024, 1, 2), tasks="Kickoff")
        )
    )

    request = ProjectRequest(
        project_code="P1X",
        project_name="Flow Tracker 2",
        status="In Progress",
        teams=[ProjectTeamRequest(team_code="T2", tech_stack_code="TS005")],
    )
    result = asyncio.run(service.update_project(seeded.project_id, request))
    assert result.is_success
    assert result.data.project_code == "P1X"
    assert [team.team_code for team in result.data.teams] == ["T2"]
    assert sql.scalar("SELECT COUNT(*) FROM Tbl_ProjectTechStack WHERE ProjectCode = 'P1X'") == 1
    assert sql.scalar("SELECT COUNT(*) FROM Tbl_ProjectTeamActivity WHERE ProjectCode = 'P1X'") == 1
    # the tech stack given with the team is linked to the team as well
    assert sql.scalar("SELECT COUNT(*) FROM Tbl_TeamTechStack WHERE TeamCode = 'T2' AND TechStackCode = 'TS005'") == 1


def test_update_missing_project(sql):
    result = asyncio.run(
        ProjectService(sql).update_project("nope", ProjectRequest(project_code="X", project_name="X"))
    )
    assert result.error_kind == ErrorKind.NOT_FOUND


def test_delete_project_twice(sql, seeded, count_rows):
    service = ProjectService(sql)
    first = asyncio.run(service.delete_project(seeded.project_id))
    assert first.is_success
    assert count_rows("Tbl_ProjectTeam") == 0
    second = asyncio.run(service.delete_project(seeded.project_id))
    assert second.error_kind == ErrorKind.NOT_FOUND


def test_list_projects_paging_and_sorting(sql):
    service = ProjectService(sql)
    for number in range(12):
        asyncio.run(service.create_project(ProjectRequest(project_code=f"P{number:02}", project_name=f"Project {number:02}")))

    page = asyncio.run(service.list_projects(page=2, page_size=5)).data
    assert page.total_count == 12
    assert page.total_pages == 3
    assert [p.project_code for p in page.items] == ["P05", "P06", "P07", "P08", "P09"]

    last = asyncio.run(service.list_projects(page=3, page_size=5)).data
    assert len(last.items) == 2
    assert not last.has_next_page

    newest = asyncio.run(service.list_projects(sort_column="ProjectCode", sort_descending=True)).data
    assert newest.items[0].project_code == "P11"

    filtered = asyncio.run(service.list_projects(filter_column="ProjectCode", filter_value="P1")).data
    assert filtered.total_count == 2


def test_list_projects_rejects_unknown_columns(sql):
    service = ProjectService(sql)
    bad_sort = asyncio.run(service.list_projects(sort_column="Password"))
    assert bad_sort.error_kind == ErrorKind.VALIDATION
    bad_filter = asyncio.run(service.list_projects(filter_column="Password", filter_value=""))
    assert bad_filter.error_kind == ErrorKind.VALIDATION
    assert bad_filter.message == "Invalid filter column: Password"
    bad_page = asyncio.run(service.list_projects(page=0))
    assert bad_page.message == "Page and PageSize must be greater than 0."


def test_page_past_the_end_is_empty_but_counted(sql):
    service = ProjectService(sql)
    for number in range(3):
        asyncio.run(service.create_project(ProjectRequest(project_code=f"P{number}", project_name=f"Project {number}")))

    page = asyncio.run(service.list_projects(page=5, page_size=10)).data
    assert page.items == []
    assert page.total_count == 3
    assert page.total_pages == 1
    assert not page.has_next_page


def test_search_projects(sql, seeded):
    service = ProjectService(sql)
    assert [p.project_code for p in asyncio.run(service.search_projects("flow")).data] == ["P1"]
    assert asyncio.run(service.search_projects("zzz")).data == []


def test_add_and_remove_project_teams(sql, seeded):
    service = ProjectService(sql)
    again = asyncio.run(service.add_teams_to_project("P1", [ProjectTeamRequest(team_code="T1")]))
    assert again.error_kind == ErrorKind.VALIDATION
    assert again.message == "Team(s) already assigned to project: T1"

    added = asyncio.run(service.add_teams_to_project("P1", [ProjectTeamRequest(team_code="T2", duration=30)]))
    assert added.is_success
    teams = asyncio.run(service.get_teams_by_project("P1")).data
    assert {team.team_code for team in teams} == {"T1", "T2"}

    missing = asyncio.run(service.add_teams_to_project("NOPE", [ProjectTeamRequest(team_code="T2")]))
    assert missing.error_kind == ErrorKind.NOT_FOUND

    assert asyncio.run(service.remove_team_from_project("P1", "T2")).is_success
    assert asyncio.run(service.remove_team_from_project("P1", "T2")).error_kind == ErrorKind.NOT_FOUND


def test_get_all_teams(sql, seeded):
    teams = asyncio.run(ProjectService(sql).get_all_teams()).data
    assert [team.team_name for team in teams] == ["Alpha", "Beta"]
