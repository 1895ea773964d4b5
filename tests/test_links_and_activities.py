import asyncio
import datetime as dt

from onemonthflow_api.app.core.result import ErrorKind
from onemonthflow_api.app.schemas.activity import ActivityRequest
from onemonthflow_api.app.schemas.user_tech_stack import UserTechStackRequest
from onemonthflow_api.app.services.activity_service import ActivityService
from onemonthflow_api.app.services.dashboard_service import DashboardService
from onemonthflow_api.app.services.project_tech_stack_service import ProjectTechStackService
from onemonthflow_api.app.services.user_tech_stack_service import UserTechStackService


# -- project tech stacks ---------------------------------------------------

def test_assign_project_tech_stacks_skips_existing(sql, seeded, count_rows):
    service = ProjectTechStackService(sql)
    first = asyncio.run(service.create_project_tech_stacks("P1", ["TS001", "TS002"]))
    assert first.data == ["TS001", "TS002"]
    assert first.message == "2 tech stack(s) assigned."

    second = asyncio.run(service.create_project_tech_stacks("P1", ["TS002", "TS003"]))
    assert second.data == ["TS003"]

    everything = asyncio.run(service.create_project_tech_stacks("P1", ["TS001", "TS003"]))
    assert everything.error_kind == ErrorKind.VALIDATION
    assert everything.message == "All provided tech stacks already exist."
    assert count_rows("Tbl_ProjectTechStack") == 3


def test_project_tech_stack_paging_update_and_delete(sql, seeded):
    service = ProjectTechStackService(sql)
    asyncio.run(service.create_project_tech_stacks("P1", ["TS001", "TS002", "TS003"]))

    page = asyncio.run(service.get_paged_by_project("P1", page=1, page_size=2)).data
    assert page.total_count == 3
    assert page.has_next_page
    assert page.items[0].tech_stack_name is not None

    assert asyncio.run(service.update_project_tech_stack("P1", "TS001", "TS011")).is_success
    stale = asyncio.run(service.update_project_tech_stack("P1", "TS001", "TS012"))
    assert stale.error_kind == ErrorKind.NOT_FOUND

    assert asyncio.run(service.delete_project_tech_stack("P1", "TS011")).is_success
    removed = asyncio.run(service.delete_by_project_code("P1"))
    assert removed.data == 2
    assert asyncio.run(service.delete_by_project_code("P1")).error_kind == ErrorKind.NOT_FOUND


def test_project_tech_stack_update_cannot_duplicate_a_link(sql, seeded, count_rows):
    service = ProjectTechStackService(sql)
    asyncio.run(service.create_project_tech_stacks("P1", ["TS001", "TS002"]))

    clash = asyncio.run(service.update_project_tech_stack("P1", "TS001", "TS002"))
    assert clash.error_kind == ErrorKind.VALIDATION
    assert clash.message == "Tech stack TS002 is already linked to project P1."
    assert count_rows("Tbl_ProjectTechStack") == 2
    assert asyncio.run(service.update_project_tech_stack("P1", "TS001", "TS001")).is_success


# -- user tech stacks ------------------------------------------------------

def test_user_tech_stacks(sql, seeded):
    service = UserTechStackService(sql)
    added = asyncio.run(
        service.add_user_tech_stack(UserTechStackRequest(user_code="U1", tech_stack_code="TS003", proficiency_level="Senior"))
    )
    assert added.is_success
    assert added.data.tech_stack_name == "Python"

    duplicate = asyncio.run(service.add_user_tech_stack(UserTechStackRequest(user_code="U1", tech_stack_code="TS003")))
    assert duplicate.error_kind == ErrorKind.VALIDATION
    unknown = asyncio.run(service.add_user_tech_stack(UserTechStackRequest(user_code="U1", tech_stack_code="TS999")))
    assert unknown.error_kind == ErrorKind.NOT_FOUND

    found = asyncio.run(service.search_by_github_account("AUNG")).data
    assert [row.user_code for row in found] == ["U1"]

    link_id = added.data.user_tech_stack_id
    updated = asyncio.run(
        service.update_user_tech_stack(link_id, UserTechStackRequest(tech_stack_code="TS011", proficiency_level="Junior"))
    ).data
    assert updated.tech_stack_code == "TS011"
    assert [row.tech_stack_code for row in asyncio.run(service.get_by_user("U1")).data] == ["TS011"]

    assert asyncio.run(service.remove_user_tech_stack(link_id)).is_success
    assert asyncio.run(service.remove_user_tech_stack(link_id)).error_kind == ErrorKind.NOT_FOUND


def test_user_tech_stack_update_cannot_duplicate_a_link(sql, seeded):
    service = UserTechStackService(sql)
    first = asyncio.run(service.add_user_tech_stack(UserTechStackRequest(user_code="U1", tech_stack_code="TS001"))).data
    asyncio.run(service.add_user_tech_stack(UserTechStackRequest(user_code="U1", tech_stack_code="TS002")))

    clash = asyncio.run(
        service.update_user_tech_stack(first.user_tech_stack_id, UserTechStackRequest(tech_stack_code="TS002"))
    )
    assert clash.error_kind == ErrorKind.VALIDATION
    assert clash.message == "User U1 already has tech stack TS002."
    codes = [row.tech_stack_code for row in asyncio.run(service.get_by_user("U1")).data]
    assert codes == ["TS001", "TS002"]

    # Keeping the same tech stack only changes the proficiency.
    same = asyncio.run(
        service.update_user_tech_stack(
            first.user_tech_stack_id, UserTechStackRequest(tech_stack_code="TS001", proficiency_level="Senior")
        )
    )
    assert same.data.proficiency_level == "Senior"


# -- activities ------------------------------------------------------------

def test_add_activity_validates_references(sql, seeded, count_rows):
    service = ActivityService(sql)
    missing = asyncio.run(service.add_activity(ActivityRequest(project_code="P1", team_code="T1")))
    assert missing.message == "ProjectCode, TeamCode, ActivityDate and Tasks are required."

    unknown = asyncio.run(
        service.add_activity(
            ActivityRequest(project_code="P404", team_code="T1", activity_date=dt.date(2024, 1, 1), tasks="x")
        )
    )
    assert unknown.error_kind == ErrorKind.NOT_FOUND
    assert count_rows("Tbl_ProjectTeamActivity") == 0


def test_activities_list_newest_first(sql, seeded):
    service = ActivityService(sql)
    for day, team in ((1, "T1"), (3, "T2"), (2, "T1")):
        result = asyncio.run(
            service.add_activity(
                ActivityRequest(
                    project_code="P1",
                    team_code=team,
                    user_code="U1",
                    activity_date=dt.date(2024, 3, day),
                    tasks=f"Day {day} work",
                )
            )
        )
        assert result.is_success
        assert result.data.project_name == "Flow Tracker"

    everything = asyncio.run(service.list_activities()).data
    assert [a.activity_date.day for a in everything.items] == [3, 2, 1]

    team_one = asyncio.run(service.list_activities(team_code="T1")).data
    assert team_one.total_count == 2
    searched = asyncio.run(service.list_activities(filter_value="Day 3")).data
    assert [a.team_code for a in searched.items] == ["T2"]

    activity = everything.items[0]
    changed = asyncio.run(
        service.update_activity(
            activity.project_team_activity_id,
            ActivityRequest(project_code="P1", team_code="T2", activity_date=dt.date(2024, 3, 4), tasks="Demo"),
        )
    ).data
    assert changed.tasks == "Demo"
    assert changed.user_code is None

    assert asyncio.run(service.delete_activity(activity.project_team_activity_id)).is_success
    again = asyncio.run(service.get_activity_by_id(activity.project_team_activity_id))
    assert again.error_kind == ErrorKind.NOT_FOUND


def test_projects_by_team(sql, seeded):
    projects = asyncio.run(ActivityService(sql).get_projects_by_team_code("T1")).data
    assert [p.project_code for p in projects] == ["P1"]
    assert asyncio.run(ActivityService(sql).get_projects_by_team_code("T2")).data == []


# -- dashboard -------------------------------------------------------------

def test_dashboard_summary(sql, seeded):
    sql.execute("UPDATE Tbl_Project SET EndDate = '2024-06-10'")
    asyncio.run(
        ActivityService(sql).add_activity(
            ActivityRequest(project_code="P1", team_code="T1", activity_date=dt.date(2024, 6, 1), tasks="Ship")
        )
    )
    summary = asyncio.run(DashboardService(sql).get_summary(days=30, today=dt.date(2024, 6, 1))).data
    assert summary.total_projects == 1
    assert summary.active_projects == 1
    assert summary.total_users == 2
    assert summary.total_teams == 2
    assert [p.project_code for p in summary.projects_ending_soon] == ["P1"]
    assert summary.latest_activities[0].tasks == "Ship"

    later = asyncio.run(DashboardService(sql).get_summary(days=5, today=dt.date(2024, 6, 1))).data
    assert later.projects_ending_soon == []
    assert asyncio.run(DashboardService(sql).get_summary(latest=0)).error_kind == ErrorKind.VALIDATION
