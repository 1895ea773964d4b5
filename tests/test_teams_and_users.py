import asyncio

from onemonthflow_api.app.core.result import ErrorKind
from onemonthflow_api.app.schemas.team import TeamRequest
from onemonthflow_api.app.schemas.team_user import TeamUserRequest
from onemonthflow_api.app.schemas.tech_stack import TechStackRequest
from onemonthflow_api.app.schemas.user import UserRequest
from onemonthflow_api.app.services.team_service import TeamService
from onemonthflow_api.app.services.team_user_service import TeamUserService
from onemonthflow_api.app.services.tech_stack_service import TechStackService
from onemonthflow_api.app.services.user_service import UserService, generate_user_code


# -- teams -----------------------------------------------------------------

def test_create_team(sql, count_rows):
    service = TeamService(sql)
    result = asyncio.run(service.create_team(TeamRequest(team_code="T1", team_name="Alpha", tech_stack_codes=["TS001", " TS001 ", ""])))
    assert result.is_success
    assert result.data.tech_stack_codes == ["TS001"]

    duplicate = asyncio.run(service.create_team(TeamRequest(team_code="T1", team_name="Again")))
    assert duplicate.message == "Team with Code 'T1' already exists."

    blank = asyncio.run(service.create_team(TeamRequest(team_code="T2")))
    assert blank.message == "TeamCode and TeamName are required."
    assert count_rows("Tbl_Team") == 1


def test_update_team_replaces_tech_stacks(sql, seeded):
    service = TeamService(sql)
    team = asyncio.run(service.get_team_by_code("T1")).data
    assert team.tech_stack_codes == ["TS003"]

    updated = asyncio.run(
        service.update_team(team.team_id, TeamRequest(team_code="IGNORED", team_name="Alpha Squad", tech_stack_codes=["TS002", "TS005"]))
    ).data
    assert updated.team_code == "T1"
    assert updated.team_name == "Alpha Squad"
    assert sorted(updated.tech_stack_codes) == ["TS002", "TS005"]
    assert asyncio.run(service.get_tech_stack_codes_by_team_code("T1")).data == updated.tech_stack_codes


def test_delete_team_removes_links(sql, seeded, count_rows):
    asyncio.run(TeamUserService(sql).add_team_user(TeamUserRequest(team_code="T1", user_code="U1")))
    service = TeamService(sql)
    team = asyncio.run(service.get_team_by_code("T1")).data
    assert asyncio.run(service.delete_team(team.team_id)).is_success
    assert count_rows("Tbl_TeamUser") == 0
    assert count_rows("Tbl_ProjectTeam") == 0
    assert count_rows("Tbl_TeamTechStack") == 0
    assert asyncio.run(service.delete_team(team.team_id)).error_kind == ErrorKind.NOT_FOUND


def test_list_and_search_teams(sql, seeded):
    service = TeamService(sql)
    page = asyncio.run(service.list_teams(page_size=1)).data
    assert page.total_count == 2
    assert page.items[0].team_name == "Alpha"
    assert [t.team_code for t in asyncio.run(service.search_teams("bet")).data] == ["T2"]


# -- users -----------------------------------------------------------------

def test_generated_user_code():
    code = generate_user_code()
    assert code.startswith("USR")
    assert len(code) == 15
    assert code == code.upper()


def test_create_user_generates_code_and_links_stacks(sql):
    service = UserService(sql)
    result = asyncio.run(service.create_user(UserRequest(user_name="Mya", tech_stack_codes=["TS003", "TS005"])))
    assert result.is_success
    user = result.data
    assert user.user_code.startswith("USR")
    assert [stack.tech_stack_name for stack in user.tech_stacks] == ["Python", "React"]

    blank = asyncio.run(service.create_user(UserRequest(user_name=" ")))
    assert blank.message == "UserName is required."


def test_add_users_stops_at_first_failure(sql, count_rows):
    service = UserService(sql)
    result = asyncio.run(
        service.add_users([UserRequest(user_name="One"), UserRequest(user_name=""), UserRequest(user_name="Three")])
    )
    assert result.error_kind == ErrorKind.VALIDATION
    assert count_rows("Tbl_User") == 1


def test_update_and_delete_user(sql, seeded, count_rows):
    service = UserService(sql)
    user = asyncio.run(service.get_user_by_code("U1")).data
    updated = asyncio.run(
        service.update_user(user.user_id, UserRequest(user_name="Aung Aung", mobile_no="0911", tech_stack_codes=["TS011"]))
    ).data
    assert updated.user_code == "U1"
    assert updated.mobile_no == "0911"
    assert [stack.tech_stack_code for stack in updated.tech_stacks] == ["TS011"]

    assert asyncio.run(service.delete_user(user.user_id)).is_success
    assert count_rows("Tbl_UserTechStack") == 0
    assert asyncio.run(service.get_user_by_id(user.user_id)).error_kind == ErrorKind.NOT_FOUND


def test_list_users_includes_tech_stacks(sql, seeded):
    asyncio.run(UserService(sql).create_user(UserRequest(user_code="U3", user_name="Zaw", tech_stack_codes=["TS004"])))
    page = asyncio.run(UserService(sql).list_users(sort_column="UserName", sort_descending=True)).data
    assert page.total_count == 3
    assert page.items[0].user_name == "Zaw"
    assert page.items[0].tech_stacks[0].tech_stack_code == "TS004"


# -- tech stacks -----------------------------------------------------------

def test_tech_stack_crud(sql, count_rows):
    service = TechStackService(sql)
    created = asyncio.run(service.create_tech_stack(TechStackRequest(tech_stack_code="TS100", tech_stack_short_code="RS", tech_stack_name="Rust")))
    assert created.is_success
    duplicate = asyncio.run(service.create_tech_stack(TechStackRequest(tech_stack_code="TS100", tech_stack_name="Rust")))
    assert duplicate.error_kind == ErrorKind.VALIDATION

    stack_id = created.data.tech_stack_id
    renamed = asyncio.run(service.update_tech_stack(stack_id, TechStackRequest(tech_stack_name="Rust lang"))).data
    assert renamed.tech_stack_name == "Rust lang"
    assert renamed.tech_stack_code == "TS100"
    missing = asyncio.run(service.update_tech_stack("nope", TechStackRequest(tech_stack_name="X")))
    assert missing.error_kind == ErrorKind.NOT_FOUND

    assert len(asyncio.run(service.get_all_tech_stacks()).data) == 14
    assert asyncio.run(service.list_tech_stacks(page_size=5)).data.total_pages == 3
    assert asyncio.run(service.delete_tech_stack(stack_id)).is_success
    assert count_rows("Tbl_TechStack") == 13


def test_deleting_tech_stack_removes_links(sql, seeded, count_rows):
    service = TechStackService(sql)
    python = asyncio.run(service.get_tech_stack_by_code("TS003")).data
    assert asyncio.run(service.delete_tech_stack(python.tech_stack_id)).is_success
    assert count_rows("Tbl_TeamTechStack") == 0


# -- team membership -------------------------------------------------------

def test_team_membership(sql, seeded):
    service = TeamUserService(sql)
    added = asyncio.run(service.add_team_user(TeamUserRequest(team_code="T1", user_code="U1", user_rating=4.5)))
    assert added.message == "User added to team successfully."
    assert added.data.user_name == "Aung"

    again = asyncio.run(service.add_team_user(TeamUserRequest(team_code="T1", user_code="U1")))
    assert again.is_success
    assert again.message == "User is already a member of this team."
    assert again.data.team_user_id == added.data.team_user_id

    missing_user = asyncio.run(service.add_team_user(TeamUserRequest(team_code="T1", user_code="U9")))
    assert missing_user.error_kind == ErrorKind.NOT_FOUND

    team = asyncio.run(service.get_team_with_users("T1")).data
    assert team.team.team_name == "Alpha"
    assert [member.user_code for member in team.members] == ["U1"]
    assert [user.user_code for user in asyncio.run(service.get_users_by_team_code("T1")).data] == ["U1"]

    negative = asyncio.run(service.update_team_user_rating(added.data.team_user_id, -1))
    assert negative.error_kind == ErrorKind.VALIDATION
    rated = asyncio.run(service.update_team_user_rating(added.data.team_user_id, 3))
    assert rated.data.user_rating == 3

    assert asyncio.run(service.list_team_users(filter_column="UserName", filter_value="aung")).data.total_count == 1
    assert asyncio.run(service.remove_user_from_team("T1", "U1")).is_success
    assert asyncio.run(service.remove_user_from_team("T1", "U1")).error_kind == ErrorKind.NOT_FOUND
    assert asyncio.run(service.remove_team_user(added.data.team_user_id)).error_kind == ErrorKind.NOT_FOUND
