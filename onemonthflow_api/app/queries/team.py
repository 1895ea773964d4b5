"""SQL for ``Tbl_Team`` and ``Tbl_TeamTechStack``."""

from ..core.pagination import ListQuery


TEAM_COLUMNS = "t.TeamId AS team_id, t.TeamCode AS team_code, t.TeamName AS team_name"

INSERT_TEAM = "INSERT INTO Tbl_Team (TeamId, TeamCode, TeamName) VALUES (:TeamId, :TeamCode, :TeamName)"

UPDATE_TEAM = "UPDATE Tbl_Team SET TeamName = :TeamName WHERE TeamId = :TeamId"

DELETE_TEAM = "DELETE FROM Tbl_Team WHERE TeamId = :TeamId"

GET_TEAM_BY_ID = f"SELECT {TEAM_COLUMNS} FROM Tbl_Team t WHERE t.TeamId = :TeamId"

GET_TEAM_BY_CODE = f"SELECT {TEAM_COLUMNS} FROM Tbl_Team t WHERE t.TeamCode = :TeamCode"

SEARCH_TEAMS = f"""
    SELECT {TEAM_COLUMNS} FROM Tbl_Team t
    WHERE t.TeamCode LIKE :Query ESCAPE '\\' OR t.TeamName LIKE :Query ESCAPE '\\'
    ORDER BY t.TeamName
"""

LIST_TEAMS = ListQuery(
    select_sql=f"SELECT {TEAM_COLUMNS} FROM Tbl_Team t",
    count_sql="SELECT COUNT(*) FROM Tbl_Team t",
    filter_columns={"TeamName": "t.TeamName", "TeamCode": "t.TeamCode"},
    sort_columns={"TeamName": "t.TeamName", "TeamCode": "t.TeamCode"},
    default_sort="t.TeamName",
    tiebreaker="t.TeamId",
)

INSERT_TEAM_TECH_STACK = """
    INSERT INTO Tbl_TeamTechStack (TeamTechStackId, TeamCode, TechStackCode)
    VALUES (:TeamTechStackId, :TeamCode, :TechStackCode)
"""

GET_TECH_STACK_CODES_BY_TEAM = """
    SELECT TechStackCode AS tech_stack_code FROM Tbl_TeamTechStack
    WHERE TeamCode = :TeamCode
    ORDER BY TechStackCode
"""

DELETE_TEAM_TECH_STACKS = "DELETE FROM Tbl_TeamTechStack WHERE TeamCode = :TeamCode"

DELETE_TEAM_MEMBERS = "DELETE FROM Tbl_TeamUser WHERE TeamCode = :TeamCode"

DELETE_TEAM_PROJECTS = "DELETE FROM Tbl_ProjectTeam WHERE TeamCode = :TeamCode"

GET_TEAM_MEMBERS = """
    SELECT u.UserId AS user_id, u.UserCode AS user_code, u.UserName AS user_name,
           u.GitHubAccountName AS github_account_name, u.Nrc AS nrc, u.MobileNo AS mobile_no
    FROM Tbl_User u
    INNER JOIN Tbl_TeamUser tu ON tu.UserCode = u.UserCode
    WHERE tu.TeamCode = :TeamCode
    ORDER BY u.UserName
"""
