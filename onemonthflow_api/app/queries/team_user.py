"""SQL for ``Tbl_TeamUser`` (team membership)."""

from ..core.pagination import ListQuery


TEAM_USER_COLUMNS = """
    tu.TeamUserId AS team_user_id, tu.TeamCode AS team_code, tu.UserCode AS user_code,
    tu.UserRating AS user_rating, t.TeamName AS team_name, u.UserName AS user_name,
    u.GitHubAccountName AS github_account_name
"""

TEAM_USER_FROM = """
    FROM Tbl_TeamUser tu
    INNER JOIN Tbl_Team t ON t.TeamCode = tu.TeamCode
    INNER JOIN Tbl_User u ON u.UserCode = tu.UserCode
"""

INSERT_TEAM_USER = """
    INSERT INTO Tbl_TeamUser (TeamUserId, TeamCode, UserCode, UserRating)
    VALUES (:TeamUserId, :TeamCode, :UserCode, :UserRating)
"""

GET_TEAM_USER_BY_ID = f"SELECT {TEAM_USER_COLUMNS} {TEAM_USER_FROM} WHERE tu.TeamUserId = :TeamUserId"

GET_MEMBERSHIP = """
    SELECT TeamUserId AS team_user_id FROM Tbl_TeamUser WHERE TeamCode = :TeamCode AND UserCode = :UserCode
"""

GET_TEAM_USERS_BY_TEAM = f"""
    SELECT {TEAM_USER_COLUMNS} {TEAM_USER_FROM}
    WHERE tu.TeamCode = :TeamCode
    ORDER BY u.UserName
"""

UPDATE_USER_RATING = "UPDATE Tbl_TeamUser SET UserRating = :UserRating WHERE TeamUserId = :TeamUserId"

DELETE_TEAM_USER = "DELETE FROM Tbl_TeamUser WHERE TeamUserId = :TeamUserId"

DELETE_USER_FROM_TEAM = "DELETE FROM Tbl_TeamUser WHERE TeamCode = :TeamCode AND UserCode = :UserCode"

LIST_TEAM_USERS = ListQuery(
    select_sql=f"SELECT {TEAM_USER_COLUMNS} {TEAM_USER_FROM}",
    count_sql=f"SELECT COUNT(*) {TEAM_USER_FROM}",
    filter_columns={
        "TeamCode": "tu.TeamCode",
        "TeamName": "t.TeamName",
        "UserCode": "tu.UserCode",
        "UserName": "u.UserName",
    },
    sort_columns={
        "TeamName": "t.TeamName",
        "UserName": "u.UserName",
        "UserRating": "tu.UserRating",
    },
    default_sort="t.TeamName",
    tiebreaker="tu.TeamUserId",
)
