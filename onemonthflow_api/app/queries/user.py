"""SQL for ``Tbl_User``."""

from ..core.pagination import ListQuery


USER_COLUMNS = """
    u.UserId AS user_id, u.UserCode AS user_code, u.UserName AS user_name,
    u.GitHubAccountName AS github_account_name, u.Nrc AS nrc, u.MobileNo AS mobile_no
"""

INSERT_USER = """
    INSERT INTO Tbl_User (UserId, UserCode, UserName, GitHubAccountName, Nrc, MobileNo)
    VALUES (:UserId, :UserCode, :UserName, :GitHubAccountName, :Nrc, :MobileNo)
"""

UPDATE_USER = """
    UPDATE Tbl_User
    SET UserName = :UserName, GitHubAccountName = :GitHubAccountName, Nrc = :Nrc, MobileNo = :MobileNo
    WHERE UserId = :UserId
"""

DELETE_USER = "DELETE FROM Tbl_User WHERE UserId = :UserId"

GET_USER_BY_ID = f"SELECT {USER_COLUMNS} FROM Tbl_User u WHERE u.UserId = :UserId"

GET_USER_BY_CODE = f"SELECT {USER_COLUMNS} FROM Tbl_User u WHERE u.UserCode = :UserCode"

SEARCH_USERS = f"""
    SELECT {USER_COLUMNS} FROM Tbl_User u
    WHERE u.UserName LIKE :Query ESCAPE '\\'
       OR u.UserCode LIKE :Query ESCAPE '\\'
       OR u.GitHubAccountName LIKE :Query ESCAPE '\\'
    ORDER BY u.UserName
"""

LIST_USERS = ListQuery(
    select_sql=f"SELECT {USER_COLUMNS} FROM Tbl_User u",
    count_sql="SELECT COUNT(*) FROM Tbl_User u",
    filter_columns={
        "UserName": "u.UserName",
        "UserCode": "u.UserCode",
        "GitHubAccountName": "u.GitHubAccountName",
    },
    sort_columns={
        "UserName": "u.UserName",
        "UserCode": "u.UserCode",
        "GitHubAccountName": "u.GitHubAccountName",
    },
    default_sort="u.UserName",
    tiebreaker="u.UserId",
)

GET_USER_TECH_STACKS = """
    SELECT uts.TechStackCode AS tech_stack_code, ts.TechStackName AS tech_stack_name,
           ts.TechStackShortCode AS tech_stack_short_code, uts.ProficiencyLevel AS proficiency_level
    FROM Tbl_UserTechStack uts
    LEFT JOIN Tbl_TechStack ts ON ts.TechStackCode = uts.TechStackCode
    WHERE uts.UserCode = :UserCode
    ORDER BY uts.TechStackCode
"""

DELETE_USER_MEMBERSHIPS = "DELETE FROM Tbl_TeamUser WHERE UserCode = :UserCode"
