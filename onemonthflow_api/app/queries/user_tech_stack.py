"""SQL for ``Tbl_UserTechStack``."""

from ..core.pagination import ListQuery


USER_TECH_STACK_COLUMNS = """
    uts.UserTechStackId AS user_tech_stack_id, uts.UserCode AS user_code,
    uts.TechStackCode AS tech_stack_code, uts.ProficiencyLevel AS proficiency_level,
    u.UserName AS user_name, u.GitHubAccountName AS github_account_name,
    ts.TechStackName AS tech_stack_name
"""

USER_TECH_STACK_FROM = """
    FROM Tbl_UserTechStack uts
    INNER JOIN Tbl_User u ON u.UserCode = uts.UserCode
    LEFT JOIN Tbl_TechStack ts ON ts.TechStackCode = uts.TechStackCode
"""

INSERT_USER_TECH_STACK = """
    INSERT INTO Tbl_UserTechStack (UserTechStackId, UserCode, TechStackCode, ProficiencyLevel)
    VALUES (:UserTechStackId, :UserCode, :TechStackCode, :ProficiencyLevel)
"""

UPDATE_USER_TECH_STACK = """
    UPDATE Tbl_UserTechStack
    SET TechStackCode = :TechStackCode, ProficiencyLevel = :ProficiencyLevel
    WHERE UserTechStackId = :UserTechStackId
"""

DELETE_USER_TECH_STACK = "DELETE FROM Tbl_UserTechStack WHERE UserTechStackId = :UserTechStackId"

DELETE_USER_TECH_STACKS_BY_USER = "DELETE FROM Tbl_UserTechStack WHERE UserCode = :UserCode"

GET_USER_TECH_STACK_BY_ID = (
    f"SELECT {USER_TECH_STACK_COLUMNS} {USER_TECH_STACK_FROM} WHERE uts.UserTechStackId = :UserTechStackId"
)

USER_TECH_STACK_EXISTS = """
    SELECT UserTechStackId AS user_tech_stack_id FROM Tbl_UserTechStack
    WHERE UserCode = :UserCode AND TechStackCode = :TechStackCode
"""

GET_BY_USER = f"""
    SELECT {USER_TECH_STACK_COLUMNS} {USER_TECH_STACK_FROM}
    WHERE uts.UserCode = :UserCode
    ORDER BY uts.TechStackCode
"""

SEARCH_BY_GITHUB_ACCOUNT = f"""
    SELECT {USER_TECH_STACK_COLUMNS} {USER_TECH_STACK_FROM}
    WHERE u.GitHubAccountName LIKE :Account ESCAPE '\\'
    ORDER BY u.GitHubAccountName, uts.TechStackCode
"""

LIST_USER_TECH_STACKS = ListQuery(
    select_sql=f"SELECT {USER_TECH_STACK_COLUMNS} {USER_TECH_STACK_FROM}",
    count_sql=f"SELECT COUNT(*) {USER_TECH_STACK_FROM}",
    filter_columns={
        "UserName": "u.UserName",
        "UserCode": "uts.UserCode",
        "TechStackName": "ts.TechStackName",
        "TechStackCode": "uts.TechStackCode",
        "GitHubAccountName": "u.GitHubAccountName",
    },
    sort_columns={
        "UserName": "u.UserName",
        "TechStackName": "ts.TechStackName",
        "ProficiencyLevel": "uts.ProficiencyLevel",
    },
    default_sort="u.UserName",
    tiebreaker="uts.UserTechStackId",
)
