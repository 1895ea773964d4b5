"""SQL for ``Tbl_TechStack``."""

from ..core.pagination import ListQuery


TECH_STACK_COLUMNS = """
    ts.TechStackId AS tech_stack_id, ts.TechStackCode AS tech_stack_code,
    ts.TechStackShortCode AS tech_stack_short_code, ts.TechStackName AS tech_stack_name
"""

INSERT_TECH_STACK = """
    INSERT INTO Tbl_TechStack (TechStackId, TechStackCode, TechStackShortCode, TechStackName)
    VALUES (:TechStackId, :TechStackCode, :TechStackShortCode, :TechStackName)
"""

UPDATE_TECH_STACK = """
    UPDATE Tbl_TechStack
    SET TechStackShortCode = :TechStackShortCode, TechStackName = :TechStackName
    WHERE TechStackId = :TechStackId
"""

DELETE_TECH_STACK = "DELETE FROM Tbl_TechStack WHERE TechStackId = :TechStackId"

GET_TECH_STACK_BY_ID = f"SELECT {TECH_STACK_COLUMNS} FROM Tbl_TechStack ts WHERE ts.TechStackId = :TechStackId"

GET_TECH_STACK_BY_CODE = f"SELECT {TECH_STACK_COLUMNS} FROM Tbl_TechStack ts WHERE ts.TechStackCode = :TechStackCode"

GET_ALL_TECH_STACKS = f"SELECT {TECH_STACK_COLUMNS} FROM Tbl_TechStack ts ORDER BY ts.TechStackCode"

LIST_TECH_STACKS = ListQuery(
    select_sql=f"SELECT {TECH_STACK_COLUMNS} FROM Tbl_TechStack ts",
    count_sql="SELECT COUNT(*) FROM Tbl_TechStack ts",
    filter_columns={
        "TechStackName": "ts.TechStackName",
        "TechStackCode": "ts.TechStackCode",
        "TechStackShortCode": "ts.TechStackShortCode",
    },
    sort_columns={
        "TechStackName": "ts.TechStackName",
        "TechStackCode": "ts.TechStackCode",
        "TechStackShortCode": "ts.TechStackShortCode",
    },
    default_sort="ts.TechStackName",
    tiebreaker="ts.TechStackId",
)

# Link rows referencing a tech stack, removed before the stack itself.
DELETE_TECH_STACK_LINKS = (
    "DELETE FROM Tbl_UserTechStack WHERE TechStackCode = :TechStackCode",
    "DELETE FROM Tbl_ProjectTechStack WHERE TechStackCode = :TechStackCode",
    "DELETE FROM Tbl_TeamTechStack WHERE TechStackCode = :TechStackCode",
)
