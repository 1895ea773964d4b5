"""SQL for ``Tbl_ProjectTechStack``."""

from ..core.pagination import ListQuery


PROJECT_TECH_STACK_FROM = """
    FROM Tbl_ProjectTechStack pts
    LEFT JOIN Tbl_TechStack ts ON ts.TechStackCode = pts.TechStackCode
"""

INSERT_PROJECT_TECH_STACK = """
    INSERT INTO Tbl_ProjectTechStack (ProjectTechStackId, ProjectCode, TechStackCode)
    VALUES (:ProjectTechStackId, :ProjectCode, :TechStackCode)
"""

GET_CODES_BY_PROJECT = """
    SELECT TechStackCode AS tech_stack_code FROM Tbl_ProjectTechStack WHERE ProjectCode = :ProjectCode
"""

LIST_BY_PROJECT = ListQuery(
    select_sql=(
        "SELECT pts.ProjectTechStackId AS project_tech_stack_id, pts.ProjectCode AS project_code, "
        "pts.TechStackCode AS tech_stack_code, ts.TechStackName AS tech_stack_name "
        f"{PROJECT_TECH_STACK_FROM}"
    ),
    count_sql=f"SELECT COUNT(*) {PROJECT_TECH_STACK_FROM}",
    filter_columns={"TechStackCode": "pts.TechStackCode", "TechStackName": "ts.TechStackName"},
    sort_columns={"TechStackCode": "pts.TechStackCode", "TechStackName": "ts.TechStackName"},
    default_sort="pts.TechStackCode",
    tiebreaker="pts.ProjectTechStackId",
    conditions=("pts.ProjectCode = :ProjectCode",),
)

UPDATE_PROJECT_TECH_STACK = """
    UPDATE Tbl_ProjectTechStack SET TechStackCode = :NewTechStackCode
    WHERE ProjectCode = :ProjectCode AND TechStackCode = :OldTechStackCode
"""

DELETE_BY_PROJECT = "DELETE FROM Tbl_ProjectTechStack WHERE ProjectCode = :ProjectCode"

DELETE_ONE = "DELETE FROM Tbl_ProjectTechStack WHERE ProjectCode = :ProjectCode AND TechStackCode = :TechStackCode"
