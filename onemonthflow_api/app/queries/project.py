"""SQL for ``Tbl_Project`` and ``Tbl_ProjectTeam``."""

from ..core.pagination import ListQuery


PROJECT_COLUMNS = """
    p.ProjectId AS project_id, p.ProjectCode AS project_code, p.ProjectName AS project_name,
    p.RepoUrl AS repo_url, p.StartDate AS start_date, p.EndDate AS end_date,
    p.ProjectDescription AS project_description, p.Status AS status
"""

INSERT_PROJECT = """
    INSERT INTO Tbl_Project (ProjectId, ProjectCode, ProjectName, RepoUrl, StartDate, EndDate, ProjectDescription, Status)
    VALUES (:ProjectId, :ProjectCode, :ProjectName, :RepoUrl, :StartDate, :EndDate, :ProjectDescription, :Status)
"""

UPDATE_PROJECT = """
    UPDATE Tbl_Project
    SET ProjectCode = :ProjectCode, ProjectName = :ProjectName, RepoUrl = :RepoUrl, StartDate = :StartDate,
        EndDate = :EndDate, ProjectDescription = :ProjectDescription, Status = :Status
    WHERE ProjectId = :ProjectId
"""

DELETE_PROJECT = "DELETE FROM Tbl_Project WHERE ProjectId = :ProjectId"

GET_PROJECT_BY_ID = f"SELECT {PROJECT_COLUMNS} FROM Tbl_Project p WHERE p.ProjectId = :ProjectId"

GET_PROJECT_BY_CODE = f"SELECT {PROJECT_COLUMNS} FROM Tbl_Project p WHERE p.ProjectCode = :ProjectCode"

SEARCH_PROJECTS = f"""
    SELECT {PROJECT_COLUMNS} FROM Tbl_Project p
    WHERE p.ProjectCode LIKE :Keyword ESCAPE '\\' OR p.ProjectName LIKE :Keyword ESCAPE '\\'
    ORDER BY p.ProjectName
"""

LIST_PROJECTS = ListQuery(
    select_sql=f"SELECT {PROJECT_COLUMNS} FROM Tbl_Project p",
    count_sql="SELECT COUNT(*) FROM Tbl_Project p",
    filter_columns={
        "ProjectName": "p.ProjectName",
        "ProjectCode": "p.ProjectCode",
        "Status": "p.Status",
    },
    sort_columns={
        "ProjectCode": "p.ProjectCode",
        "ProjectName": "p.ProjectName",
        "Status": "p.Status",
        "StartDate": "p.StartDate",
        "EndDate": "p.EndDate",
    },
    default_sort="p.ProjectName",
    tiebreaker="p.ProjectId",
)

# ProjectTechStack rows follow the project when its code changes.
RENAME_PROJECT_TECH_STACKS = """
    UPDATE Tbl_ProjectTechStack SET ProjectCode = :NewProjectCode WHERE ProjectCode = :ProjectCode
"""

RENAME_PROJECT_ACTIVITIES = """
    UPDATE Tbl_ProjectTeamActivity SET ProjectCode = :NewProjectCode WHERE ProjectCode = :ProjectCode
"""

DELETE_PROJECT_TECH_STACKS = "DELETE FROM Tbl_ProjectTechStack WHERE ProjectCode = :ProjectCode"

DELETE_PROJECT_ACTIVITIES = "DELETE FROM Tbl_ProjectTeamActivity WHERE ProjectCode = :ProjectCode"

# -- project teams ---------------------------------------------------------

INSERT_PROJECT_TEAM = """
    INSERT INTO Tbl_ProjectTeam (ProjectTeamId, ProjectCode, TeamCode, ProjectTeamRating, Duration)
    VALUES (:ProjectTeamId, :ProjectCode, :TeamCode, :ProjectTeamRating, :Duration)
"""

GET_PROJECT_TEAMS = """
    SELECT pt.ProjectTeamId AS project_team_id, pt.ProjectCode AS project_code, pt.TeamCode AS team_code,
           t.TeamName AS team_name, pt.ProjectTeamRating AS project_team_rating, pt.Duration AS duration
    FROM Tbl_ProjectTeam pt
    LEFT JOIN Tbl_Team t ON t.TeamCode = pt.TeamCode
    WHERE pt.ProjectCode = :ProjectCode
    ORDER BY pt.TeamCode
"""

GET_TEAMS_BY_PROJECT = """
    SELECT t.TeamId AS team_id, t.TeamCode AS team_code, t.TeamName AS team_name
    FROM Tbl_Team t
    INNER JOIN Tbl_ProjectTeam pt ON pt.TeamCode = t.TeamCode
    WHERE pt.ProjectCode = :ProjectCode
    ORDER BY t.TeamName
"""

GET_ALL_TEAMS = "SELECT TeamId AS team_id, TeamCode AS team_code, TeamName AS team_name FROM Tbl_Team ORDER BY TeamName"

PROJECT_TEAM_EXISTS = """
    SELECT 1 FROM Tbl_ProjectTeam WHERE ProjectCode = :ProjectCode AND TeamCode = :TeamCode
"""

DELETE_PROJECT_TEAMS = "DELETE FROM Tbl_ProjectTeam WHERE ProjectCode = :ProjectCode"

DELETE_PROJECT_TEAM = "DELETE FROM Tbl_ProjectTeam WHERE ProjectCode = :ProjectCode AND TeamCode = :TeamCode"

TEAM_TECH_STACK_EXISTS = """
    SELECT 1 FROM Tbl_TeamTechStack WHERE TeamCode = :TeamCode AND TechStackCode = :TechStackCode
"""
