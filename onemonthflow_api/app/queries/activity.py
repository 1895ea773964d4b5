"""SQL for ``Tbl_ProjectTeamActivity``."""

from ..core.pagination import ListQuery


ACTIVITY_COLUMNS = """
    a.ProjectTeamActivityId AS project_team_activity_id, a.ProjectCode AS project_code,
    a.TeamCode AS team_code, a.UserCode AS user_code, a.TechStackCode AS tech_stack_code,
    a.ActivityDate AS activity_date, a.Tasks AS tasks,
    p.ProjectName AS project_name, t.TeamName AS team_name, u.UserName AS user_name
"""

ACTIVITY_FROM = """
    FROM Tbl_ProjectTeamActivity a
    LEFT JOIN Tbl_Project p ON p.ProjectCode = a.ProjectCode
    LEFT JOIN Tbl_Team t ON t.TeamCode = a.TeamCode
    LEFT JOIN Tbl_User u ON u.UserCode = a.UserCode
"""

INSERT_ACTIVITY = """
    INSERT INTO Tbl_ProjectTeamActivity
        (ProjectTeamActivityId, ProjectCode, TeamCode, UserCode, TechStackCode, ActivityDate, Tasks)
    VALUES (:ProjectTeamActivityId, :ProjectCode, :TeamCode, :UserCode, :TechStackCode, :ActivityDate, :Tasks)
"""

UPDATE_ACTIVITY = """
    UPDATE Tbl_ProjectTeamActivity
    SET ProjectCode = :ProjectCode, TeamCode = :TeamCode, UserCode = :UserCode,
        TechStackCode = :TechStackCode, ActivityDate = :ActivityDate, Tasks = :Tasks
    WHERE ProjectTeamActivityId = :ProjectTeamActivityId
"""

DELETE_ACTIVITY = "DELETE FROM Tbl_ProjectTeamActivity WHERE ProjectTeamActivityId = :ProjectTeamActivityId"

GET_ACTIVITY_BY_ID = (
    f"SELECT {ACTIVITY_COLUMNS} {ACTIVITY_FROM} WHERE a.ProjectTeamActivityId = :ProjectTeamActivityId"
)

LIST_ACTIVITIES = ListQuery(
    select_sql=f"SELECT {ACTIVITY_COLUMNS} {ACTIVITY_FROM}",
    count_sql=f"SELECT COUNT(*) {ACTIVITY_FROM}",
    filter_columns={"Tasks": "a.Tasks", "ProjectName": "p.ProjectName", "TeamName": "t.TeamName"},
    sort_columns={"ActivityDate": "a.ActivityDate", "ProjectCode": "a.ProjectCode", "TeamCode": "a.TeamCode"},
    default_sort="a.ActivityDate",
    tiebreaker="a.ProjectTeamActivityId",
)

GET_PROJECTS_BY_TEAM = """
    SELECT p.ProjectId AS project_id, p.ProjectCode AS project_code, p.ProjectName AS project_name,
           p.RepoUrl AS repo_url, p.StartDate AS start_date, p.EndDate AS end_date,
           p.ProjectDescription AS project_description, p.Status AS status
    FROM Tbl_Project p
    INNER JOIN Tbl_ProjectTeam pt ON pt.ProjectCode = p.ProjectCode
    WHERE pt.TeamCode = :TeamCode
    ORDER BY p.ProjectName
"""
