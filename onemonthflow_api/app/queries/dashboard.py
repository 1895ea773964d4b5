"""Aggregate queries for the dashboard."""

from .activity import ACTIVITY_COLUMNS, ACTIVITY_FROM
from .project import PROJECT_COLUMNS


COUNT_PROJECTS = "SELECT COUNT(*) FROM Tbl_Project"

COUNT_ACTIVE_PROJECTS = "SELECT COUNT(*) FROM Tbl_Project WHERE Status = 'Active'"

COUNT_USERS = "SELECT COUNT(*) FROM Tbl_User"

COUNT_TEAMS = "SELECT COUNT(*) FROM Tbl_Team"

PROJECTS_ENDING_SOON = f"""
    SELECT {PROJECT_COLUMNS} FROM Tbl_Project p
    WHERE p.EndDate IS NOT NULL AND p.EndDate >= :Today AND p.EndDate <= :Until
    ORDER BY p.EndDate
"""

LATEST_ACTIVITIES = f"""
    SELECT {ACTIVITY_COLUMNS} {ACTIVITY_FROM}
    ORDER BY a.ActivityDate DESC, a.ProjectTeamActivityId
    LIMIT :Count
"""
