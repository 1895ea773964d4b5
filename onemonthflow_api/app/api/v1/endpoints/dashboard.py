"""Dashboard endpoint for API v1."""

from fastapi import APIRouter, Depends, Query

from onemonthflow_api.app.api.deps import get_sql, unwrap
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.schemas.dashboard import DashboardSummary
from onemonthflow_api.app.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/", response_model=DashboardSummary)
async def get_dashboard(
    days: int = Query(30, ge=0, description="Window for projects ending soon"),
    latest: int = Query(5, ge=1, le=100, description="Number of recent activities"),
    sql: SqlService = Depends(get_sql),
) -> DashboardSummary:
    return unwrap(await DashboardService(sql).get_summary(days=days, latest=latest))
