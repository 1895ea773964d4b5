"""
GitHub import endpoint.

The request waits for the whole import, which may take a while for large
organisations since pages are fetched one after another with a delay in
between.  Fetching happens on a worker thread so other requests keep being
served.
"""

from fastapi import APIRouter, Depends

from onemonthflow_api.app.api.deps import get_github_client, get_settings, get_sql, unwrap
from onemonthflow_api.app.core.config import Settings
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.schemas.github import ImportRequest, ImportResult
from onemonthflow_api.app.services.github_service import GitHubService
from onemonthflow_api.app.services.import_service import GitHubImportService

router = APIRouter()


@router.post("/github", response_model=ImportResult)
async def import_github_organization(
    body: ImportRequest,
    sql: SqlService = Depends(get_sql),
    settings: Settings = Depends(get_settings),
    client: GitHubService = Depends(get_github_client),
) -> ImportResult:
    organization = body.organization or settings.github_organization
    return unwrap(await GitHubImportService(sql, client).import_organization(organization))
