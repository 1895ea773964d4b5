"""
Shared FastAPI dependencies.

Services return ``Result`` values; :func:`unwrap` turns a non-success
result into an ``HTTPException`` with the matching status code so that
endpoint bodies stay one line long.
"""

from typing import TypeVar

from fastapi import HTTPException, Request, status

from onemonthflow_api.app.core.config import Settings
from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.core.result import ErrorKind, Result
from onemonthflow_api.app.services.github_service import GitHubService


T = TypeVar("T")

ERROR_STATUS = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: Result[T]) -> T:
    if result.is_success:
        return result.data
    raise HTTPException(status_code=ERROR_STATUS[result.error_kind], detail=result.message)


def get_sql(request: Request) -> SqlService:
    return request.app.state.sql


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_github_client(request: Request) -> GitHubService:
    settings: Settings = request.app.state.settings
    return GitHubService(
        token=settings.github_token,
        base_url=settings.github_api_url,
        page_delay=settings.import_page_delay,
    )
