"""
Plumbing shared by the feature services.

Services hold a :class:`SqlService` and run their statements through
it.  Statements that must succeed or fail together go through
``self.sql.transaction()``.
"""

import uuid
from typing import Any, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from onemonthflow_api.app.core.db import SqlService
from onemonthflow_api.app.core.pagination import ListQuery, PageRequest, QueryValidationError
from onemonthflow_api.app.core.result import Result
from onemonthflow_api.app.schemas.common import Page


M = TypeVar("M", bound=BaseModel)


def new_id() -> str:
    """Return a new application-generated row identifier."""
    return str(uuid.uuid4())


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def clean_codes(codes: Sequence[Optional[str]]) -> list[str]:
    """Trim, drop blanks and de-duplicate while keeping the input order."""
    seen: list[str] = []
    for code in codes:
        if is_blank(code):
            continue
        code = code.strip()
        if code not in seen:
            seen.append(code)
    return seen


class BaseService:
    def __init__(self, sql: SqlService) -> None:
        self.sql = sql

    def _paged(
        self,
        query: ListQuery,
        model: Type[M],
        request: PageRequest,
        conditions: Sequence[str] = (),
        params: Optional[Mapping[str, Any]] = None,
    ) -> Result[Page[M]]:
        """Run the count and page statements for ``query``.

        Returns a ``ValidationError`` result for a bad page request or a
        column outside the allow-lists.
        """
        try:
            built = query.build(request, conditions, params)
        except QueryValidationError as exc:
            return Result.validation_error(str(exc))
        total = self.sql.scalar(built.count_sql, built.count_params)
        rows = self.sql.query(built.sql, built.params)
        page = Page[model](
            items=[model(**dict(row)) for row in rows],
            total_count=total,
            page=request.page,
            page_size=request.page_size,
        )
        return Result.success(page)
