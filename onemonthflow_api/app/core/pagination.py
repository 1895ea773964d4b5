"""
Paginated, filtered and sorted list queries.

Filter and sort column names come from callers (query strings, CLI
prompts) and therefore cannot be trusted.  Each catalogue declares an
allow-list mapping public column names to SQL identifiers, and
:meth:`ListQuery.build` only ever interpolates identifiers taken from
that mapping.  Filter values are bound as parameters.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence


class QueryValidationError(ValueError):
    """Raised for page numbers or column names that cannot be used."""


def _normalise(name: str) -> str:
    return name.replace("_", "").replace(" ", "").lower()


def resolve_column(allowed: Mapping[str, str], name: Optional[str]) -> Optional[str]:
    """Map ``name`` through ``allowed``.

    Matching ignores case and underscores, so ``"project_name"`` and
    ``"ProjectName"`` resolve to the same column.  Returns ``None`` when
    ``name`` is not in the allow-list.
    """
    if not name:
        return None
    wanted = _normalise(name)
    for public, identifier in allowed.items():
        if _normalise(public) == wanted:
            return identifier
    return None


def like_pattern(value: str) -> str:
    """Wrap ``value`` for a ``LIKE ... ESCAPE '\\'`` substring match."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass
class PageRequest:
    page: int = 1
    page_size: int = 10
    filter_column: Optional[str] = None
    filter_value: Optional[str] = None
    sort_column: Optional[str] = None
    sort_descending: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def validate(self) -> None:
        if self.page < 1 or self.page_size < 1:
            raise QueryValidationError("Page and PageSize must be greater than 0.")


@dataclass(frozen=True)
class BuiltQuery:
    sql: str
    count_sql: str
    params: Dict[str, Any]
    count_params: Dict[str, Any]


@dataclass(frozen=True)
class ListQuery:
    """Template for one entity's list statement.

    ``select_sql`` and ``count_sql`` must not contain a ``WHERE`` clause;
    fixed conditions are passed to :meth:`build` instead.
    """

    select_sql: str
    count_sql: str
    filter_columns: Mapping[str, str]
    sort_columns: Mapping[str, str]
    default_sort: str
    # Appended to every ORDER BY so that paging is deterministic.
    tiebreaker: Optional[str] = None
    conditions: Sequence[str] = field(default_factory=tuple)

    def build(
        self,
        request: PageRequest,
        conditions: Sequence[str] = (),
        params: Optional[Mapping[str, Any]] = None,
    ) -> BuiltQuery:
        request.validate()
        where = list(self.conditions) + list(conditions)
        bound: Dict[str, Any] = dict(params or {})

        filter_sql = None
        if request.filter_column:
            filter_sql = resolve_column(self.filter_columns, request.filter_column)
            if filter_sql is None:
                raise QueryValidationError(f"Invalid filter column: {request.filter_column}")

        if request.filter_value:
            if filter_sql:
                where.append(f"{filter_sql} LIKE :FilterValue ESCAPE '\\'")
            else:
                # No column given: search every filterable column.
                clauses = [f"{column} LIKE :FilterValue ESCAPE '\\'" for column in self.filter_columns.values()]
                where.append("(" + " OR ".join(clauses) + ")")
            bound["FilterValue"] = like_pattern(request.filter_value)

        if request.sort_column:
            sort = resolve_column(self.sort_columns, request.sort_column)
            if sort is None:
                raise QueryValidationError(f"Invalid sort column: {request.sort_column}")
        else:
            sort = self.default_sort
        direction = "DESC" if request.sort_descending else "ASC"
        order_by = f"{sort} {direction}"
        if self.tiebreaker and self.tiebreaker != sort:
            order_by += f", {self.tiebreaker} ASC"

        where_sql = f" WHERE {' AND '.join(where)}" if where else ""
        sql = f"{self.select_sql}{where_sql} ORDER BY {order_by} LIMIT :Limit OFFSET :Offset"
        count_sql = f"{self.count_sql}{where_sql}"
        count_params = dict(bound)
        bound.update(Limit=request.page_size, Offset=request.offset)
        return BuiltQuery(sql=sql, count_sql=count_sql, params=bound, count_params=count_params)
