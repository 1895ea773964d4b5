import pytest

from onemonthflow_api.app.core.pagination import (
    PageRequest,
    QueryValidationError,
    like_pattern,
    resolve_column,
)
from onemonthflow_api.app.queries.project import LIST_PROJECTS
from onemonthflow_api.app.schemas.common import Page


def test_resolve_column_ignores_case_and_underscores():
    allowed = {"ProjectName": "p.ProjectName"}
    assert resolve_column(allowed, "projectname") == "p.ProjectName"
    assert resolve_column(allowed, "project_name") == "p.ProjectName"
    assert resolve_column(allowed, "ProjectId") is None
    assert resolve_column(allowed, None) is None


def test_like_pattern_escapes_wildcards():
    assert like_pattern("50%_off") == "%50\\%\\_off%"


def test_build_uses_default_sort_and_tiebreaker():
    built = LIST_PROJECTS.build(PageRequest(page=3, page_size=5))
    assert built.sql.endswith("ORDER BY p.ProjectName ASC, p.ProjectId ASC LIMIT :Limit OFFSET :Offset")
    assert built.params == {"Limit": 5, "Offset": 10}
    assert built.count_params == {}
    assert "WHERE" not in built.count_sql


def test_build_with_filter_column_and_descending_sort():
    request = PageRequest(filter_column="status", filter_value="Act", sort_column="StartDate", sort_descending=True)
    built = LIST_PROJECTS.build(request)
    assert "WHERE p.Status LIKE :FilterValue" in built.sql
    assert "ORDER BY p.StartDate DESC, p.ProjectId ASC" in built.sql
    assert built.count_params == {"FilterValue": "%Act%"}


def test_filter_value_without_column_searches_every_filter_column():
    built = LIST_PROJECTS.build(PageRequest(filter_value="flow"))
    assert "p.ProjectName LIKE :FilterValue" in built.sql
    assert " OR p.ProjectCode LIKE :FilterValue" in built.sql


def test_unknown_columns_are_rejected():
    with pytest.raises(QueryValidationError):
        LIST_PROJECTS.build(PageRequest(filter_column="1=1; DROP TABLE Tbl_Project", filter_value="x"))
    with pytest.raises(QueryValidationError):
        LIST_PROJECTS.build(PageRequest(sort_column="ProjectId"))
    with pytest.raises(QueryValidationError, match="Invalid filter column: Password"):
        LIST_PROJECTS.build(PageRequest(filter_column="Password"))


def test_non_positive_page_is_rejected():
    with pytest.raises(QueryValidationError, match="Page and PageSize must be greater than 0."):
        LIST_PROJECTS.build(PageRequest(page=0))
    with pytest.raises(QueryValidationError):
        LIST_PROJECTS.build(PageRequest(page_size=0))


def test_page_navigation_fields():
    page = Page[int](items=[1, 2], total_count=25, page=1, page_size=10)
    assert page.total_pages == 3
    assert page.has_next_page
    assert not page.has_previous_page

    last = Page[int](items=[], total_count=25, page=3, page_size=10)
    assert not last.has_next_page
    assert last.has_previous_page

    empty = Page[int](total_count=0)
    assert empty.total_pages == 0
    assert not empty.has_next_page
