import asyncio
import datetime as dt
import threading

import requests

from onemonthflow_api.app.core.result import ErrorKind
from onemonthflow_api.app.schemas.github import GitHubRepository
from onemonthflow_api.app.schemas.project import ProjectRequest
from onemonthflow_api.app.services.github_service import (
    ERROR,
    EXHAUSTED,
    FORBIDDEN,
    NOT_FOUND,
    GitHubService,
    RepositoryFetch,
)
from onemonthflow_api.app.services.import_service import (
    GitHubImportService,
    determine_status,
    format_project_name,
    generate_project_code,
    map_tech_stacks,
)
from onemonthflow_api.app.services.project_service import ProjectService
from onemonthflow_api.app.services.project_tech_stack_service import ProjectTechStackService


NOW = dt.datetime(2024, 6, 1, tzinfo=dt.timezone.utc)


def repo(repo_id, name, **extra):
    data = {"id": repo_id, "name": name, "full_name": f"org/{name}", "html_url": f"https://github.com/org/{name}"}
    data.update(extra)
    return data


class FakeResponse:
    def __init__(self, status_code, payload=None, headers=None):
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.headers = {}
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


# -- GitHub client ---------------------------------------------------------

def make_client(session, sleeps=None):
    return GitHubService(
        token="secret",
        session=session,
        per_page=2,
        page_delay=0.5,
        sleep=(sleeps.append if sleeps is not None else lambda seconds: None),
    )


def test_client_sets_headers():
    session = FakeSession()
    make_client(session)
    assert session.headers["Authorization"] == "Bearer secret"
    assert session.headers["User-Agent"] == "OneMonthFlow/1.0"


def test_pages_until_a_short_page():
    sleeps = []
    session = FakeSession(
        FakeResponse(200, [repo(1, "a"), repo(2, "b")]),
        FakeResponse(200, [repo(3, "c")]),
    )
    fetch = make_client(session, sleeps).get_organization_repositories("org")
    assert [r.name for r in fetch.repositories] == ["a", "b", "c"]
    assert fetch.stop_reason == EXHAUSTED
    assert fetch.pages == 2
    assert sleeps == [0.5]
    url, params, timeout = session.calls[1]
    assert url == "https://api.github.com/orgs/org/repos"
    assert params["page"] == 2
    assert timeout == 15


def test_forbidden_page_keeps_earlier_results():
    session = FakeSession(
        FakeResponse(200, [repo(1, "a"), repo(2, "b")]),
        FakeResponse(403, {"message": "rate limited"}, {"X-RateLimit-Remaining": "0"}),
    )
    fetch = make_client(session).get_organization_repositories("org")
    assert len(fetch.repositories) == 2
    assert fetch.stop_reason == FORBIDDEN
    assert "page 2" in fetch.error


def test_unknown_organization():
    fetch = make_client(FakeSession(FakeResponse(404, {}))).get_organization_repositories("nobody")
    assert fetch.repositories == []
    assert fetch.stop_reason == NOT_FOUND


def test_network_error_and_bad_body():
    fetch = make_client(FakeSession(requests.ConnectionError("down"))).get_organization_repositories("org")
    assert fetch.stop_reason == ERROR
    fetch = make_client(FakeSession(FakeResponse(200, {"not": "a list"}))).get_organization_repositories("org")
    assert fetch.stop_reason == ERROR


def test_get_repository():
    found, error = make_client(FakeSession(FakeResponse(200, repo(9, "solo")))).get_repository("org", "solo")
    assert found.full_name == "org/solo"
    assert error is None
    missing, error = make_client(FakeSession(FakeResponse(404, {}))).get_repository("org", "gone")
    assert missing is None
    assert "not found" in error


# -- mapping helpers -------------------------------------------------------

def test_project_code_and_name():
    assert generate_project_code("my-cool.app") == "PROJ_MY_COOL_APP"
    assert generate_project_code("proj-x") == "PROJ_X"
    assert len(generate_project_code("x" * 80)) == 50
    assert format_project_name("my-cool_app") == "My Cool App"


def test_determine_status():
    def at(days):
        return GitHubRepository.model_validate(repo(1, "a", pushed_at=(NOW - dt.timedelta(days=days)).isoformat()))

    assert determine_status(at(10), NOW) == "Active"
    assert determine_status(at(60), NOW) == "In Progress"
    assert determine_status(at(200), NOW) == "Completed"
    assert determine_status(GitHubRepository.model_validate(repo(1, "a", archived=True)), NOW) == "Archived"


def test_map_tech_stacks():
    repository = GitHubRepository.model_validate(
        repo(1, "a", language="Python", topics=["react-native", "nodejs", "react"])
    )
    assert map_tech_stacks(repository) == ["TS003", "TS005", "TS008"]
    assert map_tech_stacks(GitHubRepository.model_validate(repo(2, "b", language="COBOL"))) == []


# -- import ----------------------------------------------------------------

class FakeClient:
    def __init__(self, fetch):
        self.fetch = fetch
        self.requested = []

    def get_organization_repositories(self, organization):
        self.requested.append(organization)
        return self.fetch


def fetch_of(*items, **kwargs):
    return RepositoryFetch(repositories=[GitHubRepository.model_validate(item) for item in items], **kwargs)


def test_import_organization(sql):
    asyncio.run(ProjectService(sql).create_project(ProjectRequest(project_code="PROJ_OLD_ONE", project_name="Old")))
    client = FakeClient(
        fetch_of(
            repo(1, "flow-api", language="Python", created_at="2024-01-01T00:00:00Z",
                 updated_at="2024-05-20T00:00:00Z", pushed_at="2024-05-25T00:00:00Z"),
            repo(2, "legacy", archived=True),
            repo(3, "old-one", language="Go"),
        )
    )
    result = asyncio.run(GitHubImportService(sql, client, clock=lambda: NOW).import_organization(" org "))
    assert client.requested == ["org"]
    summary = result.data
    assert summary.total_repositories == 3
    assert summary.imported == 1
    assert summary.skipped_archived == 1
    assert summary.skipped_existing == 1
    assert summary.failed == 0
    assert summary.imported_projects == ["PROJ_FLOW_API"]

    project = asyncio.run(ProjectService(sql).get_project_by_code("PROJ_FLOW_API")).data
    assert project.project_name == "Flow Api"
    assert project.status == "Active"
    assert project.start_date == dt.date(2024, 1, 1)
    assert project.project_description == "Repository: org/flow-api"
    stacks = asyncio.run(ProjectTechStackService(sql).get_paged_by_project("PROJ_FLOW_API")).data
    assert [s.tech_stack_code for s in stacks.items] == ["TS003"]


def test_import_twice_skips_everything(sql):
    client = FakeClient(fetch_of(repo(1, "flow-api")))
    service = GitHubImportService(sql, client, clock=lambda: NOW)
    asyncio.run(service.import_organization("org"))
    again = asyncio.run(service.import_organization("org")).data
    assert again.imported == 0
    assert again.skipped_existing == 1


def test_import_keeps_partial_results(sql):
    client = FakeClient(fetch_of(repo(1, "first"), stop_reason=FORBIDDEN, error="GitHub API rate limit exceeded"))
    summary = asyncio.run(GitHubImportService(sql, client, clock=lambda: NOW).import_organization("org")).data
    assert summary.imported == 1
    assert summary.stop_reason == FORBIDDEN
    assert summary.errors == ["GitHub API rate limit exceeded"]


def test_import_unknown_organization(sql):
    client = FakeClient(RepositoryFetch(stop_reason=NOT_FOUND, error="Organization 'x' not found."))
    result = asyncio.run(GitHubImportService(sql, client).import_organization("x"))
    assert result.error_kind == ErrorKind.NOT_FOUND
    blank = asyncio.run(GitHubImportService(sql, client).import_organization("  "))
    assert blank.error_kind == ErrorKind.VALIDATION


def test_repositories_with_the_same_code_in_one_batch(sql):
    client = FakeClient(fetch_of(repo(1, "my-app"), repo(2, "my.app")))
    summary = asyncio.run(GitHubImportService(sql, client, clock=lambda: NOW).import_organization("org")).data
    assert summary.imported == 1
    assert summary.skipped_existing == 1
    assert summary.failed == 0
    assert summary.imported_projects == ["PROJ_MY_APP"]


def test_repositories_are_fetched_off_the_event_loop(sql):
    class ThreadRecordingClient(FakeClient):
        def get_organization_repositories(self, organization):
            self.thread = threading.get_ident()
            return super().get_organization_repositories(organization)

    client = ThreadRecordingClient(fetch_of(repo(1, "flow-api")))
    asyncio.run(GitHubImportService(sql, client, clock=lambda: NOW).import_organization("org"))
    assert client.thread != threading.get_ident()
