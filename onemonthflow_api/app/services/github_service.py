"""GitHub REST API client.

This module wraps the handful of GitHub endpoints the importer needs
using the ``requests`` library:

* :meth:`GitHubService.get_organization_repositories` pages through
  ``GET /orgs/{org}/repos`` and returns everything it managed to fetch,
* :meth:`GitHubService.get_repository` fetches a single repository.

Paging stops at the first short page.  A 404 (unknown organisation), a
403 (rate limit or missing permission) or any other error also ends
paging, but the repositories gathered so far are still returned; no
request is retried.  Successive page requests are separated by
``page_delay`` seconds so that unauthenticated imports stay inside the
rate limit.

An optional token is sent as ``Authorization: Bearer <token>``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests
from pydantic import ValidationError

from onemonthflow_api.app.schemas.github import GitHubRepository


logger = logging.getLogger(__name__)

USER_AGENT = "OneMonthFlow/1.0"
ACCEPT = "application/vnd.github.v3+json"

# Reasons ``get_organization_repositories`` stopped paging.
EXHAUSTED = "exhausted"
NOT_FOUND = "not_found"
FORBIDDEN = "forbidden"
ERROR = "error"


@dataclass
class RepositoryFetch:
    """Everything fetched for an organisation and why paging ended.

    Attributes:
        repositories: Repositories from every page read before stopping.
        stop_reason: One of ``exhausted``, ``not_found``, ``forbidden``
            or ``error``.
        error: Human readable description when ``stop_reason`` is not
            ``exhausted``.
        pages: Number of pages requested.
    """

    repositories: List[GitHubRepository] = field(default_factory=list)
    stop_reason: str = EXHAUSTED
    error: Optional[str] = None
    pages: int = 0


class GitHubService:
    """Minimal GitHub API client."""

    def __init__(
        self,
        *,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        session: Optional[requests.Session] = None,
        page_delay: float = 1.0,
        per_page: int = 100,
        timeout: float = 15,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialise the client.

        Args:
            token: Optional personal access token.
            base_url: API root; only changed for GitHub Enterprise.
            session: Optional requests session, created when omitted.
            page_delay: Seconds to wait between two page requests.
            per_page: Page size requested from the API (maximum 100).
            timeout: Per-request timeout in seconds.
            sleep: Function used to wait between pages.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.page_delay = page_delay
        self.per_page = per_page
        self.timeout = timeout
        self._sleep = sleep
        self.session.headers.update({"User-Agent": USER_AGENT, "Accept": ACCEPT})
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("Sending GET request to %s params=%s", url, params)
        return self.session.get(url, params=params, timeout=self.timeout)

    def get_organization_repositories(self, organization: str) -> RepositoryFetch:
        """Fetch every repository of ``organization``, newest update first."""
        fetch = RepositoryFetch()
        page = 1
        while True:
            params = {"per_page": self.per_page, "page": page, "sort": "updated", "direction": "desc"}
            fetch.pages = page
            try:
                response = self._get(f"/orgs/{organization}/repos", params=params)
            except requests.RequestException as exc:
                logger.error("Request for page %s of %s failed: %s", page, organization, exc)
                fetch.stop_reason, fetch.error = ERROR, f"Request failed on page {page}: {exc}"
                return fetch

            if response.status_code == 404:
                logger.warning("Organization %s not found", organization)
                fetch.stop_reason, fetch.error = NOT_FOUND, f"Organization '{organization}' not found."
                return fetch
            if response.status_code == 403:
                remaining = response.headers.get("X-RateLimit-Remaining")
                logger.warning("GitHub returned 403 on page %s (rate limit remaining: %s)", page, remaining)
                fetch.stop_reason = FORBIDDEN
                fetch.error = f"GitHub API rate limit exceeded or access forbidden (page {page})."
                return fetch
            if not response.ok:
                logger.error("GitHub returned %s on page %s", response.status_code, page)
                fetch.stop_reason = ERROR
                fetch.error = f"GitHub API returned status {response.status_code} on page {page}."
                return fetch

            try:
                batch = response.json()
            except ValueError:
                batch = None
            if not isinstance(batch, list):
                fetch.stop_reason, fetch.error = ERROR, f"Unexpected response body on page {page}."
                return fetch

            for item in batch:
                try:
                    fetch.repositories.append(GitHubRepository.model_validate(item))
                except ValidationError as exc:
                    logger.warning("Skipping malformed repository entry on page %s: %s", page, exc)
            logger.info("Fetched %d repositories from page %s", len(batch), page)

            if len(batch) < self.per_page:
                return fetch
            page += 1
            if self.page_delay:
                self._sleep(self.page_delay)

    def get_repository(self, owner: str, repo: str) -> Tuple[Optional[GitHubRepository], Optional[str]]:
        """Fetch one repository.

        Returns:
            A tuple ``(repository, error)``; exactly one of them is set.
        """
        try:
            response = self._get(f"/repos/{owner}/{repo}")
        except requests.RequestException as exc:
            logger.error("Request for %s/%s failed: %s", owner, repo, exc)
            return None, str(exc)
        if response.status_code == 404:
            return None, f"Repository '{owner}/{repo}' not found."
        if not response.ok:
            return None, f"GitHub API returned status {response.status_code}."
        try:
            return GitHubRepository.model_validate(response.json()), None
        except (ValueError, ValidationError) as exc:
            return None, f"Unexpected response body: {exc}"
