#!/usr/bin/env python3
"""
Import the repositories of a GitHub organisation as OneMonthFlow projects.

Usage:
    onemonthflow-import one-project-one-month --token ghp_xxx --yes
    onemonthflow-import --org one-project-one-month --database ./onemonthflow.db

Without an organisation argument the configured ``GITHUB_ORGANIZATION``
is used.  Without ``--yes`` the script asks for confirmation before
contacting GitHub.  The exit code is 0 when the import ran (even if
some repositories failed) and 1 otherwise.
"""

import argparse
import asyncio
import sys
from typing import Callable, List, Optional

from onemonthflow_api.app.core.config import ConfigurationError, load_settings
from onemonthflow_api.app.core.db import SqlService, init_db
from onemonthflow_api.app.core.logging_config import setup_logging
from onemonthflow_api.app.services.github_service import GitHubService
from onemonthflow_api.app.services.import_service import GitHubImportService


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Import GitHub repositories as projects.")
    ap.add_argument("organization", nargs="?", help="GitHub organisation (defaults to GITHUB_ORGANIZATION)")
    ap.add_argument("--org", help="Same as the positional organisation argument")
    ap.add_argument("--token", help="GitHub personal access token (overrides GITHUB_TOKEN)")
    ap.add_argument("--database", help="SQLite database path (overrides DATABASE_URL)")
    ap.add_argument("--config", help="Path to an appsettings.json file")
    ap.add_argument("--log-level", help="Logging level, e.g. DEBUG")
    ap.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    return ap


def confirm(organization: str, input_func: Callable[[str], str] = input) -> bool:
    while True:
        answer = input_func(f"Import all repositories from '{organization}'? (y/n): ").strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        print("Please answer 'y' or 'n'.")


def main(argv: Optional[List[str]] = None, input_func: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config).override(
            database_url=args.database,
            github_organization=args.org or args.organization,
            github_token=args.token,
            log_level=args.log_level,
        )
        settings.validate()
    except ConfigurationError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level, settings.log_file)
    organization = settings.github_organization
    if not args.yes and not confirm(organization, input_func):
        print("Import cancelled.")
        return 0

    sql = SqlService(settings.database_url)
    init_db(sql)
    client = GitHubService(
        token=settings.github_token,
        base_url=settings.github_api_url,
        page_delay=settings.import_page_delay,
    )
    print(f"Fetching repositories from '{organization}'...")
    result = asyncio.run(GitHubImportService(sql, client).import_organization(organization))
    if not result.is_success:
        print(f"[!] {result.message}", file=sys.stderr)
        return 1

    summary = result.data
    print(f"Repositories found:  {summary.total_repositories}")
    print(f"Imported:            {summary.imported}")
    print(f"Already existing:    {summary.skipped_existing}")
    print(f"Archived (skipped):  {summary.skipped_archived}")
    print(f"Failed:              {summary.failed}")
    if summary.errors:
        print("Errors:")
        for error in summary.errors:
            print(f"  - {error}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
