#!/usr/bin/env python3
"""
Interactive console for OneMonthFlow.

Usage:
    onemonthflow --database ./onemonthflow.db

A numbered main menu leads to Projects, Teams, Users and Activities;
each of those offers Create, List, View, Update and Delete.  Prompts
for required fields are repeated until a value is entered, and dates
must be typed as YYYY-MM-DD.  On update a blank answer keeps the
current value and "-" clears an optional one.  Service errors are
printed and the menu loop continues.
"""

import argparse
import asyncio
import datetime as dt
import logging
import sys
from typing import Any, Callable, Coroutine, List, Optional

from onemonthflow_api.app.core.config import ConfigurationError, load_settings
from onemonthflow_api.app.core.db import SqlService, init_db
from onemonthflow_api.app.core.logging_config import setup_logging
from onemonthflow_api.app.core.result import Result
from onemonthflow_api.app.schemas.activity import ActivityRequest
from onemonthflow_api.app.schemas.project import ProjectRequest, ProjectTeamRequest
from onemonthflow_api.app.schemas.team import TeamRequest
from onemonthflow_api.app.schemas.user import UserRequest
from onemonthflow_api.app.services.activity_service import ActivityService
from onemonthflow_api.app.services.project_service import ProjectService
from onemonthflow_api.app.services.team_service import TeamService
from onemonthflow_api.app.services.user_service import UserService


logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
PAGE_SIZE = 20
# Typed at an optional prompt to empty a field that has a current value.
CLEAR = "-"

MAIN_MENU = ("Projects", "Teams", "Users", "Activities", "Exit")
ENTITY_MENU = ("Create", "List", "View", "Update", "Delete", "Back")


def split_codes(text: Optional[str]) -> List[str]:
    return [part.strip() for part in (text or "").split(",") if part.strip()]


def project_team_request(team_code: str, stored=None) -> ProjectTeamRequest:
    # Updating a project rewrites its team rows; keep what a kept team already had.
    if stored is None:
        return ProjectTeamRequest(team_code=team_code)
    return ProjectTeamRequest(
        team_code=team_code, project_team_rating=stored.project_team_rating, duration=stored.duration
    )


class ConsoleApp:
    """Menu loop over the feature services.

    ``input_func`` defaults to :func:`input`; tests pass a scripted one.
    """

    def __init__(self, sql: SqlService, input_func: Optional[Callable[[str], str]] = None) -> None:
        self.projects = ProjectService(sql)
        self.teams = TeamService(sql)
        self.users = UserService(sql)
        self.activities = ActivityService(sql)
        self._input = input_func or input

    # -- prompting ---------------------------------------------------------

    def get_menu_choice(self, options: tuple, title: str) -> int:
        print(f"\n=== {title} ===")
        for number, label in enumerate(options, start=1):
            print(f"{number}. {label}")
        while True:
            raw = self._input("Select an option: ").strip()
            if raw.isdigit() and 1 <= int(raw) <= len(options):
                return int(raw)
            print(f"Invalid choice. Please enter a number between 1 and {len(options)}.")

    def get_input(self, prompt: str, required: bool = False, default: Optional[str] = None) -> Optional[str]:
        suffix = f" [{default}]" if default else ""
        while True:
            value = self._input(f"{prompt}{suffix}: ").strip()
            if value == CLEAR and not required:
                return None
            if not value and default is not None:
                return default
            if value or not required:
                return value or None
            print("This field is required!")

    def get_date_input(
        self, prompt: str, required: bool = False, default: Optional[dt.date] = None
    ) -> Optional[dt.date]:
        suffix = f" [{default.isoformat()}]" if default else ""
        while True:
            value = self._input(f"{prompt} (YYYY-MM-DD){suffix}: ").strip()
            if value == CLEAR and not required:
                return None
            if not value:
                if default is not None:
                    return default
                if not required:
                    return None
                print("This field is required!")
                continue
            try:
                return dt.datetime.strptime(value, DATE_FORMAT).date()
            except ValueError:
                print("Invalid date format. Please try again.")

    def get_page(self) -> int:
        raw = self.get_input("Page", default="1")
        return int(raw) if raw and raw.isdigit() and int(raw) > 0 else 1

    # -- output ------------------------------------------------------------

    @staticmethod
    def call(coroutine: Coroutine[Any, Any, Result[Any]]) -> Optional[Any]:
        """Run a service call; print its message or error and return the data."""
        result = asyncio.run(coroutine)
        if not result.is_success:
            print(f"Error: {result.message}")
            return None
        if result.message:
            print(result.message)
        return result.data if result.data is not None else True

    @staticmethod
    def show_page(page, render: Callable[[Any], str]) -> None:
        if not page.items:
            print("No records found.")
        for item in page.items:
            print(render(item))
        print(f"Page {page.page} of {max(page.total_pages, 1)} ({page.total_count} total)")

    @staticmethod
    def show_fields(title: str, fields: List[tuple]) -> None:
        print(f"\n--- {title} ---")
        for label, value in fields:
            print(f"{label}: {value if value not in (None, '') else '-'}")

    # -- menus -------------------------------------------------------------

    def run(self) -> None:
        handlers = {1: self.project_menu, 2: self.team_menu, 3: self.user_menu, 4: self.activity_menu}
        try:
            while True:
                choice = self.get_menu_choice(MAIN_MENU, "OneMonthFlow")
                if choice == len(MAIN_MENU):
                    print("Goodbye!")
                    return
                handlers[choice]()
        except (EOFError, KeyboardInterrupt):
            print()

    def _entity_menu(self, title: str, actions: dict) -> None:
        while True:
            choice = self.get_menu_choice(ENTITY_MENU, title)
            if choice == len(ENTITY_MENU):
                return
            actions[choice]()

    def project_menu(self) -> None:
        self._entity_menu(
            "Projects",
            {
                1: self.create_project,
                2: self.list_projects,
                3: self.view_project,
                4: self.update_project,
                5: self.delete_project,
            },
        )

    def team_menu(self) -> None:
        self._entity_menu(
            "Teams",
            {1: self.create_team, 2: self.list_teams, 3: self.view_team, 4: self.update_team, 5: self.delete_team},
        )

    def user_menu(self) -> None:
        self._entity_menu(
            "Users",
            {1: self.create_user, 2: self.list_users, 3: self.view_user, 4: self.update_user, 5: self.delete_user},
        )

    def activity_menu(self) -> None:
        self._entity_menu(
            "Activities",
            {
                1: self.create_activity,
                2: self.list_activities,
                3: self.view_activity,
                4: self.update_activity,
                5: self.delete_activity,
            },
        )

    # -- projects ----------------------------------------------------------

    def _prompt_project(self, current=None) -> ProjectRequest:
        stored = {team.team_code: team for team in current.teams} if current else {}
        teams = ", ".join(stored) or None
        request = ProjectRequest(
            project_code=self.get_input("Project code", required=True, default=current and current.project_code),
            project_name=self.get_input("Project name", required=True, default=current and current.project_name),
            repo_url=self.get_input("Repository URL", default=current and current.repo_url),
            start_date=self.get_date_input("Start date", default=current and current.start_date),
            end_date=self.get_date_input("End date", default=current and current.end_date),
            project_description=self.get_input("Description", default=current and current.project_description),
            status=self.get_input("Status", default=current.status if current else "Active"),
            teams=[
                project_team_request(code, stored.get(code))
                for code in split_codes(self.get_input("Team codes (comma separated)", default=teams))
            ],
        )
        return request

    def create_project(self) -> None:
        self.call(self.projects.create_project(self._prompt_project()))

    def list_projects(self) -> None:
        search = self.get_input("Search (blank for all)")
        page = self.call(self.projects.list_projects(page=self.get_page(), page_size=PAGE_SIZE, filter_value=search))
        if page:
            self.show_page(page, lambda p: f"{p.project_id} | {p.project_code} | {p.project_name} | {p.status}")

    def view_project(self) -> None:
        project = self.call(self.projects.get_project_by_id(self.get_input("Project ID", required=True)))
        if not project:
            return
        self.show_fields(
            project.project_name,
            [
                ("ID", project.project_id),
                ("Code", project.project_code),
                ("Repository", project.repo_url),
                ("Start", project.start_date),
                ("End", project.end_date),
                ("Status", project.status),
                ("Description", project.project_description),
                ("Teams", ", ".join(team.team_code for team in project.teams)),
            ],
        )

    def update_project(self) -> None:
        project_id = self.get_input("Project ID", required=True)
        current = self.call(self.projects.get_project_by_id(project_id))
        if current:
            self.call(self.projects.update_project(project_id, self._prompt_project(current)))

    def delete_project(self) -> None:
        self.call(self.projects.delete_project(self.get_input("Project ID", required=True)))

    # -- teams -------------------------------------------------------------

    def create_team(self) -> None:
        request = TeamRequest(
            team_code=self.get_input("Team code", required=True),
            team_name=self.get_input("Team name", required=True),
            tech_stack_codes=split_codes(self.get_input("Tech stack codes (comma separated)")),
        )
        self.call(self.teams.create_team(request))

    def list_teams(self) -> None:
        search = self.get_input("Search (blank for all)")
        page = self.call(self.teams.list_teams(page=self.get_page(), page_size=PAGE_SIZE, filter_value=search))
        if page:
            self.show_page(page, lambda t: f"{t.team_id} | {t.team_code} | {t.team_name}")

    def view_team(self) -> None:
        team = self.call(self.teams.get_team_by_id(self.get_input("Team ID", required=True)))
        if team:
            self.show_fields(
                team.team_name,
                [
                    ("ID", team.team_id),
                    ("Code", team.team_code),
                    ("Tech stacks", ", ".join(team.tech_stack_codes)),
                    ("Members", ", ".join(user.user_name for user in team.users)),
                ],
            )

    def update_team(self) -> None:
        team_id = self.get_input("Team ID", required=True)
        current = self.call(self.teams.get_team_by_id(team_id))
        if not current:
            return
        request = TeamRequest(
            team_name=self.get_input("Team name", required=True, default=current.team_name),
            tech_stack_codes=split_codes(
                self.get_input("Tech stack codes (comma separated)", default=", ".join(current.tech_stack_codes))
            ),
        )
        self.call(self.teams.update_team(team_id, request))

    def delete_team(self) -> None:
        self.call(self.teams.delete_team(self.get_input("Team ID", required=True)))

    # -- users -------------------------------------------------------------

    def create_user(self) -> None:
        request = UserRequest(
            user_code=self.get_input("User code (blank to generate)"),
            user_name=self.get_input("User name", required=True),
            github_account_name=self.get_input("GitHub account"),
            nrc=self.get_input("NRC"),
            mobile_no=self.get_input("Mobile number"),
            tech_stack_codes=split_codes(self.get_input("Tech stack codes (comma separated)")),
        )
        self.call(self.users.create_user(request))

    def list_users(self) -> None:
        search = self.get_input("Search (blank for all)")
        page = self.call(self.users.list_users(page=self.get_page(), page_size=PAGE_SIZE, filter_value=search))
        if page:
            self.show_page(page, lambda u: f"{u.user_id} | {u.user_code} | {u.user_name} | {u.github_account_name or '-'}")

    def view_user(self) -> None:
        user = self.call(self.users.get_user_by_id(self.get_input("User ID", required=True)))
        if user:
            self.show_fields(
                user.user_name,
                [
                    ("ID", user.user_id),
                    ("Code", user.user_code),
                    ("GitHub", user.github_account_name),
                    ("NRC", user.nrc),
                    ("Mobile", user.mobile_no),
                    ("Tech stacks", ", ".join(stack.tech_stack_code for stack in user.tech_stacks)),
                ],
            )

    def update_user(self) -> None:
        user_id = self.get_input("User ID", required=True)
        current = self.call(self.users.get_user_by_id(user_id))
        if not current:
            return
        stacks = ", ".join(stack.tech_stack_code for stack in current.tech_stacks)
        request = UserRequest(
            user_name=self.get_input("User name", required=True, default=current.user_name),
            github_account_name=self.get_input("GitHub account", default=current.github_account_name),
            nrc=self.get_input("NRC", default=current.nrc),
            mobile_no=self.get_input("Mobile number", default=current.mobile_no),
            tech_stack_codes=split_codes(self.get_input("Tech stack codes (comma separated)", default=stacks)),
        )
        self.call(self.users.update_user(user_id, request))

    def delete_user(self) -> None:
        self.call(self.users.delete_user(self.get_input("User ID", required=True)))

    # -- activities --------------------------------------------------------

    def _prompt_activity(self, current=None) -> ActivityRequest:
        return ActivityRequest(
            project_code=self.get_input("Project code", required=True, default=current and current.project_code),
            team_code=self.get_input("Team code", required=True, default=current and current.team_code),
            user_code=self.get_input("User code", default=current and current.user_code),
            tech_stack_code=self.get_input("Tech stack code", default=current and current.tech_stack_code),
            activity_date=self.get_date_input("Activity date", required=True, default=current and current.activity_date),
            tasks=self.get_input("Tasks", required=True, default=current and current.tasks),
        )

    def create_activity(self) -> None:
        self.call(self.activities.add_activity(self._prompt_activity()))

    def list_activities(self) -> None:
        project_code = self.get_input("Project code (blank for all)")
        team_code = self.get_input("Team code (blank for all)")
        page = self.call(
            self.activities.list_activities(
                page=self.get_page(), page_size=PAGE_SIZE, team_code=team_code, project_code=project_code
            )
        )
        if page:
            self.show_page(
                page,
                lambda a: f"{a.project_team_activity_id} | {a.activity_date} | {a.project_code}/{a.team_code} | {a.tasks}",
            )

    def view_activity(self) -> None:
        activity = self.call(self.activities.get_activity_by_id(self.get_input("Activity ID", required=True)))
        if activity:
            self.show_fields(
                f"Activity {activity.project_team_activity_id}",
                [
                    ("Date", activity.activity_date),
                    ("Project", f"{activity.project_code} ({activity.project_name or '-'})"),
                    ("Team", f"{activity.team_code} ({activity.team_name or '-'})"),
                    ("User", activity.user_code),
                    ("Tech stack", activity.tech_stack_code),
                    ("Tasks", activity.tasks),
                ],
            )

    def update_activity(self) -> None:
        activity_id = self.get_input("Activity ID", required=True)
        current = self.call(self.activities.get_activity_by_id(activity_id))
        if current:
            self.call(self.activities.update_activity(activity_id, self._prompt_activity(current)))

    def delete_activity(self) -> None:
        self.call(self.activities.delete_activity(self.get_input("Activity ID", required=True)))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="OneMonthFlow interactive console.")
    ap.add_argument("--database", help="SQLite database path (overrides DATABASE_URL)")
    ap.add_argument("--config", help="Path to an appsettings.json file")
    ap.add_argument("--log-level", help="Logging level, e.g. DEBUG")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config).override(database_url=args.database, log_level=args.log_level)
        settings.validate()
    except ConfigurationError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1

    # Keep the console readable: only warnings and above unless asked otherwise.
    setup_logging(args.log_level or "WARNING", settings.log_file)
    sql = SqlService(settings.database_url)
    init_db(sql)
    logger.info("Console session on %s", sql.database_path)
    ConsoleApp(sql).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
