"""
Layered configuration management.

The ``Settings`` dataclass is filled from, in increasing priority:

1. the dataclass defaults below,
2. an optional JSON file (``appsettings.json`` in the working directory,
   or the path named by ``ONEMONTHFLOW_CONFIG``),
3. environment variables,
4. explicit overrides passed by the command line programs through
   :meth:`Settings.override`.

A JSON file looks like this::

    {
        "ConnectionStrings": {"DefaultConnection": "onemonthflow.db"},
        "GitHub": {"Organization": "one-project-one-month", "Token": ""},
        "Logging": {"LogLevel": {"Default": "INFO"}}
    }
"""

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional


DEFAULT_CONFIG_FILE = "appsettings.json"


class ConfigurationError(RuntimeError):
    """Raised when the configuration is unusable at startup."""


@dataclass
class Settings:
    """Application settings."""

    project_name: str = "OneMonthFlow API"
    api_version: str = "1.0.0"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Path to the SQLite database.  Relative paths are resolved against the
    # current working directory by ``core.db``.
    database_url: str = "onemonthflow.db"

    github_organization: str = "one-project-one-month"
    github_token: Optional[str] = None
    github_api_url: str = "https://api.github.com"
    # Seconds to wait between two repository pages.
    import_page_delay: float = 1.0

    def override(self, **values: Any) -> "Settings":
        """Return a copy with every non-``None`` value in ``values`` applied."""
        known = {f.name for f in fields(self)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in values.items() if v is not None})

    def validate(self) -> "Settings":
        if not self.database_url or not self.database_url.strip():
            raise ConfigurationError("Connection string 'DefaultConnection' not found.")
        if self.import_page_delay < 0:
            raise ConfigurationError("IMPORT_PAGE_DELAY must not be negative.")
        return self


# environment variable -> (settings field, converter)
_ENVIRONMENT: Dict[str, tuple[str, Callable[[str], Any]]] = {
    "PROJECT_NAME": ("project_name", str),
    "API_VERSION": ("api_version", str),
    "LOG_LEVEL": ("log_level", str),
    "LOG_FILE": ("log_file", str),
    "DATABASE_URL": ("database_url", str),
    "GITHUB_ORGANIZATION": ("github_organization", str),
    "GITHUB_TOKEN": ("github_token", str),
    "GITHUB_API_URL": ("github_api_url", str),
    "IMPORT_PAGE_DELAY": ("import_page_delay", float),
}


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as fh:
            document = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Could not read configuration file {path}: {exc}") from exc
    if not isinstance(document, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a JSON object")

    values: Dict[str, Any] = {}
    connection = (document.get("ConnectionStrings") or {}).get("DefaultConnection")
    if connection is not None:
        values["database_url"] = connection
    github = document.get("GitHub") or {}
    if github.get("Organization"):
        values["github_organization"] = github["Organization"]
    if github.get("Token"):
        values["github_token"] = github["Token"]
    level = ((document.get("Logging") or {}).get("LogLevel") or {}).get("Default")
    if level:
        values["log_level"] = level
    return values


def load_settings(
    config_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build settings from the config file and the environment.

    ``environ`` defaults to ``os.environ``; tests pass a plain dict.
    """
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    path = Path(config_file or env.get("ONEMONTHFLOW_CONFIG") or DEFAULT_CONFIG_FILE)
    if path.is_file():
        values.update(_read_config_file(path))
    elif config_file:
        raise ConfigurationError(f"Configuration file {path} does not exist")

    for name, (field_name, convert) in _ENVIRONMENT.items():
        if name in env:
            try:
                values[field_name] = convert(env[name])
            except ValueError as exc:
                raise ConfigurationError(f"Invalid value for {name}: {env[name]!r}") from exc
    return Settings(**values)


# Loaded once at import so the web application can pick it up without
# arguments.  Command line programs build their own copy with overrides.
settings = load_settings()
