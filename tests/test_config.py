import json
import logging

import pytest

from onemonthflow_api.app.core.config import ConfigurationError, Settings, load_settings
from onemonthflow_api.app.core.logging_config import resolve_level


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    # load_settings looks for appsettings.json in the working directory.
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = load_settings(environ={})
    assert settings.database_url == "onemonthflow.db"
    assert settings.github_organization == "one-project-one-month"
    assert settings.github_token is None
    assert settings.import_page_delay == 1.0


def test_config_file_then_environment(tmp_path):
    (tmp_path / "appsettings.json").write_text(
        json.dumps(
            {
                "ConnectionStrings": {"DefaultConnection": "from-file.db"},
                "GitHub": {"Organization": "file-org"},
                "Logging": {"LogLevel": {"Default": "DEBUG"}},
            }
        )
    )
    settings = load_settings(environ={"GITHUB_ORGANIZATION": "env-org", "IMPORT_PAGE_DELAY": "0.5"})
    assert settings.database_url == "from-file.db"
    assert settings.log_level == "DEBUG"
    assert settings.github_organization == "env-org"
    assert settings.import_page_delay == 0.5


def test_explicit_missing_config_file_is_an_error():
    with pytest.raises(ConfigurationError):
        load_settings("does-not-exist.json", environ={})


def test_invalid_environment_value():
    with pytest.raises(ConfigurationError, match="IMPORT_PAGE_DELAY"):
        load_settings(environ={"IMPORT_PAGE_DELAY": "soon"})


def test_override_skips_none_and_rejects_unknown_keys():
    settings = Settings().override(database_url="cli.db", github_token=None)
    assert settings.database_url == "cli.db"
    assert settings.github_token is None
    with pytest.raises(ConfigurationError):
        Settings().override(colour="blue")


def test_validate_requires_a_connection_string():
    with pytest.raises(ConfigurationError, match="Connection string 'DefaultConnection' not found."):
        Settings(database_url="  ").validate()
    with pytest.raises(ConfigurationError):
        Settings(import_page_delay=-1).validate()
    assert Settings().validate().database_url == "onemonthflow.db"


def test_resolve_level_understands_appsettings_names():
    assert resolve_level("Information") == logging.INFO
    assert resolve_level("Trace") == logging.DEBUG
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level("loud") == logging.INFO
    assert resolve_level(None) == logging.INFO
