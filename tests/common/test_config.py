from __future__ import annotations

from pathlib import Path

import pytest

from courtsync.config import (
    DEFAULT_LISTEN_PORT,
    SCOREBOARD_BASE_URL,
    ConfigurationError,
    MissingConfigurationError,
    SourceMode,
    access_database_uri,
    env_bool,
    get_connector_config,
    get_scoreboard_config,
    require_env_vars,
)

_CONNECTOR_VARS = (
    "COURTSYNC_DATABASE",
    "COURTSYNC_DATABASE_URI",
    "COURTSYNC_DATABASE_PASSWORD",
    "COURTSYNC_LISTEN_HOST",
    "COURTSYNC_LISTEN_PORT",
    "COURTSYNC_EXPORT_DIR",
    "COURTSYNC_POLL_SECONDS",
    "COURTSYNC_TRANSLATE_CATEGORIES",
    "COURTSYNC_VERBOSE",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (*_CONNECTOR_VARS, "SCOREBOARD_URL", "SCOREBOARD_TOURNAMENT_ID"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_reports_blank_and_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLANK_VAR", "   ")
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR", "BLANK_VAR"])

    assert "BLANK_VAR, MISSING_VAR" in str(exc.value)


def test_env_bool_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLAG", "perhaps")

    with pytest.raises(ConfigurationError):
        env_bool("FLAG")


def test_connector_defaults_to_tournament_tv(clean_env: pytest.MonkeyPatch) -> None:
    config = get_connector_config()

    assert config.mode is SourceMode.TOURNAMENT_TV
    assert config.listen_host == ""
    assert config.listen_port == DEFAULT_LISTEN_PORT
    assert config.poll_seconds == 1.0
    assert config.export_dir is None
    assert not config.translate_categories


def test_connector_database_path_builds_access_uri(
    clean_env: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    clean_env.setenv("COURTSYNC_DATABASE", str(tmp_path / "cup.tp"))
    clean_env.setenv("COURTSYNC_DATABASE_PASSWORD", "pw")
    clean_env.setenv("COURTSYNC_TRANSLATE_CATEGORIES", "yes")

    config = get_connector_config()

    assert config.mode is SourceMode.DATABASE
    assert config.database_uri == access_database_uri(tmp_path / "cup.tp", password="pw")
    assert config.translate_categories


def test_access_uri_escapes_connection_string() -> None:
    uri = access_database_uri(Path("C:/cups/spring cup.tp"))

    assert uri.startswith("access+pyodbc:///?odbc_connect=")
    assert " " not in uri
    assert "PWD" not in uri


def test_connector_rejects_invalid_port(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("COURTSYNC_LISTEN_PORT", "70000")

    with pytest.raises(ConfigurationError):
        get_connector_config()


def test_with_overrides_ignores_none(clean_env: pytest.MonkeyPatch) -> None:
    config = get_connector_config().with_overrides(listen_port=None, listen_host="127.0.0.1")

    assert config.listen_port == DEFAULT_LISTEN_PORT
    assert config.listen_host == "127.0.0.1"


def test_scoreboard_config_requires_device(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.delenv("SCOREBOARD_UNIT_ID", raising=False)
    clean_env.setenv("SCOREBOARD_DEVICE_CODE", "secret")

    with pytest.raises(MissingConfigurationError, match="SCOREBOARD_UNIT_ID"):
        get_scoreboard_config()


def test_scoreboard_config_reads_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("SCOREBOARD_UNIT_ID", "4")
    clean_env.setenv("SCOREBOARD_DEVICE_CODE", "secret")
    clean_env.setenv("SCOREBOARD_TOURNAMENT_ID", "9")

    config = get_scoreboard_config()

    assert config.device.unit_id == 4
    assert config.device.device_code == "secret"
    assert config.tournament_id == 9
    assert config.resilience.base_url == SCOREBOARD_BASE_URL
    assert config.resilience.ratelimit is not None


def test_scoreboard_url_gets_trailing_slash(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("SCOREBOARD_UNIT_ID", "4")
    clean_env.setenv("SCOREBOARD_DEVICE_CODE", "secret")

    config = get_scoreboard_config(base_url="http://localhost:8080")

    assert config.resilience.base_url == "http://localhost:8080/"


def test_scoreboard_unit_must_be_numeric(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("SCOREBOARD_UNIT_ID", "four")
    clean_env.setenv("SCOREBOARD_DEVICE_CODE", "secret")

    with pytest.raises(ConfigurationError):
        get_scoreboard_config()
