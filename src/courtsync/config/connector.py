"""Tournament source configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path
from typing import Final
from urllib.parse import quote_plus

from .env import env_bool, env_float, env_int, optional_env_var
from .errors import ConfigurationError

DEFAULT_LISTEN_PORT: Final[int] = 13333
DEFAULT_POLL_SECONDS: Final[float] = 1.0
ACCESS_DRIVER: Final[str] = "{Microsoft Access Driver (*.mdb, *.accdb)}"


class SourceMode(StrEnum):
    DATABASE = "database"
    TOURNAMENT_TV = "ttv"


@dataclass(frozen=True, slots=True)
class ConnectorConfig:
    """Where tournament data comes from and how it is processed.

    A ``database_uri`` selects polling of the tournament database; without one
    the connector listens for TournamentTV pushes on ``listen_host``:``listen_port``
    (an empty host binds every interface).
    """

    database_uri: str | None = None
    listen_host: str = ""
    listen_port: int = DEFAULT_LISTEN_PORT
    export_dir: Path | None = None
    poll_seconds: float = DEFAULT_POLL_SECONDS
    translate_categories: bool = False
    verbose: bool = False

    @property
    def mode(self) -> SourceMode:
        return SourceMode.DATABASE if self.database_uri else SourceMode.TOURNAMENT_TV

    def with_overrides(self, **overrides: object) -> ConnectorConfig:
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)  # type: ignore[arg-type]


def access_database_uri(path: str | Path, *, password: str | None = None) -> str:
    """Build an ``access+pyodbc`` URI for a TP/CP tournament file."""

    connection = f"DRIVER={ACCESS_DRIVER};DBQ={Path(path).expanduser()};"
    if password:
        connection += f"PWD={password};"
    return f"access+pyodbc:///?odbc_connect={quote_plus(connection)}"


def get_connector_config() -> ConnectorConfig:
    database_uri = optional_env_var("COURTSYNC_DATABASE_URI")
    database_path = optional_env_var("COURTSYNC_DATABASE")
    if database_uri is None and database_path is not None:
        database_uri = access_database_uri(
            database_path,
            password=optional_env_var("COURTSYNC_DATABASE_PASSWORD"),
        )

    port = env_int("COURTSYNC_LISTEN_PORT", DEFAULT_LISTEN_PORT)
    if port is None or not 0 <= port <= 65535:
        raise ConfigurationError(f"COURTSYNC_LISTEN_PORT out of range: {port}")
    poll_seconds = env_float("COURTSYNC_POLL_SECONDS", DEFAULT_POLL_SECONDS)
    if poll_seconds < 0:
        raise ConfigurationError("COURTSYNC_POLL_SECONDS must be non-negative")

    export_dir = optional_env_var("COURTSYNC_EXPORT_DIR")
    return ConnectorConfig(
        database_uri=database_uri,
        listen_host=optional_env_var("COURTSYNC_LISTEN_HOST") or "",
        listen_port=port,
        export_dir=Path(export_dir).expanduser() if export_dir else None,
        poll_seconds=poll_seconds,
        translate_categories=env_bool("COURTSYNC_TRANSLATE_CATEGORIES"),
        verbose=env_bool("COURTSYNC_VERBOSE"),
    )
