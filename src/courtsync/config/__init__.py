"""Application configuration helpers."""

from __future__ import annotations

from .connector import (
    DEFAULT_LISTEN_PORT,
    DEFAULT_POLL_SECONDS,
    ConnectorConfig,
    SourceMode,
    access_database_uri,
    get_connector_config,
)
from .env import env_bool, env_float, env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .scoreboard import (
    SCOREBOARD_BASE_URL,
    DeviceCredentials,
    ScoreboardConfig,
    get_scoreboard_config,
)

__all__ = [
    "DEFAULT_LISTEN_PORT",
    "DEFAULT_POLL_SECONDS",
    "SCOREBOARD_BASE_URL",
    "ConfigurationError",
    "ConnectorConfig",
    "DeviceCredentials",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "ScoreboardConfig",
    "SourceMode",
    "access_database_uri",
    "configure_logging",
    "env_bool",
    "env_float",
    "env_int",
    "get_connector_config",
    "get_scoreboard_config",
    "optional_env_var",
    "require_env_vars",
]
