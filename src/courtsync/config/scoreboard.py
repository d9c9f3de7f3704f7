"""ScoreboardLive configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

SCOREBOARD_BASE_URL = "https://www.scoreboardlive.se/"
SCOREBOARD_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class DeviceCredentials:
    """Credentials of a device already registered with a ScoreboardLive unit."""

    unit_id: int
    device_code: str


@dataclass(frozen=True)
class ScoreboardConfig:
    """Holds ScoreboardLive API configuration values.

    ``tournament_id`` may be ``None`` to let the server pick the unit's
    current tournament.
    """

    device: DeviceCredentials
    resilience: ResilienceConfig
    tournament_id: int | None = None


def _normalise_base_url(url: str) -> str:
    return url if url.endswith("/") else f"{url}/"


def get_scoreboard_config(
    *,
    base_url: str | None = None,
    resilience: ResilienceConfig | None = None,
) -> ScoreboardConfig:
    values = require_env_vars(("SCOREBOARD_UNIT_ID", "SCOREBOARD_DEVICE_CODE"))
    try:
        unit_id = int(values["SCOREBOARD_UNIT_ID"])
    except ValueError:
        raise ConfigurationError("SCOREBOARD_UNIT_ID must be an integer") from None

    url = base_url or optional_env_var("SCOREBOARD_URL") or SCOREBOARD_BASE_URL
    return ScoreboardConfig(
        device=DeviceCredentials(unit_id=unit_id, device_code=values["SCOREBOARD_DEVICE_CODE"]),
        tournament_id=env_int("SCOREBOARD_TOURNAMENT_ID"),
        resilience=resilience
        or ResilienceConfig(
            base_url=_normalise_base_url(url),
            timeout_seconds=SCOREBOARD_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        ),
    )
