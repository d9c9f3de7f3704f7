"""HTTP client for the ScoreboardLive API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from courtsync.adapters.http_resilience import ResilientClient
from courtsync.domain.errors import RemoteServiceError

from .schema import CourtsResponse, MatchesResponse, MatchResponse, ScoreboardResponse
from .translator import court_from_payload, match_from_payload, payload_from_match

if TYPE_CHECKING:
    from collections.abc import Callable

    from courtsync.config.http_resilience import ResilienceConfig
    from courtsync.config.scoreboard import ScoreboardConfig
    from courtsync.domain.model import Court, Match

log = getLogger(__name__)

CREATE_MATCH_PATH: Final[str] = "api/match/create_on_the_fly"
FIND_MATCHES_PATH: Final[str] = "api/match/find_by_sequence_number"
ASSIGN_MATCH_PATH: Final[str] = "api/court/assign_match"
GET_COURTS_PATH: Final[str] = "api/court/get_courts"


class ScoreboardAPIError(RemoteServiceError):
    """Raised when a ScoreboardLive call fails or returns application errors."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ScoreboardClient:
    """Synchronous ScoreboardLive client bound to one device and tournament.

    Each call runs its own event loop and HTTP client, matching the blocking
    tick loop that drives it.
    """

    def __init__(
        self,
        *,
        config: ScoreboardConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def create_match(self, match: Match) -> Match:
        fields = payload_from_match(match).model_dump(by_alias=True, exclude_none=True)
        fields.pop("matchid", None)
        response = asyncio.run(
            self._call("POST", CREATE_MATCH_PATH, fields, MatchResponse, with_tournament=True)
        )
        return match_from_payload(response.match)

    def assign_match_to_court(self, match: Match, court: Court) -> None:
        fields = {"matchid": str(match.match_id), "courtid": str(court.court_id)}
        asyncio.run(self._call("POST", ASSIGN_MATCH_PATH, fields, ScoreboardResponse))

    def find_matches_by_sequence_number(self, tournament_match_number: int) -> list[Match]:
        fields = {"sequencenumber": str(tournament_match_number)}
        response = asyncio.run(
            self._call("GET", FIND_MATCHES_PATH, fields, MatchesResponse, with_tournament=True)
        )
        return [match_from_payload(payload) for payload in response.matches]

    def get_courts(self) -> list[Court]:
        log.info("Fetching all available courts from server...")
        response = asyncio.run(self._call("GET", GET_COURTS_PATH, {}, CourtsResponse))
        return [court_from_payload(payload) for payload in response.courts]

    def _fields(self, fields: dict[str, str], *, with_tournament: bool) -> dict[str, str]:
        device = self._config.device
        merged = {"unitid": str(device.unit_id), "devicecode": device.device_code}
        if with_tournament and self._config.tournament_id is not None:
            merged["tournamentid"] = str(self._config.tournament_id)
        merged.update(fields)
        return merged

    async def _call[ResponseT: ScoreboardResponse](
        self,
        method: str,
        path: str,
        fields: dict[str, str],
        response_model: type[ResponseT],
        *,
        with_tournament: bool = False,
    ) -> ResponseT:
        values = self._fields(fields, with_tournament=with_tournament)
        try:
            async with self._client_factory(self._resilience) as client:
                if method == "GET":
                    response = await client.get(path, params=values)
                else:
                    response = await client.post(path, data=values)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise ScoreboardAPIError(
                f"ScoreboardLive {path} returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise ScoreboardAPIError(f"ScoreboardLive {path} failed: {exc}") from exc

        if not isinstance(payload, dict):
            raise ScoreboardAPIError(f"Unexpected ScoreboardLive response payload from {path}")
        try:
            errors = ScoreboardResponse.model_validate(payload).errors
            if not errors:
                return response_model.model_validate(payload)
        except ValidationError as exc:
            raise ScoreboardAPIError(f"Invalid ScoreboardLive response from {path}: {exc}") from exc

        message = "; ".join(errors)
        log.error(f"ScoreboardLive API error on {path}: {message}")
        raise ScoreboardAPIError(message)
