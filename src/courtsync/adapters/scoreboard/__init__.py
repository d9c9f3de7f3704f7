"""Public interface for the ScoreboardLive adapter."""

from __future__ import annotations

from .client import ScoreboardAPIError, ScoreboardClient
from .schema import CourtPayload, CourtsResponse, MatchesResponse, MatchPayload, MatchResponse
from .translator import court_from_payload, match_from_payload, payload_from_match

__all__ = [
    "CourtPayload",
    "CourtsResponse",
    "MatchPayload",
    "MatchResponse",
    "MatchesResponse",
    "ScoreboardAPIError",
    "ScoreboardClient",
    "court_from_payload",
    "match_from_payload",
    "payload_from_match",
]
