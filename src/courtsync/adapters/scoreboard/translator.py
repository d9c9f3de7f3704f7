"""Translate between ScoreboardLive payloads and domain records."""

from __future__ import annotations

from datetime import datetime
from logging import getLogger

from courtsync.domain.model import Court, Match

from .schema import CourtPayload, MatchPayload

log = getLogger(__name__)

START_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_start_time(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.strptime(value, START_TIME_FORMAT)
    except ValueError:
        log.warning(f"Ignoring unparsable start time from scoreboard: {value!r}")
        return None


def format_start_time(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime("%Y-%m-%d %H:%M:00")


def match_from_payload(payload: MatchPayload) -> Match:
    return Match(
        match_id=payload.match_id,
        tournament_match_number=payload.sequence_number,
        team1_player1_name=payload.team1_player1_name,
        team1_player1_team=payload.team1_player1_team,
        team1_player2_name=payload.team1_player2_name,
        team1_player2_team=payload.team1_player2_team,
        team2_player1_name=payload.team2_player1_name,
        team2_player1_team=payload.team2_player1_team,
        team2_player2_name=payload.team2_player2_name,
        team2_player2_team=payload.team2_player2_team,
        status=payload.status,
        category=payload.category,
        start_time=parse_start_time(payload.start_time),
        umpire=payload.umpire,
        service_judge=payload.service_judge,
    )


def payload_from_match(match: Match) -> MatchPayload:
    return MatchPayload(
        match_id=match.match_id,
        sequence_number=match.tournament_match_number,
        team1_player1_name=match.team1_player1_name,
        team1_player1_team=match.team1_player1_team,
        team1_player2_name=match.team1_player2_name,
        team1_player2_team=match.team1_player2_team,
        team2_player1_name=match.team2_player1_name,
        team2_player1_team=match.team2_player1_team,
        team2_player2_name=match.team2_player2_name,
        team2_player2_team=match.team2_player2_team,
        status=match.status,
        category=match.category,
        start_time=format_start_time(match.start_time),
        umpire=match.umpire,
        service_judge=match.service_judge,
    )


def court_from_payload(payload: CourtPayload) -> Court:
    return Court(court_id=payload.court_id, name=payload.name)
