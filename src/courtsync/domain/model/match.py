"""Match, court and court-assignment records."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .enums import Category

if TYPE_CHECKING:
    from datetime import datetime


def truncate_to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


@dataclass(slots=True, kw_only=True)
class Match:
    """A scoreboard match.

    ``tournament_match_number`` is the sequence number shared by the tournament
    software and the scoreboard service; it is the correlation key between the
    two. ``match_id`` stays ``0`` until the scoreboard service has created or
    returned the match.
    """

    match_id: int = 0
    tournament_match_number: int = 0
    team1_player1_name: str = ""
    team1_player1_team: str = ""
    team1_player2_name: str = ""
    team1_player2_team: str = ""
    team2_player1_name: str = ""
    team2_player1_team: str = ""
    team2_player2_name: str = ""
    team2_player2_team: str = ""
    category: str = ""
    status: str = ""
    start_time: datetime | None = None
    umpire: str = ""
    service_judge: str = ""

    def __post_init__(self) -> None:
        if self.start_time is not None:
            self.start_time = truncate_to_minute(self.start_time)

    @property
    def is_registered(self) -> bool:
        return self.match_id > 0

    @property
    def is_doubles(self) -> bool:
        return self.category.endswith("d")

    def with_match_id(self, match_id: int) -> Match:
        return replace(self, match_id=match_id)

    def describe(self) -> str:
        """Render a multi-line console summary of the match."""

        try:
            title = Category(self.category).description
        except ValueError:
            title = self.category or "Unknown category"
        numbers = ""
        if self.tournament_match_number > 0:
            numbers += f"({self.tournament_match_number})"
        numbers += "-"
        if self.match_id > 0:
            numbers += f"({self.match_id})"
        start = self.start_time.strftime("%Y-%m-%d %H:%M:00") if self.start_time else ""

        lines = [
            f"{title} {numbers} {start}".rstrip(),
            "-" * 52,
            f"{self.team1_player1_name:<20}    {self.team2_player1_name:<20}",
            f"{self.team1_player1_team:<20} vs {self.team2_player1_team:<20}",
        ]
        if self.is_doubles:
            lines.append(f"{self.team1_player2_name:<20}    {self.team2_player2_name:<20}")
            lines.append(f"{self.team1_player2_team:<20}    {self.team2_player2_team:<20}")
        if self.umpire:
            officials = f"Umpire: {self.umpire:<20}"
            if self.service_judge:
                officials += f" Service judge: {self.service_judge:<20}"
            lines.append(officials)
        return "\n".join(line.rstrip() for line in lines)


@dataclass(frozen=True, slots=True)
class Court:
    """A court known to the scoreboard service; read-only for a tick."""

    court_id: int
    name: str


@dataclass(slots=True, kw_only=True)
class CourtAssignment:
    """The match currently shown on ``court``.

    ``pinged`` is cleared at the start of every tick and set again when the
    snapshot still places the same match on the court.
    """

    court: str
    match: Match
    location: str = ""
    pinged: bool = False

    @property
    def tournament_match_number(self) -> int:
        return self.match.tournament_match_number
