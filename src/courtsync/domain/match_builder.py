"""Assemble complete scoreboard matches from tournament data."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from .draws import resolve_participants
from .errors import UnknownCategoryError
from .model import Match, truncate_to_minute

if TYPE_CHECKING:
    from .draws import Participant
    from .model import Draw, DrawMatch, Event, Officials

log = getLogger(__name__)

SWEDISH_CATEGORIES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "dd": "wd",
        "damdubbel": "wd",
        "ds": "ws",
        "damsingel": "ws",
        "hd": "md",
        "herrdubbel": "md",
        "hs": "ms",
        "herrsingel": "ms",
        "md": "xd",
        "mixed": "xd",
        "mixeddubbel": "xd",
    }
)

_START_TIME_FORMAT = "%Y-%m-%d %H:%M"


def translate_category(
    category: str,
    *,
    translate: bool,
    table: Mapping[str, str] = SWEDISH_CATEGORIES,
) -> str:
    """Map a category code through ``table``; unknown codes become ``""``."""

    if not translate:
        return category
    return table.get(category, "")


def category_key(event_name: str) -> str:
    """Lower-case event name cut at the first space ("HS U11" -> "hs")."""

    name = event_name.strip().lower()
    space = name.find(" ")
    return name[:space] if space > 0 else name


def strip_match_number(playtime: str) -> str:
    """Drop a "#543:" style prefix when the text holds a second colon."""

    pos = playtime.find(":")
    if pos >= 0 and ":" in playtime[pos + 1 :]:
        return playtime[pos + 1 :].strip()
    return playtime


def strip_round_label(playtime: str) -> str:
    return playtime[playtime.find(" ") + 1 :]


def parse_start_time(text: str) -> datetime:
    """Parse ``"<day> <yyyy-mm-dd> <hh:mm> [hall ...]"``.

    The day name is locale dependent and is ignored; anything after the
    time is dropped.
    """

    tokens = text.split()[:3]
    if len(tokens) == 3:
        tokens = tokens[1:]
    if len(tokens) != 2:
        raise ValueError(f"Unexpected schedule format: {text!r}")
    return datetime.strptime(" ".join(tokens), _START_TIME_FORMAT)


@dataclass(slots=True)
class MatchBuilder:
    """Build :class:`Match` records from either tournament source.

    ``translate_categories`` selects whether event names follow the Swedish
    naming scheme (``hs``, ``damdubbel`` ...) and must be mapped to scoreboard
    categories.
    """

    translate_categories: bool = False
    category_table: Mapping[str, str] = field(default_factory=lambda: SWEDISH_CATEGORIES)
    clock: Callable[[], datetime] = field(default=datetime.now)

    def category_for(self, event_name: str) -> str:
        """Scoreboard category of ``event_name``.

        With translation off the category key is passed through unchanged, the
        same way database rows pass their computed code. Only an empty result
        (an event the translation table does not know, or a blank name) is an
        error.
        """

        category = translate_category(
            category_key(event_name),
            translate=self.translate_categories,
            table=self.category_table,
        )
        if not category:
            raise UnknownCategoryError(event_name)
        return category

    def start_time_for(self, playtime: str, *, pool: bool = False) -> datetime:
        text = strip_match_number(playtime)
        if pool:
            text = strip_round_label(text)
        if not text:
            log.warning("No scheduled time, using the current time")
            return truncate_to_minute(self.clock())
        try:
            return parse_start_time(text)
        except ValueError as exc:
            log.warning(f"Failed to parse the scheduled time {text!r}: {exc}")
            return truncate_to_minute(self.clock())

    def from_draw(
        self,
        *,
        tournament_match_number: int,
        event: Event,
        draw: Draw,
        draw_match: DrawMatch,
        officials: Officials,
    ) -> Match:
        category = self.category_for(event.name)
        log.debug(f"Match {tournament_match_number} planning is {draw_match.planning}")
        team1, team2 = resolve_participants(event, draw, draw_match)
        start_time = self.start_time_for(draw_match.playtime, pool=draw.is_pool)
        return self._assemble(
            tournament_match_number=tournament_match_number,
            category=category,
            team1=team1,
            team2=team2,
            start_time=start_time,
            umpire=officials.umpire_name,
            service_judge=officials.service_judge_name,
        )

    def from_columns(
        self,
        *,
        tournament_match_number: int,
        category: str,
        players: tuple[tuple[str, str], tuple[str, str], tuple[str, str], tuple[str, str]],
    ) -> Match:
        """Build a match from database columns; ``players`` is (name, club) x 4."""

        (p1_name, p1_club), (p2_name, p2_club), (p3_name, p3_club), (p4_name, p4_club) = players
        return Match(
            tournament_match_number=tournament_match_number,
            category=category,
            team1_player1_name=p1_name,
            team1_player1_team=p1_club,
            team1_player2_name=p2_name,
            team1_player2_team=p2_club,
            team2_player1_name=p3_name,
            team2_player1_team=p3_club,
            team2_player2_name=p4_name,
            team2_player2_team=p4_club,
        )

    @staticmethod
    def _assemble(
        *,
        tournament_match_number: int,
        category: str,
        team1: Participant,
        team2: Participant,
        start_time: datetime,
        umpire: str,
        service_judge: str,
    ) -> Match:
        return Match(
            tournament_match_number=tournament_match_number,
            category=category,
            team1_player1_name=team1.player1_name,
            team1_player1_team=team1.player1_team,
            team1_player2_name=team1.player2_name,
            team1_player2_team=team1.player2_team,
            team2_player1_name=team2.player1_name,
            team2_player1_team=team2.player1_team,
            team2_player2_name=team2.player2_name,
            team2_player2_team=team2.player2_team,
            start_time=start_time,
            umpire=umpire,
            service_judge=service_judge,
        )
