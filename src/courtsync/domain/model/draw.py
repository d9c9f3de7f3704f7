"""Draw hierarchy of a tournament as pushed by TournamentTV.

Events own draws and entries; draws own their matches, indexed by planning
code. Entry slots are themselves draw matches that carry an ``entry_id``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import DrawType


@dataclass(frozen=True, slots=True, kw_only=True)
class Entry:
    entry_id: str
    name1: str = ""
    club1: str = ""
    name2: str = ""
    club2: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DrawMatch:
    planning: str
    match_id: str | None = None
    entry_id: str | None = None
    playtime: str = ""


@dataclass(slots=True, kw_only=True)
class Draw:
    draw_id: str
    draw_type: DrawType | int
    doubles: bool = False
    matches_by_planning: dict[str, DrawMatch] = field(default_factory=dict[str, DrawMatch])
    matches_by_id: dict[str, DrawMatch] = field(default_factory=dict[str, DrawMatch])

    def add_match(self, match: DrawMatch) -> None:
        self.matches_by_planning.setdefault(match.planning, match)
        if match.match_id is not None:
            self.matches_by_id.setdefault(match.match_id, match)

    def match_at(self, planning: str) -> DrawMatch | None:
        return self.matches_by_planning.get(planning)

    @property
    def is_pool(self) -> bool:
        return self.draw_type == DrawType.POOL


@dataclass(slots=True, kw_only=True)
class Event:
    event_id: str
    name: str
    draws: list[Draw] = field(default_factory=list[Draw])
    entries: dict[str, Entry] = field(default_factory=dict[str, Entry])

    def find_draw_match(self, match_id: str) -> tuple[Draw, DrawMatch] | None:
        """Return the first draw match with ``match_id`` in document order."""

        for draw in self.draws:
            match = draw.matches_by_id.get(match_id)
            if match is not None:
                return draw, match
        return None


@dataclass(frozen=True, slots=True)
class Official:
    first_name: str | None = None
    last_name: str | None = None

    @property
    def display_name(self) -> str:
        if self.first_name is None or self.last_name is None:
            return ""
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True, slots=True)
class Officials:
    umpire: Official | None = None
    service_judge: Official | None = None

    @property
    def umpire_name(self) -> str:
        return self.umpire.display_name if self.umpire else ""

    @property
    def service_judge_name(self) -> str:
        return self.service_judge.display_name if self.service_judge else ""
