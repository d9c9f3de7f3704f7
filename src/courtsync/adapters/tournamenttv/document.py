"""Typed index over a decoded TournamentTV document.

The XML is walked once per message; lookups during match resolution go
through the dictionaries built here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from courtsync.domain.model import (
    Draw,
    DrawMatch,
    DrawType,
    Entry,
    Event,
    Official,
    Officials,
)

if TYPE_CHECKING:
    import xml.etree.ElementTree as ET

log = getLogger(__name__)

UMPIRE_OFFICIAL_ID = "1"
SERVICE_JUDGE_OFFICIAL_ID = "2"
DOUBLES_FLAG = "-1"


@dataclass(frozen=True, slots=True, kw_only=True)
class OnCourtMatch:
    """A ``MATCHES/ONCOURT/MATCH`` node: which match is on which court."""

    match_id: str | None
    event_id: str | None
    court: str | None
    officials: Officials = field(default_factory=Officials)


@dataclass(slots=True)
class TournamentDocument:
    events: dict[str, Event] = field(default_factory=dict[str, Event])
    on_court: list[OnCourtMatch] = field(default_factory=list[OnCourtMatch])

    @classmethod
    def from_xml(cls, root: ET.Element) -> TournamentDocument:
        document = cls()
        for event_node in root.iterfind("EVENTS/EVENT"):
            event = _parse_event(event_node)
            document.events.setdefault(event.event_id, event)
        document.on_court.extend(
            _parse_on_court(node) for node in root.iterfind("MATCHES/ONCOURT/MATCH")
        )
        log.debug(
            f"Indexed {len(document.events)} events and {len(document.on_court)} courts in play"
        )
        return document

    def event(self, event_id: str) -> Event | None:
        return self.events.get(event_id)


def _parse_draw_type(value: str | None) -> DrawType | int:
    number = int(value) if value and value.strip().lstrip("-").isdigit() else 0
    try:
        return DrawType(number)
    except ValueError:
        return number


def _parse_event(node: ET.Element) -> Event:
    event = Event(event_id=node.get("ID", ""), name=node.get("NAME", ""))
    for draw_node in node.iterfind("DRAWS/DRAW"):
        draw = Draw(
            draw_id=draw_node.get("ID", ""),
            draw_type=_parse_draw_type(draw_node.get("DRAWTYPE")),
            doubles=draw_node.get("DOUBLES") == DOUBLES_FLAG,
        )
        for match_node in draw_node.iterfind("MATCHES/MATCH"):
            planning = match_node.get("PLANNING")
            if planning is None:
                continue
            draw.add_match(
                DrawMatch(
                    planning=planning,
                    match_id=match_node.get("ID"),
                    entry_id=match_node.get("ENTRY"),
                    playtime=match_node.get("PLAYTIME", ""),
                )
            )
        event.draws.append(draw)
    for entry_node in node.iterfind("ENTRIES/ENTRY"):
        entry_id = entry_node.get("ID")
        if entry_id is None:
            continue
        event.entries.setdefault(
            entry_id,
            Entry(
                entry_id=entry_id,
                name1=entry_node.get("NAME1", ""),
                club1=entry_node.get("CLUB1", ""),
                name2=entry_node.get("NAME2", ""),
                club2=entry_node.get("CLUB2"),
            ),
        )
    return event


def _parse_official(node: ET.Element, official_id: str) -> Official | None:
    for official in node.iterfind("OFFICIALS/OFFICIAL"):
        if official.get("ID") == official_id:
            return Official(first_name=official.get("F"), last_name=official.get("N"))
    return None


def _parse_on_court(node: ET.Element) -> OnCourtMatch:
    return OnCourtMatch(
        match_id=node.get("ID"),
        event_id=node.get("EID"),
        court=node.get("CT"),
        officials=Officials(
            umpire=_parse_official(node, UMPIRE_OFFICIAL_ID),
            service_judge=_parse_official(node, SERVICE_JUDGE_OFFICIAL_ID),
        ),
    )
