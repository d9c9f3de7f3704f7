"""Participant resolution inside a draw.

A planning code is four digits: the first is the level, the remaining three the
position within that level. Where the two participants of a match are stored
depends on the draw type:

* pool draws seed entries on a fixed grid, so match ``2003`` is played between
  the entries at plannings ``2000`` and ``3000``;
* elimination draws (and their qualification variant) take the participants
  from the two child nodes one level deeper, so match ``4003`` is played
  between ``5005`` and ``5006``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import (
    MissingDrawMatchError,
    MissingEntryError,
    ResolutionError,
    UnsupportedDrawTypeError,
)
from .model import DrawType

if TYPE_CHECKING:
    from .model import Draw, DrawMatch, Entry, Event

_ELIMINATION_TYPES = frozenset({DrawType.ELIMINATION, DrawType.QUALIFICATION})


@dataclass(frozen=True, slots=True)
class Participant:
    """One side of a match as found in the entry list."""

    player1_name: str
    player1_team: str
    player2_name: str = ""
    player2_team: str = ""


def parse_planning(planning: str) -> tuple[int, int]:
    """Split a planning code into ``(level, position)``."""

    code = planning.strip()
    try:
        return int(code[0:1]), int(code[1:4])
    except ValueError:
        raise ResolutionError(f"Invalid planning code {planning!r}") from None


def feeder_plannings(planning: str, draw_type: int, *, event_name: str = "") -> tuple[str, str]:
    """Return the planning codes holding the two participants of ``planning``."""

    level, pos = parse_planning(planning)
    if draw_type == DrawType.POOL:
        return f"{level * 1000:04d}", f"{pos * 1000:04d}"
    if draw_type in _ELIMINATION_TYPES:
        return f"{level + 1}{pos * 2 - 1:03d}", f"{level + 1}{pos * 2:03d}"
    raise UnsupportedDrawTypeError(draw_type, event_name=event_name)


def resolve_entry(event: Event, draw: Draw, planning: str) -> Entry:
    slot = draw.match_at(planning)
    if slot is None:
        raise MissingDrawMatchError(
            f"No match at planning {planning} in draw {draw.draw_id} of {event.name}"
        )
    if not slot.entry_id:
        raise MissingEntryError(
            f"Planning {planning} in draw {draw.draw_id} of {event.name} has no entry"
        )
    entry = event.entries.get(slot.entry_id)
    if entry is None:
        raise MissingEntryError(f"Entry {slot.entry_id} not found in {event.name}")
    return entry


def participant_from_entry(entry: Entry, *, doubles: bool) -> Participant:
    if not doubles:
        return Participant(player1_name=entry.name1, player1_team=entry.club1)
    return Participant(
        player1_name=entry.name1,
        player1_team=entry.club1,
        player2_name=entry.name2,
        player2_team=entry.club2 if entry.club2 is not None else entry.club1,
    )


def resolve_participants(
    event: Event,
    draw: Draw,
    match: DrawMatch,
) -> tuple[Participant, Participant]:
    """Resolve both sides of ``match`` to their entries."""

    first, second = feeder_plannings(match.planning, draw.draw_type, event_name=event.name)
    return (
        participant_from_entry(resolve_entry(event, draw, first), doubles=draw.doubles),
        participant_from_entry(resolve_entry(event, draw, second), doubles=draw.doubles),
    )
