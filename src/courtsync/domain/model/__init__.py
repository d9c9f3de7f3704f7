"""Domain model for court synchronisation."""

from __future__ import annotations

from .draw import Draw, DrawMatch, Entry, Event, Official, Officials
from .enums import Category, DrawType
from .match import Court, CourtAssignment, Match, truncate_to_minute
from .snapshot import MatchDetails, RawCourtEntry

__all__ = [
    "Category",
    "Court",
    "CourtAssignment",
    "Draw",
    "DrawMatch",
    "DrawType",
    "Entry",
    "Event",
    "Match",
    "MatchDetails",
    "Official",
    "Officials",
    "RawCourtEntry",
    "truncate_to_minute",
]
