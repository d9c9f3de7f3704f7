"""Normalized snapshot rows produced by both tournament sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from courtsync.domain.match_builder import MatchBuilder

    from .match import Match


@runtime_checkable
class MatchDetails(Protocol):
    """Source-specific payload able to build the full match on demand.

    Building is deferred because it is only needed for courts whose match
    changed, and because it may fail (see ``ResolutionError``).
    """

    def build_match(self, builder: MatchBuilder) -> Match: ...


@dataclass(frozen=True, slots=True, kw_only=True)
class RawCourtEntry:
    court: str
    tournament_match_number: int
    details: MatchDetails
    location: str = ""
