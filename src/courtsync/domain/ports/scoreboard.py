"""Port for the remote scoreboard service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from courtsync.domain.model import Court, Match


@runtime_checkable
class ScoreboardGateway(Protocol):
    """Synchronous operations consumed from the scoreboard service.

    Implementations are bound to one device and one tournament and raise
    ``RemoteServiceError`` when a call fails.
    """

    def create_match(self, match: Match) -> Match: ...

    def assign_match_to_court(self, match: Match, court: Court) -> None: ...

    def find_matches_by_sequence_number(self, tournament_match_number: int) -> list[Match]: ...

    def get_courts(self) -> list[Court]: ...


@dataclass(slots=True)
class ScoreboardSession:
    """Gateway plus the court list fetched when the session was opened."""

    gateway: ScoreboardGateway
    courts: Sequence[Court] = ()

    @classmethod
    def open(cls, gateway: ScoreboardGateway) -> ScoreboardSession:
        return cls(gateway=gateway, courts=tuple(gateway.get_courts()))

    def court_named(self, name: str) -> Court | None:
        for court in self.courts:
            if court.name == name:
                return court
        return None
