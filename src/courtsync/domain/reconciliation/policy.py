"""Failure policies applied while publishing new court assignments."""

from __future__ import annotations

from enum import StrEnum


class CreationFailurePolicy(StrEnum):
    """What to do when the scoreboard service refuses to create a match."""

    ABORT_TICK = "abort_tick"
    """Stop the tick; an operator has to intervene (database mode)."""

    KEEP_LOCAL = "keep_local"
    """Keep the locally built match, skip the court assignment and retry on
    the next tick (TournamentTV mode)."""
