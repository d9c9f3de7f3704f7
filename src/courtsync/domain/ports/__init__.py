"""Domain port definitions for adapters."""

from __future__ import annotations

from .scoreboard import ScoreboardGateway, ScoreboardSession
from .snapshots import SnapshotSource

__all__ = ["ScoreboardGateway", "ScoreboardSession", "SnapshotSource"]
