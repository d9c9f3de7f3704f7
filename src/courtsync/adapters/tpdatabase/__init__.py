"""Tournament database adapter (TP/CP tournament files via SQLAlchemy)."""

from __future__ import annotations

from .snapshot import (
    DatabaseMatchDetails,
    DatabaseSnapshotSource,
    court_snapshot_statement,
    entries_from_rows,
)
from .tables import create_all_tables, metadata

__all__ = [
    "DatabaseMatchDetails",
    "DatabaseSnapshotSource",
    "court_snapshot_statement",
    "create_all_tables",
    "entries_from_rows",
    "metadata",
]
