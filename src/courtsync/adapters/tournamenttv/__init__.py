"""TournamentTV push adapter: wire framing, document index and listener."""

from __future__ import annotations

from .document import OnCourtMatch, TournamentDocument
from .listener import TournamentTvServer
from .snapshot import TournamentTvMatchDetails, decode_snapshot, snapshot_from_document
from .wire import decompress_payload, export_message, parse_document, read_message, sanitize

__all__ = [
    "OnCourtMatch",
    "TournamentDocument",
    "TournamentTvMatchDetails",
    "TournamentTvServer",
    "decode_snapshot",
    "decompress_payload",
    "export_message",
    "parse_document",
    "read_message",
    "sanitize",
    "snapshot_from_document",
]
