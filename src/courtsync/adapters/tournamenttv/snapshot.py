"""Turn a TournamentTV document into court snapshot entries."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from courtsync.domain.errors import MissingDrawMatchError
from courtsync.domain.model import RawCourtEntry

from .document import TournamentDocument
from .wire import decompress_payload, export_message, parse_document, sanitize

if TYPE_CHECKING:
    from pathlib import Path

    from courtsync.domain.match_builder import MatchBuilder
    from courtsync.domain.model import Match

    from .document import OnCourtMatch

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TournamentTvMatchDetails:
    """Resolve an on-court match against the draw hierarchy of its event."""

    document: TournamentDocument
    on_court: OnCourtMatch
    tournament_match_number: int

    def build_match(self, builder: MatchBuilder) -> Match:
        event_id = self.on_court.event_id or ""
        event = self.document.event(event_id)
        if event is None:
            raise MissingDrawMatchError(f"Event {event_id!r} not found in message")
        match_id = str(self.tournament_match_number)
        found = event.find_draw_match(match_id)
        if found is None and self.on_court.match_id not in {None, match_id}:
            found = event.find_draw_match(self.on_court.match_id or "")
        if found is None:
            raise MissingDrawMatchError(f"Match {match_id} not found in the draws of {event.name}")
        draw, draw_match = found
        return builder.from_draw(
            tournament_match_number=self.tournament_match_number,
            event=event,
            draw=draw,
            draw_match=draw_match,
            officials=self.on_court.officials,
        )


def snapshot_from_document(document: TournamentDocument) -> list[RawCourtEntry]:
    """Return one entry per court currently showing a match.

    Nodes without a numeric match id or without a court are logged and left
    out; they cannot be correlated with the scoreboard.
    """

    entries: list[RawCourtEntry] = []
    for on_court in document.on_court:
        try:
            number = int(on_court.match_id or "")
        except ValueError:
            log.warning(f"Ignoring on-court match with invalid ID {on_court.match_id!r}")
            continue
        if not on_court.court:
            log.warning(f"Ignoring match {number} without a court")
            continue
        log.debug(f"ID: {number} EID: {on_court.event_id} CT: {on_court.court}")
        entries.append(
            RawCourtEntry(
                court=on_court.court,
                tournament_match_number=number,
                details=TournamentTvMatchDetails(
                    document=document,
                    on_court=on_court,
                    tournament_match_number=number,
                ),
            )
        )
    return entries


def decode_snapshot(data: bytes, *, export_dir: Path | None = None) -> list[RawCourtEntry]:
    """Decode one TournamentTV message body into snapshot entries.

    The decompressed XML is exported as received, before the ampersand fix-up,
    so a message that later fails to parse is still kept on disk.
    """

    text = decompress_payload(data)
    if export_dir is not None:
        export_message(text, export_dir)
    document = TournamentDocument.from_xml(parse_document(sanitize(text)))
    return snapshot_from_document(document)
