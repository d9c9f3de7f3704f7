"""Push new court assignments to the scoreboard service."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from courtsync.domain.errors import RemoteServiceError, TickAbortedError

from .policy import CreationFailurePolicy

if TYPE_CHECKING:
    from courtsync.domain.match_builder import MatchBuilder
    from courtsync.domain.model import Match, RawCourtEntry
    from courtsync.domain.ports import ScoreboardSession

log = getLogger(__name__)


@dataclass(slots=True)
class AssignmentPublisher:
    """Find or create the remote match of a court entry and assign it.

    With ``lookup_existing`` the scoreboard service is first asked for a match
    with the same sequence number and that match is reused as is; otherwise
    the match is built locally and created on the fly.
    """

    session: ScoreboardSession
    builder: MatchBuilder
    lookup_existing: bool = True
    on_creation_failure: CreationFailurePolicy = CreationFailurePolicy.KEEP_LOCAL

    def publish(self, entry: RawCourtEntry) -> Match:
        """Return the match to show on ``entry.court``.

        Raises ``ResolutionError`` when the entry cannot be built,
        ``RemoteServiceError`` when the lookup fails and ``TickAbortedError``
        when creation fails under ``CreationFailurePolicy.ABORT_TICK``.
        """

        gateway = self.session.gateway
        if self.lookup_existing:
            existing = gateway.find_matches_by_sequence_number(entry.tournament_match_number)
            if existing:
                log.info(
                    f"Match {entry.tournament_match_number} already known to the scoreboard "
                    f"as {existing[0].match_id}"
                )
                return existing[0]

        match = entry.details.build_match(self.builder)
        log.info("New: %s", match.describe())
        log.info("Uploading a match to server...")
        try:
            created = gateway.create_match(match)
        except RemoteServiceError as exc:
            if self.on_creation_failure is CreationFailurePolicy.ABORT_TICK:
                raise TickAbortedError(
                    f"Could not create match {entry.tournament_match_number}: {exc}"
                ) from exc
            log.warning(
                f"Could not create match {entry.tournament_match_number}, "
                f"keeping the local copy until the next update: {exc}"
            )
            return match
        log.info("The following match was created:\n%s", created.describe())
        return created

    def assign(self, match: Match, court_name: str) -> bool:
        """Assign ``match`` to the court called ``court_name``; False when skipped."""

        if not match.is_registered:
            log.warning(f"Illegal match ID {match.match_id}, cannot assign to court!")
            return False
        court = self.session.court_named(court_name)
        if court is None:
            log.warning(f"Could not find court {court_name} in ScoreboardLive!")
            return False
        log.info(f"Assigning match {match.match_id} to court {court.name}")
        try:
            self.session.gateway.assign_match_to_court(match, court)
        except RemoteServiceError as exc:
            log.error(f"Assigning match {match.match_id} to court {court.name} failed: {exc}")
            return False
        return True
