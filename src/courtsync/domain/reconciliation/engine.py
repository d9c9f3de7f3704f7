"""Per-tick reconciliation of court assignments.

Each tick runs three steps over the previous state:

1) reset the ``pinged`` flag of every known assignment
2) ingest the snapshot; courts still showing the same match are pinged,
   anything else is published and recorded as the court's new assignment
3) drop assignments that were not pinged; their court was vacated

The scoreboard service is not told about vacated courts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import DEBUG, INFO, getLogger
from typing import TYPE_CHECKING

from courtsync.domain.errors import RemoteServiceError, ResolutionError
from courtsync.domain.model import CourtAssignment

from .plan import ChangeKind, CourtChange, TickReport

if TYPE_CHECKING:
    from collections.abc import Iterable

    from courtsync.domain.model import RawCourtEntry

    from .publisher import AssignmentPublisher

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    publisher: AssignmentPublisher
    assignments: dict[str, CourtAssignment] = field(default_factory=dict[str, CourtAssignment])

    def run_tick(self, entries: Iterable[RawCourtEntry]) -> TickReport:
        """Converge the known assignments on ``entries`` and report the changes."""

        report = TickReport()
        for assignment in self.assignments.values():
            assignment.pinged = False

        for entry in entries:
            self._ingest(entry, report)

        self._remove_vacated(report)
        level = DEBUG if report.is_quiet else INFO
        summary = report.summary() or "-"
        log.log(level, f"Tick finished: {summary}; courts {self.sequence_numbers()}")
        return report

    def sequence_numbers(self) -> dict[str, int]:
        """Current court -> sequence number mapping."""

        return {
            court: assignment.tournament_match_number
            for court, assignment in self.assignments.items()
        }

    def _ingest(self, entry: RawCourtEntry, report: TickReport) -> None:
        current = self.assignments.get(entry.court)
        number = entry.tournament_match_number
        if current is not None and current.tournament_match_number == number:
            if current.match.is_registered:
                current.pinged = True
                report.add(
                    CourtChange(
                        court=entry.court,
                        kind=ChangeKind.UNCHANGED,
                        previous=number,
                        current=number,
                    )
                )
                return
            kind = ChangeKind.RETRIED
        elif current is None:
            kind = ChangeKind.ADDED
        else:
            kind = ChangeKind.CHANGED
        previous = current.tournament_match_number if current is not None else None

        try:
            match = self.publisher.publish(entry)
        except (ResolutionError, RemoteServiceError) as exc:
            log.warning(f"Skipping match {number} on court {entry.court}: {exc}")
            report.add(
                CourtChange(
                    court=entry.court,
                    kind=ChangeKind.SKIPPED,
                    previous=previous,
                    reason=str(exc),
                )
            )
            return

        self.assignments[entry.court] = CourtAssignment(
            court=entry.court,
            match=match,
            location=entry.location,
            pinged=True,
        )
        log.info("Match: %s", match.describe())
        self.publisher.assign(match, entry.court)
        report.add(CourtChange(court=entry.court, kind=kind, previous=previous, current=number))

    def _remove_vacated(self, report: TickReport) -> None:
        vacated = [court for court, assignment in self.assignments.items() if not assignment.pinged]
        for court in vacated:
            assignment = self.assignments.pop(court)
            log.info(f"Match {assignment.tournament_match_number} removed from court {court}!")
            report.add(
                CourtChange(
                    court=court,
                    kind=ChangeKind.VACATED,
                    previous=assignment.tournament_match_number,
                )
            )
