"""Outcome types of one reconciliation tick."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ChangeKind(StrEnum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    CHANGED = "changed"
    RETRIED = "retried"
    VACATED = "vacated"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True, kw_only=True)
class CourtChange:
    """Classification of one court after a tick.

    ``previous`` and ``current`` are sequence numbers; ``previous`` is ``None``
    for a court that had no assignment, ``current`` is ``None`` for a vacated
    court or one whose entry was skipped.
    """

    court: str
    kind: ChangeKind
    previous: int | None = None
    current: int | None = None
    reason: str | None = None


@dataclass(slots=True)
class TickReport:
    changes: list[CourtChange] = field(default_factory=list[CourtChange])

    def add(self, change: CourtChange) -> None:
        self.changes.append(change)

    def of_kind(self, kind: ChangeKind) -> list[CourtChange]:
        return [change for change in self.changes if change.kind is kind]

    def courts(self, kind: ChangeKind) -> set[str]:
        return {change.court for change in self.of_kind(kind)}

    @property
    def unchanged(self) -> set[str]:
        return self.courts(ChangeKind.UNCHANGED)

    @property
    def added(self) -> set[str]:
        return self.courts(ChangeKind.ADDED)

    @property
    def changed(self) -> set[str]:
        return self.courts(ChangeKind.CHANGED)

    @property
    def vacated(self) -> set[str]:
        return self.courts(ChangeKind.VACATED)

    @property
    def skipped(self) -> set[str]:
        return self.courts(ChangeKind.SKIPPED)

    @property
    def is_quiet(self) -> bool:
        """True when the tick neither assigned nor removed anything."""

        return all(
            change.kind in {ChangeKind.UNCHANGED, ChangeKind.SKIPPED} for change in self.changes
        )

    def summary(self) -> str:
        counts = {kind: len(self.of_kind(kind)) for kind in ChangeKind}
        return ", ".join(f"{kind}={count}" for kind, count in counts.items() if count)
