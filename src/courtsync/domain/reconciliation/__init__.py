"""Court assignment reconciliation.

The engine diffs each snapshot against the assignments of the previous tick
and hands new assignments to the publisher, which talks to the scoreboard
service through the ``ScoreboardGateway`` port.
"""

from __future__ import annotations

from .engine import ReconciliationEngine
from .plan import ChangeKind, CourtChange, TickReport
from .policy import CreationFailurePolicy
from .publisher import AssignmentPublisher

__all__ = [
    "AssignmentPublisher",
    "ChangeKind",
    "CourtChange",
    "CreationFailurePolicy",
    "ReconciliationEngine",
    "TickReport",
]
