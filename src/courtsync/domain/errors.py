"""Domain error hierarchy."""

from __future__ import annotations


class CourtSyncError(RuntimeError):
    """Base class for errors raised by the synchronisation core."""


class ResolutionError(CourtSyncError):
    """Raised when a court entry cannot be turned into a complete match.

    The entry is skipped for the current tick; it is not fatal.
    """


class UnsupportedDrawTypeError(ResolutionError):
    def __init__(self, draw_type: int, *, event_name: str = "") -> None:
        message = f"Illegal draw type {draw_type}"
        if event_name:
            message += f" in {event_name}"
        super().__init__(message)
        self.draw_type = draw_type


class MissingDrawMatchError(ResolutionError):
    """Raised when an event, draw match or feeder slot is absent from the draw."""


class MissingEntryError(ResolutionError):
    """Raised when a feeder slot references no entry or an unknown one."""


class UnknownCategoryError(ResolutionError):
    def __init__(self, event_name: str) -> None:
        super().__init__(f"Cannot map event {event_name!r} to a scoreboard category")
        self.event_name = event_name


class MalformedMessageError(CourtSyncError):
    """Raised when a TournamentTV message cannot be decompressed or parsed."""


class SnapshotSchemaError(CourtSyncError):
    """Raised when the tournament database returns an unexpected projection."""


class RemoteServiceError(CourtSyncError):
    """Raised by scoreboard gateways when a remote call fails."""


class TickAbortedError(CourtSyncError):
    """Raised when a failure must stop the whole tick rather than one entry."""
