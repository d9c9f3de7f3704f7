"""Port for polled tournament sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from courtsync.domain.model import RawCourtEntry


@runtime_checkable
class SnapshotSource(Protocol):
    """Callable returning the courts currently showing a match."""

    def __call__(self) -> list[RawCourtEntry]: ...


__all__ = ["SnapshotSource"]
