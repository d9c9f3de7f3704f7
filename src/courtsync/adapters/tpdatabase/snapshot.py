"""Court snapshot query against the tournament database."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from sqlalchemy import case, select

from courtsync.domain.errors import SnapshotSchemaError
from courtsync.domain.model import RawCourtEntry

from .tables import (
    club_table,
    court_table,
    event_table,
    location_table,
    player_match_table,
    player_table,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy import ColumnElement, FromClause, Select
    from sqlalchemy.engine import Engine

    from courtsync.domain.match_builder import MatchBuilder
    from courtsync.domain.model import Match

log = getLogger(__name__)

# Positions in the projection built by ``court_snapshot_statement``.
COL_ID: Final[int] = 0
COL_COURT_NAME: Final[int] = 1
COL_LOCATION_NAME: Final[int] = 2
COL_PLAYER_1_NAME: Final[int] = 3
COL_CLUB_1_NAME: Final[int] = 4
COL_PLAYER_2_NAME: Final[int] = 5
COL_CLUB_2_NAME: Final[int] = 6
COL_PLAYER_3_NAME: Final[int] = 7
COL_CLUB_3_NAME: Final[int] = 8
COL_PLAYER_4_NAME: Final[int] = 9
COL_CLUB_4_NAME: Final[int] = 10
COL_EVENT: Final[int] = 11
COL_COUNT: Final[int] = 12

SINGLES_EVENT_TYPE: Final[int] = 1

PlayerColumns = tuple[tuple[str, str], tuple[str, str], tuple[str, str], tuple[str, str]]


def _player_name(player: FromClause) -> ColumnElement[str]:
    return case(
        (player.c.asianname, player.c.name.concat(" ").concat(player.c.firstname)),
        else_=player.c.name.concat(", ").concat(player.c.firstname),
    )


def _event_code() -> ColumnElement[str]:
    gender = case(
        (event_table.c.gender.in_((1, 4)), "m"),
        (event_table.c.gender.in_((2, 5)), "w"),
        (event_table.c.gender.in_((3, 6)), "x"),
        else_="",
    )
    discipline = case((event_table.c.eventtype == SINGLES_EVENT_TYPE, "s"), else_="d")
    return gender.concat(discipline)


def court_snapshot_statement() -> Select[tuple[object, ...]]:
    """One row per court with a match on it, in ``COL_*`` order."""

    players = [player_table.alias(f"Player_{n}") for n in range(1, 5)]
    clubs = [club_table.alias(f"Club_{n}") for n in range(1, 5)]
    slots = (
        player_match_table.c.sp1,
        player_match_table.c.sp2,
        player_match_table.c.sp3,
        player_match_table.c.sp4,
    )

    joined = (
        location_table.join(court_table, location_table.c.id == court_table.c.location)
        .join(player_match_table, player_match_table.c.id == court_table.c.playermatch)
        .join(event_table, player_match_table.c.event == event_table.c.id)
    )
    columns: list[ColumnElement[object]] = [
        player_match_table.c.id.label("id"),
        court_table.c.name.label("court_name"),
        location_table.c.name.label("location_name"),
    ]
    for n, (player, club, slot) in enumerate(zip(players, clubs, slots, strict=True), start=1):
        joined = joined.outerjoin(player, player.c.id == slot).outerjoin(
            club, club.c.id == player.c.club
        )
        columns.append(_player_name(player).label(f"player_{n}_name"))
        columns.append(club.c.name.label(f"club_{n}_name"))
    columns.append(_event_code().label("event"))

    return select(*columns).select_from(joined).where(court_table.c.playermatch != 0)


def _text(value: object) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True, slots=True)
class DatabaseMatchDetails:
    """Match fields already present in a snapshot row."""

    tournament_match_number: int
    category: str
    players: PlayerColumns

    def build_match(self, builder: MatchBuilder) -> Match:
        return builder.from_columns(
            tournament_match_number=self.tournament_match_number,
            category=self.category,
            players=self.players,
        )


def entries_from_rows(rows: Iterable[Sequence[object]]) -> list[RawCourtEntry]:
    """Convert snapshot rows into entries.

    Raises ``SnapshotSchemaError`` for a row with fewer than ``COL_COUNT``
    columns. Rows whose id is not an integer are skipped.
    """

    entries: list[RawCourtEntry] = []
    for row in rows:
        if len(row) < COL_COUNT:
            raise SnapshotSchemaError(
                f"Not enough columns returned from query. Got {len(row)}, expected {COL_COUNT}"
            )
        try:
            number = int(_text(row[COL_ID]))
        except ValueError:
            log.warning(f"Ignoring court row with invalid match ID {row[COL_ID]!r}")
            continue
        players: PlayerColumns = (
            (_text(row[COL_PLAYER_1_NAME]), _text(row[COL_CLUB_1_NAME])),
            (_text(row[COL_PLAYER_2_NAME]), _text(row[COL_CLUB_2_NAME])),
            (_text(row[COL_PLAYER_3_NAME]), _text(row[COL_CLUB_3_NAME])),
            (_text(row[COL_PLAYER_4_NAME]), _text(row[COL_CLUB_4_NAME])),
        )
        entries.append(
            RawCourtEntry(
                court=_text(row[COL_COURT_NAME]),
                tournament_match_number=number,
                location=_text(row[COL_LOCATION_NAME]),
                details=DatabaseMatchDetails(
                    tournament_match_number=number,
                    category=_text(row[COL_EVENT]),
                    players=players,
                ),
            )
        )
    return entries


class DatabaseSnapshotSource:
    """Poll the courts of a tournament database through SQLAlchemy."""

    def __init__(
        self,
        engine: Engine,
        *,
        statement: Select[tuple[object, ...]] | None = None,
    ) -> None:
        self._engine = engine
        self._statement = statement if statement is not None else court_snapshot_statement()

    def __call__(self) -> list[RawCourtEntry]:
        with self._engine.connect() as connection:
            rows = connection.execute(self._statement).all()
        entries = entries_from_rows(rows)
        log.debug(f"Database reports {len(entries)} courts in play")
        return entries
