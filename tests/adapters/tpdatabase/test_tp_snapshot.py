from __future__ import annotations

import pytest
from sqlalchemy import insert, select
from sqlalchemy.engine import Engine  # noqa: TC002

from courtsync.adapters.tpdatabase import DatabaseSnapshotSource, entries_from_rows
from courtsync.adapters.tpdatabase.tables import (
    club_table,
    court_table,
    event_table,
    location_table,
    player_match_table,
    player_table,
)
from courtsync.domain.errors import SnapshotSchemaError
from courtsync.domain.match_builder import MatchBuilder


@pytest.fixture
def populated_engine(tournament_engine: Engine) -> Engine:
    with tournament_engine.begin() as connection:
        connection.execute(
            insert(club_table),
            [{"id": 1, "name": "BK Aura"}, {"id": 2, "name": "Fyris"}],
        )
        connection.execute(
            insert(player_table),
            [
                {"id": 1, "name": "Svensson", "firstname": "Erik", "asianname": False, "club": 1},
                {"id": 2, "name": "Lind", "firstname": "Per", "asianname": False, "club": 2},
                {"id": 3, "name": "Wang", "firstname": "Li", "asianname": True, "club": None},
                {"id": 4, "name": "Berg", "firstname": "Ada", "asianname": False, "club": 2},
            ],
        )
        connection.execute(
            insert(event_table),
            [
                {"id": 1, "name": "HS A", "gender": 1, "eventtype": 1},
                {"id": 2, "name": "MD A", "gender": 6, "eventtype": 2},
            ],
        )
        connection.execute(
            insert(player_match_table),
            [
                {"id": 100, "event": 1, "sp1": 1, "sp2": None, "sp3": 2, "sp4": None},
                {"id": 200, "event": 2, "sp1": 3, "sp2": 4, "sp3": 2, "sp4": 1},
            ],
        )
        connection.execute(insert(location_table), [{"id": 1, "name": "Hall A"}])
        connection.execute(
            insert(court_table),
            [
                {"id": 1, "name": "Court 1", "location": 1, "playermatch": 100},
                {"id": 2, "name": "Court 2", "location": 1, "playermatch": 200},
                {"id": 3, "name": "Court 3", "location": 1, "playermatch": 0},
            ],
        )
    return tournament_engine


def test_snapshot_lists_courts_with_a_match(populated_engine: Engine) -> None:
    entries = sorted(DatabaseSnapshotSource(populated_engine)(), key=lambda entry: entry.court)

    assert [(entry.court, entry.tournament_match_number) for entry in entries] == [
        ("Court 1", 100),
        ("Court 2", 200),
    ]
    assert {entry.location for entry in entries} == {"Hall A"}


def test_singles_row_builds_match(populated_engine: Engine) -> None:
    entries = {entry.court: entry for entry in DatabaseSnapshotSource(populated_engine)()}

    match = entries["Court 1"].details.build_match(MatchBuilder())

    assert match.tournament_match_number == 100
    assert match.category == "ms"
    assert (match.team1_player1_name, match.team1_player1_team) == ("Svensson, Erik", "BK Aura")
    assert (match.team1_player2_name, match.team1_player2_team) == ("", "")
    assert (match.team2_player1_name, match.team2_player1_team) == ("Lind, Per", "Fyris")


def test_doubles_row_uses_asian_name_order(populated_engine: Engine) -> None:
    entries = {entry.court: entry for entry in DatabaseSnapshotSource(populated_engine)()}

    match = entries["Court 2"].details.build_match(MatchBuilder())

    assert match.category == "xd"
    assert (match.team1_player1_name, match.team1_player1_team) == ("Wang Li", "")
    assert match.team1_player2_name == "Berg, Ada"
    assert match.team2_player2_name == "Svensson, Erik"


def test_projection_with_too_few_columns_is_rejected(populated_engine: Engine) -> None:
    source = DatabaseSnapshotSource(
        populated_engine,
        statement=select(court_table.c.playermatch, court_table.c.name),
    )

    with pytest.raises(SnapshotSchemaError):
        source()


def test_rows_with_non_numeric_id_are_skipped() -> None:
    row = ("abc", "Court 1", "Hall A", *[""] * 8, "ms")
    valid = ("7", "Court 2", None, *[None] * 8, "wd")

    entries = entries_from_rows([row, valid])

    assert [(entry.court, entry.tournament_match_number) for entry in entries] == [("Court 2", 7)]
    assert entries[0].location == ""
