from __future__ import annotations

import pytest

from courtsync.domain.draws import (
    Participant,
    feeder_plannings,
    parse_planning,
    participant_from_entry,
    resolve_participants,
)
from courtsync.domain.errors import (
    MissingDrawMatchError,
    MissingEntryError,
    ResolutionError,
    UnsupportedDrawTypeError,
)
from courtsync.domain.model import Draw, DrawMatch, DrawType, Entry, Event


def _event(draw: Draw, *entries: Entry) -> Event:
    return Event(
        event_id="1",
        name="HS U15",
        draws=[draw],
        entries={entry.entry_id: entry for entry in entries},
    )


def test_parse_planning_splits_level_and_position() -> None:
    assert parse_planning("4003") == (4, 3)
    assert parse_planning(" 1012 ") == (1, 12)


def test_parse_planning_rejects_garbage() -> None:
    with pytest.raises(ResolutionError):
        parse_planning("abcd")


@pytest.mark.parametrize(
    ("planning", "expected"),
    [
        ("2003", ("2000", "3000")),
        ("1002", ("1000", "2000")),
        ("3004", ("3000", "4000")),
    ],
)
def test_pool_feeders(planning: str, expected: tuple[str, str]) -> None:
    assert feeder_plannings(planning, DrawType.POOL) == expected


@pytest.mark.parametrize("draw_type", [DrawType.ELIMINATION, DrawType.QUALIFICATION])
def test_elimination_feeders(draw_type: DrawType) -> None:
    assert feeder_plannings("4003", draw_type) == ("5005", "5006")
    assert feeder_plannings("1001", draw_type) == ("2001", "2002")


def test_unknown_draw_type_is_rejected() -> None:
    with pytest.raises(UnsupportedDrawTypeError) as excinfo:
        feeder_plannings("2001", 3, event_name="HS U15")

    assert excinfo.value.draw_type == 3
    assert "HS U15" in str(excinfo.value)


def test_resolve_participants_in_elimination_draw() -> None:
    draw = Draw(draw_id="10", draw_type=DrawType.ELIMINATION)
    match = DrawMatch(planning="4003", match_id="7")
    draw.add_match(match)
    draw.add_match(DrawMatch(planning="5005", entry_id="E1"))
    draw.add_match(DrawMatch(planning="5006", entry_id="E2"))
    event = _event(
        draw,
        Entry(entry_id="E1", name1="Svensson, Erik", club1="BK Aura"),
        Entry(entry_id="E2", name1="Lind, Per", club1="Fyris"),
    )

    team1, team2 = resolve_participants(event, draw, match)

    assert team1 == Participant(player1_name="Svensson, Erik", player1_team="BK Aura")
    assert team2 == Participant(player1_name="Lind, Per", player1_team="Fyris")


def test_resolve_participants_reports_missing_feeder_slot() -> None:
    draw = Draw(draw_id="10", draw_type=DrawType.ELIMINATION)
    match = DrawMatch(planning="4003", match_id="7")
    draw.add_match(match)
    draw.add_match(DrawMatch(planning="5005", entry_id="E1"))
    event = _event(draw, Entry(entry_id="E1", name1="Svensson, Erik"))

    with pytest.raises(MissingDrawMatchError):
        resolve_participants(event, draw, match)


def test_resolve_participants_reports_unknown_entry() -> None:
    draw = Draw(draw_id="20", draw_type=DrawType.POOL)
    match = DrawMatch(planning="2003", match_id="9")
    draw.add_match(match)
    draw.add_match(DrawMatch(planning="2000", entry_id="E1"))
    draw.add_match(DrawMatch(planning="3000", entry_id="E9"))
    event = _event(draw, Entry(entry_id="E1", name1="Svensson, Erik"))

    with pytest.raises(MissingEntryError):
        resolve_participants(event, draw, match)


def test_doubles_partner_club_defaults_to_first_club() -> None:
    entry = Entry(entry_id="E1", name1="Berg, Ada", club1="IFK Umeå", name2="Berg, Bo")

    participant = participant_from_entry(entry, doubles=True)

    assert participant.player2_name == "Berg, Bo"
    assert participant.player2_team == "IFK Umeå"


def test_singles_ignore_second_player() -> None:
    entry = Entry(entry_id="E1", name1="Berg, Ada", club1="A", name2="Berg, Bo", club2="B")

    participant = participant_from_entry(entry, doubles=False)

    assert participant.player2_name == ""
    assert participant.player2_team == ""


def test_first_draw_match_with_a_planning_wins() -> None:
    draw = Draw(draw_id="10", draw_type=DrawType.ELIMINATION)
    draw.add_match(DrawMatch(planning="3001", entry_id="E1"))
    draw.add_match(DrawMatch(planning="3001", entry_id="E2"))

    slot = draw.match_at("3001")

    assert slot is not None
    assert slot.entry_id == "E1"
