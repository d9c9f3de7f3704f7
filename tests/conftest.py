from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from courtsync.adapters.tpdatabase import create_all_tables
from courtsync.domain.model import Court
from courtsync.domain.ports import ScoreboardSession
from tests.helpers.scoreboard import FakeScoreboardGateway
from tests.helpers.ttv import SAMPLE_XML, frame_message

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_XML


@pytest.fixture
def sample_message() -> bytes:
    return frame_message(SAMPLE_XML)


@pytest.fixture
def gateway() -> FakeScoreboardGateway:
    return FakeScoreboardGateway(
        courts=[
            Court(court_id=11, name="Court 1"),
            Court(court_id=12, name="Court 2"),
            Court(court_id=13, name="Court 3"),
        ]
    )


@pytest.fixture
def session(gateway: FakeScoreboardGateway) -> ScoreboardSession:
    return ScoreboardSession.open(gateway)


@pytest.fixture
def tournament_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()
