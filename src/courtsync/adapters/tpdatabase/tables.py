"""SQLAlchemy Core view of the tournament database tables read by the connector.

Only the columns used by the court snapshot are declared. The tournament
file is owned by the tournament software; ``create_all_tables`` exists for
local fixtures.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, Integer, MetaData, String, Table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData()

club_table = Table(
    "Club",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String),
)

player_table = Table(
    "Player",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String),
    Column("firstname", String),
    Column("asianname", Boolean, default=False),
    Column("club", Integer),
)

event_table = Table(
    "Event",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String),
    Column("gender", Integer),
    Column("eventtype", Integer),
)

player_match_table = Table(
    "PlayerMatch",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("event", Integer),
    Column("sp1", Integer),
    Column("sp2", Integer),
    Column("sp3", Integer),
    Column("sp4", Integer),
)

location_table = Table(
    "Location",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String),
)

court_table = Table(
    "Court",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String),
    Column("location", Integer),
    Column("playermatch", Integer, default=0),
)


def create_all_tables(engine: Engine) -> None:
    log.info("Creating tournament tables")
    metadata.create_all(engine)
