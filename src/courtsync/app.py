"""Application orchestration entry points."""

from __future__ import annotations

import sys
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine

from courtsync.adapters.scoreboard import ScoreboardClient
from courtsync.adapters.tournamenttv import TournamentTvServer, decode_snapshot
from courtsync.adapters.tpdatabase import DatabaseSnapshotSource
from courtsync.config import SourceMode
from courtsync.domain.match_builder import MatchBuilder
from courtsync.domain.ports import ScoreboardSession
from courtsync.domain.reconciliation import (
    AssignmentPublisher,
    CreationFailurePolicy,
    ReconciliationEngine,
)

if TYPE_CHECKING:
    from courtsync.common.stop import StopFlag
    from courtsync.config import ConnectorConfig, ScoreboardConfig
    from courtsync.domain.ports import ScoreboardGateway, SnapshotSource

ServerFactory = Callable[..., TournamentTvServer]

log = getLogger(__name__)


def open_session(
    config: ScoreboardConfig,
    *,
    gateway: ScoreboardGateway | None = None,
) -> ScoreboardSession:
    """Connect to the scoreboard and fetch the courts of the device's unit."""

    session = ScoreboardSession.open(gateway or ScoreboardClient(config=config))
    tournament = config.tournament_id or "chosen by server"
    names = ", ".join(court.name for court in session.courts)
    log.info(
        f"Using unit {config.device.unit_id}, tournament {tournament}, "
        f"{len(session.courts)} courts: {names}"
    )
    return session


def build_engine(session: ScoreboardSession, connector: ConnectorConfig) -> ReconciliationEngine:
    """Wire publisher and engine with the failure policy of the source mode.

    Database polling creates matches directly and aborts the tick when that
    fails; TournamentTV looks matches up by sequence number first and keeps a
    local copy when creation fails.
    """

    builder = MatchBuilder(translate_categories=connector.translate_categories)
    if connector.mode is SourceMode.DATABASE:
        publisher = AssignmentPublisher(
            session=session,
            builder=builder,
            lookup_existing=False,
            on_creation_failure=CreationFailurePolicy.ABORT_TICK,
        )
    else:
        publisher = AssignmentPublisher(
            session=session,
            builder=builder,
            lookup_existing=True,
            on_creation_failure=CreationFailurePolicy.KEEP_LOCAL,
        )
    return ReconciliationEngine(publisher=publisher)


def run_database_mode(
    connector: ConnectorConfig,
    *,
    session: ScoreboardSession,
    stop: StopFlag,
    source: SnapshotSource | None = None,
    watch_console: bool = False,
) -> ReconciliationEngine:
    """Poll the tournament database until ``stop`` is set.

    ``TickAbortedError`` propagates and ends the loop.
    """

    engine = build_engine(session, connector)
    if source is None:
        if connector.database_uri is None:
            raise ValueError("Database mode requires a database URI")
        source = DatabaseSnapshotSource(create_engine(connector.database_uri))
    log.info(f"Polling the tournament database every {connector.poll_seconds}s")

    while not stop.is_set():
        engine.run_tick(source())
        if watch_console and stop.poll_console():
            break
        if stop.wait(connector.poll_seconds):
            break
    return engine


def run_ttv_mode(
    connector: ConnectorConfig,
    *,
    session: ScoreboardSession,
    stop: StopFlag,
    server_factory: ServerFactory = TournamentTvServer,
    watch_console: bool = False,
) -> ReconciliationEngine:
    """Serve TournamentTV pushes until ``stop`` is set."""

    engine = build_engine(session, connector)
    export_dir = connector.export_dir
    if export_dir is not None:
        export_dir.mkdir(parents=True, exist_ok=True)
        log.info(f"Exporting received messages to {export_dir}")

    def on_message(data: bytes) -> None:
        engine.run_tick(decode_snapshot(data, export_dir=export_dir))

    def on_idle() -> None:
        if watch_console:
            stop.poll_console()

    with server_factory((connector.listen_host, connector.listen_port), on_message) as server:
        server.serve_until(stop, on_idle=on_idle)
    return engine


def run_connector(
    connector: ConnectorConfig,
    scoreboard: ScoreboardConfig,
    *,
    stop: StopFlag,
    gateway: ScoreboardGateway | None = None,
) -> ReconciliationEngine:
    """Open a scoreboard session and run the source selected by ``connector``."""

    session = open_session(scoreboard, gateway=gateway)
    watch_console = sys.stdin is not None and sys.stdin.isatty()
    if watch_console:
        log.info("Press q to quit")
    if connector.mode is SourceMode.DATABASE:
        return run_database_mode(
            connector, session=session, stop=stop, watch_console=watch_console
        )
    return run_ttv_mode(connector, session=session, stop=stop, watch_console=watch_console)
