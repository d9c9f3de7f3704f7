from __future__ import annotations

import socket
import threading
import time
from typing import TYPE_CHECKING

import pytest

from courtsync import app as app_module
from courtsync.adapters.tournamenttv import TournamentTvServer
from courtsync.app import build_engine, run_connector, run_database_mode, run_ttv_mode
from courtsync.common.stop import StopFlag
from courtsync.config import ConnectorConfig, DeviceCredentials, ResilienceConfig, ScoreboardConfig
from courtsync.domain.errors import TickAbortedError
from courtsync.domain.model import RawCourtEntry  # noqa: TC001
from courtsync.domain.reconciliation import CreationFailurePolicy
from tests.helpers.scoreboard import court_entry
from tests.helpers.ttv import SAMPLE_XML, frame_message

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from courtsync.domain.ports import ScoreboardSession
    from tests.helpers.scoreboard import FakeScoreboardGateway


class ScriptedSource:
    """Return the given snapshots in order and stop after the last one."""

    def __init__(self, snapshots: list[list[RawCourtEntry]], stop: StopFlag) -> None:
        self.snapshots = list(snapshots)
        self.stop = stop

    def __call__(self) -> list[RawCourtEntry]:
        snapshot = self.snapshots.pop(0)
        if not self.snapshots:
            self.stop.set("snapshots exhausted")
        return snapshot


def _wait_for(condition: Callable[[], bool], timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.02)
    return False


def test_build_engine_picks_policy_per_mode(session: ScoreboardSession) -> None:
    database = build_engine(session, ConnectorConfig(database_uri="sqlite://"))
    ttv = build_engine(session, ConnectorConfig())

    assert database.publisher.on_creation_failure is CreationFailurePolicy.ABORT_TICK
    assert not database.publisher.lookup_existing
    assert ttv.publisher.on_creation_failure is CreationFailurePolicy.KEEP_LOCAL
    assert ttv.publisher.lookup_existing


def test_database_mode_polls_until_stopped(
    session: ScoreboardSession, gateway: FakeScoreboardGateway
) -> None:
    stop = StopFlag()
    source = ScriptedSource(
        [
            [court_entry("Court 1", 1), court_entry("Court 2", 2)],
            [court_entry("Court 1", 1), court_entry("Court 2", 3)],
        ],
        stop,
    )

    engine = run_database_mode(
        ConnectorConfig(database_uri="sqlite://", poll_seconds=0),
        session=session,
        stop=stop,
        source=source,
    )

    assert engine.sequence_numbers() == {"Court 1": 1, "Court 2": 3}
    assert [match.tournament_match_number for match in gateway.created] == [1, 2, 3]
    assert gateway.lookups == []


def test_database_mode_aborts_when_creation_fails(
    session: ScoreboardSession, gateway: FakeScoreboardGateway
) -> None:
    gateway.fail_create = True
    stop = StopFlag()
    source = ScriptedSource([[court_entry("Court 1", 1)], [court_entry("Court 1", 1)]], stop)

    with pytest.raises(TickAbortedError):
        run_database_mode(
            ConnectorConfig(database_uri="sqlite://", poll_seconds=0),
            session=session,
            stop=stop,
            source=source,
        )

    assert len(source.snapshots) == 1


def test_ttv_mode_reconciles_pushed_messages(
    session: ScoreboardSession, gateway: FakeScoreboardGateway, tmp_path: Path
) -> None:
    servers: list[TournamentTvServer] = []

    def server_factory(
        _address: tuple[str, int], on_message: Callable[[bytes], None]
    ) -> TournamentTvServer:
        server = TournamentTvServer(("127.0.0.1", 0), on_message, accept_timeout=0.05)
        servers.append(server)
        return server

    stop = StopFlag()
    connector = ConnectorConfig(translate_categories=True, export_dir=tmp_path / "export")
    result: list[object] = []
    thread = threading.Thread(
        target=lambda: result.append(
            run_ttv_mode(connector, session=session, stop=stop, server_factory=server_factory)
        )
    )
    thread.start()
    try:
        assert _wait_for(lambda: bool(servers))
        with socket.create_connection(("127.0.0.1", servers[0].port), timeout=5) as client:
            client.sendall(frame_message(SAMPLE_XML))
            client.shutdown(socket.SHUT_WR)
        assert _wait_for(lambda: len(gateway.assigned) == 2)
    finally:
        stop.set()
        thread.join(5)

    assert gateway.lookups == [101, 201]
    assert gateway.assigned == [(1001, "Court 1"), (1002, "Court 2")]
    assert len(list((tmp_path / "export").glob("*.xml"))) == 1
    assert len(result) == 1


def test_run_connector_dispatches_on_mode(
    monkeypatch: pytest.MonkeyPatch, gateway: FakeScoreboardGateway
) -> None:
    calls: list[str] = []

    def fake_database(*_args: object, **_kwargs: object) -> None:
        calls.append("database")

    def fake_ttv(*_args: object, **_kwargs: object) -> None:
        calls.append("ttv")

    monkeypatch.setattr(app_module, "run_database_mode", fake_database)
    monkeypatch.setattr(app_module, "run_ttv_mode", fake_ttv)
    scoreboard = ScoreboardConfig(
        device=DeviceCredentials(unit_id=1, device_code="secret"),
        resilience=ResilienceConfig(base_url="https://scoreboard.test/"),
    )

    run_connector(
        ConnectorConfig(database_uri="sqlite://"), scoreboard, stop=StopFlag(), gateway=gateway
    )
    run_connector(ConnectorConfig(), scoreboard, stop=StopFlag(), gateway=gateway)

    assert calls == ["database", "ttv"]
