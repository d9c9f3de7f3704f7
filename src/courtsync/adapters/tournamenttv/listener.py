"""TCP listener for TournamentTV pushes.

The server is single threaded: a connection is read to EOF and handed to
``on_message`` before the next one is accepted. ``handle_request`` runs with
a short timeout so a ``StopFlag`` is honoured while no client is connected.
"""

from __future__ import annotations

import socketserver
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING, Final

from courtsync.domain.errors import MalformedMessageError

from .wire import read_message

if TYPE_CHECKING:
    from courtsync.common.stop import StopFlag

MessageHandler = Callable[[bytes], None]

log = getLogger(__name__)

ACCEPT_TIMEOUT_SECONDS: Final[float] = 0.5


class TournamentTvRequestHandler(socketserver.StreamRequestHandler):
    server: TournamentTvServer

    def handle(self) -> None:
        peer = self.client_address[0]
        log.info(f"Connected to {peer}")
        data = read_message(self.rfile)
        log.debug(f"Received {len(data)} bytes from {peer}")
        try:
            self.server.on_message(data)
        except MalformedMessageError as exc:
            log.error(f"Discarding message from {peer}: {exc}")


class TournamentTvServer(socketserver.TCPServer):
    allow_reuse_address = True

    def __init__(
        self,
        address: tuple[str, int],
        on_message: MessageHandler,
        *,
        accept_timeout: float = ACCEPT_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(address, TournamentTvRequestHandler)
        self.on_message = on_message
        self.timeout = accept_timeout

    @property
    def port(self) -> int:
        return self.server_address[1]

    def serve_until(
        self,
        stop: StopFlag,
        *,
        on_idle: Callable[[], object] | None = None,
    ) -> None:
        """Accept connections one at a time until ``stop`` is set."""

        log.info(f"Listening for TournamentTV on port {self.port}...")
        while not stop.is_set():
            self.handle_request()
            if on_idle is not None:
                on_idle()
        log.info("Listener stopped")

    def handle_error(self, request: object, client_address: object) -> None:
        log.exception(f"Connection from {client_address} aborted")
