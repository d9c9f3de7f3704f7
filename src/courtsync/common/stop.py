"""Cooperative cancellation for the blocking connector loops."""

from __future__ import annotations

import select
import sys
import threading
import time
from logging import getLogger
from signal import SIGINT, signal
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from types import FrameType

log = getLogger(__name__)

QUIT_KEY = "q"
SIGINT_REASON = "closed by user (Ctrl+C)"
WAIT_SLICE_SECONDS = 0.1


class StopFlag:
    """Set once to ask every loop to finish its current iteration and return.

    The SIGINT handler only flips a plain attribute; :meth:`is_set` turns it
    into a regular stop the next time a loop checks the flag, and :meth:`wait`
    sleeps in short slices so it notices that in time.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._interrupted = False
        self.reason: str | None = None

    def set(self, reason: str = "stop requested") -> None:
        if not self._event.is_set():
            log.info(f"Stopping: {reason}")
            self.reason = reason
        self._event.set()

    def is_set(self) -> bool:
        if self._interrupted and not self._event.is_set():
            self.set(SIGINT_REASON)
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return early with True once the flag is set."""

        deadline = time.monotonic() + seconds
        while not self.is_set():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            self._event.wait(min(remaining, WAIT_SLICE_SECONDS))
        return True

    def interrupt(self, _signal_received: int = SIGINT, _frame: FrameType | None = None) -> None:
        """SIGINT handler; safe to run while the main thread holds any lock."""

        self._interrupted = True

    def install_sigint_handler(self) -> None:
        signal(SIGINT, self.interrupt)

    def poll_console(self, stream: TextIO | None = None) -> bool:
        """Set the flag when the quit key was typed on ``stream`` (stdin by default)."""

        if console_quit_requested(stream or sys.stdin):
            self.set("quit key pressed")
        return self.is_set()


def console_quit_requested(stream: TextIO) -> bool:
    """Non-blocking check for a pending quit key.

    On Windows the console keyboard buffer is inspected; elsewhere a line is
    read from ``stream`` only when one is already waiting.
    """

    if sys.platform == "win32":
        import msvcrt

        while msvcrt.kbhit():
            if msvcrt.getwch().lower() == QUIT_KEY:
                return True
        return False

    try:
        ready, _, _ = select.select([stream], [], [], 0)
    except (OSError, ValueError):
        return False
    if not ready:
        return False
    return stream.readline().strip().lower() == QUIT_KEY
