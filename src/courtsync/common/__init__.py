from __future__ import annotations

from .stop import StopFlag, console_quit_requested

__all__ = ["StopFlag", "console_quit_requested"]
