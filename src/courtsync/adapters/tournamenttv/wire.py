"""TournamentTV message framing.

One message per TCP connection: a 4-byte header followed by a gzip stream,
terminated by the sender closing the connection. The decompressed payload
starts with 3 bytes that are not part of the XML document.
"""

from __future__ import annotations

import gzip
import xml.etree.ElementTree as ET
import zlib
from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING, BinaryIO, Final

from courtsync.domain.errors import MalformedMessageError

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

FRAME_HEADER_SIZE: Final[int] = 4
PREAMBLE_SIZE: Final[int] = 3
READ_CHUNK_SIZE: Final[int] = 1024


def read_message(stream: BinaryIO) -> bytes:
    """Read until end of stream and return the bytes after the frame header."""

    chunks: list[bytes] = []
    while True:
        chunk = stream.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)[FRAME_HEADER_SIZE:]


def decompress_payload(data: bytes) -> str:
    """Gunzip ``data`` and drop the preamble; bytes that are not UTF-8 become U+FFFD."""

    try:
        raw = gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as exc:
        raise MalformedMessageError(f"Cannot decompress message: {exc}") from exc
    return raw[PREAMBLE_SIZE:].decode("utf-8", errors="replace")


def sanitize(text: str) -> str:
    """Escape the bare ampersands TournamentTV sends ("Court & Time TBA")."""

    return text.replace("& ", "&amp; ")


def parse_document(text: str) -> ET.Element:
    try:
        return ET.fromstring(text)  # noqa: S314
    except ET.ParseError as exc:
        raise MalformedMessageError(f"Cannot parse message XML: {exc}") from exc


def export_message(text: str, directory: Path, *, now: datetime | None = None) -> Path | None:
    """Write ``text`` to ``directory`` named after the receive time.

    Failures are logged and reported as ``None``; exporting never blocks
    processing of the message.
    """

    stamp = (now or datetime.now()).strftime("%Y%m%d%H%M%S%f")[:-3]
    path = directory / f"{stamp}.xml"
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        log.error(f"Cannot export XML message to {path}: {exc}")
        return None
    return path
