from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from courtsync.app import run_connector
from courtsync.common.stop import StopFlag
from courtsync.config import (
    ConfigurationError,
    ConnectorConfig,
    ScoreboardConfig,
    access_database_uri,
    configure_logging,
    get_connector_config,
    get_scoreboard_config,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Log debug output",
    )
    common.add_argument(
        "--translate-categories",
        action="store_true",
        default=None,
        help="Map Swedish event names (hs, damdubbel, ...) to scoreboard categories",
    )
    common.add_argument(
        "--scoreboard-url",
        type=str,
        help="ScoreboardLive base URL (defaults to config)",
    )
    common.add_argument(
        "--tournament-id",
        type=int,
        help="ScoreboardLive tournament to add matches to (defaults to the server's choice)",
    )

    parser = argparse.ArgumentParser(
        description="Assign TournamentSoftware matches to ScoreboardLive courts"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    database = subparsers.add_parser(
        "database",
        parents=[common],
        help="Poll the courts of a tournament database",
    )
    database.add_argument(
        "--database",
        type=Path,
        help="Path to the tournament file (.tp)",
    )
    database.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy URI of the tournament database (overrides --database)",
    )
    database.add_argument(
        "--password",
        type=str,
        help="Password of the tournament file",
    )
    database.add_argument(
        "--poll-seconds",
        type=float,
        help="Seconds to wait between two database polls (defaults to config)",
    )

    ttv = subparsers.add_parser(
        "ttv",
        parents=[common],
        help="Listen for TournamentTV updates",
    )
    ttv.add_argument(
        "--host",
        type=str,
        help="Interface to listen on (defaults to all interfaces)",
    )
    ttv.add_argument(
        "--port",
        type=int,
        help="TCP port to listen on (defaults to config)",
    )
    ttv.add_argument(
        "-x",
        "--export",
        type=Path,
        help="Directory to save every received XML message to",
    )

    return parser.parse_args(list(argv))


def _connector_config(args: argparse.Namespace) -> ConnectorConfig:
    config = get_connector_config().with_overrides(
        verbose=args.verbose,
        translate_categories=args.translate_categories,
    )
    if args.command == "database":
        uri = args.database_uri
        if uri is None and args.database is not None:
            uri = access_database_uri(args.database, password=args.password)
        config = config.with_overrides(database_uri=uri, poll_seconds=args.poll_seconds)
        if config.database_uri is None:
            raise ValueError("Missing --database or --database-uri (or COURTSYNC_DATABASE)")
        if config.poll_seconds < 0:
            raise ValueError("Poll seconds must be non-negative")
        return config

    if args.port is not None and not 0 <= args.port <= 65535:
        raise ValueError(f"Port out of range: {args.port}")
    config = config.with_overrides(
        listen_host=args.host,
        listen_port=args.port,
        export_dir=args.export,
    )
    return replace(config, database_uri=None)


def _scoreboard_config(args: argparse.Namespace) -> ScoreboardConfig:
    config = get_scoreboard_config(base_url=args.scoreboard_url)
    if args.tournament_id is not None:
        config = replace(config, tournament_id=args.tournament_id)
    return config


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        connector = _connector_config(parsed_args)
        scoreboard = _scoreboard_config(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    if connector.verbose:
        configure_logging(level=logging.DEBUG, force=True)

    stop = StopFlag()
    stop.install_sigint_handler()
    try:
        run_connector(connector, scoreboard, stop=stop)
    except Exception:
        log.exception("Fatal error while synchronising courts")
        sys.exit(1)

    if stop.reason:
        log.info(f"Closed: {stop.reason}")


if __name__ == "__main__":
    main()
