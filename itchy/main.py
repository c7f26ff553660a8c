#!/usr/bin/env python3
"""itchy - Main Entry Point (command line).

Downloads information about your itch.io library and stores it in a
SQLite database, making it easier to search and filter through what's
available.
"""

from __future__ import annotations

import argparse
import logging
import sqlite3
import sys
from pathlib import Path

import requests

from itchy.config import config
from itchy.core.db import Database
from itchy.core.logging import logger, setup_logging
from itchy.integrations.itch_api import ItchAPI
from itchy.integrations.itch_page_scraper import PageParseError
from itchy.services.library_sync_service import LibrarySyncService
from itchy.services.search_service import SearchService
from itchy.utils.formatting import format_listing
from itchy.version import __app_name__, __version__

__all__ = ["build_parser", "main", "protect_search_terms"]

_EPILOG = "You need an API key from https://itch.io/user/settings/api-keys"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all sub-commands."""
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description=(
            "Download information about your itch.io library into a SQLite database, "
            "making it easier to search and filter through what's available."
        ),
        epilog=_EPILOG,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--db", type=Path, default=None, help="SQLite database file (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write a debug log to this file")

    commands = parser.add_subparsers(dest="command", metavar="command")

    sync = commands.add_parser(
        "sync",
        aliases=["update"],
        help="Update the database with the newest games from your library",
    )
    sync.add_argument("apikey", nargs="?", default=None, help="itch.io API key (default: ITCH_API_KEY)")

    search = commands.add_parser(
        "search",
        help="Search the database. Prefix terms with + or - to include or exclude specific tags",
    )
    search.add_argument("-f", "--full", action="store_true", help="Show and search full description")
    search.add_argument("terms", nargs="*", help="Search terms")

    download = commands.add_parser("download-url", help="Print a download URL for a stored file")
    download.add_argument("fileid", type=int, help="Id of the file (upload)")
    download.add_argument("--api-key", default=None, help="itch.io API key (default: ITCH_API_KEY)")

    return parser


# Global options that consume the following token as their value
_VALUE_OPTIONS = frozenset({"--db", "--log-file"})
_SEARCH_OPTIONS = frozenset({"-f", "--full", "-h", "--help"})


def protect_search_terms(argv: list[str]) -> list[str]:
    """Keep ``-tag`` search terms away from the option parser.

    argparse would read ``-horror`` as the option ``-h`` with a value. For
    the search command the known options are moved to the front and a
    ``--`` separator is put before the terms, which keep their order.
    Command lines that already contain ``--`` are left alone.

    Args:
        argv: Arguments without the program name.

    Returns:
        The arguments to hand to the parser.
    """
    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg == "--":
            return list(argv)
        if not arg.startswith("-"):
            break
        index += 2 if arg in _VALUE_OPTIONS else 1
    else:
        return list(argv)

    if argv[index] != "search":
        return list(argv)

    head, rest = list(argv[: index + 1]), argv[index + 1 :]
    if "--" in rest:
        return head + list(rest)

    options = [arg for arg in rest if arg in _SEARCH_OPTIONS]
    terms = [arg for arg in rest if arg not in _SEARCH_OPTIONS]
    return head + options + (["--", *terms] if terms else [])


def _make_api(api_key: str) -> ItchAPI:
    return ItchAPI(api_key, base_url=config.API_BASE_URL, timeout=config.REQUEST_TIMEOUT)


def cmd_sync(database: Database, api_key: str) -> int:
    """Sync command."""
    LibrarySyncService(_make_api(api_key), database).sync()
    return 0


def cmd_search(database: Database, terms: list[str], full: bool) -> int:
    """Search command."""
    results = database.search(SearchService.build_query(terms, full=full))
    if not results:
        logger.error("Found no matching entries")
        return 1

    for listing in results:
        print(format_listing(listing, full=full))
    logger.info("Found %d matching entries", len(results))
    return 0


def cmd_download_url(database: Database, api_key: str, fileid: int) -> int:
    """Download URL command."""
    file = database.get_file(fileid)
    game = database.get_game(file.gameid) if file else None
    if game is None:
        logger.error("Unknown file %d, run sync first", fileid)
        return 1

    print(_make_api(api_key).get_download_url(game.gameid, fileid, game.key))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments without the program name, defaults to sys.argv[1:].

    Returns:
        Process exit code.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(protect_search_terms(argv))

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    if args.command is None:
        parser.print_help()
        return 0

    api_key = getattr(args, "apikey", None) or getattr(args, "api_key", None) or config.ITCH_API_KEY
    if args.command in ("sync", "update", "download-url") and not api_key:
        parser.error("an API key is required (argument or ITCH_API_KEY)")

    try:
        with Database(args.db or config.DB_PATH) as database:
            if args.command == "search":
                return cmd_search(database, args.terms, args.full)
            if args.command == "download-url":
                return cmd_download_url(database, api_key, args.fileid)
            return cmd_sync(database, api_key)
    except (requests.RequestException, PageParseError) as e:
        logger.error("Request failed: %s", e)
    except sqlite3.Error as e:
        logger.error("Database error: %s", e)
    return 1


if __name__ == "__main__":
    sys.exit(main())
