#!/usr/bin/env python3
"""
Command line search over a reading collection.

Usage:
    lectionary-search mountain
    lectionary-search "Exodus 3:1" --data https://example.org/readings.json
    lectionary-search "salvation, throne" --expand
    lectionary-search --json < queries.txt

Without a QUERY argument, queries are read from stdin one per line and
each line is searched as an explicit submit.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import TextIO

from lectionary_search import __version__
from lectionary_search.core.config import get_settings
from lectionary_search.core.exceptions import ConfigurationError
from lectionary_search.core.logging import configure_logging, get_logger
from lectionary_search.readings.dates import DateEncoding, format_reading_date
from lectionary_search.readings.loader import (
    HttpReadingSource,
    LoadState,
    ReadingStore,
    source_from_location,
)
from lectionary_search.render import render_outcome
from lectionary_search.search.matcher import SearchOutcome
from lectionary_search.session import SearchSession

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_LOAD_FAILED = 1
EXIT_USAGE = 2


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="lectionary-search",
        description="Search lectionary readings by verse reference or keywords.",
    )
    parser.add_argument(
        "query",
        nargs="?",
        help="Verse reference ('Genesis 1:1'), phrase, or comma-separated terms",
    )
    parser.add_argument(
        "--data",
        default=settings.readings_location,
        help="Readings JSON file or http(s) URL (default: %(default)s)",
    )
    parser.add_argument(
        "--date-encoding",
        choices=[e.value for e in DateEncoding],
        default=settings.date_encoding,
        help="How reading dates are encoded (default: %(default)s)",
    )
    parser.add_argument(
        "--expand",
        action="store_true",
        help="Show full reading text instead of a preview",
    )
    parser.add_argument(
        "--preview-chars",
        type=positive_int,
        default=settings.preview_chars,
        help="Preview length for collapsed results (default: %(default)s)",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON lines")
    parser.add_argument("--log-level", default="WARNING", help="Log level for stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def load_store(location: str) -> ReadingStore:
    settings = get_settings()
    store = ReadingStore()
    source = source_from_location(
        location,
        timeout=settings.http_timeout,
        max_retries=settings.http_max_retries,
    )
    try:
        await store.load(source)
    finally:
        if isinstance(source, HttpReadingSource):
            await source.close()
    return store


def outcome_to_json(outcome: SearchOutcome, encoding: DateEncoding) -> str:
    return json.dumps(
        {
            "query": outcome.query,
            "mode": outcome.mode.value,
            "status": outcome.status.value,
            "total_results": len(outcome),
            "results": [
                {
                    **r.to_dict(),
                    "display_date": format_reading_date(r.date, encoding),
                }
                for r in outcome.results
            ],
        },
        ensure_ascii=False,
    )


def emit(
    outcome: SearchOutcome,
    args: argparse.Namespace,
    out: TextIO,
) -> None:
    encoding = DateEncoding(args.date_encoding)
    if args.json:
        print(outcome_to_json(outcome, encoding), file=out)
        return

    text = render_outcome(
        outcome,
        expanded=args.expand,
        preview_chars=args.preview_chars,
        date_encoding=encoding,
    )
    if text:
        print(text, file=out)
        print(file=out)


def build_session(
    store: ReadingStore,
    args: argparse.Namespace,
    out: TextIO,
) -> SearchSession:
    """Session over the loaded store using the configured debounce window."""
    settings = get_settings()
    return SearchSession(
        store,
        debounce_seconds=settings.debounce_seconds,
        on_results=lambda o: emit(o, args, out),
    )


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Entry point for the lectionary-search console script."""
    args = build_parser().parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    configure_logging(log_level=args.log_level, json_output=False, stream=sys.stderr)

    try:
        store = asyncio.run(load_store(args.data))
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if store.state is not LoadState.READY:
        print(store.notice, file=sys.stderr)
        return EXIT_LOAD_FAILED

    session = build_session(store, args, stdout)

    if args.query is not None:
        session.submit(args.query)
        return EXIT_OK

    for line in stdin:
        session.submit(line.rstrip("\n"))

    logger.debug("session_finished", passes=session.passes)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
