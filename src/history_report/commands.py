"""CLI entry point that parses transcript exports and prints statistics.

Usage::

    history_stats exports/ --aliases aliases.json --interactive

Inputs may be files or directories; only ``.txt`` files are parsed. When no
input is given the ``./data`` directory is used.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from chat_history.aliases import AliasTable, load_alias_table
from chat_history.errors import AliasConfigError, SourceUnreadableError
from chat_history.gaps import spans_longer_than
from chat_history.identities import (
    rank_by_message_count,
    rank_by_word_count,
    resolve_identities,
)
from chat_history.loader import collect_transcript_paths
from chat_history.models import UserIdentity
from chat_history.pipeline import History, parse_history
from chat_history.words import (
    DEFAULT_STOP_WORDS,
    DEFAULT_TOP_WORDS,
    count_words,
    split_words,
    text_messages,
    top_words,
    words_longer_than,
)

from .browse import browse_users
from .render import (
    basic_statistics_frame,
    missing_dates_frame,
    ranking_frame,
    render_table,
    word_frequency_frame,
)
from .summary import summarize_history

DEFAULT_DATA_DIR = Path("data")
DEFAULT_MIN_GAP_DAYS = 7
DEFAULT_TOP_USERS = 10
DEFAULT_LONG_WORD_LENGTHS = (5, 10)

LOGGER_NAMES = ("chat_history", "history_report")

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="history_stats",
        description="Merge exported chat transcripts and print statistics",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        type=Path,
        help=f"Transcript files or directories (default: ./{DEFAULT_DATA_DIR})",
    )
    parser.add_argument(
        "--aliases",
        type=Path,
        default=None,
        help="JSON file listing groups of sender names that belong to one person",
    )
    parser.add_argument(
        "-j", "--jobs", type=int, default=1, help="Parallel parsing workers"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", type=Path, help="Write a detailed log file")
    parser.add_argument(
        "--no-progress", action="store_true", help="Disable parse progress bar"
    )
    parser.add_argument(
        "--min-gap-days",
        type=int,
        default=DEFAULT_MIN_GAP_DAYS,
        help=(
            "Only list silent periods longer than this many days "
            f"(default: {DEFAULT_MIN_GAP_DAYS})"
        ),
    )
    parser.add_argument(
        "--top-users",
        type=int,
        default=DEFAULT_TOP_USERS,
        help=f"Rows in the user rankings (default: {DEFAULT_TOP_USERS})",
    )
    parser.add_argument(
        "--top-words",
        type=int,
        default=DEFAULT_TOP_WORDS,
        help=f"Rows in the most common words table (default: {DEFAULT_TOP_WORDS})",
    )
    parser.add_argument(
        "--long-word",
        dest="long_word_lengths",
        type=int,
        action="append",
        help=(
            "Also list common words longer than this many characters "
            "(repeatable; default: 5 and 10)"
        ),
    )
    parser.add_argument(
        "--stop-word",
        dest="stop_words",
        action="append",
        help=(
            "Word to leave out of the most common words table (repeatable; "
            "replaces the default list)"
        ),
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Browse per-user statistics after the report",
    )
    return parser


def configure_logging(verbose: bool, log_file: Optional[Path]) -> None:
    """Attach console and optional file handlers to the package loggers."""

    handlers: List[logging.Handler] = []
    console = logging.StreamHandler()
    console.setLevel(logging.INFO if verbose else logging.WARNING)
    console.setFormatter(logging.Formatter("%(message)s"))
    handlers.append(console)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(message)s")
        )
        handlers.append(file_handler)

    for name in LOGGER_NAMES:
        pkg_logger = logging.getLogger(name)
        pkg_logger.handlers.clear()
        pkg_logger.setLevel(logging.INFO)
        pkg_logger.propagate = False
        for handler in handlers:
            pkg_logger.addHandler(handler)


def write_report(
    history: History,
    alias_table: AliasTable,
    args: argparse.Namespace,
    write: Callable[[str], None] = print,
) -> List[UserIdentity]:
    """Print every report table and return identities ranked by messages.

    Parameters
    ----------
    history:
        Merged history to describe.
    alias_table:
        Alias classes used to resolve identities.
    args:
        Parsed CLI arguments providing the table sizes and filters.
    write:
        Output function receiving one block of text per call.
    """

    texts = text_messages(history.messages)

    write("\nAll-time statistics")
    write(render_table(basic_statistics_frame(summarize_history(history))))

    write(f"\nDates without activity (longer than {args.min_gap_days} days)")
    long_gaps = spans_longer_than(history.missing_dates, args.min_gap_days)
    write(render_table(missing_dates_frame(long_gaps)))

    frequencies = count_words(split_words(texts))
    stop_words = args.stop_words if args.stop_words else DEFAULT_STOP_WORDS
    shown_stop_words = ", ".join(word for word in stop_words if word)
    write(f"\nMost common words (except {shown_stop_words})")
    write(
        render_table(
            word_frequency_frame(
                top_words(frequencies, stop_words=stop_words, limit=args.top_words)
            )
        )
    )
    for length in args.long_word_lengths or DEFAULT_LONG_WORD_LENGTHS:
        write(f"\nMost common words longer than {length} characters")
        long_words = words_longer_than(frequencies, length)
        write(render_table(word_frequency_frame(long_words)))

    identities = resolve_identities(texts, alias_table)
    by_words = rank_by_word_count(identities)
    by_messages = rank_by_message_count(identities)

    write(f"\nUsers by number of words (top {args.top_users})")
    write(render_table(ranking_frame(by_words, "Number of words", args.top_users)))
    write(f"\nUsers by number of messages (top {args.top_users})")
    write(
        render_table(
            ranking_frame(by_messages, "Number of messages", args.top_users)
        )
    )
    return [row.identity for row in by_messages]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return a process exit code."""

    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    inputs = args.inputs or [DEFAULT_DATA_DIR]
    try:
        paths = collect_transcript_paths(inputs)
    except SourceUnreadableError as err:
        logger.error("Error: %s", err)
        if not args.inputs:
            logger.error(
                "Put the transcript files into the ./%s directory or pass them "
                "as arguments.",
                DEFAULT_DATA_DIR,
            )
        return 1
    if not paths:
        logger.error(
            "No .txt transcript files found in: %s", ", ".join(map(str, inputs))
        )
        return 1

    try:
        alias_table = load_alias_table(args.aliases)
    except AliasConfigError as err:
        logger.error("Error: %s", err)
        return 1

    print(f"[i] {len(paths)} history file(s) found. Parsing messages...")
    jobs = args.jobs if args.jobs > 0 else (os.cpu_count() or 1)
    try:
        history = parse_history(paths, jobs=jobs, progress=not args.no_progress)
    except SourceUnreadableError as err:
        logger.error("Error: %s", err)
        return 1
    print(f"[i] {len(history.messages)} message(s) parsed. Printing statistics...")

    identities = write_report(history, alias_table, args)
    if args.interactive:
        browse_users(identities)
    return 0


if __name__ == "__main__":
    sys.exit(main())
