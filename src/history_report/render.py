"""Build console tables for the history report.

Each builder returns a :class:`pandas.DataFrame` so the same rows can be
printed, inspected in tests, or written elsewhere; :func:`render_table`
turns a frame into aligned plain text.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import pandas as pd

from chat_history.models import (
    DateSpan,
    MessageKind,
    RankedIdentity,
    UserIdentity,
    WordFrequencyEntry,
)

from .summary import HistorySummary, UserSummary, describe_timespan

DEFAULT_NAME_LIMIT = 3

_KIND_LABELS = (
    (MessageKind.TEXT, "Number of text messages"),
    (MessageKind.REMOVED, "Number of removed messages"),
    (MessageKind.STATUS, "Number of status messages"),
    (MessageKind.FILE, "Number of files sent"),
    (MessageKind.CALL, "Number of calls"),
)


def render_table(frame: pd.DataFrame) -> str:
    """Return ``frame`` as left-aligned plain text without the index."""

    if frame.empty:
        return "(none)"
    formatters = {}
    for column in frame.columns:
        width = max(len(str(column)), int(frame[column].astype(str).str.len().max()))
        formatters[column] = f"{{:<{width}}}".format
    return frame.to_string(index=False, justify="left", formatters=formatters)


def _format_timestamp(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value is not None else "-"


def basic_statistics_frame(summary: HistorySummary) -> pd.DataFrame:
    """Two-column table of the headline statistics."""

    years, months, days = summary.timespan
    rows: List[tuple] = [
        ("First message", _format_timestamp(summary.first_message)),
        ("Last message", _format_timestamp(summary.last_message)),
        ("Timespan", f"{years} year(s) {months} month(s) {days} day(s)"),
        (
            "Number of days without activity",
            f"{summary.missing_day_count} (out of {summary.total_day_count} days) "
            f"({summary.missing_day_ratio * 100:.2f}%)",
        ),
    ]
    rows.extend(
        (label, f"{summary.kind_counts.get(kind, 0):,}") for kind, label in _KIND_LABELS
    )
    rows.extend(
        [
            ("Average number of messages a day", f"{summary.messages_per_day:.2f}"),
            ("Number of words", f"{summary.word_count:,}"),
            ("Number of characters", f"{summary.character_count:,}"),
            ("Average message length", f"{summary.average_message_length:.2f} words"),
            (
                "Average word length",
                f"{summary.average_word_length:.2f} characters",
            ),
        ]
    )
    return pd.DataFrame(rows, columns=["Statistic", "Value"])


def missing_dates_frame(spans: Iterable[DateSpan]) -> pd.DataFrame:
    rows = [
        (
            f"{span.start.isoformat()} - {span.end.isoformat()}",
            describe_timespan(span.start, span.end),
        )
        for span in spans
    ]
    return pd.DataFrame(rows, columns=["Missing date", "Timespan"])


def word_frequency_frame(entries: Iterable[WordFrequencyEntry]) -> pd.DataFrame:
    rows = [(entry.word, entry.count) for entry in entries]
    return pd.DataFrame(rows, columns=["Word", "Number of occurrences"])


def ranking_frame(
    ranking: Sequence[RankedIdentity],
    count_label: str,
    limit: Optional[int] = None,
    name_limit: int = DEFAULT_NAME_LIMIT,
) -> pd.DataFrame:
    """Numbered table of the top ``limit`` rows of an identity ranking."""

    shown = ranking if limit is None else ranking[:limit]
    rows = [
        (index, row.identity.display_name(name_limit), f"{row.count:,}")
        for index, row in enumerate(shown)
    ]
    return pd.DataFrame(rows, columns=["#", "Name", count_label])


def identities_frame(identities: Sequence[UserIdentity]) -> pd.DataFrame:
    """Numbered table of every identity with all of its aliases."""

    rows = [
        (index, ", ".join(identity.aliases), identity.message_count)
        for index, identity in enumerate(identities)
    ]
    return pd.DataFrame(rows, columns=["#", "Name", "Number of messages"])


def user_frame(summary: UserSummary) -> pd.DataFrame:
    first = summary.first_message.content if summary.first_message else "-"
    last = summary.last_message.content if summary.last_message else "-"
    rows = [
        ("Name", summary.name),
        ("Number of messages", f"{summary.message_count:,}"),
        ("Number of words", f"{summary.word_count:,}"),
        ("First message", first),
        ("Last message", last),
    ]
    return pd.DataFrame(rows, columns=["Statistic", "Value"])


__all__ = [
    "basic_statistics_frame",
    "identities_frame",
    "missing_dates_frame",
    "ranking_frame",
    "render_table",
    "user_frame",
    "word_frequency_frame",
]
