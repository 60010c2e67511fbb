"""Pure computation of whole-history and per-user statistics.

These helpers turn a parsed :class:`~chat_history.pipeline.History` into the
numbers shown in the console report: first and last text message, the
calendar time span between them, silent days, message counts per kind, and
word and character averages. Every ratio falls back to ``0.0`` when its
denominator is zero so that empty histories can still be summarised.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Optional, Sequence, Tuple

from chat_history.gaps import count_missing_days
from chat_history.models import Message, MessageKind, UserIdentity
from chat_history.pipeline import History
from chat_history.words import split_words, text_messages


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the end of short months."""

    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def calendar_timespan(start: date, end: date) -> Tuple[int, int, int]:
    """Return the ``(years, months, days)`` between two dates.

    Parameters
    ----------
    start:
        Earlier date.
    end:
        Later date. The result is all zeros when ``end`` is not after
        ``start``.

    Returns
    -------
    Tuple[int, int, int]
        Whole years, remaining whole months, and remaining days.
    """

    if end <= start:
        return 0, 0, 0
    total_months = (end.year - start.year) * 12 + end.month - start.month
    if end.day < start.day:
        total_months -= 1
    days = (end - add_months(start, total_months)).days
    return total_months // 12, total_months % 12, days


def describe_timespan(start: date, end: date) -> str:
    """Render the calendar span between two dates, omitting zero parts.

    >>> describe_timespan(date(2020, 1, 1), date(2021, 3, 4))
    '1 year(s) 2 month(s) 3 day(s)'
    """

    years, months, days = calendar_timespan(start, end)
    parts = []
    if years:
        parts.append(f"{years} year(s)")
    if months:
        parts.append(f"{months} month(s)")
    if days or not parts:
        parts.append(f"{days} day(s)")
    return " ".join(parts)


@dataclass
class HistorySummary:
    """Headline statistics for a merged history.

    Parameters
    ----------
    first_message, last_message:
        Timestamps of the first and last text message, or ``None`` when the
        history has no text messages.
    timespan:
        ``(years, months, days)`` between the first and last text message.
    missing_day_count:
        Number of silent days across all gaps.
    total_day_count:
        Days between the first and last text message.
    kind_counts:
        Number of messages of every kind; kinds that never occur map to 0.
    text_message_count, word_count, character_count:
        Totals over text messages.
    """

    first_message: Optional[datetime]
    last_message: Optional[datetime]
    timespan: Tuple[int, int, int]
    missing_day_count: int
    total_day_count: int
    kind_counts: Dict[MessageKind, int] = field(default_factory=dict)
    text_message_count: int = 0
    word_count: int = 0
    character_count: int = 0

    @property
    def missing_day_ratio(self) -> float:
        return _ratio(self.missing_day_count, self.total_day_count)

    @property
    def messages_per_day(self) -> float:
        return _ratio(self.text_message_count, self.total_day_count)

    @property
    def average_message_length(self) -> float:
        """Average number of words per text message."""

        return _ratio(self.word_count, self.text_message_count)

    @property
    def average_word_length(self) -> float:
        """Average number of characters per word."""

        return _ratio(self.character_count, self.word_count)


def count_kinds(messages: Sequence[Message]) -> Dict[MessageKind, int]:
    """Count messages per kind, including kinds with no messages."""

    counts = {kind: 0 for kind in MessageKind}
    for message in messages:
        counts[message.kind] += 1
    return counts


def summarize_history(history: History) -> HistorySummary:
    """Compute the headline statistics of ``history``."""

    texts = text_messages(history.messages)
    first = texts[0].timestamp if texts else None
    last = texts[-1].timestamp if texts else None
    if first is not None and last is not None:
        timespan = calendar_timespan(first.date(), last.date())
        total_days = (last.date() - first.date()).days
    else:
        timespan = (0, 0, 0)
        total_days = 0

    return HistorySummary(
        first_message=first,
        last_message=last,
        timespan=timespan,
        missing_day_count=count_missing_days(history.missing_dates),
        total_day_count=total_days,
        kind_counts=count_kinds(history.messages),
        text_message_count=len(texts),
        word_count=len(split_words(texts)),
        character_count=sum(len(message.content) for message in texts),
    )


@dataclass
class UserSummary:
    """What the interactive browser shows for one identity."""

    name: str
    message_count: int
    word_count: int
    first_message: Optional[Message]
    last_message: Optional[Message]


def summarize_user(identity: UserIdentity) -> UserSummary:
    messages = identity.messages
    return UserSummary(
        name=", ".join(identity.aliases),
        message_count=identity.message_count,
        word_count=identity.word_count,
        first_message=messages[0] if messages else None,
        last_message=messages[-1] if messages else None,
    )


__all__ = [
    "HistorySummary",
    "UserSummary",
    "add_months",
    "calendar_timespan",
    "count_kinds",
    "describe_timespan",
    "summarize_history",
    "summarize_user",
]
