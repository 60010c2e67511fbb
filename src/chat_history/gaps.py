"""Find calendar days on which nobody wrote anything."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, List, Sequence

from .models import DateSpan, Message

ONE_DAY = timedelta(days=1)


def find_missing_dates(messages: Sequence[Message]) -> List[DateSpan]:
    """Return the runs of silent days between active days.

    Parameters
    ----------
    messages:
        Merged history in chronological order. Messages of every kind count
        as activity.

    Returns
    -------
    List[DateSpan]
        Disjoint spans ordered by start date. Each span starts the day after
        an active day and ends on the next active day. An empty history has
        no spans.
    """

    spans: List[DateSpan] = []
    if not messages:
        return spans

    last_active = messages[0].day
    for message in messages:
        day = message.day
        if day <= last_active:
            continue
        if day > last_active + ONE_DAY:
            spans.append(DateSpan(start=last_active + ONE_DAY, end=day))
        last_active = day
    return spans


def spans_longer_than(spans: Iterable[DateSpan], days: int) -> List[DateSpan]:
    """Keep only the spans with more than ``days`` silent days."""

    return [span for span in spans if span.days > days]


def count_missing_days(spans: Iterable[DateSpan]) -> int:
    """Total number of silent days covered by ``spans``."""

    return sum(span.days for span in spans)


__all__ = [
    "count_missing_days",
    "find_missing_dates",
    "spans_longer_than",
]
