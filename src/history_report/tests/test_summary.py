"""
Tests for whole-history and per-user summaries.
"""

from __future__ import annotations

from datetime import date, datetime

from chat_history.models import Message, MessageKind, UserIdentity
from chat_history.pipeline import History
from history_report.summary import (
    add_months,
    calendar_timespan,
    count_kinds,
    describe_timespan,
    summarize_history,
    summarize_user,
)


def _msg(
    day: int,
    content: str,
    kind: MessageKind = MessageKind.TEXT,
    sender: str = "Alice",
) -> Message:
    return Message(
        content=content,
        sender=sender,
        timestamp=datetime(2020, 1, day, 12),
        kind=kind,
    )


def test_summarize_history_counts_text_and_gaps() -> None:
    """The summary should reflect text totals, kinds, and silent days."""

    messages = [
        _msg(1, "hello there"),
        _msg(1, "", MessageKind.REMOVED),
        _msg(2, "report.pdf", MessageKind.FILE),
        _msg(11, "good night all"),
    ]
    history = History.from_messages(messages)

    summary = summarize_history(history)

    assert summary.first_message == datetime(2020, 1, 1, 12)
    assert summary.last_message == datetime(2020, 1, 11, 12)
    assert summary.timespan == (0, 0, 10)
    assert summary.total_day_count == 10
    assert summary.missing_day_count == 8
    assert summary.missing_day_ratio == 0.8
    assert summary.text_message_count == 2
    assert summary.word_count == 5
    assert summary.character_count == len("hello there") + len("good night all")
    assert summary.kind_counts[MessageKind.REMOVED] == 1
    assert summary.kind_counts[MessageKind.CALL] == 0
    assert summary.messages_per_day == 0.2
    assert summary.average_message_length == 2.5
    assert summary.average_word_length == 25 / 5


def test_summarize_empty_history_is_all_zero() -> None:
    """An empty history summarises without dividing by zero."""

    summary = summarize_history(History())

    assert summary.first_message is None
    assert summary.last_message is None
    assert summary.timespan == (0, 0, 0)
    assert summary.missing_day_ratio == 0.0
    assert summary.messages_per_day == 0.0
    assert summary.average_message_length == 0.0
    assert summary.average_word_length == 0.0
    assert set(summary.kind_counts.values()) == {0}


def test_calendar_timespan_splits_years_months_days() -> None:
    """Spans are split into whole years, months, and remaining days."""

    assert calendar_timespan(date(2020, 1, 1), date(2021, 3, 4)) == (1, 2, 3)
    assert calendar_timespan(date(2020, 1, 31), date(2020, 3, 1)) == (0, 1, 1)
    assert calendar_timespan(date(2020, 5, 1), date(2020, 5, 1)) == (0, 0, 0)


def test_add_months_clamps_to_month_end() -> None:
    """Shifting into a shorter month lands on its last day."""

    assert add_months(date(2020, 1, 31), 1) == date(2020, 2, 29)
    assert add_months(date(2020, 11, 15), 3) == date(2021, 2, 15)


def test_describe_timespan_omits_zero_parts() -> None:
    """Only non-zero parts are rendered."""

    assert describe_timespan(date(2020, 1, 1), date(2021, 3, 4)) == (
        "1 year(s) 2 month(s) 3 day(s)"
    )
    assert describe_timespan(date(2020, 1, 4), date(2020, 1, 13)) == "9 day(s)"
    assert describe_timespan(date(2020, 1, 1), date(2020, 2, 1)) == "1 month(s)"
    assert describe_timespan(date(2020, 1, 1), date(2020, 1, 1)) == "0 day(s)"


def test_count_kinds_lists_every_kind() -> None:
    """Every message kind appears in the counts."""

    counts = count_kinds([_msg(1, "[Call]", MessageKind.CALL)])

    assert set(counts) == set(MessageKind)
    assert counts[MessageKind.CALL] == 1


def test_summarize_user_reports_first_and_last_message() -> None:
    """The user summary exposes the first and last message."""

    identity = UserIdentity(
        aliases=("Alice", "al"),
        messages=(_msg(1, "first words"), _msg(3, "last")),
    )

    summary = summarize_user(identity)

    assert summary.name == "Alice, al"
    assert summary.message_count == 2
    assert summary.word_count == 3
    assert summary.first_message.content == "first words"
    assert summary.last_message.content == "last"
