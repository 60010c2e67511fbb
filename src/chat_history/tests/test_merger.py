"""
Tests for merging overlapping transcript exports.
"""

from __future__ import annotations

from datetime import datetime

from chat_history.merger import merge_message_lists
from chat_history.models import Message, MessageKind


def _msg(day: int, hour: int, content: str, sender: str = "Alice") -> Message:
    return Message(
        content=content,
        sender=sender,
        timestamp=datetime(2020, 1, day, hour, 0),
    )


def test_merge_drops_repeated_tail_of_previous_export() -> None:
    """A later export repeating the previous tail should add only new messages."""

    first = [_msg(1, 9, "a"), _msg(1, 10, "b"), _msg(2, 9, "c")]
    second = [_msg(1, 10, "b"), _msg(2, 9, "c"), _msg(3, 9, "d")]

    merged = merge_message_lists([second, first])

    assert [m.content for m in merged] == ["a", "b", "c", "d"]
    assert len(merged) == len(set(merged))


def test_merge_appends_everything_without_overlap() -> None:
    """Lists that do not contain the last recorded message are appended whole."""

    first = [_msg(1, 9, "a")]
    second = [_msg(5, 9, "b"), _msg(6, 9, "c")]

    assert merge_message_lists([first, second]) == first + second


def test_merge_orders_lists_by_first_timestamp() -> None:
    """Input order should not matter for the merged history."""

    early = [_msg(1, 9, "a"), _msg(2, 9, "b")]
    late = [_msg(4, 9, "c")]

    assert merge_message_lists([late, early]) == merge_message_lists([early, late])
    assert [m.content for m in merge_message_lists([late, early])] == ["a", "b", "c"]


def test_merge_ignores_empty_lists() -> None:
    """Empty files contribute nothing and do not break ordering."""

    messages = [_msg(1, 9, "a")]

    assert merge_message_lists([[], messages, []]) == messages
    assert merge_message_lists([]) == []
    assert merge_message_lists([[], []]) == []


def test_merge_skips_up_to_first_occurrence_of_last_message() -> None:
    """Only the prefix through the first matching message is dropped."""

    first = [_msg(1, 9, "a"), _msg(1, 10, "ok")]
    second = [_msg(1, 10, "ok"), _msg(1, 11, "x"), _msg(1, 12, "y")]
    third = [_msg(1, 11, "x"), _msg(1, 12, "y"), _msg(1, 13, "z")]

    merged = merge_message_lists([first, second, third])

    assert [m.content for m in merged] == ["a", "ok", "x", "y", "z"]


def test_message_equality_ignores_kind() -> None:
    """Duplicates are defined by timestamp, sender, and content only."""

    text = _msg(1, 9, "hi")
    status = Message(
        content="hi",
        sender="Alice",
        timestamp=datetime(2020, 1, 1, 9, 0),
        kind=MessageKind.STATUS,
    )

    assert text == status
    assert hash(text) == hash(status)
    assert text != _msg(1, 9, "hi", sender="Bob")
