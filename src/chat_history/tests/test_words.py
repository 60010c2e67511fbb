"""
Tests for word normalization and frequency views.
"""

from __future__ import annotations

from datetime import datetime

from chat_history.models import Message, MessageKind, WordFrequencyEntry
from chat_history.words import (
    count_words,
    normalize_word,
    split_words,
    top_words,
    words_longer_than,
)


def test_normalize_word_strips_edge_punctuation() -> None:
    """Leading and trailing punctuation is removed, inner punctuation kept."""

    assert normalize_word("(hello!!)") == "hello"
    assert normalize_word("don't-stop") == "don't-stop"
    assert normalize_word("-dash_") == "-dash_"
    assert normalize_word("HeLLo,") == "hello"
    assert normalize_word("...") == ""


def test_normalize_word_keeps_non_ascii_letters() -> None:
    """Accented letters count as letters at the word edges."""

    assert normalize_word("Ádám!") == "ádám"
    assert normalize_word("«Éva»") == "éva"


def test_split_words_uses_text_messages_only() -> None:
    """Only text messages contribute words, split on single spaces."""

    messages = [
        Message(content="hello  there", sender="A", timestamp=datetime(2020, 1, 1)),
        Message(
            content="report.pdf",
            sender="A",
            timestamp=datetime(2020, 1, 1),
            kind=MessageKind.FILE,
        ),
    ]

    assert split_words(messages) == ["hello", "", "there"]


def test_count_words_ranks_by_frequency_with_stable_ties() -> None:
    """Counts are descending; ties keep first-encounter order."""

    entries = count_words(["b", "a", "B!", "c", "a", "b"])

    assert entries == [
        WordFrequencyEntry("b", 3),
        WordFrequencyEntry("a", 2),
        WordFrequencyEntry("c", 1),
    ]


def test_top_words_excludes_stop_words_and_limits() -> None:
    """top_words drops stop words before applying the limit."""

    entries = count_words(["", "", "", "a", "a", "az", "cat", "dog", "dog", "emu"])

    assert [entry.word for entry in top_words(entries)] == ["dog", "cat", "emu"]
    assert [entry.word for entry in top_words(entries, limit=1)] == ["dog"]
    assert [entry.word for entry in top_words(entries, stop_words={"dog"})][:2] == [
        "",
        "a",
    ]


def test_words_longer_than_is_strict() -> None:
    """Only words with more characters than the minimum are kept."""

    entries = count_words(["short", "longer", "longer", "lengthiest"])

    assert [entry.word for entry in words_longer_than(entries, 5)] == [
        "longer",
        "lengthiest",
    ]
    assert words_longer_than(entries, 10) == []
    assert len(words_longer_than(entries, 0, limit=2)) == 2


def test_empty_input_gives_empty_views() -> None:
    """No words means empty outputs rather than errors."""

    assert count_words([]) == []
    assert top_words([]) == []
    assert words_longer_than([], 5) == []
    assert split_words([]) == []
