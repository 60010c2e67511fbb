"""Word frequency statistics over text messages.

Words are taken from text messages only, split on single spaces, stripped
of leading and trailing characters other than letters, digits, hyphens,
and underscores, and lower-cased. Internal punctuation such as the
apostrophe in ``don't`` is kept.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Collection, Iterable, List, Optional

from .models import Message, MessageKind, WordFrequencyEntry

# Anything that is not a letter, digit, underscore, or hyphen at either end.
_EDGE_RE = re.compile(r"^[^\w-]+|[^\w-]+$")

DEFAULT_STOP_WORDS: tuple[str, ...] = ("", "a", "az", "ez")
DEFAULT_TOP_WORDS = 50
DEFAULT_LONG_WORD_LIMIT = 10


def text_messages(messages: Iterable[Message]) -> List[Message]:
    """Return only the messages classified as text."""

    return [message for message in messages if message.kind is MessageKind.TEXT]


def split_words(messages: Iterable[Message]) -> List[str]:
    """Split the content of every text message on single spaces."""

    words: List[str] = []
    for message in text_messages(messages):
        words.extend(message.words())
    return words


def normalize_word(word: str) -> str:
    """Strip edge punctuation from ``word`` and lower-case it."""

    return _EDGE_RE.sub("", word).lower()


def count_words(words: Iterable[str]) -> List[WordFrequencyEntry]:
    """Count normalized words, most frequent first.

    Ties keep the order in which the words were first seen.
    """

    counts = Counter(normalize_word(word) for word in words)
    return [
        WordFrequencyEntry(word=word, count=count)
        for word, count in counts.most_common()
    ]


def top_words(
    entries: Iterable[WordFrequencyEntry],
    stop_words: Collection[str] = DEFAULT_STOP_WORDS,
    limit: Optional[int] = DEFAULT_TOP_WORDS,
) -> List[WordFrequencyEntry]:
    """Return the most frequent words that are not stop words.

    Parameters
    ----------
    entries:
        Ranked frequencies from :func:`count_words`.
    stop_words:
        Normalized words to leave out. The default list holds the empty
        string and a few short function words.
    limit:
        Maximum number of rows; ``None`` keeps all of them.
    """

    kept = [entry for entry in entries if entry.word not in stop_words]
    return kept if limit is None else kept[:limit]


def words_longer_than(
    entries: Iterable[WordFrequencyEntry],
    min_length: int,
    limit: Optional[int] = DEFAULT_LONG_WORD_LIMIT,
) -> List[WordFrequencyEntry]:
    """Return the most frequent words with more than ``min_length`` characters."""

    kept = [entry for entry in entries if len(entry.word) > min_length]
    return kept if limit is None else kept[:limit]


__all__ = [
    "DEFAULT_LONG_WORD_LIMIT",
    "DEFAULT_STOP_WORDS",
    "DEFAULT_TOP_WORDS",
    "count_words",
    "normalize_word",
    "split_words",
    "text_messages",
    "top_words",
    "words_longer_than",
]
