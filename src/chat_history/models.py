"""Data structures shared by the transcript parsing and statistics modules.

Every structure here is plain data. Parsing produces :class:`Message` and
:class:`DateSpan` values once per run; identity resolution freezes its
results into :class:`UserIdentity` values; word statistics produce
:class:`WordFrequencyEntry` rows.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Tuple


class MessageKind(enum.Enum):
    """Kind assigned to a message by the classifier."""

    CALL = "call"
    CALL_END = "call_end"
    FILE = "file"
    REMOVED = "removed"
    STATUS = "status"
    SYSTEM = "system"
    TEXT = "text"


@dataclass(frozen=True)
class RawMessage:
    """A message as cut out of a transcript, before classification."""

    timestamp: datetime
    sender: str
    content: str


@dataclass(frozen=True)
class Message:
    """A single classified transcript message.

    Two messages are equal when their timestamp, sender, and content all
    match. The kind is derived from those fields and does not take part in
    comparisons, so equality can be used to find the overlap between two
    exports of the same conversation.

    Parameters
    ----------
    content:
        Normalized message text (for example the file name of a file-sent
        message, or an empty string for removed messages).
    sender:
        Raw sender name exactly as written in the transcript. Empty for
        status lines.
    timestamp:
        Date and time of day of the message.
    kind:
        Classification of the message.
    """

    content: str
    sender: str
    timestamp: datetime
    kind: MessageKind = field(default=MessageKind.TEXT, compare=False)

    @property
    def day(self) -> date:
        """Calendar date the message was sent on."""

        return self.timestamp.date()

    def words(self) -> list[str]:
        """Return the raw words of the message split on single spaces."""

        return self.content.split(" ")


@dataclass(frozen=True)
class DateSpan:
    """A half-open run of calendar days without any message.

    ``start`` is the first silent day and ``end`` is the day of the first
    message after the gap, so ``end - start`` is the number of silent days.
    """

    start: date
    end: date

    @property
    def days(self) -> int:
        """Number of calendar days without activity."""

        return (self.end - self.start).days


@dataclass(frozen=True)
class UserIdentity:
    """A resolved participant and everything attributed to them.

    Parameters
    ----------
    aliases:
        Raw sender strings merged into this identity, in discovery order.
        The first alias is the primary one used for matching.
    messages:
        Messages of all aliases in chronological order.
    """

    aliases: Tuple[str, ...]
    messages: Tuple[Message, ...] = ()

    @property
    def primary_alias(self) -> str:
        return self.aliases[0]

    @property
    def message_count(self) -> int:
        return len(self.messages)

    @property
    def word_count(self) -> int:
        """Number of words in the identity's text messages."""

        return sum(
            len(message.words())
            for message in self.messages
            if message.kind is MessageKind.TEXT
        )

    def display_name(self, limit: int = 3) -> str:
        """Join the first ``limit`` aliases, marking any that were left out."""

        shown = ", ".join(self.aliases[:limit])
        if len(self.aliases) > limit:
            shown += ", ..."
        return shown


@dataclass(frozen=True)
class RankedIdentity:
    """One row of an identity ranking."""

    identity: UserIdentity
    count: int


@dataclass(frozen=True)
class WordFrequencyEntry:
    """Occurrence count of a normalized word."""

    word: str
    count: int


__all__ = [
    "DateSpan",
    "Message",
    "MessageKind",
    "RankedIdentity",
    "RawMessage",
    "UserIdentity",
    "WordFrequencyEntry",
]
