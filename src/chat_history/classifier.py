"""Assign a kind to raw transcript messages.

Rules are checked in a fixed order and the first one that applies wins:

1. ``[Call ended]`` is a call end, ``[Call]`` a call start.
2. Messages without a sender are status lines.
3. ``This message has been removed.`` is a removed message with no content.
4. ``Sent file <name>.`` is a file transfer; the content becomes the name.
5. Leaving the conversation or changing its settings is a system message.
6. ``/me <text>`` is a status line; the content becomes ``<text>``.
7. Anything else is plain text.
"""

from __future__ import annotations

import re
from typing import Tuple

from .models import Message, MessageKind, RawMessage

CALL_ENDED = "[Call ended]"
CALL_STARTED = "[Call]"
REMOVED_MESSAGE = "This message has been removed."

FILE_SENT_RE = re.compile(r"^Sent file (.*)\.$")
LEFT_CONVERSATION_RE = re.compile(r"^.* has left the conversation\.$")
CHANGED_CONVERSATION_RE = re.compile(r"^Changed the conversation .*$")
STATUS_COMMAND_RE = re.compile(r"^/me\s+(.*)$")


def classify(content: str, sender: str) -> Tuple[MessageKind, str]:
    """Return the kind of a message and its normalized content.

    Parameters
    ----------
    content:
        Cleaned message content as produced by the tokenizer.
    sender:
        Raw sender string; empty for status lines.

    Returns
    -------
    Tuple[MessageKind, str]
        The message kind and the content to store for it.
    """

    if content == CALL_ENDED:
        return MessageKind.CALL_END, content
    if content == CALL_STARTED:
        return MessageKind.CALL, content
    if sender == "":
        return MessageKind.STATUS, content
    if content == REMOVED_MESSAGE:
        return MessageKind.REMOVED, ""

    file_match = FILE_SENT_RE.match(content)
    if file_match:
        return MessageKind.FILE, file_match.group(1)

    if LEFT_CONVERSATION_RE.match(content) or CHANGED_CONVERSATION_RE.match(content):
        return MessageKind.SYSTEM, content

    status_match = STATUS_COMMAND_RE.match(content)
    if status_match:
        return MessageKind.STATUS, status_match.group(1)

    return MessageKind.TEXT, content


def classify_raw_message(raw: RawMessage) -> Message:
    """Build a classified :class:`Message` from a tokenizer record."""

    kind, content = classify(raw.content, raw.sender)
    return Message(
        content=content,
        sender=raw.sender,
        timestamp=raw.timestamp,
        kind=kind,
    )


__all__ = [
    "CALL_ENDED",
    "CALL_STARTED",
    "REMOVED_MESSAGE",
    "classify",
    "classify_raw_message",
]
