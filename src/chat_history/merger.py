"""Combine per-file message lists into one chronological history.

Transcripts are usually successive exports of the same conversation, and a
later export repeats the tail of the previous one. Lists are therefore
ordered by their first message and folded together: each list contributes
only the messages after the last message already recorded.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .models import Message

LOGGER = logging.getLogger(__name__)


def _overlap_end(messages: Sequence[Message], last: Message) -> int:
    """Return the index just past ``last`` in ``messages``, or 0 if absent."""

    for index, message in enumerate(messages):
        if message == last:
            return index + 1
    return 0


def merge_message_lists(message_lists: Sequence[Sequence[Message]]) -> List[Message]:
    """Merge chronologically ordered message lists, dropping overlaps.

    Parameters
    ----------
    message_lists:
        One list per transcript file, each already in chronological order.
        Empty lists contribute nothing.

    Returns
    -------
    List[Message]
        The merged history. Lists are taken in order of their first message
        timestamp (ties keep input order). When a list contains the last
        message recorded so far, everything up to and including its first
        occurrence is skipped; otherwise the whole list is appended.
    """

    non_empty = [messages for messages in message_lists if messages]
    skipped = len(message_lists) - len(non_empty)
    if skipped:
        LOGGER.info("Ignoring %d transcript(s) without messages", skipped)

    merged: List[Message] = []
    for messages in sorted(non_empty, key=lambda messages: messages[0].timestamp):
        start = _overlap_end(messages, merged[-1]) if merged else 0
        if start:
            LOGGER.debug("Dropping %d overlapping message(s)", start)
        merged.extend(messages[start:])
    return merged


__all__ = ["merge_message_lists"]
