"""Split exported chat transcripts into raw messages.

A transcript is a sequence of date blocks. Each block starts with a header
line such as ``Monday, 06. January 2020`` followed by a line of exactly 40
dashes, and holds the messages written on that day::

    Monday, 06. January 2020
    ----------------------------------------
    09:15 Alice:
    Good morning
    09:16 :
    Alice is away

Every message starts with a ``HH:MM sender:`` header line; its content runs
until the next message header or the end of the block and may span several
lines. An empty sender marks a status line.

The tokenizer works in two tiers. :func:`iter_date_blocks` yields the
character span of every date block and :func:`iter_message_spans` yields the
message header spans inside one block. :func:`tokenize` combines both into
:class:`~chat_history.models.RawMessage` values. Headers that match the
pattern but do not describe a real date or time of day are skipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterator, List, Mapping, Optional

from .models import RawMessage

LOGGER = logging.getLogger(__name__)

DATE_HEADER_RE = re.compile(
    r"^[^\W\d_]+, (\d{2})\. ([^\W\d_]+) (\d{4})\r?\n-{40}\r?$",
    re.MULTILINE,
)

# "HH:MM sender:" or a bare "HH:MM" line; the sender group is None for the
# latter.
MESSAGE_HEADER_RE = re.compile(
    r"^(\d{2}):(\d{2})(?:[ \t]?([^:\r\n]*):|[ \t]*)\r?$",
    re.MULTILINE,
)

ENGLISH_MONTHS: Mapping[str, int] = {
    name: index
    for index, name in enumerate(
        (
            "january",
            "february",
            "march",
            "april",
            "may",
            "june",
            "july",
            "august",
            "september",
            "october",
            "november",
            "december",
        ),
        start=1,
    )
}


@dataclass(frozen=True)
class DateBlock:
    """Character span of the messages written on one calendar day.

    ``start`` is the offset just after the dashed separator line and
    ``end`` is the offset of the next date header (or the end of the text).
    """

    day: date
    start: int
    end: int


@dataclass(frozen=True)
class MessageSpan:
    """Header fields and content span of one message inside a date block."""

    hour: int
    minute: int
    sender: str
    start: int
    end: int


def parse_header_date(
    day_text: str,
    month_text: str,
    year_text: str,
    months: Mapping[str, int] = ENGLISH_MONTHS,
) -> Optional[date]:
    """Return the date named by a date header, or ``None`` when invalid.

    Parameters
    ----------
    day_text, month_text, year_text:
        Captured header fields, for example ``"06"``, ``"January"``,
        ``"2020"``.
    months:
        Mapping from lower-cased month name to month number.
    """

    month = months.get(month_text.lower())
    if month is None:
        return None
    try:
        return date(int(year_text), month, int(day_text))
    except ValueError:
        return None


def iter_date_blocks(
    text: str,
    months: Mapping[str, int] = ENGLISH_MONTHS,
) -> Iterator[DateBlock]:
    """Yield the date blocks of ``text`` in file order.

    A header whose fields do not form a valid date is skipped together with
    the block it introduces.
    """

    matches = list(DATE_HEADER_RE.finditer(text))
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        day = parse_header_date(*match.groups(), months=months)
        if day is None:
            LOGGER.debug("Skipping malformed date header %r", match.group(0))
            continue
        yield DateBlock(day=day, start=match.end(), end=end)


def iter_message_spans(
    text: str,
    start: int = 0,
    end: Optional[int] = None,
) -> Iterator[MessageSpan]:
    """Yield the message headers found in ``text[start:end]``.

    Each span's content range reaches up to the next header, or ``end`` for
    the last message. Headers are not validated here; see :func:`tokenize`.
    """

    if end is None:
        end = len(text)
    matches = list(MESSAGE_HEADER_RE.finditer(text, start, end))
    for index, match in enumerate(matches):
        content_end = matches[index + 1].start() if index + 1 < len(matches) else end
        yield MessageSpan(
            hour=int(match.group(1)),
            minute=int(match.group(2)),
            sender=match.group(3) or "",
            start=match.end(),
            end=content_end,
        )


def clean_content(raw: str) -> str:
    """Trim line terminators and fold line breaks into single spaces."""

    return raw.strip("\r\n").replace("\r", "").replace("\n", " ")


def tokenize(
    text: str,
    months: Mapping[str, int] = ENGLISH_MONTHS,
) -> List[RawMessage]:
    """Extract every raw message from one transcript, in file order.

    Parameters
    ----------
    text:
        Full text of a transcript file.
    months:
        Month-name table used to read date headers.

    Returns
    -------
    List[RawMessage]
        Messages with their full timestamp, verbatim sender, and cleaned
        content. A file without date headers yields an empty list.
    """

    messages: List[RawMessage] = []
    for block in iter_date_blocks(text, months=months):
        for span in iter_message_spans(text, block.start, block.end):
            try:
                time_of_day = time(span.hour, span.minute)
            except ValueError:
                LOGGER.debug(
                    "Skipping message with invalid time %02d:%02d on %s",
                    span.hour,
                    span.minute,
                    block.day,
                )
                continue
            messages.append(
                RawMessage(
                    timestamp=datetime.combine(block.day, time_of_day),
                    sender=span.sender,
                    content=clean_content(text[span.start : span.end]),
                )
            )
    return messages


__all__ = [
    "DATE_HEADER_RE",
    "ENGLISH_MONTHS",
    "MESSAGE_HEADER_RE",
    "DateBlock",
    "MessageSpan",
    "clean_content",
    "iter_date_blocks",
    "iter_message_spans",
    "parse_header_date",
    "tokenize",
]
