"""End-to-end parsing of transcript exports into a merged history.

Files are read up front, tokenized and classified independently (optionally
in worker processes), and then merged with the first-timestamp fold from
:mod:`chat_history.merger`. The resulting :class:`History` feeds the gap,
identity, and word statistics, which only ever read it.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from tqdm import tqdm

from .classifier import classify_raw_message
from .gaps import find_missing_dates
from .loader import read_transcripts
from .merger import merge_message_lists
from .models import DateSpan, Message
from .tokenizer import ENGLISH_MONTHS, tokenize

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class History:
    """Merged messages of a conversation and its silent date ranges.

    Both sequences are tuples; a parsed history is read-only.
    """

    messages: Tuple[Message, ...] = ()
    missing_dates: Tuple[DateSpan, ...] = ()

    @classmethod
    def from_messages(cls, messages: Sequence[Message]) -> "History":
        messages = tuple(messages)
        return cls(
            messages=messages,
            missing_dates=tuple(find_missing_dates(messages)),
        )


def parse_transcript(
    text: str,
    months: Mapping[str, int] = ENGLISH_MONTHS,
) -> List[Message]:
    """Tokenize and classify the messages of one transcript."""

    return [classify_raw_message(raw) for raw in tokenize(text, months=months)]


def _parse_source(
    index: int,
    text: str,
    months: Mapping[str, int],
) -> Tuple[int, List[Message]]:
    return index, parse_transcript(text, months=months)


def parse_sources(
    sources: Sequence[Tuple[str, str]],
    *,
    jobs: int = 1,
    progress: bool = False,
    months: Mapping[str, int] = ENGLISH_MONTHS,
) -> History:
    """Parse ``(source_id, text)`` pairs and merge them into one history.

    Parameters
    ----------
    sources:
        Transcript texts keyed by an identifier used in log messages. Their
        order does not matter.
    jobs:
        Number of worker processes for tokenization. Values of 0 or 1 parse
        in the calling process.
    progress:
        Show a progress bar while parsing.
    months:
        Month-name table for date headers.

    Returns
    -------
    History
        The merged messages and the date ranges without activity.
    """

    parsed: Dict[int, List[Message]] = {}
    with tqdm(
        total=len(sources),
        desc="Parsing transcripts",
        unit="file",
        disable=not progress,
    ) as bar:
        if jobs in (0, 1) or len(sources) < 2:
            for index, (_, text) in enumerate(sources):
                parsed[index] = parse_transcript(text, months=months)
                bar.update(1)
        else:
            with ProcessPoolExecutor(max_workers=jobs) as pool:
                futures = [
                    pool.submit(_parse_source, index, text, dict(months))
                    for index, (_, text) in enumerate(sources)
                ]
                for future in as_completed(futures):
                    index, messages = future.result()
                    parsed[index] = messages
                    bar.update(1)

    for index, (source_id, _) in enumerate(sources):
        LOGGER.info("[PARSED] %s: %d message(s)", source_id, len(parsed[index]))

    merged = merge_message_lists([parsed[index] for index in range(len(sources))])
    LOGGER.info("Merged %d message(s) from %d file(s)", len(merged), len(sources))
    return History.from_messages(merged)


def parse_history(
    paths: Iterable[Path | str],
    *,
    jobs: int = 1,
    progress: bool = False,
    months: Mapping[str, int] = ENGLISH_MONTHS,
) -> History:
    """Read transcript files and parse them into a merged history.

    Raises :class:`~chat_history.errors.SourceUnreadableError` when any file
    cannot be read.
    """

    sources = read_transcripts(paths)
    return parse_sources(sources, jobs=jobs, progress=progress, months=months)


__all__ = [
    "History",
    "parse_history",
    "parse_sources",
    "parse_transcript",
]
