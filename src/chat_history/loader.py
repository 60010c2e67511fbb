"""Read transcript files from disk.

Exports come from different machines and clients, so the text is decoded
best-effort: a UTF-8 or UTF-16 byte-order mark wins, then UTF-8 and cp1252
are tried before falling back to latin-1. Any
operating-system error while reading is fatal and is reported as
:class:`~chat_history.errors.SourceUnreadableError`.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from .errors import SourceUnreadableError

LOGGER = logging.getLogger(__name__)

TRANSCRIPT_SUFFIX = ".txt"


def decode_best_effort(raw: bytes) -> str:
    """Decode transcript bytes using a best-effort set of encodings."""

    if raw.startswith(codecs.BOM_UTF8):
        return raw.decode("utf-8-sig", errors="replace")
    if raw.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return raw.decode("utf-16", errors="replace")
    for enc in ("utf-8", "cp1252"):
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    # latin-1 maps every byte
    return raw.decode("latin-1")


def read_transcript(path: Path | str) -> str:
    """Return the decoded text of one transcript file."""

    src = Path(path)
    try:
        raw = src.read_bytes()
    except OSError as err:
        raise SourceUnreadableError(src, err.strerror or str(err)) from err
    return decode_best_effort(raw)


def read_transcripts(paths: Iterable[Path | str]) -> List[Tuple[str, str]]:
    """Read every path and return ``(source_id, text)`` pairs."""

    sources: List[Tuple[str, str]] = []
    for path in paths:
        text = read_transcript(path)
        LOGGER.info("Read %s (%d characters)", path, len(text))
        sources.append((str(path), text))
    return sources


def collect_transcript_paths(inputs: Iterable[Path | str]) -> List[Path]:
    """Expand files and directories into a sorted list of transcript files.

    Directories contribute their direct ``.txt`` children. Explicit files
    are kept only when they carry the ``.txt`` suffix. Missing inputs raise
    :class:`SourceUnreadableError`.
    """

    found: List[Path] = []
    for item in inputs:
        path = Path(item).expanduser()
        if path.is_dir():
            found.extend(
                sorted(
                    child
                    for child in path.iterdir()
                    if child.is_file() and child.suffix.lower() == TRANSCRIPT_SUFFIX
                )
            )
        elif path.is_file():
            if path.suffix.lower() == TRANSCRIPT_SUFFIX:
                found.append(path)
            else:
                LOGGER.info("Skipping non-transcript file %s", path)
        else:
            raise SourceUnreadableError(path, "no such file or directory")
    return found


__all__ = [
    "TRANSCRIPT_SUFFIX",
    "collect_transcript_paths",
    "decode_best_effort",
    "read_transcript",
    "read_transcripts",
]
