"""
Tests for transcript file reading and discovery.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from chat_history.errors import SourceUnreadableError
from chat_history.loader import (
    collect_transcript_paths,
    decode_best_effort,
    read_transcript,
    read_transcripts,
)


def test_decode_best_effort_handles_common_encodings() -> None:
    """BOMs, UTF-8, and cp1252 bytes should all decode to the same text."""

    text = "Ádám: szia"

    assert decode_best_effort(text.encode("utf-8")) == text
    assert decode_best_effort(b"\xef\xbb\xbf" + text.encode("utf-8")) == text
    assert decode_best_effort(text.encode("utf-16")) == text
    assert decode_best_effort(text.encode("cp1252")) == text


def test_read_transcript_raises_distinct_error_for_missing_file(tmp_path: Path) -> None:
    """Unreadable sources surface as SourceUnreadableError with the path."""

    missing = tmp_path / "missing.txt"

    with pytest.raises(SourceUnreadableError) as excinfo:
        read_transcript(missing)

    assert excinfo.value.path == missing
    assert "missing.txt" in str(excinfo.value)


def test_read_transcripts_pairs_source_ids_with_text(tmp_path: Path) -> None:
    """read_transcripts should keep input order and use the path as id."""

    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("first", encoding="utf-8")
    second.write_text("second", encoding="utf-8")

    assert read_transcripts([second, first]) == [
        (str(second), "second"),
        (str(first), "first"),
    ]


def test_collect_transcript_paths_expands_directories(tmp_path: Path) -> None:
    """Directories contribute their .txt files in name order."""

    for name in ("b.txt", "a.TXT", "notes.md"):
        (tmp_path / name).write_text("x", encoding="utf-8")
    (tmp_path / "nested").mkdir()
    extra = tmp_path / "nested" / "c.txt"
    extra.write_text("x", encoding="utf-8")
    ignored = tmp_path / "nested" / "d.log"
    ignored.write_text("x", encoding="utf-8")

    paths = collect_transcript_paths([tmp_path, extra, ignored])

    assert paths == [tmp_path / "a.TXT", tmp_path / "b.txt", extra]


def test_collect_transcript_paths_rejects_missing_inputs(tmp_path: Path) -> None:
    """A missing input path is reported as unreadable."""

    with pytest.raises(SourceUnreadableError):
        collect_transcript_paths([tmp_path / "nope"])
