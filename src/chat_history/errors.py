"""Exceptions raised by the chat history core."""

from __future__ import annotations

from pathlib import Path


class HistoryError(Exception):
    """Base class for chat history failures."""


class SourceUnreadableError(HistoryError):
    """Raised when a transcript file cannot be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read transcript {self.path}: {reason}")


class AliasConfigError(HistoryError):
    """Raised when an alias table is malformed or its classes overlap."""


__all__ = [
    "AliasConfigError",
    "HistoryError",
    "SourceUnreadableError",
]
