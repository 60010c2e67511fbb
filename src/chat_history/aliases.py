"""Configured equivalence classes of sender names.

Chat exports record whatever display name or handle a participant used at
the time, so one person can appear under several unrelated names. An alias
table lists those names per person. Tables are loaded from JSON, either as a
bare list of lists::

    [["Alice Example", "alice_handle"], ["Bob", "bobby"]]

or wrapped in an object under an ``"aliases"`` key. A name may belong to at
most one class; overlapping classes are rejected because identity
resolution could otherwise merge the two people depending on input order.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

import json_repair

from .errors import AliasConfigError
from .loader import decode_best_effort

LOGGER = logging.getLogger(__name__)


class AliasTable:
    """Ordered, disjoint classes of raw sender strings naming one person."""

    def __init__(self, classes: Iterable[Iterable[str]] = ()) -> None:
        self._classes: List[Tuple[str, ...]] = []
        self._class_index: Dict[str, int] = {}
        for position, names in enumerate(classes):
            names = list(names)
            if not names:
                raise AliasConfigError(f"Alias class {position} is empty.")
            for name in names:
                if not isinstance(name, str):
                    raise AliasConfigError(
                        f"Alias class {position} contains a non-string entry: {name!r}"
                    )
            unique = tuple(dict.fromkeys(names))
            for name in unique:
                if name in self._class_index:
                    raise AliasConfigError(
                        f"Sender {name!r} is listed in alias classes "
                        f"{self._class_index[name]} and {position}."
                    )
                self._class_index[name] = position
            self._classes.append(unique)

    def __len__(self) -> int:
        return len(self._classes)

    @property
    def classes(self) -> List[Tuple[str, ...]]:
        return list(self._classes)

    def class_of(self, sender: str) -> Optional[FrozenSet[str]]:
        """Return the class containing ``sender``, if any."""

        position = self._class_index.get(sender)
        if position is None:
            return None
        return frozenset(self._classes[position])

    def are_aliases(self, sender: str, other: str) -> bool:
        """Return True when both names are listed in the same class."""

        position = self._class_index.get(sender)
        return position is not None and self._class_index.get(other) == position

    @classmethod
    def from_data(cls, data: object) -> "AliasTable":
        """Build a table from decoded JSON data.

        Parameters
        ----------
        data:
            Either a list of string lists or a mapping with an ``"aliases"``
            key holding such a list.
        """

        if isinstance(data, dict):
            data = data.get("aliases")
        if not isinstance(data, list):
            raise AliasConfigError(
                "Alias configuration must be a list of alias lists or an object "
                "with an 'aliases' list."
            )
        classes = []
        for position, names in enumerate(data):
            if not isinstance(names, list):
                raise AliasConfigError(
                    f"Alias class {position} must be a list of names, "
                    f"got {type(names).__name__}."
                )
            classes.append(names)
        return cls(classes)


def load_alias_table(path: Optional[Path | str]) -> AliasTable:
    """Load an alias table from a JSON file.

    Parameters
    ----------
    path:
        Location of the alias file. ``None`` returns an empty table.

    Returns
    -------
    AliasTable
        The validated table.

    Raises
    ------
    AliasConfigError
        When the file cannot be read, is not shaped like an alias table, or
        lists a name in more than one class.
    """

    if path is None:
        return AliasTable()
    alias_path = Path(path).expanduser()
    try:
        raw = alias_path.read_bytes()
    except OSError as err:
        raise AliasConfigError(
            f"Failed to read alias file {alias_path}: {err}"
        ) from err
    table = AliasTable.from_data(json_repair.loads(decode_best_effort(raw)))
    LOGGER.info("Loaded %d alias class(es) from %s", len(table), alias_path)
    return table


__all__ = [
    "AliasTable",
    "load_alias_table",
]
