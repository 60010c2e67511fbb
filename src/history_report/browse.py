"""Interactive selection of a user to show per-user statistics for."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from chat_history.models import UserIdentity

from .render import identities_frame, render_table, user_frame
from .summary import summarize_user

LOGGER = logging.getLogger(__name__)

PROMPT = (
    'Select a user by number to see user-specific statistics or type "." to '
    'list all users or "x" to exit: '
)
EXIT_COMMANDS = frozenset({"x", "exit"})
LIST_COMMAND = "."


def _read(read: Callable[[str], str], prompt: str) -> Optional[str]:
    try:
        return read(prompt).strip()
    except EOFError:
        return None


def browse_users(
    identities: Sequence[UserIdentity],
    read: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
) -> None:
    """Prompt for users until the user exits or input runs out.

    Parameters
    ----------
    identities:
        Identities in the order they are numbered in the report.
    read:
        Prompt function returning one line of input; ``EOFError`` ends the
        loop. Defaults to :func:`input`.
    write:
        Output function receiving complete blocks of text. Defaults to
        :func:`print`.
    """

    read = read or input
    write = write or print
    while True:
        choice = _read(read, PROMPT)
        if choice is None or choice in EXIT_COMMANDS:
            return
        if choice == LIST_COMMAND:
            write(render_table(identities_frame(identities)))
            continue
        try:
            number = int(choice)
        except ValueError:
            number = -1
        if not 0 <= number < len(identities):
            write("Error: Please enter a number from the table above.")
            continue
        LOGGER.debug("Showing statistics for user %d", number)
        write(render_table(user_frame(summarize_user(identities[number]))))


__all__ = ["browse_users"]
