"""Resolve raw sender names into participant identities.

Transcripts carry no stable user id, only the name shown at the time. Names
are grouped first, then the groups are folded into identities: a group joins
the first identity whose primary alias either shares an alias-table class
with it or consists of the same set of name parts ("John Francis Doe" and
"Doe John Francis"). The fold compares every group with every identity,
which is fine because a conversation only has a handful of distinct names.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional

from .aliases import AliasTable
from .models import Message, RankedIdentity, UserIdentity

LOGGER = logging.getLogger(__name__)


def name_tokens(sender: str) -> FrozenSet[str]:
    """Return the lower-cased whitespace-separated parts of a name."""

    return frozenset(sender.lower().split())


def same_person(sender: str, alias: str, alias_table: Optional[AliasTable]) -> bool:
    """Return True when ``sender`` and ``alias`` denote the same participant."""

    if alias_table is not None and alias_table.are_aliases(sender, alias):
        return True
    return name_tokens(sender) == name_tokens(alias)


@dataclass
class _IdentityBuilder:
    aliases: List[str]
    messages: List[Message] = field(default_factory=list)

    def absorb(self, sender: str, messages: List[Message]) -> None:
        self.aliases.append(sender)
        self.messages = list(
            heapq.merge(self.messages, messages, key=lambda message: message.timestamp)
        )

    def freeze(self) -> UserIdentity:
        return UserIdentity(aliases=tuple(self.aliases), messages=tuple(self.messages))


def group_by_sender(messages: Iterable[Message]) -> Dict[str, List[Message]]:
    """Group messages by raw sender, keeping first-occurrence order."""

    groups: Dict[str, List[Message]] = {}
    for message in messages:
        groups.setdefault(message.sender, []).append(message)
    return groups


def resolve_identities(
    messages: Iterable[Message],
    alias_table: Optional[AliasTable] = None,
) -> List[UserIdentity]:
    """Group messages into participant identities.

    Parameters
    ----------
    messages:
        Classified messages in chronological order. Callers usually pass only
        text messages so that status lines do not form an identity of their
        own.
    alias_table:
        Known equivalence classes of sender names. ``None`` relies on the
        name-part rule alone.

    Returns
    -------
    List[UserIdentity]
        Identities in the order their first sender appeared. Each sender
        belongs to exactly one identity.
    """

    builders: List[_IdentityBuilder] = []
    for sender, sender_messages in group_by_sender(messages).items():
        match = next(
            (
                builder
                for builder in builders
                if same_person(sender, builder.aliases[0], alias_table)
            ),
            None,
        )
        if match is None:
            builders.append(
                _IdentityBuilder(aliases=[sender], messages=list(sender_messages))
            )
            continue
        LOGGER.debug("Merging sender %r into %r", sender, match.aliases[0])
        match.absorb(sender, sender_messages)

    return [builder.freeze() for builder in builders]


def _rank(
    identities: Iterable[UserIdentity],
    counts: List[int],
) -> List[RankedIdentity]:
    rows = [
        RankedIdentity(identity=identity, count=count)
        for identity, count in zip(identities, counts)
    ]
    rows.sort(key=lambda row: row.count, reverse=True)
    return rows


def rank_by_word_count(identities: List[UserIdentity]) -> List[RankedIdentity]:
    """Order identities by the number of words in their text messages."""

    return _rank(identities, [identity.word_count for identity in identities])


def rank_by_message_count(identities: List[UserIdentity]) -> List[RankedIdentity]:
    """Order identities by their total number of messages."""

    return _rank(identities, [identity.message_count for identity in identities])


__all__ = [
    "group_by_sender",
    "name_tokens",
    "rank_by_message_count",
    "rank_by_word_count",
    "resolve_identities",
    "same_person",
]
