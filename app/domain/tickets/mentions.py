"""
Domain service: mention parsing for ticket comments.

A mention is an "@" immediately followed by a known user's name, not
preceded by a word character (so e-mail addresses are ignored).
"""

import re
from typing import Iterable

from app.domain.tickets.entities import TicketMention


def parse_mentions(
    text: str, candidates: Iterable[tuple[str, str]]
) -> list[TicketMention]:
    """Find every mention of a candidate user in a comment.

    Args:
        text: The comment message.
        candidates: (user_id, user_name) pairs the author may mention.

    Returns:
        Mentions ordered by position; a user mentioned twice appears twice.
    """
    # Longest names first so "@Ann Lee" wins over "@Ann" at the same offset.
    ordered = sorted(
        {(user_id, name) for user_id, name in candidates if name},
        key=lambda pair: len(pair[1]),
        reverse=True,
    )
    mentions: list[TicketMention] = []
    taken: set[int] = set()
    for user_id, name in ordered:
        pattern = re.compile(r"(?<!\w)@" + re.escape(name) + r"(?!\w)")
        for match in pattern.finditer(text):
            if match.start() in taken:
                continue
            taken.add(match.start())
            mentions.append(
                TicketMention(user_id=user_id, user_name=name, position=match.start())
            )
    return sorted(mentions, key=lambda m: m.position)
