"""
Append-only audit trail of a ticket's status field.

Every transition must continue the chain: the first one starts from
no status, and each following one starts from the status the previous
one moved to. Entries are never mutated or reordered once appended.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from app.domain.tickets.errors import BrokenTransitionChainError


@dataclass(frozen=True)
class StatusTransition:
    """A single recorded status change."""

    from_status: Optional[str]
    to_status: str
    transitioned_at: datetime
    transitioned_by: str
    note: Optional[str] = None


class StatusHistory:
    """Ordered, append-only sequence of status transitions."""

    def __init__(self) -> None:
        self._entries: list[StatusTransition] = []

    @classmethod
    def from_transitions(
        cls, transitions: Iterable[StatusTransition]
    ) -> "StatusHistory":
        """Build a history, validating every link of the chain.

        Raises:
            BrokenTransitionChainError: If any entry does not continue
                from its predecessor.
        """
        history = cls()
        for transition in transitions:
            history.append(transition)
        return history

    def append(self, transition: StatusTransition) -> None:
        """Append a transition after checking it continues the chain."""
        expected_from = self.current_status
        if transition.from_status != expected_from:
            raise BrokenTransitionChainError(expected_from, transition.from_status)
        self._entries.append(transition)

    @property
    def current_status(self) -> Optional[str]:
        """Return the latest target status, or None when empty."""
        if not self._entries:
            return None
        return self._entries[-1].to_status

    @property
    def entries(self) -> tuple[StatusTransition, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self.entries)
