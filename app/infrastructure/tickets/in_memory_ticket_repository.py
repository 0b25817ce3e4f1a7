"""
Adapter: In-memory ticket repository.

Implements TicketRepository port.
Stores tickets in process memory behind a lock. Tickets are copied on the
way in and out so callers never share mutable state with the store.
Writes are optimistic: a save based on a stale copy is rejected.
"""

import copy
import threading
from typing import Optional

from app.domain.tickets.entities import Ticket, TicketFilters
from app.domain.tickets.errors import ConcurrentTicketUpdateError
from app.domain.tickets.ports import TicketRepository


class InMemoryTicketRepository(TicketRepository):
    """Process-local ticket store with sequential integer ids."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tickets: dict[int, Ticket] = {}
        self._last_id = 0

    def next_id(self) -> int:
        with self._lock:
            self._last_id += 1
            return self._last_id

    def get_by_id(self, ticket_id: int) -> Optional[Ticket]:
        with self._lock:
            ticket = self._tickets.get(ticket_id)
            return copy.deepcopy(ticket) if ticket is not None else None

    def list(self, filters: Optional[TicketFilters] = None) -> list[Ticket]:
        filters = filters or TicketFilters()
        with self._lock:
            tickets = [
                copy.deepcopy(t) for t in self._tickets.values() if filters.matches(t)
            ]
        return sorted(tickets, key=lambda t: (t.created_at, t.id), reverse=True)

    def save(self, ticket: Ticket) -> None:
        with self._lock:
            stored = self._tickets.get(ticket.id)
            stored_version = stored.version if stored is not None else 0
            if stored_version != ticket.version:
                raise ConcurrentTicketUpdateError(ticket.id)
            ticket.version += 1
            self._tickets[ticket.id] = copy.deepcopy(ticket)
