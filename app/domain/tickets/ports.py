"""
Port interfaces (ABCs) for the tickets bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.tickets.entities import Ticket, TicketFilters


class TicketRepository(ABC):
    """Port for persisting and retrieving tickets."""

    @abstractmethod
    def next_id(self) -> int:
        """Reserve and return a fresh ticket id."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, ticket_id: int) -> Optional[Ticket]:
        """Return a ticket by its id, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def list(self, filters: Optional[TicketFilters] = None) -> list[Ticket]:
        """Return the tickets matching filters, newest first."""
        raise NotImplementedError

    @abstractmethod
    def save(self, ticket: Ticket) -> None:
        """Insert or replace a ticket.

        The stored version must equal ticket.version; on success both are
        incremented.

        Raises:
            ConcurrentTicketUpdateError: If the ticket was saved by someone
                else after this copy was loaded.
        """
        raise NotImplementedError
