"""
Use case: Open a new ticket.

Input: CreateTicketCommand
Output: Ticket
Side effects: Persists the ticket with its initial status transition.
Failure cases: None.
"""

import logging
from datetime import datetime, timezone

from app.application.tickets.dtos import CreateTicketCommand
from app.domain.tickets.entities import Ticket, TicketStatus
from app.domain.tickets.ports import TicketRepository
from app.domain.tickets.status_history import StatusHistory, StatusTransition

logger = logging.getLogger(__name__)

CREATED_NOTE = "Ticket created"


class CreateTicketUseCase:
    """Orchestrates opening a ticket.

    Every ticket starts in the open status, and the first entry of its
    status history records the move from no status to open.
    """

    def __init__(self, ticket_repo: TicketRepository) -> None:
        """Initialize the use case.

        Args:
            ticket_repo: Repository used to persist the new ticket.
        """
        self._ticket_repo = ticket_repo

    def execute(self, command: CreateTicketCommand) -> Ticket:
        """Run the create ticket use case.

        Args:
            command: Ticket fields and the acting user.

        Returns:
            The persisted ticket.
        """
        now = datetime.now(timezone.utc)
        history = StatusHistory()
        history.append(
            StatusTransition(
                from_status=None,
                to_status=TicketStatus.OPEN,
                transitioned_at=now,
                transitioned_by=command.actor.user_id,
                note=CREATED_NOTE,
            )
        )
        ticket = Ticket(
            id=self._ticket_repo.next_id(),
            title=command.title,
            description=command.description,
            category=command.category,
            priority=command.priority,
            location=command.location,
            opened_by=command.actor.user_id,
            assigned_to=command.assigned_to,
            created_at=now,
            updated_at=now,
            status_history=history,
        )
        self._ticket_repo.save(ticket)

        logger.info("Ticket %d created by %s", ticket.id, command.actor.user_id)
        return ticket
