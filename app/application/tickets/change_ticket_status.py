"""
Use case: Move a ticket through the status workflow.

Input: ChangeTicketStatusCommand
Output: Ticket
Side effects: Appends to the ticket's status history and persists it.
Failure cases:
    TicketNotFoundError if the ticket is absent.
    PermissionDeniedError if the actor is neither staff nor the assignee.
    InvalidStatusTransitionError if the workflow forbids the move.
    ConcurrentTicketUpdateError if the ticket changed since it was loaded.
"""

import logging
from datetime import datetime, timezone

from app.application.tickets.dtos import ChangeTicketStatusCommand
from app.application.tickets.get_ticket import load_ticket
from app.domain.tickets.entities import Ticket
from app.domain.tickets.ports import TicketRepository
from app.domain.tickets.status_history import StatusTransition
from app.domain.tickets.workflow import (
    ensure_can_change_status,
    ensure_transition_allowed,
)

logger = logging.getLogger(__name__)


class ChangeTicketStatusUseCase:
    """Validates and records a status change."""

    def __init__(self, ticket_repo: TicketRepository) -> None:
        """Initialize the use case.

        Args:
            ticket_repo: Repository for loading and saving tickets.
        """
        self._ticket_repo = ticket_repo

    def execute(self, command: ChangeTicketStatusCommand) -> Ticket:
        """Run the change status use case.

        Args:
            command: Target ticket, requested status and acting user.

        Returns:
            The updated ticket.
        """
        ticket = load_ticket(self._ticket_repo, command.ticket_id)
        ensure_can_change_status(ticket, command.actor.user_id, command.actor.role)

        current = ticket.status
        ensure_transition_allowed(current, command.status)

        ticket.record_transition(
            StatusTransition(
                from_status=current,
                to_status=command.status,
                transitioned_at=datetime.now(timezone.utc),
                transitioned_by=command.actor.user_id,
                note=command.note,
            )
        )
        self._ticket_repo.save(ticket)

        logger.info(
            "Ticket %d moved %s -> %s by %s",
            ticket.id,
            current.value,
            command.status.value,
            command.actor.user_id,
        )
        return ticket
