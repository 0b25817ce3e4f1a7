"""
Use case: Assign a ticket to the user who will handle it.

Input: AssignTicketCommand
Output: Ticket
Side effects:
    Sets the assignee, moves an open ticket into review and records the
    assignment in the status history.
Failure cases:
    PermissionDeniedError if the actor is not staff.
    TicketNotFoundError if the ticket is absent.
"""

import logging
from datetime import datetime, timezone

from app.application.tickets.dtos import AssignTicketCommand
from app.application.tickets.get_ticket import load_ticket
from app.domain.tickets.entities import Ticket, TicketStatus
from app.domain.tickets.ports import TicketRepository
from app.domain.tickets.status_history import StatusTransition
from app.domain.tickets.workflow import ensure_can_assign

logger = logging.getLogger(__name__)


class AssignTicketUseCase:
    """Assigns a ticket.

    Assigning an open ticket starts its review. Any other status is kept,
    but the assignment is still written to the history as a transition
    from the current status to itself, so the audit trail shows it.
    """

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, command: AssignTicketCommand) -> Ticket:
        ensure_can_assign(command.actor.user_id, command.actor.role)
        ticket = load_ticket(self._ticket_repo, command.ticket_id)

        current = ticket.status
        target = TicketStatus.IN_REVIEW if current == TicketStatus.OPEN else current
        ticket.assigned_to = command.assignee_id
        ticket.record_transition(
            StatusTransition(
                from_status=current,
                to_status=target,
                transitioned_at=datetime.now(timezone.utc),
                transitioned_by=command.actor.user_id,
                note=f"Assigned to {command.assignee_name or command.assignee_id}",
            )
        )
        self._ticket_repo.save(ticket)

        logger.info(
            "Ticket %d assigned to %s by %s",
            ticket.id,
            command.assignee_id,
            command.actor.user_id,
        )
        return ticket
