"""
Use case: Rate a closed ticket.

Input: RateTicketCommand
Output: Ticket
Side effects:
    Stores the satisfaction score; a rating comment is added to the
    ticket's comments when given.
Failure cases:
    PermissionDeniedError if the actor is not a requester or did not open the ticket.
    TicketNotFoundError if the ticket is absent or not visible.
    InvalidTicketStateError if the ticket is not closed.
"""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from app.application.tickets.dtos import RateTicketCommand
from app.application.tickets.get_ticket import load_visible_ticket
from app.domain.tickets.entities import Ticket, TicketComment, UserRole
from app.domain.tickets.errors import PermissionDeniedError
from app.domain.tickets.ports import TicketRepository
from app.domain.tickets.workflow import ensure_can_rate

logger = logging.getLogger(__name__)

MAX_SCORE = 5


class RateTicketUseCase:
    """Records the opener's 1-5 satisfaction score."""

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, command: RateTicketCommand) -> Ticket:
        if command.actor.role != UserRole.REQUESTER:
            raise PermissionDeniedError("Only requesters may rate tickets")
        ticket = load_visible_ticket(self._ticket_repo, command.ticket_id, command.actor)
        ensure_can_rate(ticket, command.actor.user_id)

        now = datetime.now(timezone.utc)
        ticket.satisfaction_score = command.score
        if command.comment:
            ticket.comments.append(
                TicketComment(
                    id=str(uuid4()),
                    author_id=command.actor.user_id,
                    message=f"Rating: {command.score}/{MAX_SCORE} - {command.comment}",
                    created_at=now,
                )
            )
        ticket.updated_at = now
        self._ticket_repo.save(ticket)

        logger.info("Ticket %d rated %d/%d", ticket.id, command.score, MAX_SCORE)
        return ticket
