"""
Use case: Edit a ticket's descriptive fields.

Input: UpdateTicketCommand
Output: Ticket
Side effects: Overwrites the given fields and persists the ticket.
Failure cases:
    TicketNotFoundError if the ticket is absent or not visible.
    PermissionDeniedError if a requester edits a ticket that is no longer open.
"""

import logging
from datetime import datetime, timezone

from app.application.tickets.dtos import UpdateTicketCommand
from app.application.tickets.get_ticket import load_visible_ticket
from app.domain.tickets.entities import Ticket
from app.domain.tickets.ports import TicketRepository
from app.domain.tickets.workflow import ensure_can_edit

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "category", "priority", "location")


class UpdateTicketUseCase:
    """Applies a partial update; fields left as None keep their value."""

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, command: UpdateTicketCommand) -> Ticket:
        ticket = load_visible_ticket(self._ticket_repo, command.ticket_id, command.actor)
        ensure_can_edit(ticket, command.actor.user_id, command.actor.role)

        changed = []
        for name in EDITABLE_FIELDS:
            value = getattr(command, name)
            if value is not None and value != getattr(ticket, name):
                setattr(ticket, name, value)
                changed.append(name)

        if changed:
            ticket.updated_at = datetime.now(timezone.utc)
            self._ticket_repo.save(ticket)

        logger.info(
            "Ticket %d updated by %s: %s",
            ticket.id,
            command.actor.user_id,
            ", ".join(changed) or "no changes",
        )
        return ticket
