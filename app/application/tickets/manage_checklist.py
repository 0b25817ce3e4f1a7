"""
Use cases: Maintain a ticket checklist.

Input: AddChecklistItemCommand / SetChecklistItemCommand
Output: TicketChecklist
Side effects: Replaces the ticket checklist and persists the ticket.
Failure cases:
    TicketNotFoundError if the ticket is absent or not visible.
    ChecklistItemNotFoundError if the item id is unknown.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from app.application.tickets.dtos import (
    AddChecklistItemCommand,
    SetChecklistItemCommand,
)
from app.application.tickets.get_ticket import load_visible_ticket
from app.domain.tickets.entities import ChecklistItem, TicketChecklist
from app.domain.tickets.errors import ChecklistItemNotFoundError
from app.domain.tickets.ports import TicketRepository

logger = logging.getLogger(__name__)


class AddChecklistItemUseCase:
    """Appends an open item to the end of the checklist."""

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, command: AddChecklistItemCommand) -> TicketChecklist:
        ticket = load_visible_ticket(self._ticket_repo, command.ticket_id, command.actor)

        item = ChecklistItem(id=str(uuid4()), label=command.label)
        ticket.checklist = TicketChecklist.from_items((*ticket.checklist.items, item))
        ticket.updated_at = datetime.now(timezone.utc)
        self._ticket_repo.save(ticket)

        logger.info("Checklist item %s added to ticket %d", item.id, ticket.id)
        return ticket.checklist


class SetChecklistItemUseCase:
    """Completes or reopens a checklist item.

    Completing records who completed the item and when; reopening
    clears both. Counters and progress are recomputed from the items.
    """

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, command: SetChecklistItemCommand) -> TicketChecklist:
        ticket = load_visible_ticket(self._ticket_repo, command.ticket_id, command.actor)

        now = datetime.now(timezone.utc)
        items = list(ticket.checklist.items)
        for index, item in enumerate(items):
            if item.id == command.item_id:
                break
        else:
            raise ChecklistItemNotFoundError(command.item_id)

        if command.completed:
            items[index] = replace(
                item,
                completed=True,
                completed_at=now,
                completed_by=command.actor.user_id,
            )
        else:
            items[index] = replace(
                item, completed=False, completed_at=None, completed_by=None
            )

        ticket.checklist = TicketChecklist.from_items(items)
        ticket.updated_at = now
        self._ticket_repo.save(ticket)

        logger.info(
            "Checklist item %s on ticket %d set completed=%s (progress %d%%)",
            command.item_id,
            ticket.id,
            command.completed,
            ticket.checklist.progress,
        )
        return ticket.checklist
