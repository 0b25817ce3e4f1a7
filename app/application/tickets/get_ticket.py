"""
Use cases: Read tickets.

Input: GetTicketQuery / ListTicketsQuery
Output: Ticket / TicketPage
Side effects: None (read-only queries).
Failure cases: TicketNotFoundError if the ticket is absent or not visible.
"""

import logging

from app.application.tickets.dtos import (
    Actor,
    GetTicketQuery,
    ListTicketsQuery,
    TicketPage,
)
from app.domain.tickets.entities import Ticket, TicketFilters, UserRole
from app.domain.tickets.errors import TicketNotFoundError
from app.domain.tickets.ports import TicketRepository
from app.domain.tickets.workflow import can_view

logger = logging.getLogger(__name__)


def load_ticket(repo: TicketRepository, ticket_id: int) -> Ticket:
    """Fetch a ticket regardless of who is asking.

    Used by operations that apply their own permission rule instead of
    the visibility rule (status changes, assignment).

    Raises:
        TicketNotFoundError: If absent.
    """
    ticket = repo.get_by_id(ticket_id)
    if ticket is None:
        raise TicketNotFoundError(ticket_id)
    return ticket


def load_visible_ticket(
    repo: TicketRepository, ticket_id: int, actor: Actor
) -> Ticket:
    """Fetch a ticket the actor is allowed to see.

    Tickets hidden from the actor are reported as missing so their
    existence is not disclosed.

    Raises:
        TicketNotFoundError: If absent or not visible.
    """
    ticket = load_ticket(repo, ticket_id)
    if not can_view(ticket, actor.user_id, actor.role):
        raise TicketNotFoundError(ticket_id)
    return ticket


def visible_filters(actor: Actor, **criteria) -> TicketFilters:
    """Build list filters, pinning requesters to their own tickets."""
    if actor.role == UserRole.REQUESTER:
        criteria["opened_by"] = actor.user_id
    return TicketFilters(**criteria)


class GetTicketUseCase:
    """Returns a single ticket with its checklist, comments and history."""

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, query: GetTicketQuery) -> Ticket:
        logger.info("Fetching ticket %d for user %s", query.ticket_id, query.actor.user_id)
        return load_visible_ticket(self._ticket_repo, query.ticket_id, query.actor)


class ListTicketsUseCase:
    """Lists tickets a page at a time; requesters only get the ones they opened."""

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, query: ListTicketsQuery) -> TicketPage:
        filters = visible_filters(
            query.actor,
            status=query.status,
            priority=query.priority,
            category=query.category,
            opened_by=query.opened_by,
            assigned_to=query.assigned_to,
            q=query.q,
        )
        tickets = self._ticket_repo.list(filters)

        start = (query.page - 1) * query.limit
        page = TicketPage(
            tickets=tickets[start:start + query.limit],
            total=len(tickets),
            page=query.page,
            limit=query.limit,
        )
        logger.info(
            "Listed %d of %d tickets (page %d) for user %s",
            len(page.tickets),
            page.total,
            page.page,
            query.actor.user_id,
        )
        return page
