"""
Domain service: ticket status workflow.

Defines which status moves are allowed and who may make them.
Pure functions, no IO.
"""

from app.domain.tickets.entities import STAFF_ROLES, Ticket, TicketStatus, UserRole
from app.domain.tickets.errors import (
    InvalidStatusTransitionError,
    InvalidTicketStateError,
    PermissionDeniedError,
)

ALLOWED_TRANSITIONS: dict[TicketStatus, frozenset[TicketStatus]] = {
    # New tickets are reviewed (usually by being assigned) before work starts.
    TicketStatus.OPEN: frozenset({TicketStatus.IN_REVIEW, TicketStatus.CANCELLED}),
    TicketStatus.IN_REVIEW: frozenset(
        {TicketStatus.IN_PROGRESS, TicketStatus.CANCELLED}
    ),
    TicketStatus.IN_PROGRESS: frozenset(
        {
            TicketStatus.AWAITING_REQUESTER,
            TicketStatus.CLOSED,
            TicketStatus.CANCELLED,
        }
    ),
    TicketStatus.AWAITING_REQUESTER: frozenset(
        {TicketStatus.IN_PROGRESS, TicketStatus.CLOSED, TicketStatus.CANCELLED}
    ),
    # Closed is terminal; a cancelled ticket may be reopened.
    TicketStatus.CLOSED: frozenset(),
    TicketStatus.CANCELLED: frozenset({TicketStatus.OPEN}),
}

ACTIVE_STATUSES = frozenset(
    {
        TicketStatus.OPEN,
        TicketStatus.IN_REVIEW,
        TicketStatus.IN_PROGRESS,
        TicketStatus.AWAITING_REQUESTER,
    }
)
FINISHED_STATUSES = frozenset({TicketStatus.CLOSED, TicketStatus.CANCELLED})


def allowed_targets(current: TicketStatus) -> frozenset[TicketStatus]:
    """Return the statuses reachable from the current one."""
    return ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition_allowed(current: TicketStatus, target: TicketStatus) -> None:
    """Raise InvalidStatusTransitionError if current -> target is not allowed."""
    if target not in allowed_targets(current):
        raise InvalidStatusTransitionError(current.value, target.value)


def ensure_can_change_status(ticket: Ticket, user_id: str, role: UserRole) -> None:
    """Only staff roles or the assignee may move a ticket through the workflow."""
    if role in STAFF_ROLES or ticket.assigned_to == user_id:
        return
    raise PermissionDeniedError(
        f"User {user_id} may not change the status of ticket {ticket.id}"
    )


def ensure_can_assign(user_id: str, role: UserRole) -> None:
    if role not in STAFF_ROLES:
        raise PermissionDeniedError(f"User {user_id} may not assign tickets")


def ensure_can_edit(ticket: Ticket, user_id: str, role: UserRole) -> None:
    """Staff may edit any ticket; the opener only while it is still open."""
    if role in STAFF_ROLES:
        return
    if ticket.opened_by == user_id and ticket.status == TicketStatus.OPEN:
        return
    raise PermissionDeniedError(f"User {user_id} may not edit ticket {ticket.id}")


def ensure_can_rate(ticket: Ticket, user_id: str) -> None:
    """Only the opener may rate, and only once the ticket is closed.

    Raises:
        PermissionDeniedError: If the user did not open the ticket.
        InvalidTicketStateError: If the ticket is not closed.
    """
    if ticket.opened_by != user_id:
        raise PermissionDeniedError("Only the user who opened the ticket may rate it")
    if ticket.status != TicketStatus.CLOSED:
        raise InvalidTicketStateError("Only closed tickets can be rated")


def can_view(ticket: Ticket, user_id: str, role: UserRole) -> bool:
    """Requesters only see the tickets they opened."""
    if role != UserRole.REQUESTER:
        return True
    return ticket.opened_by == user_id
