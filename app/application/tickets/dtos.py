"""
Data Transfer Objects for the tickets application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no business logic.
"""

from dataclasses import dataclass, field

from app.domain.tickets.entities import Ticket, TicketPriority, TicketStatus, UserRole


@dataclass(frozen=True)
class Actor:
    """The authenticated user performing an operation.

    Attributes:
        user_id: Identifier of the user.
        role: Role used for permission checks.
    """

    user_id: str
    role: UserRole


@dataclass(frozen=True)
class CreateTicketCommand:
    """Input DTO for opening a new ticket.

    Attributes:
        actor: User opening the ticket.
        title: Short summary.
        description: Full description of the request.
        category: Free-form category (e.g. "maintenance").
        priority: Ticket urgency.
        location: Where the problem is, if relevant.
        assigned_to: Optional user id to assign straight away.
    """

    actor: Actor
    title: str
    description: str
    category: str
    priority: TicketPriority = TicketPriority.MEDIUM
    location: str | None = None
    assigned_to: str | None = None


@dataclass(frozen=True)
class GetTicketQuery:
    """Input DTO for reading a single ticket."""

    actor: Actor
    ticket_id: int


LIST_DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class ListTicketsQuery:
    """Input DTO for listing tickets visible to the actor.

    Attributes:
        actor: User listing tickets.
        status: Optional filter on the current status.
        priority: Optional filter on priority.
        category: Optional filter on category.
        opened_by: Optional filter on the opener (ignored for requesters).
        assigned_to: Optional filter on the assignee.
        q: Case-insensitive text search on title, description and location.
        page: 1-based page number.
        limit: Page size.
    """

    actor: Actor
    status: TicketStatus | None = None
    priority: TicketPriority | None = None
    category: str | None = None
    opened_by: str | None = None
    assigned_to: str | None = None
    q: str | None = None
    page: int = 1
    limit: int = LIST_DEFAULT_LIMIT


@dataclass(frozen=True)
class TicketPage:
    """One page of a ticket listing plus paging metadata."""

    tickets: list[Ticket]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


@dataclass(frozen=True)
class UpdateTicketCommand:
    """Input DTO for editing ticket fields. None leaves a field unchanged."""

    actor: Actor
    ticket_id: int
    title: str | None = None
    description: str | None = None
    category: str | None = None
    priority: TicketPriority | None = None
    location: str | None = None


@dataclass(frozen=True)
class AssignTicketCommand:
    """Input DTO for assigning a ticket.

    Attributes:
        actor: Staff member making the assignment.
        ticket_id: Target ticket.
        assignee_id: User who will handle the ticket.
        assignee_name: Display name used in the history note.
    """

    actor: Actor
    ticket_id: int
    assignee_id: str
    assignee_name: str | None = None


@dataclass(frozen=True)
class RateTicketCommand:
    """Input DTO for the opener's satisfaction rating of a closed ticket."""

    actor: Actor
    ticket_id: int
    score: int
    comment: str | None = None


@dataclass(frozen=True)
class ChangeTicketStatusCommand:
    """Input DTO for moving a ticket through the workflow.

    Attributes:
        actor: User making the change.
        ticket_id: Target ticket.
        status: Requested new status.
        note: Optional note stored in the status history.
    """

    actor: Actor
    ticket_id: int
    status: TicketStatus
    note: str | None = None


@dataclass(frozen=True)
class AddCommentCommand:
    """Input DTO for commenting on a ticket.

    Attributes:
        actor: Comment author.
        ticket_id: Target ticket.
        message: Comment text.
        mention_candidates: (user_id, user_name) pairs that may be mentioned.
    """

    actor: Actor
    ticket_id: int
    message: str
    mention_candidates: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class AddChecklistItemCommand:
    """Input DTO for appending a checklist item."""

    actor: Actor
    ticket_id: int
    label: str


@dataclass(frozen=True)
class SetChecklistItemCommand:
    """Input DTO for completing or reopening a checklist item."""

    actor: Actor
    ticket_id: int
    item_id: str
    completed: bool


@dataclass(frozen=True)
class AddAttachmentCommand:
    """Input DTO for registering an uploaded file on a ticket."""

    actor: Actor
    ticket_id: int
    file_name: str
    file_url: str
    file_type: str
    file_size: int


@dataclass(frozen=True)
class RemoveAttachmentCommand:
    """Input DTO for deleting an attachment."""

    actor: Actor
    ticket_id: int
    attachment_id: str


@dataclass(frozen=True)
class TicketBoardQuery:
    """Input DTO for the kanban board and the statistics views."""

    actor: Actor


@dataclass(frozen=True)
class KanbanColumn:
    """Tickets in one status, most urgent first."""

    status: TicketStatus
    tickets: list[Ticket]

    @property
    def count(self) -> int:
        return len(self.tickets)


@dataclass(frozen=True)
class TicketStats:
    """Aggregate figures over the tickets visible to the actor.

    Attributes:
        total: Number of tickets.
        open: Tickets not yet closed or cancelled.
        closed: Closed or cancelled tickets.
        overdue: Tickets older than the overdue threshold that nobody
            has finished or parked waiting on the requester.
        avg_satisfaction: Mean rating of rated tickets, 0 when none.
        by_category: Ticket count per category.
        by_priority: Ticket count per priority.
    """

    total: int
    open: int
    closed: int
    overdue: int
    avg_satisfaction: float
    by_category: dict[str, int] = field(default_factory=dict)
    by_priority: dict[TicketPriority, int] = field(default_factory=dict)
