"""
Domain entities for the tickets bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
Value records (checklist items, attachments, mentions, transitions)
are frozen; the Ticket aggregate is the only mutable object.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from app.domain.tickets.errors import (
    InconsistentChecklistError,
    InvalidChecklistItemError,
)
from app.domain.tickets.status_history import StatusHistory, StatusTransition


class TicketStatus(str, Enum):
    """Lifecycle status of a ticket."""

    OPEN = "open"
    IN_REVIEW = "in_review"
    IN_PROGRESS = "in_progress"
    AWAITING_REQUESTER = "awaiting_requester"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class TicketPriority(str, Enum):
    """Urgency of a ticket."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class UserRole(str, Enum):
    """Role of the acting user."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    REQUESTER = "requester"


STAFF_ROLES = frozenset({UserRole.ADMIN, UserRole.MANAGER, UserRole.STAFF})

PRIORITY_RANK = {
    TicketPriority.LOW: 0,
    TicketPriority.MEDIUM: 1,
    TicketPriority.HIGH: 2,
    TicketPriority.URGENT: 3,
}


def percentage(value: float, maximum: float = 100) -> int:
    """Return value/maximum as a whole percentage clamped to 0-100.

    Exact halves round up (12.5 -> 13), matching the progress bar.
    """
    if maximum <= 0:
        return 0
    ratio = Decimal(value) * 100 / Decimal(maximum)
    ratio = min(Decimal(100), max(Decimal(0), ratio))
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ChecklistItem:
    """A single sub-task on a ticket checklist.

    completed_at and completed_by are set if and only if completed is True.
    """

    id: str
    label: str
    completed: bool = False
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None

    def __post_init__(self) -> None:
        has_metadata = self.completed_at is not None and self.completed_by is not None
        has_any_metadata = self.completed_at is not None or self.completed_by is not None
        if self.completed and not has_metadata:
            raise InvalidChecklistItemError(
                f"Completed checklist item {self.id} needs completed_at and completed_by"
            )
        if not self.completed and has_any_metadata:
            raise InvalidChecklistItemError(
                f"Open checklist item {self.id} cannot carry completion metadata"
            )


@dataclass(frozen=True)
class TicketChecklist:
    """Ordered checklist with counters derived from its items.

    Build through from_items(); the counters are validated against the
    items so an inconsistent checklist can never exist.
    """

    items: tuple[ChecklistItem, ...] = ()
    completed_count: int = 0
    total_count: int = 0
    progress: int = 0

    def __post_init__(self) -> None:
        completed = sum(1 for item in self.items if item.completed)
        total = len(self.items)
        expected = (completed, total, percentage(completed, total))
        actual = (self.completed_count, self.total_count, self.progress)
        if actual != expected:
            raise InconsistentChecklistError(
                f"Checklist counters {actual} do not match items {expected}"
            )

    @classmethod
    def from_items(cls, items) -> "TicketChecklist":
        """Build a checklist, recomputing every derived counter."""
        items = tuple(items)
        completed = sum(1 for item in items if item.completed)
        return cls(
            items=items,
            completed_count=completed,
            total_count=len(items),
            progress=percentage(completed, len(items)),
        )


@dataclass(frozen=True)
class TicketAttachment:
    """Metadata of a file uploaded to a ticket. Never mutated."""

    id: str
    file_name: str
    file_url: str
    file_type: str
    file_size: int
    uploaded_by: str
    uploaded_at: datetime


@dataclass(frozen=True)
class TicketMention:
    """A user referenced inside a comment, at a character offset."""

    user_id: str
    user_name: str
    position: int


@dataclass(frozen=True)
class TicketComment:
    """A comment posted on a ticket."""

    id: str
    author_id: str
    message: str
    created_at: datetime
    mentions: tuple[TicketMention, ...] = ()


@dataclass
class Ticket:
    """A trackable work item and the aggregate root of the context.

    The current status is always the target of the last entry in the
    status history. version counts successful saves and is used by the
    repository to reject writes based on a stale copy.
    """

    id: int
    title: str
    description: str
    category: str
    priority: TicketPriority
    opened_by: str
    created_at: datetime
    updated_at: datetime
    status_history: StatusHistory
    location: Optional[str] = None
    assigned_to: Optional[str] = None
    closed_at: Optional[datetime] = None
    satisfaction_score: Optional[int] = None
    checklist: TicketChecklist = field(default_factory=TicketChecklist)
    attachments: list[TicketAttachment] = field(default_factory=list)
    comments: list[TicketComment] = field(default_factory=list)
    version: int = 0

    @property
    def status(self) -> TicketStatus:
        """Return the status the last recorded transition moved to."""
        return TicketStatus(self.status_history.current_status)

    def record_transition(self, transition: StatusTransition) -> None:
        """Append a transition and update timestamps accordingly."""
        was_closed = self.status == TicketStatus.CLOSED
        self.status_history.append(transition)
        self.updated_at = transition.transitioned_at
        if transition.to_status != TicketStatus.CLOSED:
            self.closed_at = None
        elif not was_closed:
            self.closed_at = transition.transitioned_at


@dataclass(frozen=True)
class TicketFilters:
    """Criteria for listing tickets. Unset fields do not filter.

    q matches title, description and location, case-insensitively.
    """

    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    category: Optional[str] = None
    opened_by: Optional[str] = None
    assigned_to: Optional[str] = None
    q: Optional[str] = None

    def matches(self, ticket: Ticket) -> bool:
        if self.status is not None and ticket.status != self.status:
            return False
        if self.priority is not None and ticket.priority != self.priority:
            return False
        if self.category is not None and ticket.category != self.category:
            return False
        if self.opened_by is not None and ticket.opened_by != self.opened_by:
            return False
        if self.assigned_to is not None and ticket.assigned_to != self.assigned_to:
            return False
        if self.q:
            needle = self.q.casefold()
            haystack = (ticket.title, ticket.description, ticket.location or "")
            return any(needle in text.casefold() for text in haystack)
        return True
