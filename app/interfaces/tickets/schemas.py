"""
Pydantic schemas for tickets API request/response validation.

These schemas enforce input validation and define the API contract.
JSON keys are camelCase; snake_case names are accepted on input too.
No business logic belongs here.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.tickets.entities import TicketPriority, TicketStatus

TITLE_MAX_LEN = 200
TEXT_MAX_LEN = 5000
NOTE_MAX_LEN = 500
CATEGORY_MAX_LEN = 50


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ------------------------------------------------------------------
# Requests
# ------------------------------------------------------------------


class CreateTicketRequest(CamelModel):
    """Request schema for opening a ticket.

    Attributes:
        title: Short summary (1-200 chars).
        description: Full description (1-5000 chars).
        category: Free-form category, e.g. "maintenance".
        priority: low, medium, high or urgent.
        location: Where the problem is, e.g. "Block B, 2nd floor".
        assigned_to: Optional user id of the assignee.
    """

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LEN)
    description: str = Field(..., min_length=1, max_length=TEXT_MAX_LEN)
    category: str = Field(..., min_length=1, max_length=CATEGORY_MAX_LEN)
    priority: TicketPriority = TicketPriority.MEDIUM
    location: str | None = Field(default=None, max_length=TITLE_MAX_LEN)
    assigned_to: str | None = Field(default=None, min_length=1)


class UpdateTicketRequest(CamelModel):
    """Request schema for editing a ticket. Omitted fields are unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LEN)
    description: str | None = Field(default=None, min_length=1, max_length=TEXT_MAX_LEN)
    category: str | None = Field(default=None, min_length=1, max_length=CATEGORY_MAX_LEN)
    priority: TicketPriority | None = None
    location: str | None = Field(default=None, max_length=TITLE_MAX_LEN)


class AssignTicketRequest(CamelModel):
    """Request schema for assigning a ticket.

    Attributes:
        assigned_to: User id of the new assignee.
        assignee_name: Display name recorded in the history note.
    """

    assigned_to: str = Field(..., min_length=1)
    assignee_name: str | None = Field(default=None, max_length=100)


class RateTicketRequest(CamelModel):
    """Request schema for rating a closed ticket."""

    satisfaction_score: int = Field(..., ge=1, le=5)
    comment: str | None = Field(default=None, max_length=NOTE_MAX_LEN)


class ChangeStatusRequest(CamelModel):
    """Request schema for a workflow status change."""

    status: TicketStatus
    note: str | None = Field(default=None, max_length=NOTE_MAX_LEN)


class CloseTicketRequest(CamelModel):
    """Request schema for closing a ticket."""

    note: str | None = Field(default=None, max_length=NOTE_MAX_LEN)


class MentionCandidate(CamelModel):
    """A user the comment author may mention."""

    user_id: str = Field(..., min_length=1)
    user_name: str = Field(..., min_length=1, max_length=100)


class AddCommentRequest(CamelModel):
    """Request schema for commenting on a ticket.

    Attributes:
        message: Comment text; "@userName" marks a mention.
        mentions: Users that may be mentioned in the message.
    """

    message: str = Field(..., min_length=1, max_length=TEXT_MAX_LEN)
    mentions: list[MentionCandidate] = Field(default_factory=list, max_length=50)


class AddChecklistItemRequest(CamelModel):
    """Request schema for appending a checklist item."""

    label: str = Field(..., min_length=1, max_length=TITLE_MAX_LEN)


class SetChecklistItemRequest(CamelModel):
    """Request schema for completing or reopening a checklist item."""

    completed: bool


class AddAttachmentRequest(CamelModel):
    """Request schema for registering an uploaded file."""

    file_name: str = Field(..., min_length=1, max_length=255)
    file_url: str = Field(..., min_length=1, max_length=2048)
    file_type: str = Field(..., min_length=1, max_length=100)
    file_size: int = Field(..., ge=0)


# ------------------------------------------------------------------
# Responses
# ------------------------------------------------------------------


class ChecklistItemSchema(CamelModel):
    id: str
    label: str
    completed: bool
    completed_at: datetime | None = None
    completed_by: str | None = None


class TicketChecklistSchema(CamelModel):
    """Checklist with derived counters; progress is 0-100."""

    items: list[ChecklistItemSchema]
    completed_count: int
    total_count: int
    progress: int


class TicketAttachmentSchema(CamelModel):
    id: str
    file_name: str
    file_url: str
    file_type: str
    file_size: int
    uploaded_by: str
    uploaded_at: datetime


class TicketMentionSchema(CamelModel):
    user_id: str
    user_name: str
    position: int


class TicketCommentSchema(CamelModel):
    id: str
    author_id: str
    message: str
    created_at: datetime
    mentions: list[TicketMentionSchema]


class StatusTransitionSchema(CamelModel):
    """One entry of the status audit trail, serialized as from/to."""

    from_status: TicketStatus | None = Field(alias="from")
    to_status: TicketStatus = Field(alias="to")
    transitioned_at: datetime
    transitioned_by: str
    note: str | None = None


class TicketResponse(CamelModel):
    """Response schema for a single ticket."""

    id: int
    title: str
    description: str
    category: str
    priority: TicketPriority
    status: TicketStatus
    location: str | None = None
    opened_by: str
    assigned_to: str | None = None
    created_at: datetime
    updated_at: datetime
    closed_at: datetime | None = None
    satisfaction_score: int | None = None
    checklist: TicketChecklistSchema
    attachments: list[TicketAttachmentSchema]
    comments: list[TicketCommentSchema]
    status_history: list[StatusTransitionSchema]


class PageMeta(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


class TicketListResponse(CamelModel):
    """Response schema for the ticket listing endpoint."""

    tickets: list[TicketResponse]
    meta: PageMeta


class KanbanColumnSchema(CamelModel):
    count: int
    tickets: list[TicketResponse]


class TicketStatsResponse(CamelModel):
    """Response schema for the ticket statistics endpoint."""

    total: int
    open: int
    closed: int
    overdue: int
    avg_satisfaction: float
    category_stats: dict[str, int]
    priority_stats: dict[TicketPriority, int]


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    service: str
    status: str
    version: str
