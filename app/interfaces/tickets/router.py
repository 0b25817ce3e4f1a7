"""
FastAPI router for the tickets bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error translation is handled by the shared error handlers.
"""

from fastapi import APIRouter, Depends, Query, Request, status

from app.application.tickets.add_comment import AddCommentUseCase
from app.application.tickets.assign_ticket import AssignTicketUseCase
from app.application.tickets.change_ticket_status import ChangeTicketStatusUseCase
from app.application.tickets.create_ticket import CreateTicketUseCase
from app.application.tickets.dtos import (
    LIST_DEFAULT_LIMIT,
    AddAttachmentCommand,
    AddChecklistItemCommand,
    AddCommentCommand,
    AssignTicketCommand,
    ChangeTicketStatusCommand,
    CreateTicketCommand,
    GetTicketQuery,
    KanbanColumn,
    ListTicketsQuery,
    RateTicketCommand,
    RemoveAttachmentCommand,
    SetChecklistItemCommand,
    TicketBoardQuery,
    TicketPage,
    TicketStats,
    UpdateTicketCommand,
)
from app.application.tickets.get_ticket import GetTicketUseCase, ListTicketsUseCase
from app.application.tickets.manage_attachments import (
    AddAttachmentUseCase,
    RemoveAttachmentUseCase,
)
from app.application.tickets.manage_checklist import (
    AddChecklistItemUseCase,
    SetChecklistItemUseCase,
)
from app.application.tickets.rate_ticket import RateTicketUseCase
from app.application.tickets.ticket_views import (
    GetKanbanBoardUseCase,
    GetTicketStatsUseCase,
)
from app.application.tickets.update_ticket import UpdateTicketUseCase
from app.domain.tickets.entities import (
    ChecklistItem,
    Ticket,
    TicketAttachment,
    TicketChecklist,
    TicketComment,
    TicketPriority,
    TicketStatus,
)
from app.domain.tickets.status_history import StatusTransition
from app.interfaces.auth.dependencies import actor_from, get_session_user
from app.interfaces.auth.session import SessionUser
from app.interfaces.tickets.dependencies import (
    get_add_attachment_use_case,
    get_add_checklist_item_use_case,
    get_add_comment_use_case,
    get_assign_ticket_use_case,
    get_change_status_use_case,
    get_create_ticket_use_case,
    get_kanban_board_use_case,
    get_list_tickets_use_case,
    get_rate_ticket_use_case,
    get_remove_attachment_use_case,
    get_set_checklist_item_use_case,
    get_ticket_stats_use_case,
    get_ticket_use_case,
    get_update_ticket_use_case,
)
from app.interfaces.tickets.schemas import (
    CATEGORY_MAX_LEN,
    TITLE_MAX_LEN,
    AddAttachmentRequest,
    AddChecklistItemRequest,
    AddCommentRequest,
    AssignTicketRequest,
    ChangeStatusRequest,
    ChecklistItemSchema,
    CloseTicketRequest,
    CreateTicketRequest,
    KanbanColumnSchema,
    PageMeta,
    RateTicketRequest,
    SetChecklistItemRequest,
    StatusTransitionSchema,
    TicketAttachmentSchema,
    TicketChecklistSchema,
    TicketCommentSchema,
    TicketListResponse,
    TicketMentionSchema,
    TicketResponse,
    TicketStatsResponse,
    UpdateTicketRequest,
)
from app.shared.errors.schemas import ErrorResponse
from app.shared.security.rate_limiting import WRITE_RATE_LIMIT, limiter

router = APIRouter(prefix="/tickets", tags=["tickets"])

LIST_MAX_LIMIT = 100

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


# ------------------------------------------------------------------
# Entity -> schema mapping
# ------------------------------------------------------------------


def _checklist_item(item: ChecklistItem) -> ChecklistItemSchema:
    return ChecklistItemSchema(
        id=item.id,
        label=item.label,
        completed=item.completed,
        completed_at=item.completed_at,
        completed_by=item.completed_by,
    )


def _checklist(checklist: TicketChecklist) -> TicketChecklistSchema:
    return TicketChecklistSchema(
        items=[_checklist_item(i) for i in checklist.items],
        completed_count=checklist.completed_count,
        total_count=checklist.total_count,
        progress=checklist.progress,
    )


def _attachment(a: TicketAttachment) -> TicketAttachmentSchema:
    return TicketAttachmentSchema(
        id=a.id,
        file_name=a.file_name,
        file_url=a.file_url,
        file_type=a.file_type,
        file_size=a.file_size,
        uploaded_by=a.uploaded_by,
        uploaded_at=a.uploaded_at,
    )


def _comment(c: TicketComment) -> TicketCommentSchema:
    return TicketCommentSchema(
        id=c.id,
        author_id=c.author_id,
        message=c.message,
        created_at=c.created_at,
        mentions=[
            TicketMentionSchema(
                user_id=m.user_id, user_name=m.user_name, position=m.position
            )
            for m in c.mentions
        ],
    )


def _transition(t: StatusTransition) -> StatusTransitionSchema:
    return StatusTransitionSchema(
        from_status=t.from_status,
        to_status=t.to_status,
        transitioned_at=t.transitioned_at,
        transitioned_by=t.transitioned_by,
        note=t.note,
    )


def _ticket(ticket: Ticket) -> TicketResponse:
    return TicketResponse(
        id=ticket.id,
        title=ticket.title,
        description=ticket.description,
        category=ticket.category,
        priority=ticket.priority,
        status=ticket.status,
        location=ticket.location,
        opened_by=ticket.opened_by,
        assigned_to=ticket.assigned_to,
        created_at=ticket.created_at,
        updated_at=ticket.updated_at,
        closed_at=ticket.closed_at,
        satisfaction_score=ticket.satisfaction_score,
        checklist=_checklist(ticket.checklist),
        attachments=[_attachment(a) for a in ticket.attachments],
        comments=[_comment(c) for c in ticket.comments],
        status_history=[_transition(t) for t in ticket.status_history],
    )


def _page(page: TicketPage) -> TicketListResponse:
    return TicketListResponse(
        tickets=[_ticket(t) for t in page.tickets],
        meta=PageMeta(
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_prev=page.has_prev,
        ),
    )


def _kanban(columns: list[KanbanColumn]) -> dict[str, KanbanColumnSchema]:
    return {
        column.status.value: KanbanColumnSchema(
            count=column.count, tickets=[_ticket(t) for t in column.tickets]
        )
        for column in columns
    }


def _stats(stats: TicketStats) -> TicketStatsResponse:
    return TicketStatsResponse(
        total=stats.total,
        open=stats.open,
        closed=stats.closed,
        overdue=stats.overdue,
        avg_satisfaction=stats.avg_satisfaction,
        category_stats=stats.by_category,
        priority_stats=stats.by_priority,
    )


# ------------------------------------------------------------------
# Tickets
# ------------------------------------------------------------------


@router.post(
    "",
    response_model=TicketResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Open a ticket",
)
@limiter.limit(WRITE_RATE_LIMIT)
def create_ticket(
    request: Request,
    body: CreateTicketRequest,
    user: SessionUser = Depends(get_session_user),
    use_case: CreateTicketUseCase = Depends(get_create_ticket_use_case),
) -> TicketResponse:
    """Open a new ticket in the open status."""
    command = CreateTicketCommand(
        actor=actor_from(user),
        title=body.title,
        description=body.description,
        category=body.category,
        priority=body.priority,
        location=body.location,
        assigned_to=body.assigned_to,
    )
    return _ticket(use_case.execute(command))


@router.get(
    "",
    response_model=TicketListResponse,
    responses=ERROR_RESPONSES,
    summary="List tickets",
    description="Requesters only see the tickets they opened.",
)
def list_tickets(
    status_filter: TicketStatus | None = Query(default=None, alias="status"),
    priority: TicketPriority | None = Query(default=None),
    category: str | None = Query(default=None, max_length=CATEGORY_MAX_LEN),
    opened_by: str | None = Query(default=None, alias="openedBy"),
    assigned_to: str | None = Query(default=None, alias="assignedTo"),
    q: str | None = Query(default=None, max_length=TITLE_MAX_LEN),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=LIST_DEFAULT_LIMIT, ge=1, le=LIST_MAX_LIMIT),
    user: SessionUser = Depends(get_session_user),
    use_case: ListTicketsUseCase = Depends(get_list_tickets_use_case),
) -> TicketListResponse:
    """List visible tickets, newest first, one page at a time."""
    query = ListTicketsQuery(
        actor=actor_from(user),
        status=status_filter,
        priority=priority,
        category=category,
        opened_by=opened_by,
        assigned_to=assigned_to,
        q=q,
        page=page,
        limit=limit,
    )
    return _page(use_case.execute(query))


@router.get(
    "/kanban",
    response_model=dict[str, KanbanColumnSchema],
    responses=ERROR_RESPONSES,
    summary="Tickets grouped by status",
)
def get_kanban_board(
    user: SessionUser = Depends(get_session_user),
    use_case: GetKanbanBoardUseCase = Depends(get_kanban_board_use_case),
) -> dict[str, KanbanColumnSchema]:
    """One column per status; urgent tickets first within a column."""
    return _kanban(use_case.execute(TicketBoardQuery(actor=actor_from(user))))


@router.get(
    "/stats",
    response_model=TicketStatsResponse,
    responses=ERROR_RESPONSES,
    summary="Ticket statistics",
)
def get_ticket_stats(
    user: SessionUser = Depends(get_session_user),
    use_case: GetTicketStatsUseCase = Depends(get_ticket_stats_use_case),
) -> TicketStatsResponse:
    return _stats(use_case.execute(TicketBoardQuery(actor=actor_from(user))))


@router.get(
    "/{ticket_id}",
    response_model=TicketResponse,
    responses=ERROR_RESPONSES,
    summary="Get a ticket",
)
def get_ticket(
    ticket_id: int,
    user: SessionUser = Depends(get_session_user),
    use_case: GetTicketUseCase = Depends(get_ticket_use_case),
) -> TicketResponse:
    """Return a ticket with its checklist, comments and status history."""
    query = GetTicketQuery(actor=actor_from(user), ticket_id=ticket_id)
    return _ticket(use_case.execute(query))


@router.patch(
    "/{ticket_id}",
    response_model=TicketResponse,
    responses=ERROR_RESPONSES,
    summary="Edit a ticket",
)
@limiter.limit(WRITE_RATE_LIMIT)
def update_ticket(
    request: Request,
    ticket_id: int,
    body: UpdateTicketRequest,
    user: SessionUser = Depends(get_session_user),
    use_case: UpdateTicketUseCase = Depends(get_update_ticket_use_case),
) -> TicketResponse:
    """Edit title, description, category, priority or location.

    Requesters may only edit their own tickets while they are open.
    """
    command = UpdateTicketCommand(
        actor=actor_from(user),
        ticket_id=ticket_id,
        title=body.title,
        description=body.description,
        category=body.category,
        priority=body.priority,
        location=body.location,
    )
    return _ticket(use_case.execute(command))


@router.patch(
    "/{ticket_id}/assign",
    response_model=TicketResponse,
    responses=ERROR_RESPONSES,
    summary="Assign a ticket",
)
@limiter.limit(WRITE_RATE_LIMIT)
def assign_ticket(
    request: Request,
    ticket_id: int,
    body: AssignTicketRequest,
    user: SessionUser = Depends(get_session_user),
    use_case: AssignTicketUseCase = Depends(get_assign_ticket_use_case),
) -> TicketResponse:
    """Staff only. Assigning an open ticket moves it into review."""
    command = AssignTicketCommand(
        actor=actor_from(user),
        ticket_id=ticket_id,
        assignee_id=body.assigned_to,
        assignee_name=body.assignee_name,
    )
    return _ticket(use_case.execute(command))


# ------------------------------------------------------------------
# Status workflow
# ------------------------------------------------------------------


@router.patch(
    "/{ticket_id}/status",
    response_model=TicketResponse,
    responses=ERROR_RESPONSES,
    summary="Change ticket status",
)
@limiter.limit(WRITE_RATE_LIMIT)
def change_status(
    request: Request,
    ticket_id: int,
    body: ChangeStatusRequest,
    user: SessionUser = Depends(get_session_user),
    use_case: ChangeTicketStatusUseCase = Depends(get_change_status_use_case),
) -> TicketResponse:
    """Move a ticket to a new status allowed by the workflow."""
    command = ChangeTicketStatusCommand(
        actor=actor_from(user),
        ticket_id=ticket_id,
        status=body.status,
        note=body.note,
    )
    return _ticket(use_case.execute(command))


@router.post(
    "/{ticket_id}/close",
    response_model=TicketResponse,
    responses=ERROR_RESPONSES,
    summary="Close a ticket",
)
@limiter.limit(WRITE_RATE_LIMIT)
def close_ticket(
    request: Request,
    ticket_id: int,
    body: CloseTicketRequest,
    user: SessionUser = Depends(get_session_user),
    use_case: ChangeTicketStatusUseCase = Depends(get_change_status_use_case),
) -> TicketResponse:
    """Shortcut for a status change to closed."""
    command = ChangeTicketStatusCommand(
        actor=actor_from(user),
        ticket_id=ticket_id,
        status=TicketStatus.CLOSED,
        note=body.note,
    )
    return _ticket(use_case.execute(command))


@router.post(
    "/{ticket_id}/satisfaction",
    response_model=TicketResponse,
    responses=ERROR_RESPONSES,
    summary="Rate a closed ticket",
)
@limiter.limit(WRITE_RATE_LIMIT)
def rate_ticket(
    request: Request,
    ticket_id: int,
    body: RateTicketRequest,
    user: SessionUser = Depends(get_session_user),
    use_case: RateTicketUseCase = Depends(get_rate_ticket_use_case),
) -> TicketResponse:
    """The requester who opened a closed ticket scores it from 1 to 5."""
    command = RateTicketCommand(
        actor=actor_from(user),
        ticket_id=ticket_id,
        score=body.satisfaction_score,
        comment=body.comment,
    )
    return _ticket(use_case.execute(command))


# ------------------------------------------------------------------
# Comments
# ------------------------------------------------------------------


@router.post(
    "/{ticket_id}/comments",
    response_model=TicketCommentSchema,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Comment on a ticket",
)
@limiter.limit(WRITE_RATE_LIMIT)
def add_comment(
    request: Request,
    ticket_id: int,
    body: AddCommentRequest,
    user: SessionUser = Depends(get_session_user),
    use_case: AddCommentUseCase = Depends(get_add_comment_use_case),
) -> TicketCommentSchema:
    """Add a comment; "@userName" occurrences become mentions."""
    command = AddCommentCommand(
        actor=actor_from(user),
        ticket_id=ticket_id,
        message=body.message,
        mention_candidates=tuple((m.user_id, m.user_name) for m in body.mentions),
    )
    return _comment(use_case.execute(command))


# ------------------------------------------------------------------
# Checklist
# ------------------------------------------------------------------


@router.post(
    "/{ticket_id}/checklist",
    response_model=TicketChecklistSchema,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Add a checklist item",
)
@limiter.limit(WRITE_RATE_LIMIT)
def add_checklist_item(
    request: Request,
    ticket_id: int,
    body: AddChecklistItemRequest,
    user: SessionUser = Depends(get_session_user),
    use_case: AddChecklistItemUseCase = Depends(get_add_checklist_item_use_case),
) -> TicketChecklistSchema:
    command = AddChecklistItemCommand(
        actor=actor_from(user), ticket_id=ticket_id, label=body.label
    )
    return _checklist(use_case.execute(command))


@router.patch(
    "/{ticket_id}/checklist/{item_id}",
    response_model=TicketChecklistSchema,
    responses=ERROR_RESPONSES,
    summary="Complete or reopen a checklist item",
)
@limiter.limit(WRITE_RATE_LIMIT)
def set_checklist_item(
    request: Request,
    ticket_id: int,
    item_id: str,
    body: SetChecklistItemRequest,
    user: SessionUser = Depends(get_session_user),
    use_case: SetChecklistItemUseCase = Depends(get_set_checklist_item_use_case),
) -> TicketChecklistSchema:
    command = SetChecklistItemCommand(
        actor=actor_from(user),
        ticket_id=ticket_id,
        item_id=item_id,
        completed=body.completed,
    )
    return _checklist(use_case.execute(command))


# ------------------------------------------------------------------
# Attachments
# ------------------------------------------------------------------


@router.post(
    "/{ticket_id}/attachments",
    response_model=TicketAttachmentSchema,
    status_code=status.HTTP_201_CREATED,
    responses={**ERROR_RESPONSES, 413: {"model": ErrorResponse}},
    summary="Register an uploaded file",
)
@limiter.limit(WRITE_RATE_LIMIT)
def add_attachment(
    request: Request,
    ticket_id: int,
    body: AddAttachmentRequest,
    user: SessionUser = Depends(get_session_user),
    use_case: AddAttachmentUseCase = Depends(get_add_attachment_use_case),
) -> TicketAttachmentSchema:
    command = AddAttachmentCommand(
        actor=actor_from(user),
        ticket_id=ticket_id,
        file_name=body.file_name,
        file_url=body.file_url,
        file_type=body.file_type,
        file_size=body.file_size,
    )
    return _attachment(use_case.execute(command))


@router.delete(
    "/{ticket_id}/attachments/{attachment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
    summary="Delete an attachment",
)
@limiter.limit(WRITE_RATE_LIMIT)
def remove_attachment(
    request: Request,
    ticket_id: int,
    attachment_id: str,
    user: SessionUser = Depends(get_session_user),
    use_case: RemoveAttachmentUseCase = Depends(get_remove_attachment_use_case),
) -> None:
    command = RemoveAttachmentCommand(
        actor=actor_from(user), ticket_id=ticket_id, attachment_id=attachment_id
    )
    use_case.execute(command)
