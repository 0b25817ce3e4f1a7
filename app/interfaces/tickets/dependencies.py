"""
Dependency injection for the tickets bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the tickets context.
"""

from functools import lru_cache

from fastapi import Depends

from app.application.tickets.add_comment import AddCommentUseCase
from app.application.tickets.assign_ticket import AssignTicketUseCase
from app.application.tickets.change_ticket_status import ChangeTicketStatusUseCase
from app.application.tickets.create_ticket import CreateTicketUseCase
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
from app.core.config import settings
from app.domain.tickets.ports import TicketRepository
from app.infrastructure.tickets.in_memory_ticket_repository import (
    InMemoryTicketRepository,
)


@lru_cache(maxsize=1)
def get_ticket_repository() -> TicketRepository:
    """Return the process-wide ticket repository."""
    return InMemoryTicketRepository()


def get_create_ticket_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> CreateTicketUseCase:
    return CreateTicketUseCase(ticket_repo=repo)


def get_ticket_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> GetTicketUseCase:
    return GetTicketUseCase(ticket_repo=repo)


def get_list_tickets_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> ListTicketsUseCase:
    return ListTicketsUseCase(ticket_repo=repo)


def get_change_status_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> ChangeTicketStatusUseCase:
    return ChangeTicketStatusUseCase(ticket_repo=repo)


def get_add_comment_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> AddCommentUseCase:
    return AddCommentUseCase(ticket_repo=repo)


def get_add_checklist_item_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> AddChecklistItemUseCase:
    return AddChecklistItemUseCase(ticket_repo=repo)


def get_set_checklist_item_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> SetChecklistItemUseCase:
    return SetChecklistItemUseCase(ticket_repo=repo)


def get_add_attachment_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> AddAttachmentUseCase:
    """Build AddAttachmentUseCase with the configured size limit."""
    return AddAttachmentUseCase(
        ticket_repo=repo,
        max_size_bytes=settings.max_attachment_size_bytes,
    )


def get_remove_attachment_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> RemoveAttachmentUseCase:
    return RemoveAttachmentUseCase(ticket_repo=repo)


def get_update_ticket_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> UpdateTicketUseCase:
    return UpdateTicketUseCase(ticket_repo=repo)


def get_assign_ticket_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> AssignTicketUseCase:
    return AssignTicketUseCase(ticket_repo=repo)


def get_rate_ticket_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> RateTicketUseCase:
    return RateTicketUseCase(ticket_repo=repo)


def get_kanban_board_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> GetKanbanBoardUseCase:
    return GetKanbanBoardUseCase(ticket_repo=repo)


def get_ticket_stats_use_case(
    repo: TicketRepository = Depends(get_ticket_repository),
) -> GetTicketStatsUseCase:
    return GetTicketStatsUseCase(ticket_repo=repo)
