"""
Use cases: Board and statistics views over the visible tickets.

Input: TicketBoardQuery
Output: list[KanbanColumn] / TicketStats
Side effects: None (read-only queries).
Failure cases: None.
"""

import logging
from collections import Counter
from datetime import datetime, timedelta, timezone

from app.application.tickets.dtos import KanbanColumn, TicketBoardQuery, TicketStats
from app.application.tickets.get_ticket import visible_filters
from app.domain.tickets.entities import PRIORITY_RANK, TicketStatus
from app.domain.tickets.ports import TicketRepository
from app.domain.tickets.workflow import ACTIVE_STATUSES, FINISHED_STATUSES

logger = logging.getLogger(__name__)

OVERDUE_AFTER = timedelta(hours=24)
OVERDUE_STATUSES = frozenset(
    {TicketStatus.OPEN, TicketStatus.IN_REVIEW, TicketStatus.IN_PROGRESS}
)


class GetKanbanBoardUseCase:
    """Groups tickets into one column per status, in workflow order.

    Every status gets a column, empty or not. Within a column tickets
    are ordered by priority (urgent first), then newest first.
    """

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, query: TicketBoardQuery) -> list[KanbanColumn]:
        tickets = self._ticket_repo.list(visible_filters(query.actor))
        tickets.sort(key=lambda t: (PRIORITY_RANK[t.priority], t.created_at), reverse=True)

        columns = [
            KanbanColumn(status=status, tickets=[t for t in tickets if t.status == status])
            for status in TicketStatus
        ]
        logger.info("Kanban board built for user %s: %d tickets", query.actor.user_id, len(tickets))
        return columns


class GetTicketStatsUseCase:
    """Computes ticket counters for the dashboard."""

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, query: TicketBoardQuery) -> TicketStats:
        tickets = self._ticket_repo.list(visible_filters(query.actor))
        overdue_before = datetime.now(timezone.utc) - OVERDUE_AFTER
        scores = [t.satisfaction_score for t in tickets if t.satisfaction_score is not None]

        stats = TicketStats(
            total=len(tickets),
            open=sum(1 for t in tickets if t.status in ACTIVE_STATUSES),
            closed=sum(1 for t in tickets if t.status in FINISHED_STATUSES),
            overdue=sum(
                1
                for t in tickets
                if t.status in OVERDUE_STATUSES and t.created_at < overdue_before
            ),
            avg_satisfaction=sum(scores) / len(scores) if scores else 0.0,
            by_category=dict(Counter(t.category for t in tickets)),
            by_priority=dict(Counter(t.priority for t in tickets)),
        )
        logger.info("Ticket stats computed for user %s: total=%d", query.actor.user_id, stats.total)
        return stats
