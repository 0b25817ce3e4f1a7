"""
Use case: Comment on a ticket.

Input: AddCommentCommand
Output: TicketComment
Side effects: Appends the comment (with parsed mentions) and persists the ticket.
Failure cases: TicketNotFoundError if the ticket is absent or not visible.
"""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from app.application.tickets.dtos import AddCommentCommand
from app.application.tickets.get_ticket import load_visible_ticket
from app.domain.tickets.entities import TicketComment
from app.domain.tickets.mentions import parse_mentions
from app.domain.tickets.ports import TicketRepository

logger = logging.getLogger(__name__)


class AddCommentUseCase:
    """Stores a comment and the user mentions found in its text."""

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, command: AddCommentCommand) -> TicketComment:
        """Run the add comment use case.

        Args:
            command: Comment text, mention candidates and acting user.

        Returns:
            The stored comment.
        """
        ticket = load_visible_ticket(self._ticket_repo, command.ticket_id, command.actor)

        now = datetime.now(timezone.utc)
        comment = TicketComment(
            id=str(uuid4()),
            author_id=command.actor.user_id,
            message=command.message,
            created_at=now,
            mentions=tuple(parse_mentions(command.message, command.mention_candidates)),
        )
        ticket.comments.append(comment)
        ticket.updated_at = now
        self._ticket_repo.save(ticket)

        logger.info(
            "Comment added to ticket %d by %s (%d mentions)",
            ticket.id,
            command.actor.user_id,
            len(comment.mentions),
        )
        return comment
