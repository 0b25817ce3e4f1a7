"""
Use cases: Register and delete ticket attachments.

Only metadata is handled here; file storage belongs to the upload service.

Input: AddAttachmentCommand / RemoveAttachmentCommand
Output: TicketAttachment / None
Side effects: Updates the ticket's attachment list and persists it.
Failure cases:
    TicketNotFoundError if the ticket is absent or not visible.
    AttachmentTooLargeError if the file exceeds the size limit.
    AttachmentNotFoundError if the attachment id is unknown.
    PermissionDeniedError if a non-staff user deletes someone else's file.
"""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from app.application.tickets.dtos import AddAttachmentCommand, RemoveAttachmentCommand
from app.application.tickets.get_ticket import load_visible_ticket
from app.domain.tickets.entities import STAFF_ROLES, TicketAttachment
from app.domain.tickets.errors import (
    AttachmentNotFoundError,
    AttachmentTooLargeError,
    PermissionDeniedError,
)
from app.domain.tickets.ports import TicketRepository

logger = logging.getLogger(__name__)


class AddAttachmentUseCase:
    """Records the metadata of an uploaded file."""

    def __init__(self, ticket_repo: TicketRepository, max_size_bytes: int) -> None:
        """Initialize the use case.

        Args:
            ticket_repo: Repository for loading and saving tickets.
            max_size_bytes: Largest accepted file size.
        """
        self._ticket_repo = ticket_repo
        self._max_size_bytes = max_size_bytes

    def execute(self, command: AddAttachmentCommand) -> TicketAttachment:
        if command.file_size > self._max_size_bytes:
            raise AttachmentTooLargeError(command.file_size, self._max_size_bytes)

        ticket = load_visible_ticket(self._ticket_repo, command.ticket_id, command.actor)

        attachment = TicketAttachment(
            id=str(uuid4()),
            file_name=command.file_name,
            file_url=command.file_url,
            file_type=command.file_type,
            file_size=command.file_size,
            uploaded_by=command.actor.user_id,
            uploaded_at=datetime.now(timezone.utc),
        )
        ticket.attachments.append(attachment)
        ticket.updated_at = attachment.uploaded_at
        self._ticket_repo.save(ticket)

        logger.info("Attachment %s added to ticket %d", attachment.id, ticket.id)
        return attachment


class RemoveAttachmentUseCase:
    """Deletes an attachment; staff may delete any, others only their own."""

    def __init__(self, ticket_repo: TicketRepository) -> None:
        self._ticket_repo = ticket_repo

    def execute(self, command: RemoveAttachmentCommand) -> None:
        ticket = load_visible_ticket(self._ticket_repo, command.ticket_id, command.actor)

        attachment = next(
            (a for a in ticket.attachments if a.id == command.attachment_id), None
        )
        if attachment is None:
            raise AttachmentNotFoundError(command.attachment_id)
        if (
            command.actor.role not in STAFF_ROLES
            and attachment.uploaded_by != command.actor.user_id
        ):
            raise PermissionDeniedError(
                f"User {command.actor.user_id} may not delete attachment {attachment.id}"
            )

        ticket.attachments = [a for a in ticket.attachments if a.id != attachment.id]
        ticket.updated_at = datetime.now(timezone.utc)
        self._ticket_repo.save(ticket)

        logger.info("Attachment %s removed from ticket %d", attachment.id, ticket.id)
