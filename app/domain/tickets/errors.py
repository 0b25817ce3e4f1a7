"""
Domain-specific errors for the tickets bounded context.

All errors raised from the domain and application layers are defined here.
Each error declares its own HTTP status and a client-safe message; the
error translator at the interface layer only formats and logs them.
No framework imports allowed.
"""


class HelpdeskError(Exception):
    """Base error for all helpdesk domain errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class TicketNotFoundError(HelpdeskError):
    """Raised when a ticket does not exist or is not visible to the user."""

    status_code = 404

    def __init__(self, ticket_id: int) -> None:
        super().__init__("Ticket not found")
        self.ticket_id = ticket_id


class ChecklistItemNotFoundError(HelpdeskError):
    """Raised when a checklist item id is unknown on a ticket."""

    status_code = 404

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Checklist item not found: {item_id}")
        self.item_id = item_id


class AttachmentNotFoundError(HelpdeskError):
    """Raised when an attachment id is unknown on a ticket."""

    status_code = 404

    def __init__(self, attachment_id: str) -> None:
        super().__init__(f"Attachment not found: {attachment_id}")
        self.attachment_id = attachment_id


class InvalidStatusTransitionError(HelpdeskError):
    """Raised when the status workflow does not allow a move."""

    status_code = 400

    def __init__(self, from_status: str, to_status: str) -> None:
        super().__init__(
            f"Invalid status transition: {from_status} -> {to_status}"
        )
        self.from_status = from_status
        self.to_status = to_status


class InvalidChecklistItemError(HelpdeskError):
    """Raised when completion metadata disagrees with the completed flag."""

    status_code = 400


class InconsistentChecklistError(HelpdeskError):
    """Raised when checklist counters do not match its items."""

    status_code = 400


class AttachmentTooLargeError(HelpdeskError):
    """Raised when an uploaded file exceeds the configured size limit."""

    status_code = 413

    def __init__(self, file_size: int, max_size: int) -> None:
        super().__init__(
            f"Attachment too large: {file_size} bytes (max {max_size})"
        )
        self.file_size = file_size
        self.max_size = max_size


class PermissionDeniedError(HelpdeskError):
    """Raised when the acting user may not perform an operation."""

    status_code = 403


class BrokenTransitionChainError(HelpdeskError):
    """Raised when a status transition does not continue the audit trail."""

    status_code = 409

    def __init__(self, expected_from: str | None, actual_from: str | None) -> None:
        super().__init__(
            "Status history is out of sequence: "
            f"expected from={expected_from}, got from={actual_from}"
        )
        self.expected_from = expected_from
        self.actual_from = actual_from


class InvalidTicketStateError(HelpdeskError):
    """Raised when an operation is not possible in the ticket's current status."""

    status_code = 400


class ConcurrentTicketUpdateError(HelpdeskError):
    """Raised when a ticket changed in storage after it was loaded."""

    status_code = 409

    def __init__(self, ticket_id: int) -> None:
        super().__init__(
            f"Ticket {ticket_id} was modified by another request, reload and retry"
        )
        self.ticket_id = ticket_id
