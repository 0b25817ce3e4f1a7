"""
Tickets bounded context — domain layer.

This module contains all domain logic for the helpdesk tickets:
- Ticket aggregate and its value records
- Status workflow and append-only status history
- Checklist progress
- Comment mention parsing
"""
