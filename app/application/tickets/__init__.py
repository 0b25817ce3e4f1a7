"""
Application layer for the tickets bounded context.

Use cases coordinate domain entities and ports to fulfill
helpdesk operations. No framework or infrastructure imports allowed.
"""
