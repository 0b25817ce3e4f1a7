"""
Shared error handling package.

Centralizes exception-to-HTTP translation so that every failed
request gets the same JSON error body and a single log record.
"""
