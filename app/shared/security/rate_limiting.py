"""
Rate limiting configuration and setup.

Uses slowapi to enforce per-endpoint rate limits on ticket writes.
Exceeded limits raise RateLimitExceeded, an HTTP 429 error that goes
through the shared error translator like any other HTTP error.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)

WRITE_RATE_LIMIT = settings.rate_limit_write
