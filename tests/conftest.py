"""
Shared pytest configuration.

Rate limiting is switched off before the application is imported so the
suite's many writes do not trip it; the rate limit test turns it back on.
"""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest  # noqa: E402

from app.interfaces.tickets.dependencies import get_ticket_repository  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_ticket_repository():
    """Give every test an empty ticket store."""
    get_ticket_repository.cache_clear()
    yield
    get_ticket_repository.cache_clear()


STAFF_HEADERS = {
    "X-User-Id": "u-staff",
    "X-User-Name": "Sam Staff",
    "X-User-Email": "sam@example.com",
    "X-User-Role": "staff",
}

REQUESTER_HEADERS = {
    "X-User-Id": "u-req",
    "X-User-Name": "Rita Requester",
    "X-User-Email": "rita@example.com",
    "X-User-Role": "requester",
}

OTHER_REQUESTER_HEADERS = {
    "X-User-Id": "u-other",
    "X-User-Name": "Otto Other",
    "X-User-Email": "otto@example.com",
    "X-User-Role": "requester",
}


@pytest.fixture
def staff_headers() -> dict[str, str]:
    return dict(STAFF_HEADERS)


@pytest.fixture
def requester_headers() -> dict[str, str]:
    return dict(REQUESTER_HEADERS)


@pytest.fixture
def other_requester_headers() -> dict[str, str]:
    return dict(OTHER_REQUESTER_HEADERS)
