"""
Dependency providing the acting user.

The API sits behind the authentication gateway, which validates the
session and forwards the user identity as X-User-* headers.
"""

from typing import Annotated

from fastapi import Header, HTTPException
from pydantic import ValidationError

from app.application.tickets.dtos import Actor
from app.interfaces.auth.session import SessionUser

HTTP_401 = 401


def get_session_user(
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_name: Annotated[str | None, Header()] = None,
    x_user_email: Annotated[str | None, Header()] = None,
    x_user_role: Annotated[str | None, Header()] = None,
) -> SessionUser:
    """Build the SessionUser from gateway headers.

    Raises:
        HTTPException: 401 when identity headers are missing or invalid.
    """
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=HTTP_401, detail="Authentication required")
    try:
        return SessionUser(
            id=x_user_id,
            name=x_user_name or x_user_id,
            email=x_user_email or "",
            role=x_user_role,
        )
    except ValidationError:
        raise HTTPException(
            status_code=HTTP_401, detail="Invalid session identity"
        ) from None


def actor_from(user: SessionUser) -> Actor:
    """Convert the session user to the application-layer actor."""
    return Actor(user_id=user.id, role=user.role)
