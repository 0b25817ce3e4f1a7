"""
Session and token shapes shared with the authentication provider.

Sign-in itself is handled elsewhere; these records only describe what
the provider hands over (AuthUser), what it keeps in its signed token
(JWTClaims) and what a client session exposes (Session). Keys are
camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.domain.tickets.entities import UserRole


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class SessionUser(_CamelModel):
    """User identity exposed in a session."""

    id: str
    email: str
    name: str
    role: UserRole
    avatar_url: str | None = None


class Session(_CamelModel):
    """Client-visible session: the user plus an API access token."""

    user: SessionUser
    access_token: str


class AuthUser(_CamelModel):
    """User object returned by the credentials check at sign-in."""

    id: str
    email: str
    name: str
    role: UserRole
    avatar_url: str | None = None
    access_token: str
    refresh_token: str


class JWTClaims(_CamelModel):
    """Claims stored in the signed session token."""

    id: str
    email: str
    name: str
    role: UserRole
    avatar_url: str | None = None
    access_token: str
    refresh_token: str


def claims_from_user(user: AuthUser) -> JWTClaims:
    """Copy a freshly signed-in user into token claims."""
    return JWTClaims(**user.model_dump())


def session_from_claims(claims: JWTClaims) -> Session:
    """Project token claims onto the session; the refresh token stays behind."""
    return Session(
        user=SessionUser(
            id=claims.id,
            email=claims.email,
            name=claims.name,
            role=claims.role,
            avatar_url=claims.avatar_url,
        ),
        access_token=claims.access_token,
    )
