"""Data models for identity and authentication results.

These dataclasses give the Stytch-backed identity source and the mock a
consistent interface, and carry the resolved principal into the
navigation controller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Role(StrEnum):
    """Role a principal acts as inside the hub."""

    TEACHER = "teacher"
    STUDENT = "student"
    NONE = "none"


class AuthEvent(StrEnum):
    """Session change events emitted by an identity source."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"


@dataclass(frozen=True)
class Session:
    """An authenticated session as reported by the identity source.

    Attributes:
        identity_id: Stable identifier of the signed-in member.
        email: The member's email address.
        session_token: Opaque token used to revalidate or revoke the session.
        user_metadata: Metadata the user can edit (consulted first for role).
        app_metadata: Metadata only the application can edit (role fallback).
    """

    identity_id: str
    email: str | None = None
    session_token: str | None = None
    user_metadata: dict[str, Any] = field(default_factory=dict)
    app_metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Principal:
    """The resolved identity and role of the current user."""

    identity_id: str | None
    role: Role
    email: str | None = None

    @classmethod
    def anonymous(cls) -> Principal:
        return cls(identity_id=None, role=Role.NONE)

    @property
    def is_authenticated(self) -> bool:
        return self.identity_id is not None


@dataclass(frozen=True)
class AuthResult:
    """Result of authenticating a login token.

    Attributes:
        success: Whether authentication succeeded.
        session: The new session if successful.
        error: Error type if authentication failed.
    """

    success: bool
    session: Session | None = None
    error: str | None = None
