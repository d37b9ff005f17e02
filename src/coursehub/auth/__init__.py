"""Identity module for CourseHub.

Provides the identity sources the hub bootstraps from:
- Stytch B2B sessions (magic link sign-in)
- Mock source for development and testing

Usage:
    from coursehub.auth import get_identity_source, principal_from_session

    source = get_identity_source()
    session = await source.fetch_session()
    principal = principal_from_session(session)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from coursehub.auth.factory import clear_config_cache, get_identity_source
from coursehub.auth.models import AuthEvent, AuthResult, Principal, Role, Session
from coursehub.auth.protocol import IdentitySourceProtocol

_RECOGNISED_ROLES: dict[str, Role] = {
    "teacher": Role.TEACHER,
    "student": Role.STUDENT,
}


def _role_field(bag: object) -> object:
    if not isinstance(bag, Mapping):
        return None
    return bag.get("role")


def resolve_role(raw_metadata: Mapping[str, Any] | None) -> Role:
    """Map raw identity metadata to a hub role.

    Reads ``role`` from the ``user_metadata`` bag first and falls back to
    ``app_metadata`` when the user-level value is missing or empty. Only
    the exact literals "teacher" and "student" are recognised; anything
    else, including malformed metadata, is Role.NONE.
    """
    if not isinstance(raw_metadata, Mapping):
        return Role.NONE
    raw_role = _role_field(raw_metadata.get("user_metadata")) or _role_field(
        raw_metadata.get("app_metadata")
    )
    if not isinstance(raw_role, str):
        return Role.NONE
    return _RECOGNISED_ROLES.get(raw_role, Role.NONE)


def principal_from_session(session: Session | None) -> Principal:
    """Resolve a Principal from a session, or anonymous for None."""
    if session is None:
        return Principal.anonymous()
    role = resolve_role(
        {"user_metadata": session.user_metadata, "app_metadata": session.app_metadata}
    )
    return Principal(identity_id=session.identity_id, role=role, email=session.email)


__all__ = [
    "AuthEvent",
    "AuthResult",
    "IdentitySourceProtocol",
    "Principal",
    "Role",
    "Session",
    "clear_config_cache",
    "get_identity_source",
    "principal_from_session",
    "resolve_role",
]
