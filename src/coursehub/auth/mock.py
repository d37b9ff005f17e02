"""Mock identity source for development and tests.

This module provides an in-memory implementation of the
IdentitySourceProtocol that never talks to Stytch.

Supports arbitrary users - any email can sign in as any role.
"""

from __future__ import annotations

import asyncio
import hashlib
from typing import TYPE_CHECKING

from coursehub.auth.events import IdentityEvents
from coursehub.auth.models import AuthEvent, AuthResult, Role, Session

if TYPE_CHECKING:
    from coursehub.auth.protocol import AuthListener, Unsubscribe

# Predefined test users offered on the mock login screens
MOCK_TEACHER_EMAIL = "teacher@uni.edu"
MOCK_STUDENT_EMAIL = "student@uni.edu"


def _email_to_identity_id(email: str) -> str:
    """Generate a deterministic identity ID from an email."""
    return f"mock-member-{hashlib.md5(email.encode()).hexdigest()[:8]}"


def _email_to_session_token(email: str) -> str:
    """Generate a deterministic session token from an email."""
    return f"mock-session-{hashlib.md5(email.encode()).hexdigest()[:12]}"


def make_mock_session(email: str, role: Role | str | None) -> Session:
    """Build a Session whose user-level metadata carries ``role``."""
    user_metadata = {} if role is None else {"role": str(role)}
    return Session(
        identity_id=_email_to_identity_id(email),
        email=email,
        session_token=_email_to_session_token(email),
        user_metadata=user_metadata,
    )


class MockIdentitySource:
    """Mock implementation of IdentitySourceProtocol.

    Token Formats accepted by ``sign_in_with_token``:
        - "mock-token-teacher:{email}" - signs in as a teacher
        - "mock-token-student:{email}" - signs in as a student

    ``fetch_delay`` and ``fetch_error`` let tests simulate a slow or
    failing backend during bootstrap.
    """

    def __init__(
        self,
        session: Session | None = None,
        *,
        fetch_delay: float = 0.0,
        fetch_error: Exception | None = None,
        sign_out_error: Exception | None = None,
    ) -> None:
        self._session = session
        self._events = IdentityEvents()
        self.fetch_delay = fetch_delay
        self.fetch_error = fetch_error
        self.sign_out_error = sign_out_error
        self.fetch_calls = 0
        self.sign_out_calls = 0
        self._sent_links: list[dict[str, str]] = []

    @property
    def listener_count(self) -> int:
        return self._events.listener_count

    @property
    def current_session(self) -> Session | None:
        return self._session

    def subscribe(self, listener: AuthListener) -> Unsubscribe:
        return self._events.subscribe(listener)

    async def fetch_session(self) -> Session | None:
        self.fetch_calls += 1
        if self.fetch_delay:
            await asyncio.sleep(self.fetch_delay)
        if self.fetch_error is not None:
            raise self.fetch_error
        return self._session

    async def send_sign_in_link(self, email: str, callback_url: str) -> bool:
        """Record the request; any email is accepted."""
        self._sent_links.append({"email": email, "callback_url": callback_url})
        return True

    def get_sent_links(self) -> list[dict[str, str]]:
        """Return sign-in links that were 'sent' (for test assertions)."""
        return self._sent_links.copy()

    async def sign_in_with_token(self, token: str) -> AuthResult:
        if not token.startswith("mock-token-") or ":" not in token:
            return AuthResult(success=False, error="invalid_token")
        role, _, email = token[len("mock-token-") :].partition(":")
        if not email:
            return AuthResult(success=False, error="invalid_token")
        session = self.sign_in(email, role)
        return AuthResult(success=True, session=session)

    def sign_in(self, email: str, role: Role | str | None) -> Session:
        """Replace the current session and emit SIGNED_IN."""
        self._session = make_mock_session(email, role)
        self._events.emit(AuthEvent.SIGNED_IN, self._session)
        return self._session

    def emit(self, event: AuthEvent, session: Session | None) -> None:
        """Publish an arbitrary event, for driving listeners in tests."""
        self._session = session
        self._events.emit(event, session)

    async def sign_out(self) -> None:
        self.sign_out_calls += 1
        if self.sign_out_error is not None:
            raise self.sign_out_error
        self._session = None
        self._events.emit(AuthEvent.SIGNED_OUT, None)
