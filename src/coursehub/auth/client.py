"""Stytch B2B identity source.

This module wraps the Stytch B2B SDK and implements the
IdentitySourceProtocol. Stytch has no push channel for session changes, so
this source publishes SIGNED_IN and SIGNED_OUT itself whenever it signs a
member in or out. A token refreshed during ``fetch_session`` is kept and
returned on the session; the caller decides whether to persist it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from stytch import B2BClient
from stytch.core.response_base import StytchError

from coursehub.auth.events import IdentityEvents
from coursehub.auth.models import AuthEvent, AuthResult, Session

if TYPE_CHECKING:
    from coursehub.auth.protocol import AuthListener, Unsubscribe

logger = logging.getLogger(__name__)

SESSION_DURATION_MINUTES = 60 * 24 * 7  # 1 week


def _session_from_member(member: Any, session_token: str | None) -> Session:
    """Build a Session from a Stytch member object.

    ``untrusted_metadata`` is editable by the member and is the user-level
    bag; ``trusted_metadata`` is only writable by the backend.
    """
    return Session(
        identity_id=member.member_id,
        email=member.email_address,
        session_token=session_token,
        user_metadata=dict(member.untrusted_metadata or {}),
        app_metadata=dict(member.trusted_metadata or {}),
    )


class StytchIdentitySource:
    """Identity source backed by Stytch B2B sessions.

    The source holds at most one session token: the one obtained from the
    last successful ``sign_in_with_token`` (or passed in on construction
    when resuming a stored session).
    """

    def __init__(
        self,
        project_id: str,
        secret: str,
        *,
        environment: str = "test",
        organization_id: str | None = None,
        session_token: str | None = None,
    ) -> None:
        """Initialize the Stytch client.

        Args:
            project_id: Stytch project ID.
            secret: Stytch secret key.
            environment: Either "test" or "live".
            organization_id: Organization magic links are sent for.
            session_token: A previously issued session token to resume.
        """
        self._client = B2BClient(
            project_id=project_id,
            secret=secret,
            environment=environment,
        )
        self._organization_id = organization_id
        self._session_token = session_token
        self._events = IdentityEvents()

    @property
    def session_token(self) -> str | None:
        return self._session_token

    def subscribe(self, listener: AuthListener) -> Unsubscribe:
        return self._events.subscribe(listener)

    async def fetch_session(self) -> Session | None:
        """Validate the held session token with Stytch.

        Stytch may rotate the token; the new one replaces the held token and
        is carried on the returned Session. No identity event is emitted.

        Returns:
            The Session if the token is still valid, otherwise None.
            Transport errors other than StytchError propagate.
        """
        if not self._session_token:
            return None
        try:
            response = await self._client.sessions.authenticate_async(
                session_token=self._session_token,
            )
        except StytchError as e:
            logger.debug(
                "Session validation failed",
                extra={"error_type": e.details.error_type},
            )
            self._session_token = None
            return None

        refreshed = response.session_token or self._session_token
        if refreshed != self._session_token:
            logger.debug("Session token rotated by Stytch")
            self._session_token = refreshed
        return _session_from_member(response.member, refreshed)

    async def send_sign_in_link(self, email: str, callback_url: str) -> bool:
        """Send a magic link email to the user.

        Args:
            email: The recipient's email address.
            callback_url: URL to redirect to after clicking the link.

        Returns:
            True if Stytch accepted the request.
        """
        if not self._organization_id:
            logger.error("STYTCH__DEFAULT_ORG_ID not configured")
            return False
        try:
            await self._client.magic_links.email.login_or_signup_async(
                organization_id=self._organization_id,
                email_address=email,
                login_redirect_url=callback_url,
                signup_redirect_url=callback_url,
            )
        except StytchError as e:
            logger.warning(
                "Magic link send failed",
                extra={"email": email, "error_type": e.details.error_type},
            )
            return False
        return True

    async def sign_in_with_token(self, token: str) -> AuthResult:
        """Authenticate a magic link token and start a session.

        Args:
            token: The token from the magic link callback URL.

        Returns:
            AuthResult with the session if successful.
        """
        try:
            response = await self._client.magic_links.authenticate_async(
                magic_links_token=token,
                session_duration_minutes=SESSION_DURATION_MINUTES,
            )
        except StytchError as e:
            logger.warning(
                "Magic link auth failed",
                extra={"error_type": e.details.error_type},
            )
            return AuthResult(success=False, error=e.details.error_type)

        if not response.member_authenticated:
            logger.info("MFA required for member %s", response.member_id)
            return AuthResult(success=False, error="mfa_required")

        session = _session_from_member(response.member, response.session_token)
        self._session_token = response.session_token
        self._events.emit(AuthEvent.SIGNED_IN, session)
        return AuthResult(success=True, session=session)

    async def sign_out(self) -> None:
        """Revoke the held session.

        The local token is dropped and SIGNED_OUT is emitted even when the
        revoke call fails; the StytchError is then re-raised so the caller
        can log it.
        """
        token, self._session_token = self._session_token, None
        try:
            if token:
                await self._client.sessions.revoke_async(session_token=token)
        finally:
            self._events.emit(AuthEvent.SIGNED_OUT, None)
