"""Protocol defining the identity source interface.

Both StytchIdentitySource and MockIdentitySource implement this protocol,
allowing them to be used interchangeably by the hub.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from coursehub.auth.models import AuthEvent, AuthResult, Session

    type AuthListener = Callable[[AuthEvent, Session | None], None]
    type Unsubscribe = Callable[[], None]


class IdentitySourceProtocol(Protocol):
    """Protocol for identity sources.

    This defines the interface that both the real Stytch source and the
    mock source must implement.
    """

    async def fetch_session(self) -> Session | None:
        """Fetch the current session.

        Returns:
            The active Session, or None if nobody is signed in.

        Raises:
            Any transport error. Callers treat a failure as "no session".
        """
        ...

    def subscribe(self, listener: AuthListener) -> Unsubscribe:
        """Register a listener for session change events.

        Args:
            listener: Called with (event, session) on every change.

        Returns:
            A callable that removes the listener. Calling it twice is harmless.
        """
        ...

    async def send_sign_in_link(self, email: str, callback_url: str) -> bool:
        """Email a sign-in link whose token lands on ``callback_url``.

        Args:
            email: The recipient's email address.
            callback_url: URL to redirect to after clicking the link.

        Returns:
            True if the link was sent.
        """
        ...

    async def sign_in_with_token(self, token: str) -> AuthResult:
        """Authenticate a login token and emit SIGNED_IN on success.

        Args:
            token: The token from the login callback.

        Returns:
            AuthResult with the new session if successful.
        """
        ...

    async def sign_out(self) -> None:
        """End the current session and emit SIGNED_OUT."""
        ...
