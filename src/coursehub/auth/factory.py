"""Identity source factory.

Provides a factory function to get the appropriate identity source
based on configuration (real Stytch or mock for development and tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from coursehub.config import get_settings

if TYPE_CHECKING:
    from coursehub.auth.protocol import IdentitySourceProtocol


# Cached mock source instance to preserve session state across clients
_mock_source_instance: IdentitySourceProtocol | None = None


def get_identity_source(session_token: str | None = None) -> IdentitySourceProtocol:
    """Get the appropriate identity source based on configuration.

    If DEV__AUTH_MOCK=true, returns MockIdentitySource (singleton to preserve
    sessions). Otherwise, returns a StytchIdentitySource resuming
    ``session_token``; one instance per browser client.

    Args:
        session_token: Stored Stytch session token for this browser, if any.

    Returns:
        An identity source implementing IdentitySourceProtocol.

    Raises:
        ValueError: If stytch.project_id is empty and mock mode is disabled.
    """
    global _mock_source_instance  # noqa: PLW0603
    settings = get_settings()

    if settings.dev.auth_mock:
        if _mock_source_instance is None:
            from coursehub.auth.mock import MockIdentitySource

            _mock_source_instance = MockIdentitySource()
        return _mock_source_instance

    stytch = settings.stytch
    if not stytch.project_id:
        msg = (
            "STYTCH__PROJECT_ID is required when DEV__AUTH_MOCK is not enabled. "
            "Set STYTCH__PROJECT_ID and STYTCH__SECRET in your .env file."
        )
        raise ValueError(msg)

    from coursehub.auth.client import StytchIdentitySource

    return StytchIdentitySource(
        project_id=stytch.project_id,
        secret=stytch.secret.get_secret_value(),
        environment=stytch.environment,
        organization_id=stytch.default_org_id,
        session_token=session_token,
    )


def clear_config_cache() -> None:
    """Clear the configuration and mock source caches.

    Useful for testing when you need to reload configuration
    or reset mock session state.
    """
    global _mock_source_instance  # noqa: PLW0603
    get_settings.cache_clear()
    _mock_source_instance = None
