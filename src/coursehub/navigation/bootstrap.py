"""Startup sequence: resolve identity once, then follow identity changes.

The session fetch is raced against a timeout with ``race_with_timeout``,
which returns whichever finished first and cancels the fetch if it lost.
Whatever the outcome, the controller leaves CHECKING, so the loading
screen can never hang.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from coursehub.activity import LogAction, log_activity
from coursehub.auth import principal_from_session
from coursehub.auth.models import AuthEvent, Principal

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from coursehub.auth.models import Session
    from coursehub.auth.protocol import IdentitySourceProtocol, Unsubscribe
    from coursehub.navigation.controller import NavigationController

logger = logging.getLogger(__name__)

DEFAULT_AUTH_TIMEOUT_SECONDS = 3.5


class RaceOutcome(StrEnum):
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class RaceResult[T]:
    """Outcome of racing an awaitable against a deadline."""

    outcome: RaceOutcome
    value: T | None = None
    error: BaseException | None = None


async def race_with_timeout[T](
    awaitable: Awaitable[T], timeout_seconds: float
) -> RaceResult[T]:
    """Await ``awaitable`` for at most ``timeout_seconds``.

    The first of {completion, deadline} decides the result. A fetch that
    loses is cancelled and its eventual result is never observed. Errors
    raised by the awaitable are returned, not raised.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout_seconds)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if not done:
        task.cancel()
        return RaceResult(outcome=RaceOutcome.TIMED_OUT)
    if task.cancelled():
        return RaceResult(outcome=RaceOutcome.FAILED, error=asyncio.CancelledError())
    error = task.exception()
    if error is not None:
        return RaceResult(outcome=RaceOutcome.FAILED, error=error)
    return RaceResult(outcome=RaceOutcome.COMPLETED, value=task.result())


class BootstrapSequencer:
    """Drives a NavigationController from an identity source.

    ``run()`` performs the one-time startup race; the identity subscription
    it opens stays active until ``close()``.
    """

    def __init__(
        self,
        controller: NavigationController,
        source: IdentitySourceProtocol,
        *,
        timeout_seconds: float = DEFAULT_AUTH_TIMEOUT_SECONDS,
    ) -> None:
        self._controller = controller
        self._source = source
        self._timeout_seconds = timeout_seconds
        self._unsubscribe: Unsubscribe | None = None
        self._started = False
        # Bumped on every identity event; a fetch result is only applied if
        # no event arrived while it was in flight.
        self._identity_generation = 0

    @property
    def subscribed(self) -> bool:
        return self._unsubscribe is not None

    async def run(self) -> RaceResult[Session | None]:
        """Resolve the initial identity and mark the controller ready.

        Returns:
            The race result, for logging and tests.

        Raises:
            RuntimeError: If called more than once.
        """
        if self._started:
            msg = "Bootstrap has already run for this controller"
            raise RuntimeError(msg)
        self._started = True
        self._unsubscribe = self._source.subscribe(self._on_identity_event)

        generation = self._identity_generation
        result = await race_with_timeout(
            self._source.fetch_session(), self._timeout_seconds
        )

        if generation != self._identity_generation:
            logger.debug("Identity changed during bootstrap; fetch result ignored")
        elif result.outcome is RaceOutcome.COMPLETED:
            principal = principal_from_session(result.value)
            logger.info(
                "Bootstrap resolved identity=%s role=%s",
                principal.identity_id,
                principal.role,
            )
            self._controller.set_principal(
                principal, relocate_from_entry=principal.is_authenticated
            )
        else:
            if result.outcome is RaceOutcome.TIMED_OUT:
                logger.warning(
                    "Auth initialization deferred: no session after %.1fs",
                    self._timeout_seconds,
                )
            else:
                logger.warning("Auth initialization deferred. Error: %s", result.error)
            self._controller.set_principal(Principal.anonymous())

        self._controller.mark_ready()
        return result

    def close(self) -> None:
        """Stop following identity changes. Safe to call repeatedly."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_identity_event(self, event: AuthEvent, session: Session | None) -> None:
        self._identity_generation += 1

        if session is None:
            if event is AuthEvent.SIGNED_OUT:
                logger.info("Signed out; resetting navigation")
                log_activity(LogAction.LOGIN_EVENT, "signed out")
                self._controller.reset_on_sign_out()
            else:
                self._controller.set_principal(Principal.anonymous())
            return

        principal = principal_from_session(session)
        fresh_sign_in = event in (AuthEvent.SIGNED_IN, AuthEvent.INITIAL_SESSION)
        if event is AuthEvent.SIGNED_IN:
            logger.info(
                "Signed in identity=%s role=%s", principal.identity_id, principal.role
            )
            log_activity(
                LogAction.LOGIN_EVENT,
                "signed in",
                {"role": str(principal.role)},
                identity=principal,
            )
        self._controller.set_principal(principal, relocate_from_entry=fresh_sign_in)
