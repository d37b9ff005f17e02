"""Listener registry shared by identity sources.

Identity sources publish session changes through ``IdentityEvents``; the
hub subscribes once per browser client and unsubscribes on disconnect.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coursehub.auth.models import AuthEvent, Session
    from coursehub.auth.protocol import AuthListener, Unsubscribe

logger = logging.getLogger(__name__)


class IdentityEvents:
    """Fan-out of (event, session) notifications to registered listeners."""

    def __init__(self) -> None:
        self._listeners: dict[int, AuthListener] = {}
        self._next_id = 0

    def subscribe(self, listener: AuthListener) -> Unsubscribe:
        listener_id = self._next_id
        self._next_id += 1
        self._listeners[listener_id] = listener

        def unsubscribe() -> None:
            self._listeners.pop(listener_id, None)

        return unsubscribe

    def emit(self, event: AuthEvent, session: Session | None) -> None:
        """Deliver an event to every listener registered at call time.

        A failing listener is logged and skipped so the remaining listeners
        still see the event.
        """
        logger.debug(
            "Identity event %s (identity=%s) to %d listener(s)",
            event,
            session.identity_id if session else None,
            len(self._listeners),
        )
        for listener in list(self._listeners.values()):
            try:
                listener(event, session)
            except Exception:
                logger.exception("Identity listener failed on %s", event)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
