"""Navigation controller: the single owner of hub navigation state.

All operations are synchronous and run to completion. Every operation that
can change the current screen or the principal's role ends by running the
access guard, then notifies subscribers once with a fresh snapshot.

Usage:
    controller = NavigationController()
    controller.subscribe(lambda snapshot: render(snapshot))
    controller.navigate_to(ScreenId.STUDENT_ASSIGNMENT, NavigationContext("A1"))
    controller.go_back()
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from coursehub.auth.models import Principal, Role
from coursehub.navigation.guard import guard_relocation
from coursehub.navigation.screens import (
    ScreenId,
    dashboard_for,
    fallback_for,
    is_entry_screen,
)
from coursehub.navigation.state import (
    BootPhase,
    HubSnapshot,
    NavigationContext,
    NavigationState,
    OverlayState,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    type SnapshotListener = Callable[[HubSnapshot], None]

logger = logging.getLogger(__name__)


class NavigationController:
    """Tracks the mounted screen, back history, principal and overlays.

    Consumers read ``snapshot`` and request changes through the operations
    below; nothing else mutates the state.
    """

    def __init__(
        self,
        initial: ScreenId = ScreenId.HOME,
        *,
        on_scroll_reset: Callable[[], None] | None = None,
    ) -> None:
        self._current = initial
        self._history: list[ScreenId] = []
        self._context = NavigationContext()
        self._principal: Principal | None = None
        self._overlays = OverlayState()
        self._phase = BootPhase.CHECKING
        self._listeners: dict[int, SnapshotListener] = {}
        self._next_listener_id = 0
        self._on_scroll_reset = on_scroll_reset
        self._scroll_reset_count = 0
        self._guard_relocation_count = 0

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def snapshot(self) -> HubSnapshot:
        return HubSnapshot(
            navigation=NavigationState(
                current=self._current,
                history=tuple(self._history),
                context=self._context,
            ),
            principal=self._principal,
            overlays=self._overlays,
            phase=self._phase,
        )

    @property
    def current(self) -> ScreenId:
        return self._current

    @property
    def role(self) -> Role:
        return self._principal.role if self._principal else Role.NONE

    @property
    def phase(self) -> BootPhase:
        return self._phase

    @property
    def scroll_reset_count(self) -> int:
        return self._scroll_reset_count

    @property
    def guard_relocation_count(self) -> int:
        return self._guard_relocation_count

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener called with a snapshot after every operation."""
        listener_id = self._next_listener_id
        self._next_listener_id += 1
        self._listeners[listener_id] = listener

        def unsubscribe() -> None:
            self._listeners.pop(listener_id, None)

        return unsubscribe

    # ------------------------------------------------------------------
    # User-initiated navigation
    # ------------------------------------------------------------------
    def navigate_to(
        self, target: ScreenId, context: NavigationContext | None = None
    ) -> None:
        """Move to ``target``, remembering the current screen for go_back.

        A supplied ``context.selected_resource_id`` replaces the stored one;
        omitting it leaves the stored value untouched. Always closes the
        role-selection overlay and resets scroll.
        """
        logger.debug("navigate_to %s -> %s", self._current, target)
        self._history.append(self._current)
        self._set_current(target)
        if context is not None and context.selected_resource_id is not None:
            self._context = NavigationContext(
                selected_resource_id=context.selected_resource_id
            )
        self._overlays = replace(self._overlays, role_selection_open=False)
        self._reset_scroll()
        self._settle()

    def go_back(self) -> None:
        """Return to the previous screen, or the role fallback if none."""
        if self._history:
            previous = self._history.pop()
            logger.debug("go_back %s -> %s", self._current, previous)
            self._set_current(previous)
        else:
            fallback = fallback_for(self.role)
            logger.debug("go_back with empty history, falling back to %s", fallback)
            self._current = fallback
        self._reset_scroll()
        self._settle()

    # ------------------------------------------------------------------
    # Identity-driven transitions
    # ------------------------------------------------------------------
    def reset_on_sign_out(self) -> None:
        """Forget history, return home and drop the principal to anonymous."""
        logger.debug("reset_on_sign_out (history depth %d)", len(self._history))
        self._history.clear()
        self._current = ScreenId.HOME
        self._principal = Principal.anonymous()
        self._settle()

    def set_principal(
        self, principal: Principal, *, relocate_from_entry: bool = False
    ) -> None:
        """Replace the principal wholesale.

        Args:
            principal: The newly resolved identity.
            relocate_from_entry: For a fresh sign-in: if the current screen
                is home or a login screen, move to the role's dashboard
                without touching history.
        """
        self._principal = principal
        if relocate_from_entry and is_entry_screen(self._current):
            dashboard = dashboard_for(principal.role)
            if dashboard is not None:
                logger.debug("Sign-in relocation %s -> %s", self._current, dashboard)
                self._set_current(dashboard)
        self._settle()

    def mark_ready(self) -> None:
        """Leave CHECKING. Later calls are ignored."""
        if self._phase is BootPhase.READY:
            return
        self._phase = BootPhase.READY
        self._settle()

    def run_guard(self) -> bool:
        """Apply the access guard once, returning True if it relocated.

        Does nothing while bootstrap is still CHECKING.
        """
        if self._phase is BootPhase.CHECKING:
            return False
        target = guard_relocation(self._current, self.role)
        if target is None:
            return False
        logger.debug(
            "Guard relocation %s -> %s for role %s", self._current, target, self.role
        )
        self._guard_relocation_count += 1
        self._set_current(target)
        return True

    # ------------------------------------------------------------------
    # Overlays
    # ------------------------------------------------------------------
    def open_role_selection(self) -> None:
        self._set_overlays(role_selection_open=True)

    def close_role_selection(self) -> None:
        self._set_overlays(role_selection_open=False)

    def open_notifications(self) -> None:
        self._set_overlays(notifications_open=True)

    def close_notifications(self) -> None:
        self._set_overlays(notifications_open=False)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _set_current(self, screen: ScreenId) -> None:
        """Change the current screen, collapsing an immediate self-loop."""
        self._current = screen
        while self._history and self._history[-1] is screen:
            self._history.pop()

    def _set_overlays(self, **flags: bool) -> None:
        self._overlays = replace(self._overlays, **flags)
        self._notify()

    def _reset_scroll(self) -> None:
        self._scroll_reset_count += 1
        if self._on_scroll_reset is not None:
            self._on_scroll_reset()

    def _settle(self) -> None:
        self.run_guard()
        self._notify()

    def _notify(self) -> None:
        snapshot = self.snapshot
        for listener in list(self._listeners.values()):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Navigation listener failed")
