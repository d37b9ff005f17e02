"""Callbacks and read-only props handed to every mounted screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from coursehub.navigation.resolution import not_found_return_target
from coursehub.navigation.screens import ScreenId
from coursehub.navigation.state import NavigationContext

if TYPE_CHECKING:
    from coursehub.auth.protocol import IdentitySourceProtocol
    from coursehub.navigation.controller import NavigationController

logger = logging.getLogger(__name__)

_LOGIN_DESTINATIONS: dict[ScreenId, ScreenId] = {
    ScreenId.TEACHER_LOGIN: ScreenId.TEACHER_DASHBOARD,
    ScreenId.STUDENT_LOGIN: ScreenId.STUDENT_DASHBOARD,
}


@dataclass(frozen=True)
class ScreenProps:
    current_path: ScreenId
    selected_resource_id: str | None


class ScreenCallbacks:
    """Thin wrappers over controller operations for one screen host."""

    def __init__(
        self, controller: NavigationController, source: IdentitySourceProtocol
    ) -> None:
        self._controller = controller
        self._source = source

    @property
    def props(self) -> ScreenProps:
        snapshot = self._controller.snapshot
        return ScreenProps(
            current_path=snapshot.current,
            selected_resource_id=snapshot.selected_resource_id,
        )

    def on_navigate_to(
        self, target: ScreenId, context: NavigationContext | None = None
    ) -> None:
        self._controller.navigate_to(target, context)

    def on_back(self) -> None:
        self._controller.go_back()

    async def on_logout(self) -> None:
        """Sign out remotely, then reset locally whatever the outcome."""
        logger.info("Logout requested")
        try:
            await self._source.sign_out()
        except Exception:
            logger.warning("Sign-out failed; forcing local sign-out", exc_info=True)
        finally:
            self._controller.reset_on_sign_out()

    def on_login_success(self, login_screen: ScreenId) -> None:
        """Move from a login screen to the dashboard it signs into."""
        destination = _LOGIN_DESTINATIONS.get(login_screen)
        if destination is None:
            logger.warning("on_login_success called from %s", login_screen)
            return
        self._controller.navigate_to(destination)

    def on_select_item(self, item_id: str, kind: str) -> None:
        """Open a dashboard item: discussions and assignments have separate screens."""
        target = (
            ScreenId.STUDENT_DISCUSSION
            if kind == "discussion"
            else ScreenId.STUDENT_ASSIGNMENT
        )
        self._controller.navigate_to(
            target, NavigationContext(selected_resource_id=item_id)
        )

    def on_open_role_selection(self) -> None:
        self._controller.open_role_selection()

    def on_close_role_selection(self) -> None:
        self._controller.close_role_selection()

    def on_open_notifications(self) -> None:
        self._controller.open_notifications()

    def on_close_notifications(self) -> None:
        self._controller.close_notifications()

    def on_not_found_return(self) -> None:
        self._controller.navigate_to(not_found_return_target(self._controller.role))
