"""Shared layout components for CourseHub.

Builds the header, navigation drawer, footer and overlays once per page;
``HubFrame.update`` then syncs them with each navigation snapshot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from nicegui import ui

from coursehub.navigation.resolution import chrome_for
from coursehub.navigation.screens import ScreenId
from coursehub.pages.registry import get_nav_screens, get_screen_meta

if TYPE_CHECKING:
    from collections.abc import Callable

    from nicegui import Client

    from coursehub.navigation.callbacks import ScreenCallbacks
    from coursehub.navigation.state import HubSnapshot


def _nav_item(
    label: str, on_click: Callable[[], Any], icon: str | None = None
) -> None:
    """Create a navigation item in the drawer."""
    with ui.item(on_click=on_click).classes("w-full"):
        if icon:
            with ui.item_section().props("avatar"):
                ui.icon(icon)
        with ui.item_section():
            ui.item_label(label)


class HubFrame:
    """Page furniture around the mounted screen."""

    def __init__(self, client: Client, callbacks: ScreenCallbacks) -> None:
        self._client = client
        self._callbacks = callbacks
        self._snapshot: HubSnapshot | None = None

        with ui.header().classes("bg-primary items-center q-py-xs") as self.header:
            menu_btn = ui.button(icon="menu").props("flat color=white")
            self._header_content()

        with ui.left_drawer(value=False).classes("bg-grey-2") as self.drawer:
            ui.label("Navigation").classes("text-h6 q-pa-md")
            ui.separator()
            self._nav_list()

        menu_btn.on("click", self.drawer.toggle)

        with ui.footer().classes("bg-grey-9 text-white q-pa-md") as self.footer:
            ui.label("CourseHub").classes("text-body2")

        with ui.page_sticky(position="bottom-right", x_offset=18, y_offset=18):
            self.scroll_top_btn = ui.button(
                icon="arrow_upward",
                on_click=lambda: ui.run_javascript("window.scrollTo(0, 0)"),
            ).props("fab color=primary")

        self._build_overlays()

    def update(self, snapshot: HubSnapshot) -> None:
        self._snapshot = snapshot
        chrome = chrome_for(snapshot.current)
        self.footer.set_visibility(chrome.show_footer)
        self.scroll_top_btn.set_visibility(chrome.show_scroll_to_top)
        # Client-bound: update may run from another client's event handler
        self._client.run_javascript(
            "document.body.classList.toggle("
            f"'hub-custom-cursor', {str(chrome.show_cursor).lower()})"
        )
        self.role_dialog.set_value(snapshot.overlays.role_selection_open)
        self.notifications_dialog.set_value(snapshot.overlays.notifications_open)
        self._header_content.refresh()
        self._nav_list.refresh()

    @ui.refreshable
    def _header_content(self) -> None:
        snapshot = self._snapshot
        meta = get_screen_meta(snapshot.current) if snapshot else None
        ui.label(meta.title if meta else "CourseHub").classes(
            "text-h6 text-white q-ml-sm"
        )
        ui.element("div").classes("flex-grow")
        if snapshot is None:
            return

        if chrome_for(snapshot.current).show_navbar:
            ui.button(
                "Get started", on_click=self._callbacks.on_open_role_selection
            ).props("flat color=white")

        principal = snapshot.principal
        if principal is not None and principal.is_authenticated:
            ui.label(principal.email or "").classes("text-white text-body2 q-mr-md")
            ui.button(
                icon="notifications",
                on_click=self._callbacks.on_open_notifications,
            ).props("flat color=white").tooltip("Notifications")
            ui.button(icon="logout", on_click=self._callbacks.on_logout).props(
                'flat color=white data-testid="logout-btn"'
            ).tooltip("Logout")

    @ui.refreshable
    def _nav_list(self) -> None:
        snapshot = self._snapshot
        if snapshot is None or snapshot.principal is None:
            return
        with ui.list().props("padding"):
            for meta in get_nav_screens(snapshot.principal.role):
                _nav_item(
                    meta.title,
                    lambda s=meta.screen: self._callbacks.on_navigate_to(s),
                    meta.icon,
                )

    def _build_overlays(self) -> None:
        with ui.dialog() as self.role_dialog, ui.card().classes("p-6 min-w-80"):
            ui.label("Who are you?").classes("text-h6 mb-2")
            ui.button(
                "I'm a teacher",
                on_click=lambda: self._callbacks.on_navigate_to(ScreenId.TEACHER_LOGIN),
            ).classes("w-full mb-2")
            ui.button(
                "I'm a student",
                on_click=lambda: self._callbacks.on_navigate_to(ScreenId.STUDENT_LOGIN),
            ).classes("w-full mb-2")
            ui.button("Close", on_click=self._callbacks.on_close_role_selection).props(
                "flat"
            )
        self.role_dialog.on("hide", self._callbacks.on_close_role_selection)

        with ui.dialog() as self.notifications_dialog, ui.card().classes("p-6"):
            ui.label("Notifications").classes("text-h6 mb-2")
            ui.label("You're all caught up.").classes("text-body2 text-grey-7")
            ui.button("Close", on_click=self._callbacks.on_close_notifications).props(
                "flat"
            )
        self.notifications_dialog.on("hide", self._callbacks.on_close_notifications)

