"""Hub page: hosts the navigation controller for one browser client.

Route: /

Each client gets its own NavigationController and BootstrapSequencer. The
main content is a refreshable view re-rendered after every controller
operation; the identity subscription is torn down on disconnect.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nicegui import app, ui

from coursehub.auth import get_identity_source
from coursehub.config import get_settings
from coursehub.navigation import (
    BootPhase,
    BootstrapSequencer,
    NavigationController,
    RaceOutcome,
    ScreenCallbacks,
    ViewKind,
    resolve_view,
)
from coursehub.navigation.screens import is_login_screen
from coursehub.pages.layout import HubFrame
from coursehub.pages.views import (
    render_landing,
    render_loading,
    render_login,
    render_not_found,
    render_screen,
)

if TYPE_CHECKING:
    from coursehub.navigation.state import HubSnapshot

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "session_token"


def _store_session_token(token: str | None) -> None:
    if token:
        app.storage.user[SESSION_TOKEN_KEY] = token
    else:
        app.storage.user.pop(SESSION_TOKEN_KEY, None)


class _HubCallbacks(ScreenCallbacks):
    async def on_logout(self) -> None:
        _store_session_token(None)
        await super().on_logout()


@ui.page("/")
async def hub_page() -> None:
    """The single-page hub. Screens are switched in place, not by URL."""
    settings = get_settings()
    client = ui.context.client
    source = get_identity_source(app.storage.user.get(SESSION_TOKEN_KEY))

    controller = NavigationController(
        on_scroll_reset=lambda: client.run_javascript("window.scrollTo(0, 0)"),
    )
    callbacks = _HubCallbacks(controller, source)
    sequencer = BootstrapSequencer(
        controller,
        source,
        timeout_seconds=settings.navigation.auth_timeout_seconds,
    )

    frame = HubFrame(client, callbacks)

    @ui.refreshable
    def content() -> None:
        snapshot = controller.snapshot
        if snapshot.phase is BootPhase.CHECKING:
            render_loading()
            return

        view = resolve_view(snapshot.current, snapshot.principal)
        if view.kind is ViewKind.NOTHING:
            return
        if view.kind is ViewKind.LANDING:
            render_landing(callbacks)
        elif view.kind is ViewKind.NOT_FOUND:
            render_not_found(callbacks)
        elif view.screen is not None and is_login_screen(view.screen):
            render_login(view.screen, source, callbacks, _store_session_token)
        elif view.screen is not None:
            render_screen(view.screen, callbacks.props, callbacks)

    with ui.element("div").classes("q-pa-md w-full"):
        content()

    def on_change(snapshot: HubSnapshot) -> None:
        frame.update(snapshot)
        content.refresh()

    unsubscribe = controller.subscribe(on_change)

    def on_disconnect() -> None:
        unsubscribe()
        sequencer.close()
        logger.debug("Hub client %s disconnected", client.id)

    client.on_disconnect(on_disconnect)

    await client.connected()
    frame.update(controller.snapshot)
    result = await sequencer.run()
    if result.outcome is RaceOutcome.COMPLETED:
        # Keep a rotated token; drop one Stytch no longer accepts
        _store_session_token(result.value.session_token if result.value else None)
    logger.info("Hub ready on %s (identity %s)", controller.current, result.outcome)


@ui.page("/auth/callback")
async def magic_link_callback() -> None:
    """Authenticate a magic link token, then return to the hub."""
    logger.info("Magic link callback received")
    token = ui.context.client.request.query_params.get("token")
    if not token:
        logger.warning("Magic link callback: invalid or missing token")
        ui.label("Invalid or missing token").classes("text-xl text-red-500")
        ui.button("Back to CourseHub", on_click=lambda: ui.navigate.to("/"))
        return

    ui.label("Authenticating...").classes("text-xl")
    ui.spinner()

    source = get_identity_source()
    result = await source.sign_in_with_token(token)
    if result.success and result.session is not None:
        _store_session_token(result.session.session_token)
        ui.navigate.to("/")
    else:
        logger.warning("Magic link auth failed: %s", result.error)
        ui.notify(f"Authentication failed: {result.error}", type="negative")
        ui.button("Back to CourseHub", on_click=lambda: ui.navigate.to("/"))
