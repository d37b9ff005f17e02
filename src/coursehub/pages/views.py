"""Views mounted by the hub.

Screen content (grading, materials, discussions, ...) is owned by the
feature views; the renderers here give each screen its title, the props it
received and the navigation actions it exposes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nicegui import ui

from coursehub.config import get_settings
from coursehub.navigation.screens import ScreenId
from coursehub.pages.registry import get_screen_meta, screen_view

if TYPE_CHECKING:
    from collections.abc import Callable

    from coursehub.auth.protocol import IdentitySourceProtocol
    from coursehub.navigation.callbacks import ScreenCallbacks, ScreenProps

logger = logging.getLogger(__name__)

# Sample dashboard items: (id, title, kind)
_STUDENT_ITEMS: tuple[tuple[str, str, str], ...] = (
    ("A1", "Essay: Data ethics", "assignment"),
    ("A2", "Quiz: Regression basics", "assignment"),
    ("D1", "Discussion: Open data", "discussion"),
)


# ---------------------------------------------------------------------------
# Non-screen views
# ---------------------------------------------------------------------------
def render_loading() -> None:
    with ui.column().classes("w-full h-screen items-center justify-center"):
        ui.spinner(size="xl")
        ui.label("Initializing Hub Systems...").classes(
            "text-caption text-grey-6 uppercase"
        )


def render_landing(callbacks: ScreenCallbacks) -> None:
    """Public landing page shown on home and to anonymous visitors."""
    with ui.column().classes("w-full items-center q-pa-xl"):
        ui.label("CourseHub").classes("text-h3 font-bold")
        ui.label("Courses, assignments and an AI tutor in one place.").classes(
            "text-lg text-grey-7 mb-6"
        )
        ui.button("Get started", on_click=callbacks.on_open_role_selection).props(
            'color=primary data-testid="get-started"'
        )


def render_not_found(callbacks: ScreenCallbacks) -> None:
    with ui.column().classes("w-full h-screen items-center justify-center"):
        ui.label("Lost in Data").classes("text-h4 font-bold")
        ui.label("The requested module could not be located.").classes(
            "text-body1 text-grey-7 mb-6"
        )
        ui.button("Return to Hub", on_click=callbacks.on_not_found_return)


def render_screen(
    screen: ScreenId, props: ScreenProps, callbacks: ScreenCallbacks
) -> None:
    meta = get_screen_meta(screen)
    if meta is None:
        logger.warning("No renderer registered for %s", screen)
        render_not_found(callbacks)
        return
    meta.render(props, callbacks)


# ---------------------------------------------------------------------------
# Login screens
# ---------------------------------------------------------------------------
def render_login(
    screen: ScreenId,
    source: IdentitySourceProtocol,
    callbacks: ScreenCallbacks,
    on_session_token: Callable[[str | None], None],
) -> None:
    """Login form for the teacher or student portal.

    In mock mode the form offers one-click test users; otherwise it emails a
    magic link that lands on /auth/callback.
    """
    role = "teacher" if screen is ScreenId.TEACHER_LOGIN else "student"
    settings = get_settings()

    with ui.card().classes("p-6 max-w-md mx-auto mt-8"):
        ui.label(f"{role.title()} sign in").classes("text-h5 mb-4")

        if settings.dev.auth_mock:

            async def mock_login() -> None:
                email = f"{role}@uni.edu"
                result = await source.sign_in_with_token(f"mock-token-{role}:{email}")
                if result.success and result.session is not None:
                    on_session_token(result.session.session_token)
                    callbacks.on_login_success(screen)
                else:
                    ui.notify(f"Sign in failed: {result.error}", type="negative")

            ui.button(f"Continue as {role}@uni.edu", on_click=mock_login).classes(
                "w-full mb-2"
            )
        else:
            email_input = ui.input("Email").classes("w-full")

            async def send_link() -> None:
                email = (email_input.value or "").strip()
                if not email:
                    ui.notify("Enter your email address", type="warning")
                    return
                callback_url = f"{settings.app.base_url}/auth/callback"
                if await source.send_sign_in_link(email, callback_url):
                    ui.notify("Check your inbox for a sign-in link", type="positive")
                else:
                    ui.notify("Could not send sign-in link", type="negative")

            ui.button("Email me a sign-in link", on_click=send_link).classes(
                "w-full mb-2"
            )

        ui.button("Back", on_click=callbacks.on_back).props("flat")


# ---------------------------------------------------------------------------
# Role screens
# ---------------------------------------------------------------------------
def _screen_header(props: ScreenProps, callbacks: ScreenCallbacks) -> None:
    meta = get_screen_meta(props.current_path)
    with ui.row().classes("items-center gap-2 mb-4"):
        ui.button(icon="arrow_back", on_click=callbacks.on_back).props("flat round")
        ui.label(meta.title if meta else str(props.current_path)).classes(
            "text-h5 font-bold"
        )


def _links(callbacks: ScreenCallbacks, *targets: ScreenId) -> None:
    with ui.row().classes("gap-2 flex-wrap"):
        for target in targets:
            meta = get_screen_meta(target)
            ui.button(
                meta.title if meta else str(target),
                icon=meta.icon if meta else None,
                on_click=lambda t=target: callbacks.on_navigate_to(t),
            ).props("outline")


@screen_view(ScreenId.TEACHER_DASHBOARD, title="Dashboard", icon="dashboard", order=10)
def teacher_dashboard(props: ScreenProps, callbacks: ScreenCallbacks) -> None:
    _screen_header(props, callbacks)
    _links(
        callbacks,
        ScreenId.TEACHER_UPLOAD,
        ScreenId.TEACHER_ASSIGNMENTS,
        ScreenId.TEACHER_GRADING,
        ScreenId.TEACHER_DISCUSSIONS,
        ScreenId.TEACHER_ANALYTICS,
        ScreenId.TEACHER_PREDICTOR,
        ScreenId.TEACHER_PERSONA,
    )


def _teacher_tool(props: ScreenProps, callbacks: ScreenCallbacks) -> None:
    _screen_header(props, callbacks)
    _links(callbacks, ScreenId.TEACHER_DASHBOARD)


for _screen, _title, _icon, _order in (
    (ScreenId.TEACHER_UPLOAD, "Upload Materials", "upload_file", 20),
    (ScreenId.TEACHER_ASSIGNMENTS, "Create Assignment", "assignment_add", 30),
    (ScreenId.TEACHER_GRADING, "Grading Hub", "grading", 40),
    (ScreenId.TEACHER_DISCUSSIONS, "Discussions", "forum", 50),
    (ScreenId.TEACHER_ANALYTICS, "Student Analytics", "insights", 60),
    (ScreenId.TEACHER_PREDICTOR, "Grade Predictor", "trending_up", 70),
    (ScreenId.TEACHER_PERSONA, "AI Persona", "smart_toy", 80),
):
    screen_view(_screen, title=_title, icon=_icon, order=_order)(_teacher_tool)


@screen_view(ScreenId.STUDENT_DASHBOARD, title="Dashboard", icon="dashboard", order=10)
def student_dashboard(props: ScreenProps, callbacks: ScreenCallbacks) -> None:
    _screen_header(props, callbacks)
    with ui.list().props("bordered separator").classes("w-full max-w-xl mb-4"):
        for item_id, title, kind in _STUDENT_ITEMS:
            with ui.item(
                on_click=lambda i=item_id, k=kind: callbacks.on_select_item(i, k)
            ):
                with ui.item_section():
                    ui.item_label(title)
                    ui.item_label(kind).props("caption")
    _links(
        callbacks,
        ScreenId.STUDENT_MATERIALS,
        ScreenId.STUDENT_PROGRESS,
        ScreenId.STUDENT_LAB,
        ScreenId.STUDENT_PEER_REVIEW,
        ScreenId.SETTINGS,
    )


def _student_item(props: ScreenProps, callbacks: ScreenCallbacks) -> None:
    _screen_header(props, callbacks)
    ui.label(f"Item: {props.selected_resource_id or 'none selected'}").classes(
        "text-body1 mb-4"
    ).props('data-testid="selected-resource"')
    _links(callbacks, ScreenId.STUDENT_DASHBOARD)


def _student_tool(props: ScreenProps, callbacks: ScreenCallbacks) -> None:
    _screen_header(props, callbacks)
    _links(
        callbacks,
        ScreenId.STUDENT_DASHBOARD,
        ScreenId.STUDENT_MATERIALS,
        ScreenId.STUDENT_PROGRESS,
    )


screen_view(
    ScreenId.STUDENT_ASSIGNMENT, title="Assignment", icon="edit_note", in_nav=False
)(_student_item)
screen_view(
    ScreenId.STUDENT_DISCUSSION, title="Discussion", icon="forum", in_nav=False
)(_student_item)

for _screen, _title, _icon, _order in (
    (ScreenId.STUDENT_MATERIALS, "Course Materials", "menu_book", 20),
    (ScreenId.STUDENT_PROGRESS, "My Progress", "timeline", 30),
    (ScreenId.STUDENT_LAB, "Laboratory", "science", 40),
    (ScreenId.STUDENT_PEER_REVIEW, "Peer Review", "rate_review", 50),
):
    screen_view(_screen, title=_title, icon=_icon, order=_order)(_student_tool)


@screen_view(ScreenId.SETTINGS, title="Settings", icon="settings", order=90)
def settings_screen(props: ScreenProps, callbacks: ScreenCallbacks) -> None:
    _screen_header(props, callbacks)
    ui.label("Account preferences").classes("text-body1 mb-4")
    ui.button("Logout", on_click=callbacks.on_logout).props("color=negative")
