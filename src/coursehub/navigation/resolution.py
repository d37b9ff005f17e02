"""Decide what the screen host mounts for a (screen, principal) pair."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from coursehub.auth.models import Principal, Role
from coursehub.navigation.screens import (
    Namespace,
    ScreenId,
    fallback_for,
    is_login_screen,
    is_public,
    namespace_for_role,
    namespace_of,
    parse_screen_id,
)


class ViewKind(StrEnum):
    LANDING = "landing"
    SCREEN = "screen"
    NOT_FOUND = "not_found"
    NOTHING = "nothing"


@dataclass(frozen=True)
class ResolvedView:
    kind: ViewKind
    screen: ScreenId | None = None


@dataclass(frozen=True)
class Chrome:
    """Page furniture shown around the mounted view."""

    show_navbar: bool
    show_footer: bool
    show_cursor: bool
    show_scroll_to_top: bool


_LANDING = ResolvedView(ViewKind.LANDING, ScreenId.HOME)
_NOTHING = ResolvedView(ViewKind.NOTHING)


def resolve_view(
    current: ScreenId | str, principal: Principal | None
) -> ResolvedView:
    """Map the current screen and principal to the view to mount.

    - Unrecognised identifiers and the not-found screen give NOT_FOUND.
    - Home is the landing page; the other public screens always mount.
    - Visitors who are not signed in see the landing page in place of any
      other screen.
    - A signed-in principal without a role sees NOTHING outside the public
      screens.
    - Settings mounts for the teacher and student roles.
    - A role screen for the wrong role renders NOTHING; the access guard
      relocates away from it on the next settle.
    """
    screen = current if isinstance(current, ScreenId) else parse_screen_id(current)
    if screen is None or screen is ScreenId.NOT_FOUND:
        return ResolvedView(ViewKind.NOT_FOUND, ScreenId.NOT_FOUND)
    if screen is ScreenId.HOME:
        return _LANDING
    if is_public(screen):
        return ResolvedView(ViewKind.SCREEN, screen)

    if principal is None or not principal.is_authenticated:
        return _LANDING
    role_namespace = namespace_for_role(principal.role)
    if role_namespace is None:
        return _NOTHING

    namespace = namespace_of(screen)
    if namespace is Namespace.SHARED or namespace is role_namespace:
        return ResolvedView(ViewKind.SCREEN, screen)
    return _NOTHING


def not_found_return_target(role: Role) -> ScreenId:
    """Where the not-found view's single action leads."""
    return fallback_for(role)


def chrome_for(current: ScreenId) -> Chrome:
    on_login = is_login_screen(current)
    on_home = current is ScreenId.HOME
    return Chrome(
        show_navbar=on_home,
        show_footer=on_home,
        show_cursor=not on_login,
        show_scroll_to_top=not on_login,
    )
