"""Screen registration system for data-driven navigation.

Provides a decorator for registering screen renderers with metadata,
enabling automatic navigation generation based on the principal's role.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from coursehub.navigation.screens import Namespace, ScreenId, namespace_for_role, namespace_of

if TYPE_CHECKING:
    from collections.abc import Callable

    from coursehub.auth.models import Role
    from coursehub.navigation.callbacks import ScreenCallbacks, ScreenProps

    type ScreenRenderer = Callable[[ScreenProps, ScreenCallbacks], None]


@dataclass
class ScreenMeta:
    """Metadata for a registered screen."""

    screen: ScreenId
    title: str
    icon: str
    render: ScreenRenderer
    in_nav: bool = True
    order: int = field(default=100)


# Global registry of all screens
_screen_registry: dict[ScreenId, ScreenMeta] = {}


def screen_view(
    screen: ScreenId,
    *,
    title: str,
    icon: str,
    in_nav: bool = True,
    order: int = 100,
) -> Callable[[ScreenRenderer], ScreenRenderer]:
    """Decorator to register a screen renderer with navigation metadata.

    Usage:
        @screen_view(ScreenId.TEACHER_GRADING, title="Grading", icon="grading")
        def grading_screen(props, callbacks):
            ...

    Args:
        screen: The screen this renderer mounts.
        title: Display title in the header and navigation.
        icon: Material icon name.
        in_nav: Whether the screen appears in the navigation drawer.
        order: Sort order in the drawer (lower = higher).

    Returns:
        The renderer, unchanged, after registering it.
    """

    def decorator(func: ScreenRenderer) -> ScreenRenderer:
        _screen_registry[screen] = ScreenMeta(
            screen=screen,
            title=title,
            icon=icon,
            render=func,
            in_nav=in_nav,
            order=order,
        )
        return func

    return decorator


def get_screen_meta(screen: ScreenId) -> ScreenMeta | None:
    return _screen_registry.get(screen)


def get_nav_screens(role: Role) -> list[ScreenMeta]:
    """Get drawer entries for a role: its own namespace, then shared screens.

    Args:
        role: The current principal's role.

    Returns:
        ScreenMeta sorted by namespace then order; empty for anonymous users.
    """
    own = namespace_for_role(role)
    if own is None:
        return []
    namespace_order = {own: 0, Namespace.SHARED: 1}
    visible = [
        meta
        for meta in _screen_registry.values()
        if meta.in_nav and namespace_of(meta.screen) in namespace_order
    ]
    visible.sort(key=lambda m: (namespace_order[namespace_of(m.screen)], m.order))
    return visible
