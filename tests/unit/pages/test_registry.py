"""Tests for the screen registry populated by coursehub.pages.views.

Rendering itself needs a NiceGUI client and is covered by end-to-end runs;
these tests check what is registered and how the drawer is built.
"""

from __future__ import annotations

import inspect

import pytest

from coursehub.auth import Role
from coursehub.navigation.screens import Namespace, ScreenId, is_public, namespace_of


@pytest.fixture(scope="module", autouse=True)
def _register_views() -> None:
    import coursehub.pages.views  # noqa: F401 - registers @screen_view renderers


class TestRegisteredScreens:
    def test_every_role_and_shared_screen_has_a_renderer(self) -> None:
        from coursehub.pages.registry import get_screen_meta

        for screen in ScreenId:
            if is_public(screen):
                continue
            meta = get_screen_meta(screen)
            assert meta is not None, screen
            assert meta.screen is screen
            assert meta.title

    def test_public_screens_are_not_registered(self) -> None:
        """Landing, login and not-found are mounted by the hub directly."""
        from coursehub.pages.registry import get_screen_meta

        assert get_screen_meta(ScreenId.HOME) is None
        assert get_screen_meta(ScreenId.TEACHER_LOGIN) is None

    def test_renderers_take_props_and_callbacks(self) -> None:
        from coursehub.pages.registry import get_screen_meta

        meta = get_screen_meta(ScreenId.STUDENT_DASHBOARD)
        assert meta is not None
        assert list(inspect.signature(meta.render).parameters) == [
            "props",
            "callbacks",
        ]


class TestNavScreens:
    def test_teacher_drawer(self) -> None:
        from coursehub.pages.registry import get_nav_screens

        screens = [m.screen for m in get_nav_screens(Role.TEACHER)]

        assert screens[0] is ScreenId.TEACHER_DASHBOARD
        assert screens[-1] is ScreenId.SETTINGS
        assert all(
            namespace_of(s) in (Namespace.TEACHER, Namespace.SHARED) for s in screens
        )

    def test_student_drawer_hides_item_screens(self) -> None:
        from coursehub.pages.registry import get_nav_screens

        screens = [m.screen for m in get_nav_screens(Role.STUDENT)]

        assert screens[0] is ScreenId.STUDENT_DASHBOARD
        assert ScreenId.STUDENT_ASSIGNMENT not in screens
        assert ScreenId.STUDENT_DISCUSSION not in screens
        assert ScreenId.STUDENT_LAB in screens

    def test_anonymous_drawer_is_empty(self) -> None:
        from coursehub.pages.registry import get_nav_screens

        assert get_nav_screens(Role.NONE) == []

    def test_drawer_item_signature_is_annotated(self) -> None:
        from coursehub.pages.layout import _nav_item

        params = inspect.signature(_nav_item).parameters
        assert params["on_click"].annotation == "Callable[[], Any]"
        assert all(p.annotation is not inspect.Parameter.empty for p in params.values())
