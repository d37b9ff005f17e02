"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from coursehub.auth import Principal, Role
from coursehub.auth.mock import (
    MOCK_STUDENT_EMAIL,
    MOCK_TEACHER_EMAIL,
    MockIdentitySource,
    make_mock_session,
)
from coursehub.navigation import NavigationController, ScreenId

TEACHER = Principal(identity_id="member-teacher", role=Role.TEACHER, email="t@uni.edu")
STUDENT = Principal(identity_id="member-student", role=Role.STUDENT, email="s@uni.edu")
NOBODY = Principal(identity_id="member-nobody", role=Role.NONE, email="n@uni.edu")


def ready_controller(
    principal: Principal | None = None, current: ScreenId = ScreenId.HOME
) -> NavigationController:
    """A controller past bootstrap, optionally signed in and placed on a screen.

    Placement happens before the principal is set, so history stays empty.
    """
    controller = NavigationController(initial=current)
    controller.mark_ready()
    if principal is not None:
        controller.set_principal(principal)
    return controller


@pytest.fixture
def teacher_session():
    return make_mock_session(MOCK_TEACHER_EMAIL, Role.TEACHER)


@pytest.fixture
def student_session():
    return make_mock_session(MOCK_STUDENT_EMAIL, Role.STUDENT)


@pytest.fixture
def mock_source() -> MockIdentitySource:
    return MockIdentitySource()
