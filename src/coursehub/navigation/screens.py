"""Screen identifiers and their namespace ownership.

Every reachable screen is a member of ``ScreenId``. Namespace membership is
looked up in a static table rather than derived from the identifier text, so
a new screen that is missing from the table fails loudly at import time.
"""

from __future__ import annotations

from enum import StrEnum

from coursehub.auth.models import Role


class Namespace(StrEnum):
    """Role ownership tag for a screen."""

    PUBLIC = "public"
    SHARED = "shared"
    TEACHER = "teacher"
    STUDENT = "student"


class ScreenId(StrEnum):
    """Closed set of screens the hub can mount."""

    HOME = "home"
    TEACHER_LOGIN = "teacher-login"
    STUDENT_LOGIN = "student-login"
    NOT_FOUND = "not-found"

    TEACHER_DASHBOARD = "teacher-dashboard"
    TEACHER_UPLOAD = "teacher-upload"
    TEACHER_ASSIGNMENTS = "teacher-assignments"
    TEACHER_ANALYTICS = "teacher-analytics"
    TEACHER_PERSONA = "teacher-persona"
    TEACHER_DISCUSSIONS = "teacher-discussions"
    TEACHER_GRADING = "teacher-grading"
    TEACHER_PREDICTOR = "teacher-predictor"

    STUDENT_DASHBOARD = "student-dashboard"
    STUDENT_ASSIGNMENT = "student-assignment"
    STUDENT_MATERIALS = "student-materials"
    STUDENT_DISCUSSION = "student-discussion"
    STUDENT_PROGRESS = "student-progress"
    STUDENT_LAB = "student-lab"
    STUDENT_PEER_REVIEW = "student-peer-review"

    SETTINGS = "settings"


_NAMESPACES: dict[ScreenId, Namespace] = {
    ScreenId.HOME: Namespace.PUBLIC,
    ScreenId.TEACHER_LOGIN: Namespace.PUBLIC,
    ScreenId.STUDENT_LOGIN: Namespace.PUBLIC,
    ScreenId.NOT_FOUND: Namespace.PUBLIC,
    ScreenId.TEACHER_DASHBOARD: Namespace.TEACHER,
    ScreenId.TEACHER_UPLOAD: Namespace.TEACHER,
    ScreenId.TEACHER_ASSIGNMENTS: Namespace.TEACHER,
    ScreenId.TEACHER_ANALYTICS: Namespace.TEACHER,
    ScreenId.TEACHER_PERSONA: Namespace.TEACHER,
    ScreenId.TEACHER_DISCUSSIONS: Namespace.TEACHER,
    ScreenId.TEACHER_GRADING: Namespace.TEACHER,
    ScreenId.TEACHER_PREDICTOR: Namespace.TEACHER,
    ScreenId.STUDENT_DASHBOARD: Namespace.STUDENT,
    ScreenId.STUDENT_ASSIGNMENT: Namespace.STUDENT,
    ScreenId.STUDENT_MATERIALS: Namespace.STUDENT,
    ScreenId.STUDENT_DISCUSSION: Namespace.STUDENT,
    ScreenId.STUDENT_PROGRESS: Namespace.STUDENT,
    ScreenId.STUDENT_LAB: Namespace.STUDENT,
    ScreenId.STUDENT_PEER_REVIEW: Namespace.STUDENT,
    ScreenId.SETTINGS: Namespace.SHARED,
}

_missing = set(ScreenId) - set(_NAMESPACES)
if _missing:
    msg = f"Screens without a namespace: {sorted(_missing)}"
    raise RuntimeError(msg)

_LOGIN_SCREENS = frozenset({ScreenId.TEACHER_LOGIN, ScreenId.STUDENT_LOGIN})

_ROLE_NAMESPACES: dict[Role, Namespace] = {
    Role.TEACHER: Namespace.TEACHER,
    Role.STUDENT: Namespace.STUDENT,
}

_DASHBOARDS: dict[Role, ScreenId] = {
    Role.TEACHER: ScreenId.TEACHER_DASHBOARD,
    Role.STUDENT: ScreenId.STUDENT_DASHBOARD,
}


def namespace_of(screen: ScreenId) -> Namespace:
    """Return the namespace that owns ``screen``."""
    return _NAMESPACES[screen]


def namespace_for_role(role: Role) -> Namespace | None:
    """Return the namespace a role owns, or None for ``Role.NONE``."""
    return _ROLE_NAMESPACES.get(role)


def is_public(screen: ScreenId) -> bool:
    return _NAMESPACES[screen] is Namespace.PUBLIC


def is_login_screen(screen: ScreenId) -> bool:
    return screen in _LOGIN_SCREENS


def is_entry_screen(screen: ScreenId) -> bool:
    """True for the screens a fresh sign-in relocates away from."""
    return screen is ScreenId.HOME or screen in _LOGIN_SCREENS


def dashboard_for(role: Role) -> ScreenId | None:
    """Return the dashboard owned by ``role``, or None for ``Role.NONE``."""
    return _DASHBOARDS.get(role)


def fallback_for(role: Role) -> ScreenId:
    """Return the role's dashboard, or home for anonymous users."""
    return _DASHBOARDS.get(role, ScreenId.HOME)


def parse_screen_id(value: str) -> ScreenId | None:
    """Parse an external screen identifier, returning None if unknown."""
    try:
        return ScreenId(value)
    except ValueError:
        return None
