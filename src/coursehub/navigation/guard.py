"""Access guard: keep the mounted screen inside the principal's namespace."""

from __future__ import annotations

from coursehub.auth.models import Role
from coursehub.navigation.screens import Namespace, ScreenId, dashboard_for, namespace_of

# Role -> namespace it must be moved out of
_FORBIDDEN: dict[Role, Namespace] = {
    Role.TEACHER: Namespace.STUDENT,
    Role.STUDENT: Namespace.TEACHER,
}


def guard_relocation(current: ScreenId, role: Role) -> ScreenId | None:
    """Return where the guard must relocate to, or None if ``current`` is allowed.

    Teachers on student screens go to the teacher dashboard and vice versa.
    Anonymous principals are never relocated here; screen resolution shows
    them the landing page instead. Applying the result and calling again
    always returns None, since a dashboard lives in its own role's namespace.
    """
    forbidden = _FORBIDDEN.get(role)
    if forbidden is None or namespace_of(current) is not forbidden:
        return None
    return dashboard_for(role)
