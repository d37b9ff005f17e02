"""Tests for NavigationController transitions, history and context.

These drive the controller directly, past bootstrap, with a fixed principal.
"""

from __future__ import annotations

import pytest

from coursehub.auth import Role
from coursehub.navigation import (
    BootPhase,
    NavigationContext,
    NavigationController,
    ScreenId,
)
from tests.unit.conftest import STUDENT, TEACHER, ready_controller


class TestNavigateAndGoBack:
    """navigate_to pushes history; go_back pops it."""

    def test_navigate_then_back_restores_previous(self) -> None:
        """One go_back after navigate_to restores current and shrinks history by one."""
        controller = ready_controller(TEACHER, ScreenId.TEACHER_DASHBOARD)
        controller.navigate_to(ScreenId.TEACHER_GRADING)
        controller.navigate_to(ScreenId.TEACHER_UPLOAD)
        before = controller.snapshot.history

        controller.go_back()

        assert controller.current is ScreenId.TEACHER_GRADING
        assert len(controller.snapshot.history) == len(before) - 1
        assert controller.snapshot.history == (ScreenId.TEACHER_DASHBOARD,)

    def test_history_records_every_screen_in_order(self) -> None:
        controller = ready_controller(STUDENT, ScreenId.STUDENT_DASHBOARD)
        controller.navigate_to(ScreenId.STUDENT_MATERIALS)
        controller.navigate_to(ScreenId.STUDENT_PROGRESS)
        controller.navigate_to(ScreenId.SETTINGS)

        assert controller.snapshot.history == (
            ScreenId.STUDENT_DASHBOARD,
            ScreenId.STUDENT_MATERIALS,
            ScreenId.STUDENT_PROGRESS,
        )
        for expected in reversed(controller.snapshot.history):
            controller.go_back()
            assert controller.current is expected
        assert controller.snapshot.history == ()

    def test_back_with_empty_history_as_teacher(self) -> None:
        """Empty history falls back to the teacher dashboard without a push."""
        controller = ready_controller(TEACHER, ScreenId.TEACHER_GRADING)
        assert controller.snapshot.history == ()

        controller.go_back()

        assert controller.current is ScreenId.TEACHER_DASHBOARD
        assert controller.snapshot.history == ()

    def test_back_with_empty_history_as_student(self) -> None:
        controller = ready_controller(STUDENT, ScreenId.SETTINGS)
        controller.go_back()
        assert controller.current is ScreenId.STUDENT_DASHBOARD
        assert controller.snapshot.history == ()

    def test_back_with_empty_history_when_anonymous(self) -> None:
        controller = ready_controller(None, ScreenId.STUDENT_LOGIN)
        controller.go_back()
        assert controller.current is ScreenId.HOME
        assert controller.snapshot.history == ()

    def test_navigate_to_current_does_not_grow_history(self) -> None:
        """A transition to the current screen leaves no self-loop on the stack."""
        controller = ready_controller(TEACHER, ScreenId.TEACHER_DASHBOARD)
        controller.navigate_to(ScreenId.TEACHER_GRADING)
        controller.navigate_to(ScreenId.TEACHER_GRADING)

        assert controller.current is ScreenId.TEACHER_GRADING
        assert controller.snapshot.history == (ScreenId.TEACHER_DASHBOARD,)

    def test_history_top_never_equals_current(self) -> None:
        controller = ready_controller(STUDENT, ScreenId.STUDENT_DASHBOARD)
        for target in (
            ScreenId.STUDENT_LAB,
            ScreenId.STUDENT_DASHBOARD,
            ScreenId.STUDENT_LAB,
            ScreenId.STUDENT_LAB,
            ScreenId.SETTINGS,
        ):
            controller.navigate_to(target)
            history = controller.snapshot.history
            assert not history or history[-1] is not controller.current


class TestResetOnSignOut:
    """reset_on_sign_out clears history and returns home as anonymous."""

    def test_reset_clears_history_and_goes_home(self) -> None:
        controller = ready_controller(TEACHER, ScreenId.TEACHER_DASHBOARD)
        controller.navigate_to(ScreenId.TEACHER_ANALYTICS)
        controller.navigate_to(ScreenId.TEACHER_PERSONA)

        controller.reset_on_sign_out()

        assert controller.snapshot.history == ()
        assert controller.current is ScreenId.HOME
        assert controller.role is Role.NONE
        assert controller.snapshot.principal is not None
        assert controller.snapshot.principal.is_authenticated is False

    def test_reset_leaves_overlays_alone(self) -> None:
        controller = ready_controller(STUDENT, ScreenId.STUDENT_DASHBOARD)
        controller.open_notifications()
        controller.open_role_selection()

        controller.reset_on_sign_out()

        overlays = controller.snapshot.overlays
        assert overlays.notifications_open is True
        assert overlays.role_selection_open is True

    def test_back_after_reset_stays_home(self) -> None:
        controller = ready_controller(STUDENT, ScreenId.STUDENT_DASHBOARD)
        controller.navigate_to(ScreenId.STUDENT_LAB)
        controller.reset_on_sign_out()

        controller.go_back()

        assert controller.current is ScreenId.HOME


class TestNavigationContext:
    """selected_resource_id is overwritten per transition, never merged."""

    def test_context_overwritten_not_merged(self) -> None:
        controller = ready_controller(STUDENT, ScreenId.STUDENT_DASHBOARD)
        controller.navigate_to(
            ScreenId.STUDENT_ASSIGNMENT, NavigationContext(selected_resource_id="A1")
        )
        assert controller.snapshot.selected_resource_id == "A1"

        controller.go_back()
        controller.navigate_to(
            ScreenId.STUDENT_DISCUSSION, NavigationContext(selected_resource_id="D1")
        )

        assert controller.snapshot.selected_resource_id == "D1"

    def test_context_kept_when_not_supplied(self) -> None:
        """A transition without an id leaves the stale value in place."""
        controller = ready_controller(STUDENT, ScreenId.STUDENT_DASHBOARD)
        controller.navigate_to(
            ScreenId.STUDENT_ASSIGNMENT, NavigationContext(selected_resource_id="A1")
        )
        controller.navigate_to(ScreenId.STUDENT_MATERIALS)
        controller.navigate_to(ScreenId.STUDENT_LAB, NavigationContext())
        controller.go_back()

        assert controller.snapshot.selected_resource_id == "A1"

    def test_reset_keeps_context(self) -> None:
        controller = ready_controller(STUDENT, ScreenId.STUDENT_DASHBOARD)
        controller.navigate_to(
            ScreenId.STUDENT_ASSIGNMENT, NavigationContext(selected_resource_id="A2")
        )
        controller.reset_on_sign_out()
        assert controller.snapshot.selected_resource_id == "A2"


class TestOverlays:
    """Overlay flags are independent; navigation closes role selection only."""

    def test_navigation_closes_role_selection(self) -> None:
        controller = ready_controller(None, ScreenId.HOME)
        controller.open_role_selection()
        controller.open_notifications()

        controller.navigate_to(ScreenId.TEACHER_LOGIN)

        overlays = controller.snapshot.overlays
        assert overlays.role_selection_open is False
        assert overlays.notifications_open is True

    def test_open_and_close_each_flag(self) -> None:
        controller = ready_controller(None)
        controller.open_role_selection()
        assert controller.snapshot.overlays.role_selection_open is True
        assert controller.snapshot.overlays.notifications_open is False

        controller.close_role_selection()
        controller.open_notifications()
        assert controller.snapshot.overlays.role_selection_open is False
        assert controller.snapshot.overlays.notifications_open is True

        controller.close_notifications()
        assert controller.snapshot.overlays.notifications_open is False


class TestScrollReset:
    """navigate_to and go_back ask the host to reset scroll."""

    def test_scroll_reset_on_navigate_and_back(self) -> None:
        calls: list[None] = []
        controller = NavigationController(on_scroll_reset=lambda: calls.append(None))
        controller.mark_ready()

        controller.navigate_to(ScreenId.STUDENT_LOGIN)
        controller.go_back()
        controller.go_back()

        assert controller.scroll_reset_count == 3
        assert len(calls) == 3

    def test_no_scroll_reset_on_sign_out_or_overlays(self) -> None:
        controller = ready_controller(TEACHER, ScreenId.TEACHER_DASHBOARD)
        controller.open_notifications()
        controller.reset_on_sign_out()
        assert controller.scroll_reset_count == 0

    @pytest.mark.parametrize(
        "counter", ["scroll_reset_count", "guard_relocation_count"]
    )
    def test_counters_are_read_only(self, counter) -> None:
        controller = ready_controller(STUDENT, ScreenId.STUDENT_DASHBOARD)
        with pytest.raises(AttributeError):
            setattr(controller, counter, 5)
        assert getattr(controller, counter) == 0


class TestSubscriptionsAndSnapshots:
    """Listeners get one read-only snapshot per operation."""

    def test_listener_called_once_per_operation(self) -> None:
        controller = ready_controller(STUDENT, ScreenId.STUDENT_DASHBOARD)
        seen = []
        controller.subscribe(seen.append)

        controller.navigate_to(ScreenId.STUDENT_LAB)
        controller.go_back()
        controller.open_notifications()

        assert [s.current for s in seen] == [
            ScreenId.STUDENT_LAB,
            ScreenId.STUDENT_DASHBOARD,
            ScreenId.STUDENT_DASHBOARD,
        ]
        assert seen[-1].overlays.notifications_open is True

    def test_unsubscribe_stops_notifications(self) -> None:
        controller = ready_controller(None)
        seen = []
        unsubscribe = controller.subscribe(seen.append)
        unsubscribe()
        unsubscribe()

        controller.navigate_to(ScreenId.TEACHER_LOGIN)

        assert seen == []

    def test_failing_listener_does_not_block_others(self) -> None:
        controller = ready_controller(None)
        seen = []

        def broken(_snapshot) -> None:
            raise RuntimeError("render failed")

        controller.subscribe(broken)
        controller.subscribe(seen.append)

        controller.navigate_to(ScreenId.STUDENT_LOGIN)

        assert len(seen) == 1
        assert controller.current is ScreenId.STUDENT_LOGIN

    def test_snapshot_is_not_affected_by_later_operations(self) -> None:
        controller = ready_controller(TEACHER, ScreenId.TEACHER_DASHBOARD)
        controller.navigate_to(ScreenId.TEACHER_GRADING)
        snapshot = controller.snapshot

        controller.navigate_to(ScreenId.TEACHER_UPLOAD)

        assert snapshot.current is ScreenId.TEACHER_GRADING
        assert snapshot.history == (ScreenId.TEACHER_DASHBOARD,)


class TestBootPhase:
    def test_starts_checking_and_marks_ready_once(self) -> None:
        controller = NavigationController()
        seen = []
        controller.subscribe(seen.append)
        assert controller.phase is BootPhase.CHECKING
        assert controller.snapshot.principal is None

        controller.mark_ready()
        controller.mark_ready()

        assert controller.phase is BootPhase.READY
        assert len(seen) == 1
