"""Read-only snapshots of hub navigation state.

The controller keeps its own mutable copy; everything handed to screens
and listeners is one of these frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from coursehub.auth.models import Principal
from coursehub.navigation.screens import ScreenId


class BootPhase(StrEnum):
    """Bootstrap progress. Moves from CHECKING to READY exactly once."""

    CHECKING = "checking"
    READY = "ready"


@dataclass(frozen=True)
class NavigationContext:
    """Per-transition payload carried into the next screen.

    ``selected_resource_id`` is only written by a transition that supplies
    it, so screens that were not the target of such a transition may see a
    stale value.
    """

    selected_resource_id: str | None = None


@dataclass(frozen=True)
class OverlayState:
    role_selection_open: bool = False
    notifications_open: bool = False


@dataclass(frozen=True)
class NavigationState:
    current: ScreenId = ScreenId.HOME
    history: tuple[ScreenId, ...] = ()
    context: NavigationContext = field(default_factory=NavigationContext)


@dataclass(frozen=True)
class HubSnapshot:
    """Everything a screen host needs to render one frame."""

    navigation: NavigationState
    principal: Principal | None
    overlays: OverlayState
    phase: BootPhase

    @property
    def current(self) -> ScreenId:
        return self.navigation.current

    @property
    def history(self) -> tuple[ScreenId, ...]:
        return self.navigation.history

    @property
    def selected_resource_id(self) -> str | None:
        return self.navigation.context.selected_resource_id
