"""Navigation and access control for the hub.

Framework-free: the NiceGUI screen host in ``coursehub.pages`` drives these
objects, and the unit tests drive them directly.
"""

from coursehub.navigation.bootstrap import (
    BootstrapSequencer,
    RaceOutcome,
    RaceResult,
    race_with_timeout,
)
from coursehub.navigation.callbacks import ScreenCallbacks, ScreenProps
from coursehub.navigation.controller import NavigationController
from coursehub.navigation.guard import guard_relocation
from coursehub.navigation.resolution import (
    Chrome,
    ResolvedView,
    ViewKind,
    chrome_for,
    resolve_view,
)
from coursehub.navigation.screens import Namespace, ScreenId, namespace_of
from coursehub.navigation.state import (
    BootPhase,
    HubSnapshot,
    NavigationContext,
    NavigationState,
    OverlayState,
)

__all__ = [
    "BootPhase",
    "BootstrapSequencer",
    "Chrome",
    "HubSnapshot",
    "Namespace",
    "NavigationContext",
    "NavigationController",
    "NavigationState",
    "OverlayState",
    "RaceOutcome",
    "RaceResult",
    "ResolvedView",
    "ScreenCallbacks",
    "ScreenId",
    "ScreenProps",
    "ViewKind",
    "chrome_for",
    "guard_relocation",
    "namespace_of",
    "race_with_timeout",
    "resolve_view",
]
