"""Interactive focus session: timer, cycling, navigation and rendering."""

from .browser import BrowserAction, InputMode, TaskBrowser
from .cycling import CycleEngine, CycleSnapshot
from .form import TaskForm
from .ring import FocusRing
from .state import (
    Browsing,
    SessionContext,
    SessionState,
    Terminated,
    Working,
    handle_input,
    handle_tick,
    state_tag,
)
from .timer import Timer

__all__ = [
    "BrowserAction",
    "Browsing",
    "CycleEngine",
    "CycleSnapshot",
    "FocusRing",
    "InputMode",
    "SessionContext",
    "SessionState",
    "TaskBrowser",
    "TaskForm",
    "Terminated",
    "Timer",
    "Working",
    "handle_input",
    "handle_tick",
    "state_tag",
]
