"""
Navigation Shell

The app shows exactly one of five screens. The current screen is a
closed enum; every change goes through transition(), which has no
guards: any screen is reachable from any other and none is terminal.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class View(str, Enum):
    """The five screens of the app."""
    DASHBOARD = "dashboard"
    ANALYTICS = "analytics"
    ADD = "add"
    HISTORY = "history"
    ASSISTANT = "assistant"

    @property
    def label(self) -> str:
        """Label shown in the navigation bar."""
        return NAV_LABELS[self]


NAV_LABELS = {
    View.DASHBOARD: "Home",
    View.ANALYTICS: "Charts",
    View.ADD: "Add",
    View.HISTORY: "History",
    View.ASSISTANT: "AI Help",
}

INITIAL_VIEW = View.DASHBOARD


class NavigationEventKind(str, Enum):
    """What the user did."""
    SELECT = "select"                # navigation bar selection
    SEE_ALL = "see_all"              # "See all" on the dashboard
    EXPENSE_SAVED = "expense_saved"  # add-expense flow completed
    ADD_CANCELLED = "add_cancelled"  # add-expense flow abandoned


class NavigationEvent(BaseModel):
    """A user-triggered navigation. SELECT events carry their target view."""

    model_config = ConfigDict(frozen=True)

    kind: NavigationEventKind
    target: Optional[View] = None

    @model_validator(mode="after")
    def check_target(self):
        if self.kind == NavigationEventKind.SELECT and self.target is None:
            raise ValueError("SELECT navigation requires a target view")
        return self

    @classmethod
    def select(cls, view: View) -> "NavigationEvent":
        return cls(kind=NavigationEventKind.SELECT, target=view)


def transition(current: View, event: NavigationEvent) -> View:
    """Next screen after a navigation event."""
    if event.kind == NavigationEventKind.SELECT:
        return event.target
    elif event.kind == NavigationEventKind.SEE_ALL:
        return View.HISTORY
    elif event.kind in (NavigationEventKind.EXPENSE_SAVED, NavigationEventKind.ADD_CANCELLED):
        return View.DASHBOARD
    # Unreachable for a closed enum; keep the current screen
    return current


class NavigationState:
    """The current screen, starting at the dashboard."""

    def __init__(self, initial: View = INITIAL_VIEW):
        self._current = View(initial)

    @property
    def current(self) -> View:
        return self._current

    def dispatch(self, event: NavigationEvent) -> View:
        self._current = transition(self._current, event)
        return self._current

    def select(self, view: View) -> View:
        return self.dispatch(NavigationEvent.select(View(view)))
