"""Session state shared across screens for one TUI run."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..workflow import Workflow


@dataclass
class UIState:
    """UI session state.

    Holds the open review workflow while the review screen redraws after each
    action, so selections survive without a rescan. Leaving the review (Back,
    Home or Exit) disposes it; nothing here outlives the run.
    """

    workflow: Workflow | None = None

    # Set once the startup trigger has fired
    startup_scan_done: bool = False

    # Transient notices queued by the workflow, shown on the next render
    notices: list[str] = field(default_factory=list)

    # Session history for debugging
    session_history: list[str] = field(default_factory=list)

    def notify(self, message: str) -> None:
        """Queue a transient notice (the workflow's notify callback)."""
        self.notices.append(message)

    def drain_notices(self) -> list[str]:
        out, self.notices = self.notices, []
        return out

    def add_to_history(self, screen: str) -> None:
        self.session_history.append(screen)

    def close_workflow(self) -> None:
        """Dispose the open review, if any."""
        from ..workflow import dispose

        if self.workflow is not None:
            dispose(self.workflow)
        self.workflow = None
