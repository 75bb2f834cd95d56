"""TUI (Terminal User Interface) module for findzero.

Provides a screen-based navigation system; the review screen renders from the
workflow's `ReviewSession` on every pass.
"""
from .navigator import Navigator
from .router import Router
from .state import UIState

__all__ = ["Navigator", "Router", "UIState"]
