"""Navigation stack manager for screen-based routing."""
from __future__ import annotations


class Navigator:
    """Stack-based navigation with breadcrumbs.

    The stack always starts at the home menu:
    - Push on enter: opening the review, settings or help screen pushes it
    - Pop on Back: returns to the previous screen (never below home)
    - Reset on Home: clears the stack to ["main_menu"]

    A screen that returns its own id is redrawn in place rather than pushed
    again; see `is_current`.
    """

    # Screen ID to breadcrumb label
    SCREEN_LABELS = {
        "main_menu": "Home",
        "review": "Blank Notes",
        "settings": "Settings",
        "help": "Help",
    }

    def __init__(self):
        """Start at the home menu."""
        self.stack: list[str] = ["main_menu"]

    def push(self, screen: str) -> None:
        """Open `screen` on top of the current one.

        Args:
            screen: Screen identifier registered with the router
        """
        self.stack.append(screen)

    def pop(self) -> str | None:
        """Leave the current screen.

        Returns:
            The screen that was left, or None when already at home
        """
        if len(self.stack) > 1:
            return self.stack.pop()
        return None

    def home(self) -> None:
        """Drop every screen above the home menu."""
        self.stack = ["main_menu"]

    def current(self) -> str:
        return self.stack[-1]

    def is_current(self, screen: str) -> bool:
        """True if `screen` is already on top (a redraw, not a new entry)."""
        return self.current() == screen

    def breadcrumbs(self) -> str:
        """Render the stack as a trail, e.g. "Home > Blank Notes".

        Unknown screen ids are shown verbatim.
        """
        return " > ".join(self.SCREEN_LABELS.get(screen, screen) for screen in self.stack)

    def depth(self) -> int:
        """Number of screens on the stack; 1 means home."""
        return len(self.stack)
