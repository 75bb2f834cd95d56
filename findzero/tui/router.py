"""Main router and screen registry for the TUI."""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from rich.console import Console

    from ..settings import Settings
    from .navigator import Navigator
    from .state import UIState

logger = logging.getLogger(__name__)


class Router:
    """Main navigation loop with screen dispatch.

    The router maintains the main event loop and dispatches to registered
    screen functions based on the current navigation state.
    """

    def __init__(
        self,
        console: Console,
        settings: Settings,
        state: UIState,
        nav: Navigator,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.console = console
        self.settings = settings
        self.state = state
        self.nav = nav
        self._sleep = sleep

    def apply_startup_trigger(self) -> bool:
        """Open the review screen once when FZ_RUN_AT_STARTUP is set.

        Returns True if the trigger fired.
        """
        if self.state.startup_scan_done or not self.settings.FZ_RUN_AT_STARTUP:
            return False
        self.state.startup_scan_done = True
        delay = float(self.settings.FZ_STARTUP_DELAY_SECONDS or 0)
        if delay > 0:
            self._sleep(delay)
        logger.info("Startup scan triggered")
        self.nav.push("review")
        return True

    def run(self) -> None:
        """Run the main navigation loop.

        Dispatches to screen functions until "exit" is received.
        Handles navigation commands: exit, home, back, or screen_id.
        """
        self.apply_startup_trigger()

        while True:
            current_screen = self.nav.current()
            self.state.add_to_history(current_screen)

            screen_fn = SCREENS.get(current_screen)

            if screen_fn is None:
                self.console.print(
                    f"[yellow]Warning:[/yellow] Unknown screen '{current_screen}', "
                    "returning to main menu"
                )
                self.nav.home()
                continue

            try:
                result = screen_fn(self)
            except KeyboardInterrupt:
                self.console.print("\n[dim]Interrupted. Returning to main menu...[/]")
                self.nav.home()
                continue

            result = self._normalize_nav_result(result)

            if result == "exit":
                self.state.close_workflow()
                self.console.print("\n[dim]Goodbye![/]")
                break
            elif result == "home":
                self.nav.home()
            elif result == "back":
                if self.nav.depth() > 1:
                    self.nav.pop()
                else:
                    self.nav.home()
            elif result:
                # A screen returning itself means "refresh"; don't stack duplicates.
                if not self.nav.is_current(result):
                    self.nav.push(result)

    @staticmethod
    def _normalize_nav_result(result: str | None) -> str | None:
        """Normalize common nav aliases/titles to canonical commands.

        Some prompts may return rendered labels such as "← Back" instead of
        the internal value "back".
        """
        if result is None:
            return None
        s = str(result).strip().lower()
        if not s:
            return None
        if s in {"back", "← back", "< back", "go back", "previous", "prev", "b"}:
            return "back"
        if s in {"home", "main", "main menu", "h"}:
            return "home"
        return str(result)


# Screen registry - maps screen IDs to handler functions
SCREENS: dict[str, Callable[[Router], str | None]] = {}


def register_screen(screen_id: str):
    """Decorator to register a screen function.

    Usage:
        @register_screen("main_menu")
        def show_main_menu(router: Router) -> str | None:
            ...
    """
    def decorator(fn: Callable[[Router], str | None]):
        SCREENS[screen_id] = fn
        return fn
    return decorator
