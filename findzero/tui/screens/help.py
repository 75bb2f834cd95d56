"""Help and shortcuts screen."""
from __future__ import annotations

import questionary
from rich.panel import Panel

from ..components import BRAND_STYLE, nav_choices, render_breadcrumbs
from ..router import Router, register_screen

HELP_TEXT = """[bold]Navigation[/bold]
  ↑/↓       Navigate menus
  Space     Toggle a note in "Select notes…"
  Enter     Select option
  Ctrl+C    Back to the main menu

[bold]What counts as blank[/bold]
  • Nothing after the first (title) line
  • Only whitespace after the title line
  • The whole note equals FZ_JOURNAL_TEMPLATE, ignoring whitespace layout

[bold]Review actions[/bold]
  Select All         Flips between select-all and deselect-all
  Delete Selected    Deletes every selected note; failures stay selected
  Delete one…        Deletes a single note immediately
  Open / in place    Default app, or $EDITOR in this terminal

[bold]Command Line Usage[/bold]
  [cyan]findzero[/cyan]                  Interactive TUI
  [cyan]findzero scan[/cyan]             List blank notes
  [cyan]findzero clean --apply[/cyan]    Delete every blank note
  [cyan]findzero status[/cyan]           Show configuration
  [cyan]findzero serve[/cyan]            Start the local API

[dim]Deleted notes are not moved to a trash folder.[/dim]
"""


@register_screen("help")
def show_help(router: Router) -> str | None:
    """Help screen with keyboard shortcuts and workflow overview."""
    router.console.clear()
    render_breadcrumbs(router)

    router.console.print(Panel.fit(HELP_TEXT, title="Help", border_style="cyan"))
    router.console.print()

    action = questionary.select(
        "",
        choices=nav_choices(include_separator=False),
        style=BRAND_STYLE,
    ).ask()

    if action == "home":
        return "home"
    return "back"
