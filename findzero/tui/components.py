"""Reusable UI components for the TUI.

Everything here renders from values passed in; nothing keeps widget state.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import questionary
from questionary import Choice, Separator
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from rich.console import Console

    from ..settings import Settings
    from ..workflow import ReviewSession
    from .router import Router


# ═══════════════════════════════════════════════════════════════════════════════
# BRAND STYLING
# ═══════════════════════════════════════════════════════════════════════════════

BRAND_STYLE = questionary.Style([
    ("qmark", "fg:#00b4d8 bold"),         # Cyan accent
    ("question", "bold"),
    ("answer", "fg:#90e0ef bold"),
    ("highlighted", "fg:#00b4d8 bold"),
    ("pointer", "fg:#00b4d8 bold"),
    ("selected", "fg:#90e0ef"),
])

SELECTED_MARK = "●"
UNSELECTED_MARK = "○"


# ═══════════════════════════════════════════════════════════════════════════════
# NAVIGATION HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def nav_choices(include_separator: bool = True) -> list:
    """Standard Back/Home navigation choices."""
    choices: list = []
    if include_separator:
        choices.append(Separator())
    choices.extend([
        Choice(title="← Back", value="back"),
        Choice(title="Home", value="home"),
    ])
    return choices


def press_enter() -> None:
    Confirm.ask("[dim]Press Enter to continue[/dim]", default=True, show_default=False)


# ═══════════════════════════════════════════════════════════════════════════════
# BANNER & HEADER
# ═══════════════════════════════════════════════════════════════════════════════

_BANNER_ART = """\
[bold cyan]╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║     [white]findzero[/white]  ·  find & clean blank notes                   ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝[/bold cyan]"""


def render_welcome_banner(console: Console) -> None:
    console.print(_BANNER_ART)
    console.print()


def render_header(console: Console, settings: Settings) -> None:
    """Render a context bar with the vault and template status."""
    vault = settings.FZ_VAULT_PATH
    template_state = (
        "[cyan]set[/cyan]" if settings.FZ_JOURNAL_TEMPLATE.strip() else "[dim]not set[/dim]"
    )
    if vault.is_dir():
        content = (
            f"  [bold]Vault[/bold] [dim]{vault}[/dim]  "
            f"[bold]Template[/bold] {template_state}"
        )
    else:
        content = (
            f"  [yellow]Vault not found:[/yellow] {vault}  "
            f"[dim]→ Set FZ_VAULT_PATH in .env[/dim]"
        )

    console.print(Panel.fit(content, border_style="dim"))
    console.print()


def render_breadcrumbs(router: Router) -> None:
    router.console.print(f"[dim]{router.nav.breadcrumbs()}[/dim]\n")


def render_notices(console: Console, notices: list[str]) -> None:
    """Print queued transient notices, failures in red."""
    for message in notices:
        style = "red" if message.startswith("Failed") else "green"
        console.print(f"[{style}]•[/{style}] {message}")
    if notices:
        console.print()


# ═══════════════════════════════════════════════════════════════════════════════
# RESULT / ERROR PANELS
# ═══════════════════════════════════════════════════════════════════════════════

def render_result_panel(
    console: Console,
    message: str,
    stats: dict[str, str | int] | None = None,
    is_error: bool = False,
) -> None:
    """Render a success/failure outcome panel."""
    if is_error:
        icon = "✗"
        style = "red"
    else:
        icon = "✓"
        style = "green"

    content = f"[bold {style}]{icon} {message}[/bold {style}]"

    if stats:
        content += "\n\n"
        content += "\n".join(f"  {k}: [cyan]{v:,}[/cyan]" if isinstance(v, int) else f"  {k}: [cyan]{v}[/cyan]"
                            for k, v in stats.items())

    console.print(Panel.fit(content, title="Result" if not is_error else "Error"))
    console.print()


def render_error(
    console: Console,
    title: str,
    cause: str,
    action: str | None = None,
) -> None:
    """Render a friendly error panel.

    Args:
        console: Rich Console for output
        title: Error title
        cause: What caused the error
        action: Suggested action to resolve
    """
    content = f"[bold red]✗ {title}[/bold red]\n\n"
    content += f"[yellow]Cause:[/yellow] {cause}\n"

    if action:
        content += f"\n[dim]→ {action}[/dim]"

    console.print(Panel.fit(content, border_style="red", title="Error"))
    console.print()


def confirm_destructive_action(message: str, default: bool = False) -> bool:
    return Confirm.ask(f"[yellow]⚠[/yellow]  {message}", default=default)


# ═══════════════════════════════════════════════════════════════════════════════
# REVIEW LIST
# ═══════════════════════════════════════════════════════════════════════════════

def selection_mark(selected: bool) -> str:
    return SELECTED_MARK if selected else UNSELECTED_MARK


def describe_session(session: ReviewSession) -> str:
    """One-line summary shown above the review table."""
    if not session.candidates:
        if session.deleted:
            return "All blank notes have been deleted."
        return "No blank notes found in your vault."
    return (
        f"Found {len(session.candidates)} blank notes. "
        "Select notes and use batch delete, or delete individually."
    )


def delete_selected_label(session: ReviewSession) -> str:
    return f"Delete Selected ({session.selected_count})"


def build_review_table(session: ReviewSession) -> Table:
    table = Table(title="[bold]Blank Notes[/bold]", show_lines=False)
    table.add_column(selection_mark(session.all_selected), justify="center", width=3)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="bold", max_width=40)
    table.add_column("Path", style="dim", max_width=60)
    table.add_column("Body", justify="right", style="cyan")

    for i, candidate in enumerate(session.candidates, start=1):
        mark = Text(selection_mark(candidate.selected), style="cyan" if candidate.selected else "dim")
        table.add_row(
            mark,
            str(i),
            candidate.title or "(untitled)",
            candidate.identity,
            f"{candidate.content_length:,}",
        )
    return table


def render_review(console: Console, session: ReviewSession) -> None:
    """Render the review list from session state."""
    console.print(f"[bold]{describe_session(session)}[/bold]\n")
    if not session.candidates:
        return
    console.print(build_review_table(session))
    console.print(
        f"\n[dim]Scanned {session.scanned:,} files"
        + (f" · {len(session.failed_reads)} unreadable" if session.failed_reads else "")
        + f" · {delete_selected_label(session)}[/dim]\n"
    )
