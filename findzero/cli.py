from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm

from .logging import setup_logging
from .settings import Settings, load_settings
from .tui.components import build_review_table, describe_session
from .workflow import Workflow, dispose, initialize

app = typer.Typer(
    add_completion=False,
    help="findzero: find and delete blank notes in a markdown vault",
    rich_markup_mode="rich",
)
console = Console()


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _load(vault: Optional[Path] = None, *, log_to_console: bool = False) -> Settings:
    s = load_settings()
    if vault is not None:
        s.FZ_VAULT_PATH = vault.expanduser()
    setup_logging(s, console=log_to_console)
    return s


def _require_vault(s: Settings) -> None:
    if not s.FZ_VAULT_PATH.is_dir():
        console.print(f"[red]Error:[/red] vault not found: {s.FZ_VAULT_PATH}")
        console.print("[dim]Set FZ_VAULT_PATH in .env or pass --vault.[/dim]")
        raise typer.Exit(code=1)


def _notify(message: str) -> None:
    style = "red" if message.startswith("Failed") else "green"
    console.print(f"[{style}]•[/{style}] {message}")


def _scan_with_progress(workflow: Workflow, show: bool = True) -> None:
    if not show:
        workflow.scan()
        return
    with Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Scanning for blank notes...", total=None)
        for step in workflow.iter_scan():
            progress.update(task, total=step.total, completed=step.processed, description=step.describe())


def _session_payload(workflow: Workflow) -> dict:
    s = workflow.session
    return {
        "state": s.state.value,
        "scanned": s.scanned,
        "total": s.total,
        "failed_reads": list(s.failed_reads),
        "candidates": [
            {"identity": c.identity, "title": c.title, "content_length": c.content_length}
            for c in s.candidates
        ],
    }


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN CALLBACK
# ═══════════════════════════════════════════════════════════════════════════════

@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    menu: bool = typer.Option(
        False,
        "--menu",
        help="Launch the interactive menu (same as running with no command)",
    ),
):
    """
    [bold]findzero[/bold]: find and delete blank notes in a markdown vault.

    [dim]Run without arguments to launch the interactive menu.[/dim]

    [bold]Quick Commands:[/bold]
      findzero scan             List blank notes
      findzero clean --apply    Delete every blank note
      findzero status           Show configuration
      findzero serve            Start the local API
    """
    if ctx.invoked_subcommand is None or menu:
        _interactive_menu()
        raise typer.Exit(code=0)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════════

@app.command("status", help="[bold cyan]S[/bold cyan]how configuration")
def status():
    """Show the effective configuration."""
    s = _load()
    template = s.FZ_JOURNAL_TEMPLATE.strip()
    console.print(Panel.fit(
        "\n".join([
            f"[bold]Vault:[/bold]          {s.FZ_VAULT_PATH}"
            + ("" if s.FZ_VAULT_PATH.is_dir() else "  [red](missing)[/red]"),
            f"[bold]Template:[/bold]       {'[cyan]set[/cyan]' if template else '[dim](not set)[/dim]'}",
            f"[bold]Template file:[/bold]  {s.FZ_JOURNAL_TEMPLATE_FILE or '[dim](none)[/dim]'}",
            f"[bold]Debug output:[/bold]   {s.FZ_DEBUG_OUTPUT}",
            f"[bold]Run at startup:[/bold] {s.FZ_RUN_AT_STARTUP}",
            f"[bold]API:[/bold]            http://{s.FZ_API_HOST}:{s.FZ_API_PORT}",
        ]),
        title="[bold]Configuration[/bold]",
    ))


@app.command("scan", help="[bold cyan]F[/bold cyan]ind blank notes (read-only)")
@app.command("find", hidden=True)  # Alias
def scan(
    vault: Optional[Path] = typer.Option(None, "--vault", "-v", help="Vault root (default: FZ_VAULT_PATH)"),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List blank notes without deleting anything."""
    s = _load(vault)
    _require_vault(s)

    workflow = initialize(s, notify=_notify)
    _scan_with_progress(workflow, show=not json_out)

    if json_out:
        typer.echo(json.dumps(_session_payload(workflow), indent=2))
        return

    session = workflow.session
    console.print(f"[bold]{describe_session(session)}[/bold]")
    if session.candidates:
        console.print(build_review_table(session))
    if session.failed_reads:
        console.print(f"[yellow]{len(session.failed_reads)} file(s) could not be read; see the log.[/yellow]")
    dispose(workflow)


@app.command("clean", help="[bold cyan]D[/bold cyan]elete every blank note (dry-run by default)")
def clean(
    vault: Optional[Path] = typer.Option(None, "--vault", "-v", help="Vault root (default: FZ_VAULT_PATH)"),
    apply: bool = typer.Option(False, "--apply", help="Actually delete files (default is dry-run)."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
):
    """Scan, then delete every blank note in one batch.

    Deletion is permanent; by default only the list is printed.
    """
    s = _load(vault)
    _require_vault(s)

    workflow = initialize(s, notify=_notify)
    _scan_with_progress(workflow)
    session = workflow.session

    console.print(f"[bold]{describe_session(session)}[/bold]")
    if not session.candidates:
        return
    console.print(build_review_table(session))

    if not apply:
        console.print("\n[dim]Nothing deleted. Re-run with --apply to delete the notes above.[/dim]")
        return

    if not yes and not Confirm.ask(
        f"[yellow]⚠[/yellow]  Delete {len(session.candidates)} note(s)? This cannot be undone.",
        default=False,
    ):
        console.print("[dim]Aborted.[/dim]")
        return

    workflow.select_all(True)
    result = workflow.delete_selected()
    if result.failed:
        console.print(f"[red]{len(result.failed)} note(s) could not be deleted.[/red]")
        raise typer.Exit(code=1)


@app.command("serve", help="[bold cyan]R[/bold cyan]un the local API server")
@app.command("run", hidden=True)  # Alias
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind"),
    port: Optional[int] = typer.Option(None, help="Port to bind"),
    vault: Optional[Path] = typer.Option(None, "--vault", "-v", help="Vault root (default: FZ_VAULT_PATH)"),
):
    """Serve the review workflow over HTTP for editor plugins."""
    import uvicorn

    from .api import create_app

    s = _load(vault, log_to_console=True)
    bind_host = host or s.FZ_API_HOST
    bind_port = port or s.FZ_API_PORT
    console.print(f"[bold cyan]findzero API[/bold cyan] → http://{bind_host}:{bind_port}")
    uvicorn.run(create_app(s), host=bind_host, port=bind_port, log_config=None)


# ═══════════════════════════════════════════════════════════════════════════════
# INTERACTIVE MENU
# ═══════════════════════════════════════════════════════════════════════════════

def _interactive_menu() -> None:
    """Launch the TUI with screen-based navigation."""
    from .tui.navigator import Navigator
    from .tui.router import Router
    from .tui.state import UIState
    # Import screens to register them
    from .tui import screens  # noqa: F401

    settings = _load()
    router = Router(
        console=console,
        settings=settings,
        state=UIState(),
        nav=Navigator(),
    )

    try:
        router.run()
    except KeyboardInterrupt:
        router.state.close_workflow()
        console.print("\n[dim]Interrupted. Goodbye![/]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
