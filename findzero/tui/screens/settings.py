"""Settings screen: read-only view of the effective configuration."""
from __future__ import annotations

import questionary
from rich.panel import Panel
from rich.table import Table

from ...classifier import normalize_whitespace
from ..components import BRAND_STYLE, nav_choices, render_breadcrumbs
from ..router import Router, register_screen


def settings_rows(settings) -> list[tuple[str, str]]:
    template = settings.FZ_JOURNAL_TEMPLATE
    preview = normalize_whitespace(template)
    if len(preview) > 60:
        preview = preview[:57] + "..."
    return [
        ("Vault", str(settings.FZ_VAULT_PATH)),
        ("Journal template", preview or "(not set)"),
        ("Template file", str(settings.FZ_JOURNAL_TEMPLATE_FILE or "(none)")),
        ("Debug output", "on" if settings.FZ_DEBUG_OUTPUT else "off"),
        ("Run at startup", "on" if settings.FZ_RUN_AT_STARTUP else "off"),
        ("Startup delay", f"{settings.FZ_STARTUP_DELAY_SECONDS:g}s"),
        ("Scan batch size", str(settings.FZ_SCAN_BATCH_SIZE)),
        ("Log dir", str(settings.FZ_LOG_DIR)),
        ("API", f"http://{settings.FZ_API_HOST}:{settings.FZ_API_PORT}"),
    ]


@register_screen("settings")
def show_settings(router: Router) -> str | None:
    router.console.clear()
    render_breadcrumbs(router)

    table = Table(title="[bold]Configuration[/bold]", show_header=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value", style="cyan")
    for key, value in settings_rows(router.settings):
        table.add_row(key, value)
    router.console.print(table)

    template = router.settings.FZ_JOURNAL_TEMPLATE
    if template.strip():
        router.console.print(Panel(template.rstrip(), title="Journal template", border_style="dim"))

    router.console.print("\n[dim]Settings are read from the environment and .env; edit .env to change them.[/dim]\n")

    action = questionary.select(
        "",
        choices=nav_choices(include_separator=False),
        style=BRAND_STYLE,
    ).ask()

    if action == "home":
        return "home"
    return "back"
