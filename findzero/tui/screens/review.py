"""Blank-note review screen: scan, select, delete, open."""
from __future__ import annotations

import logging

import questionary
from questionary import Choice, Separator
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from ...workflow import SessionState, Workflow, initialize
from ..components import (
    BRAND_STYLE,
    confirm_destructive_action,
    delete_selected_label,
    nav_choices,
    press_enter,
    render_breadcrumbs,
    render_error,
    render_notices,
    render_result_panel,
    render_review,
    selection_mark,
)
from ..router import Router, register_screen

logger = logging.getLogger(__name__)


def _run_scan(router: Router, workflow: Workflow) -> None:
    """Drive the scan generator, redrawing the progress bar at each yield."""
    with Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        console=router.console,
        transient=True,
    ) as progress:
        task = progress.add_task("Scanning for blank notes...", total=None)
        for step in workflow.iter_scan():
            progress.update(task, total=step.total, completed=step.processed, description=step.describe())


def _open_workflow(router: Router) -> Workflow | None:
    if router.state.workflow is not None:
        return router.state.workflow

    vault = router.settings.FZ_VAULT_PATH
    if not vault.is_dir():
        render_error(
            router.console,
            "Vault not found",
            f"{vault} is not a directory",
            action="Set FZ_VAULT_PATH in .env and restart",
        )
        return None

    workflow = initialize(router.settings, notify=router.state.notify)
    router.state.workflow = workflow
    _run_scan(router, workflow)
    return workflow


def review_actions(workflow: Workflow) -> list:
    """Build the action menu for the current session state."""
    session = workflow.session
    choices: list = []
    if session.state == SessionState.REVIEWING:
        choices.extend([
            Choice(title="Select notes…", value="select"),
            Choice(
                title=f"{selection_mark(session.all_selected)} Select All",
                value="select_all",
            ),
            Choice(
                title=delete_selected_label(session),
                value="delete_selected",
                disabled="nothing selected" if session.selected_count == 0 else None,
            ),
            Choice(title="Delete one…", value="delete_one"),
            Separator(),
            Choice(title="Open…", value="open"),
            Choice(title="Open in place…", value="open_in_place"),
        ])
    choices.append(Choice(title="Rescan", value="rescan"))
    choices.extend(nav_choices())
    return choices


def _pick_candidate(workflow: Workflow, prompt: str) -> str | None:
    choices = [
        Choice(title=f"{c.title or '(untitled)'}  ({c.identity})", value=c.identity)
        for c in workflow.session.candidates
    ]
    choices.append(Choice(title="Cancel", value="__cancel__"))
    picked = questionary.select(prompt, choices=choices, style=BRAND_STYLE).ask()
    if picked in (None, "__cancel__"):
        return None
    return picked


def apply_checkbox_selection(workflow: Workflow, checked: list[str]) -> int:
    """Toggle exactly the candidates whose checkbox differs from their state.

    Returns the number of toggles applied.
    """
    wanted = set(checked)
    toggled = 0
    for candidate in list(workflow.session.candidates):
        if candidate.selected != (candidate.identity in wanted):
            workflow.toggle_selection(candidate.identity)
            toggled += 1
    return toggled


def _select_notes(workflow: Workflow) -> None:
    choices = [
        Choice(
            title=f"{c.title or '(untitled)'}  ({c.identity})",
            value=c.identity,
            checked=c.selected,
        )
        for c in workflow.session.candidates
    ]
    checked = questionary.checkbox(
        "Toggle notes (space to toggle, enter to confirm):",
        choices=choices,
        style=BRAND_STYLE,
    ).ask()
    if checked is None:
        return
    apply_checkbox_selection(workflow, checked)


def _delete_selected(router: Router, workflow: Workflow) -> None:
    count = workflow.session.selected_count
    if not confirm_destructive_action(f"Delete {count} selected note(s)? This cannot be undone."):
        return
    result = workflow.delete_selected()
    render_notices(router.console, router.state.drain_notices())
    render_result_panel(
        router.console,
        f"Deleted {result.deleted_count} files",
        stats={"Deleted": result.deleted_count, "Failed": len(result.failed)},
        is_error=bool(result.failed) and result.deleted_count == 0,
    )
    press_enter()


def _open(router: Router, workflow: Workflow, identity: str, in_place: bool) -> None:
    try:
        if in_place:
            workflow.open_in_place(identity)
        else:
            workflow.open(identity)
    except Exception as e:
        logger.warning("Open failed for %s: %s", identity, e)
        render_error(router.console, "Could not open note", str(e))
        press_enter()


@register_screen("review")
def show_review(router: Router) -> str | None:
    """Review blank notes and delete them individually or in batch."""
    router.console.clear()
    render_breadcrumbs(router)

    workflow = _open_workflow(router)
    if workflow is None:
        press_enter()
        return "back"

    render_notices(router.console, router.state.drain_notices())
    render_review(router.console, workflow.session)

    action = questionary.select(
        "What next?",
        choices=review_actions(workflow),
        style=BRAND_STYLE,
    ).ask()

    if action is None or action in ("back", "home"):
        router.state.close_workflow()
        return action or "back"

    if action == "select":
        _select_notes(workflow)
    elif action == "select_all":
        workflow.toggle_select_all()
    elif action == "delete_selected":
        _delete_selected(router, workflow)
    elif action == "delete_one":
        identity = _pick_candidate(workflow, "Delete which note?")
        if identity is not None:
            workflow.delete_one(identity)
    elif action in ("open", "open_in_place"):
        identity = _pick_candidate(workflow, "Open which note?")
        if identity is not None:
            _open(router, workflow, identity, in_place=action == "open_in_place")
    elif action == "rescan":
        _run_scan(router, workflow)

    return "review"
