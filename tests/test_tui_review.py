"""Tests for the review screen with prompts patched out."""
from __future__ import annotations

from io import StringIO
from types import SimpleNamespace

import pytest
from rich.console import Console

from findzero.settings import Settings
from findzero.tui.navigator import Navigator
from findzero.tui.router import Router
from findzero.tui.screens import review
from findzero.tui.state import UIState
from findzero.workflow import Workflow


class _Answers:
    """Replays canned answers for questionary prompts."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, message, **kwargs):
        self.prompts.append(message)
        return SimpleNamespace(ask=lambda: self.answers.pop(0))


@pytest.fixture
def router(vault, tmp_path):
    settings = Settings(FZ_VAULT_PATH=vault, FZ_LOG_DIR=tmp_path / "logs")
    return Router(
        console=Console(file=StringIO(), width=120),
        settings=settings,
        state=UIState(),
        nav=Navigator(),
        sleep=lambda _s: None,
    )


@pytest.fixture(autouse=True)
def _no_enter(monkeypatch):
    monkeypatch.setattr(review, "press_enter", lambda: None)


def test_apply_checkbox_selection_toggles_only_differences(make_store):
    wf = Workflow(make_store({"a.md": "A\n", "b.md": "B\n", "c.md": "C\n"}))
    wf.scan()
    wf.toggle_selection("a.md")

    toggled = review.apply_checkbox_selection(wf, ["b.md", "c.md"])

    assert toggled == 3
    assert [c.selected for c in wf.session.candidates] == [False, True, True]
    assert wf.session.selected_count == 2


def test_show_review_scans_vault_once(router, monkeypatch):
    answers = _Answers(["select_all", "rescan"])
    monkeypatch.setattr(review.questionary, "select", answers)

    assert review.show_review(router) == "review"
    workflow = router.state.workflow
    assert [c.identity for c in workflow.session.candidates] == ["daily/2024-01-01.md", "empty.md"]
    assert workflow.session.selected_count == 2

    assert review.show_review(router) == "review"
    assert router.state.workflow is workflow
    # Rescan resets selections.
    assert workflow.session.selected_count == 0


def test_show_review_batch_delete(router, vault, monkeypatch):
    monkeypatch.setattr(review.questionary, "select", _Answers(["select_all", "delete_selected"]))
    monkeypatch.setattr(review, "confirm_destructive_action", lambda message: True)

    review.show_review(router)
    review.show_review(router)

    assert not (vault / "empty.md").exists()
    assert not (vault / "daily" / "2024-01-01.md").exists()
    assert (vault / "real.md").exists()
    assert router.state.workflow.session.candidates == []
    assert "Deleted 2 files" in router.console.file.getvalue()


def test_show_review_declined_delete_keeps_files(router, vault, monkeypatch):
    monkeypatch.setattr(review.questionary, "select", _Answers(["select_all", "delete_selected"]))
    monkeypatch.setattr(review, "confirm_destructive_action", lambda message: False)

    review.show_review(router)
    review.show_review(router)

    assert (vault / "empty.md").exists()
    assert router.state.workflow.session.selected_count == 2


def test_show_review_delete_one(router, vault, monkeypatch):
    monkeypatch.setattr(review.questionary, "select", _Answers(["delete_one", "empty.md"]))

    review.show_review(router)

    assert not (vault / "empty.md").exists()
    assert [c.identity for c in router.state.workflow.session.candidates] == ["daily/2024-01-01.md"]
    assert router.state.notices == ["Deleted empty.md"]


def test_show_review_open_in_place(router, monkeypatch):
    opened = []
    monkeypatch.setattr(review.questionary, "select", _Answers(["open_in_place", "empty.md"]))
    monkeypatch.setattr("findzero.vault.typer.edit", lambda **kw: opened.append(kw["filename"]))

    review.show_review(router)

    assert len(opened) == 1
    assert opened[0].endswith("empty.md")


def test_show_review_back_disposes_workflow(router, monkeypatch):
    monkeypatch.setattr(review.questionary, "select", _Answers(["back"]))

    assert review.show_review(router) == "back"
    assert router.state.workflow is None


def test_show_review_missing_vault(router, tmp_path):
    router.settings = Settings(FZ_VAULT_PATH=tmp_path / "missing", FZ_LOG_DIR=tmp_path / "logs")

    assert review.show_review(router) == "back"
    assert router.state.workflow is None
    assert "Vault not found" in router.console.file.getvalue()
