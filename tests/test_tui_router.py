"""Unit tests for Router class."""
from __future__ import annotations

from io import StringIO
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from findzero.tui.navigator import Navigator
from findzero.tui.router import SCREENS, Router, register_screen
from findzero.tui.state import UIState


@pytest.fixture
def mock_settings():
    settings = MagicMock()
    settings.FZ_RUN_AT_STARTUP = False
    settings.FZ_STARTUP_DELAY_SECONDS = 1.5
    return settings


@pytest.fixture
def router_components(mock_settings):
    sleeps: list[float] = []
    router = Router(
        console=Console(file=StringIO()),
        settings=mock_settings,
        state=UIState(),
        nav=Navigator(),
        sleep=sleeps.append,
    )
    return router, sleeps


def test_register_screen_decorator(monkeypatch):
    monkeypatch.setattr("findzero.tui.router.SCREENS", {})
    from findzero.tui import router as router_mod

    @register_screen("test_screen")
    def test_screen_fn(router):
        return "exit"

    assert router_mod.SCREENS["test_screen"] is test_screen_fn


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, None),
        ("", None),
        ("← Back", "back"),
        ("Main Menu", "home"),
        ("review", "review"),
    ],
)
def test_normalize_nav_result(raw, expected):
    assert Router._normalize_nav_result(raw) == expected


def test_startup_trigger_disabled(router_components):
    router, sleeps = router_components

    assert router.apply_startup_trigger() is False
    assert router.nav.current() == "main_menu"
    assert sleeps == []


def test_startup_trigger_fires_once_after_delay(router_components, mock_settings):
    router, sleeps = router_components
    mock_settings.FZ_RUN_AT_STARTUP = True

    assert router.apply_startup_trigger() is True
    assert router.apply_startup_trigger() is False

    assert sleeps == [1.5]
    assert router.nav.stack == ["main_menu", "review"]


def test_run_dispatches_until_exit(router_components, monkeypatch):
    router, _ = router_components
    results = iter(["review", "exit"])
    monkeypatch.setitem(SCREENS, "main_menu", lambda r: next(results))
    monkeypatch.setitem(SCREENS, "review", lambda r: "back")

    router.run()

    assert router.state.session_history == ["main_menu", "review", "main_menu"]


def test_run_refresh_does_not_stack_duplicates(router_components, monkeypatch):
    router, _ = router_components
    results = iter(["review", "review", "exit"])
    monkeypatch.setitem(SCREENS, "main_menu", lambda r: "review")
    monkeypatch.setitem(SCREENS, "review", lambda r: next(results))

    router.run()

    assert router.nav.stack == ["main_menu", "review"]


def test_run_recovers_from_unknown_screen(router_components, monkeypatch):
    router, _ = router_components
    router.nav.push("nowhere")
    monkeypatch.setitem(SCREENS, "main_menu", lambda r: "exit")

    router.run()

    assert router.state.session_history == ["nowhere", "main_menu"]
    assert "Unknown screen 'nowhere'" in router.console.file.getvalue()


def test_run_closes_workflow_on_exit(router_components, monkeypatch, make_store):
    from findzero.workflow import Workflow

    router, _ = router_components
    router.state.workflow = Workflow(make_store({}))
    monkeypatch.setitem(SCREENS, "main_menu", lambda r: "exit")

    router.run()

    assert router.state.workflow is None
