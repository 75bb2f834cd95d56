from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from findzero import cli
from findzero.settings import Settings


runner = CliRunner()


@pytest.fixture
def settings(vault: Path, tmp_path: Path, monkeypatch) -> Settings:
    s = Settings(FZ_VAULT_PATH=vault, FZ_LOG_DIR=tmp_path / "logs")
    monkeypatch.setattr(cli, "load_settings", lambda: s)
    return s


def test_scan_json_lists_blank_notes(settings):
    result = runner.invoke(cli.app, ["scan", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["state"] == "reviewing"
    assert payload["scanned"] == 3
    assert [c["identity"] for c in payload["candidates"]] == ["daily/2024-01-01.md", "empty.md"]


def test_find_alias_and_vault_override(settings, tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    (other / "x.md").write_text("Only a title", encoding="utf-8")

    result = runner.invoke(cli.app, ["find", "--vault", str(other), "--json"])

    assert result.exit_code == 0, result.output
    assert [c["identity"] for c in json.loads(result.output)["candidates"]] == ["x.md"]


def test_scan_table_output(settings):
    result = runner.invoke(cli.app, ["scan"])

    assert result.exit_code == 0, result.output
    assert "Found 2 blank notes." in result.output


def test_clean_is_dry_run_by_default(settings, vault):
    result = runner.invoke(cli.app, ["clean"])

    assert result.exit_code == 0, result.output
    assert "Nothing deleted" in result.output
    assert (vault / "empty.md").exists()


def test_clean_apply_yes_deletes(settings, vault):
    result = runner.invoke(cli.app, ["clean", "--apply", "--yes"])

    assert result.exit_code == 0, result.output
    assert "Deleted 2 files" in result.output
    assert not (vault / "empty.md").exists()
    assert not (vault / "daily" / "2024-01-01.md").exists()
    assert (vault / "real.md").exists()


def test_clean_apply_declined(settings, vault):
    result = runner.invoke(cli.app, ["clean", "--apply"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Aborted" in result.output
    assert (vault / "empty.md").exists()


def test_clean_with_nothing_to_delete(settings, vault):
    (vault / "empty.md").unlink()
    (vault / "daily" / "2024-01-01.md").unlink()

    result = runner.invoke(cli.app, ["clean", "--apply", "--yes"])

    assert result.exit_code == 0, result.output
    assert "No blank notes found in your vault." in result.output


def test_missing_vault_exits_nonzero(settings, tmp_path):
    result = runner.invoke(cli.app, ["scan", "--vault", str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert "vault not found" in result.output


def test_status_shows_configuration(settings):
    result = runner.invoke(cli.app, ["status"])

    assert result.exit_code == 0, result.output
    assert "Configuration" in result.output
    assert "8765" in result.output


def test_serve_passes_bind_to_uvicorn(settings, monkeypatch):
    calls = {}

    def fake_run(app, **kwargs):
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr("uvicorn.run", fake_run)

    result = runner.invoke(cli.app, ["serve", "--port", "9001"])

    assert result.exit_code == 0, result.output
    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 9001
    assert calls["log_config"] is None


def test_scan_accepts_home_relative_vault(tmp_path, monkeypatch):
    home = tmp_path / "home"
    (home / "notes").mkdir(parents=True)
    (home / "notes" / "x.md").write_text("Only a title", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("FZ_VAULT_PATH", "~/notes")
    monkeypatch.setenv("FZ_LOG_DIR", str(tmp_path / "logs"))

    result = runner.invoke(cli.app, ["scan", "--json"])

    assert result.exit_code == 0, result.output
    assert [c["identity"] for c in json.loads(result.output)["candidates"]] == ["x.md"]
