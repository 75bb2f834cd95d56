from __future__ import annotations

import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler

import pytest


def _ensure_project_root_on_path() -> None:
    # When running via the venv's pytest entrypoint, the CWD is not guaranteed to
    # be on sys.path. Ensure the repository root (containing `findzero/`) is importable.
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_path()

from findzero.errors import DeleteError, ReadError  # noqa: E402


class FakeStore:
    """In-memory note store. Handles are the relative paths themselves."""

    def __init__(self, files: dict[str, str], *, unreadable=(), undeletable=()):
        self.files = dict(files)
        self.unreadable = set(unreadable)
        self.undeletable = set(undeletable)
        self.deleted: list[str] = []
        self.opened: list[tuple[str, bool]] = []

    def list_markdown_files(self) -> list[str]:
        return list(self.files)

    def read_file(self, handle: str) -> str:
        if handle in self.unreadable:
            raise ReadError(handle, "permission denied")
        return self.files[handle]

    def delete_file(self, handle: str) -> None:
        if handle in self.undeletable:
            raise DeleteError(handle, "file is locked")
        del self.files[handle]
        self.deleted.append(handle)

    def open_file(self, handle: str, new_view: bool) -> None:
        self.opened.append((handle, new_view))

    def basename(self, handle: str) -> str:
        return handle.rsplit("/", 1)[-1].removesuffix(".md")

    def identity(self, handle: str) -> str:
        return handle


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """setup_logging() installs root handlers; drop them after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, TimedRotatingFileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def vault(tmp_path):
    """A small on-disk vault with two blank notes and one real note."""
    root = tmp_path / "vault"
    (root / "daily").mkdir(parents=True)
    (root / ".obsidian").mkdir()
    (root / "empty.md").write_text("Empty title\n", encoding="utf-8")
    (root / "daily" / "2024-01-01.md").write_text("2024-01-01\n\n   \n", encoding="utf-8")
    (root / "real.md").write_text("Real\nSome actual thoughts.\n", encoding="utf-8")
    (root / ".obsidian" / "workspace.md").write_text("", encoding="utf-8")
    (root / "image.png").write_bytes(b"\x89PNG")
    return root
