from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

import typer

from .errors import DeleteError, ReadError
from .settings import Settings

logger = logging.getLogger(__name__)

# Folders the note app keeps for itself; never offered for cleanup.
_SKIP_DIRS = {".obsidian", ".trash", ".git"}


class NoteStore(Protocol):
    """Host file storage as seen by the review workflow."""

    def list_markdown_files(self) -> list[Any]: ...

    def read_file(self, handle: Any) -> str: ...

    def delete_file(self, handle: Any) -> None: ...

    def open_file(self, handle: Any, new_view: bool) -> None: ...

    def basename(self, handle: Any) -> str: ...

    def identity(self, handle: Any) -> str: ...


class FileSystemVault:
    """A vault backed by a plain directory of `.md` files."""

    def __init__(self, root: Path | str):
        self.root = Path(root).expanduser()

    def _is_hidden(self, path: Path) -> bool:
        rel = path.relative_to(self.root)
        return any(part in _SKIP_DIRS or part.startswith(".") for part in rel.parts[:-1])

    def list_markdown_files(self) -> list[Path]:
        if not self.root.is_dir():
            return []
        files = [p for p in self.root.rglob("*.md") if p.is_file() and not self._is_hidden(p)]
        return sorted(files, key=lambda p: p.relative_to(self.root).as_posix())

    def read_file(self, handle: Path) -> str:
        try:
            return handle.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(self.identity(handle), e) from e

    def delete_file(self, handle: Path) -> None:
        try:
            handle.unlink()
        except OSError as e:
            raise DeleteError(self.identity(handle), e) from e
        logger.info("Deleted note: %s", handle)

    def open_file(self, handle: Path, new_view: bool) -> None:
        # A new view is the desktop's default app; in place is $EDITOR in this terminal.
        if new_view:
            typer.launch(str(handle))
        else:
            typer.edit(filename=str(handle))

    def basename(self, handle: Path) -> str:
        return handle.stem

    def identity(self, handle: Path) -> str:
        try:
            return handle.relative_to(self.root).as_posix()
        except ValueError:
            return handle.as_posix()


def get_store(settings: Settings) -> NoteStore:
    return FileSystemVault(settings.FZ_VAULT_PATH)
