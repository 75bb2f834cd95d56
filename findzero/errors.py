from __future__ import annotations

from pathlib import Path


class FindZeroError(Exception):
    """Base class for file-level failures raised by a note store."""

    action = "Failed to process"

    def __init__(self, path: Path | str, cause: BaseException | str | None = None):
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"{self.action} {path}{detail}")


class ReadError(FindZeroError):
    """A note could not be read. Scans skip the file and continue."""

    action = "Failed to read"


class DeleteError(FindZeroError):
    """A note could not be deleted. The candidate stays in the review list."""

    action = "Failed to delete"
