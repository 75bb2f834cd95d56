"""Scan, review and delete blank notes.

The `Workflow` is the single writer of a `ReviewSession`. Hosts (TUI, CLI,
API) call its operations and re-render from `workflow.session`; they never
mutate candidates directly.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator

from .classifier import analyze, is_blank_analysis
from .errors import DeleteError, ReadError
from .settings import Settings
from .vault import NoteStore, get_store

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


class SessionState(str, Enum):
    SCANNING = "scanning"
    REVIEWING = "reviewing"
    DELETING = "deleting"
    EMPTY = "empty"


@dataclass
class Candidate:
    identity: str
    title: str
    content_length: int
    selected: bool = False
    handle: Any = field(default=None, repr=False, compare=False)


@dataclass
class ReviewSession:
    """In-memory state for one review. Discarded when the workflow is disposed."""

    template: str = ""
    candidates: list[Candidate] = field(default_factory=list)
    selected_count: int = 0
    # Last state applied by the select-all toggle (not the aggregate of items).
    select_all_intent: bool = False
    state: SessionState = SessionState.SCANNING

    # Scan statistics
    scanned: int = 0
    total: int = 0
    failed_reads: list[str] = field(default_factory=list)
    deleted: int = 0

    _index: dict[str, Candidate] = field(default_factory=dict, repr=False)

    def get(self, identity: str) -> Candidate:
        """Return the candidate for `identity`; raises KeyError if absent."""
        return self._index[identity]

    def __contains__(self, identity: object) -> bool:
        return identity in self._index

    def selected(self) -> list[Candidate]:
        return [c for c in self.candidates if c.selected]

    def recount_selected(self) -> int:
        """Count selected candidates by full scan (ignores `selected_count`)."""
        return sum(1 for c in self.candidates if c.selected)

    @property
    def all_selected(self) -> bool:
        """True when every candidate is selected; drives the select-all mark."""
        return bool(self.candidates) and self.selected_count == len(self.candidates)

    def is_consistent(self) -> bool:
        return self.selected_count == self.recount_selected() and len(self._index) == len(self.candidates)

    def _append(self, candidate: Candidate) -> None:
        self.candidates.append(candidate)
        self._index[candidate.identity] = candidate

    def _remove(self, identities: set[str]) -> None:
        if not identities:
            return
        self.deleted += len(identities)
        self.candidates = [c for c in self.candidates if c.identity not in identities]
        for identity in identities:
            self._index.pop(identity, None)

    def _reset(self) -> None:
        self.candidates = []
        self._index = {}
        self.selected_count = 0
        self.select_all_intent = False
        self.scanned = 0
        self.total = 0
        self.failed_reads = []
        self.deleted = 0


@dataclass(frozen=True)
class ScanProgress:
    processed: int
    total: int
    found: int
    failed: int = 0

    @property
    def done(self) -> bool:
        return self.processed >= self.total

    def describe(self) -> str:
        return f"Read {self.processed} of {self.total} files... Found {self.found} blank notes"


@dataclass(frozen=True)
class DeleteOutcome:
    identity: str
    deleted: bool
    reason: str | None = None

    @classmethod
    def ok(cls, identity: str) -> DeleteOutcome:
        return cls(identity=identity, deleted=True)

    @classmethod
    def failed(cls, identity: str, reason: str) -> DeleteOutcome:
        return cls(identity=identity, deleted=False, reason=reason)


@dataclass(frozen=True)
class BatchDeleteResult:
    outcomes: tuple[DeleteOutcome, ...] = ()

    @property
    def deleted_count(self) -> int:
        return sum(1 for o in self.outcomes if o.deleted)

    @property
    def failed(self) -> list[DeleteOutcome]:
        return [o for o in self.outcomes if not o.deleted]


class Workflow:
    """Scan-review-delete state machine over a `NoteStore`."""

    def __init__(
        self,
        store: NoteStore,
        template: str = "",
        *,
        notify: Notifier | None = None,
        batch_size: int = 10,
        debug: bool = False,
    ):
        self.store = store
        self.notify: Notifier = notify or (lambda message: logger.info("%s", message))
        self.batch_size = max(1, int(batch_size))
        self.debug = debug
        self.session = ReviewSession(template=template or "")

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def iter_scan(self) -> Iterator[ScanProgress]:
        """Scan the store, yielding progress every `batch_size` files and at the end.

        Each yield is a point where the host may redraw. Files that fail to
        read are logged and skipped but still count as processed.
        """
        session = self.session
        session._reset()
        session.state = SessionState.SCANNING

        files = list(self.store.list_markdown_files())
        session.total = len(files)
        logger.info("Scanning %d markdown files", session.total)

        for handle in files:
            try:
                self._classify(handle)
            except ReadError as e:
                session.failed_reads.append(str(e.path))
                logger.warning("Error processing file %s: %s", e.path, e.cause)
            finally:
                session.scanned += 1

            if session.scanned % self.batch_size == 0 and session.scanned < session.total:
                yield self._progress()

        self._settle()
        logger.info(
            "Scan finished: %d blank of %d files (%d unreadable)",
            len(session.candidates),
            session.total,
            len(session.failed_reads),
        )
        yield self._progress()

    def scan(self, progress: Callable[[ScanProgress], None] | None = None) -> ReviewSession:
        for step in self.iter_scan():
            if progress is not None:
                progress(step)
        return self.session

    def _classify(self, handle: Any) -> None:
        content = self.store.read_file(handle)
        analysis = analyze(content, fallback_title=self.store.basename(handle))
        if is_blank_analysis(analysis, content, self.session.template, debug=self.debug):
            self.session._append(
                Candidate(
                    identity=self.store.identity(handle),
                    title=analysis.title,
                    content_length=analysis.content_length,
                    handle=handle,
                )
            )

    def _progress(self) -> ScanProgress:
        s = self.session
        return ScanProgress(
            processed=s.scanned,
            total=s.total,
            found=len(s.candidates),
            failed=len(s.failed_reads),
        )

    def _settle(self) -> None:
        self.session.state = SessionState.REVIEWING if self.session.candidates else SessionState.EMPTY

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle_selection(self, identity: str) -> bool:
        """Flip one candidate's selection and return its new state."""
        candidate = self.session.get(identity)
        candidate.selected = not candidate.selected
        self.session.selected_count += 1 if candidate.selected else -1
        return candidate.selected

    def select_all(self, state: bool) -> None:
        session = self.session
        for candidate in session.candidates:
            candidate.selected = state
        session.selected_count = len(session.candidates) if state else 0
        session.select_all_intent = state

    def toggle_select_all(self) -> bool:
        """Apply the opposite of the last select-all, ignoring individual toggles."""
        new_state = not self.session.select_all_intent
        self.select_all(new_state)
        return new_state

    def recount_selected(self) -> int:
        return self.session.recount_selected()

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def _delete(self, candidate: Candidate) -> DeleteOutcome:
        try:
            self.store.delete_file(candidate.handle)
        except DeleteError as e:
            logger.warning("Delete failed for %s: %s", candidate.identity, e.cause)
            self.notify(f"Failed to delete {candidate.identity}: {e.cause}")
            return DeleteOutcome.failed(candidate.identity, str(e.cause))
        return DeleteOutcome.ok(candidate.identity)

    def delete_one(self, identity: str) -> DeleteOutcome:
        candidate = self.session.get(identity)
        outcome = self._delete(candidate)
        if outcome.deleted:
            if candidate.selected:
                self.session.selected_count -= 1
            self.session._remove({identity})
            self.notify(f"Deleted {identity}")
            self._settle()
        return outcome

    def delete_selected(self) -> BatchDeleteResult:
        session = self.session
        if session.selected_count == 0:
            return BatchDeleteResult()

        session.state = SessionState.DELETING
        outcomes: list[DeleteOutcome] = []
        try:
            for candidate in session.selected():
                outcomes.append(self._delete(candidate))
        finally:
            # Drop what was deleted even if the store raised midway.
            session._remove({o.identity for o in outcomes if o.deleted})
            # Failed items keep their selection, so the count is derived, not zeroed.
            session.selected_count = session.recount_selected()
            self._settle()

        result = BatchDeleteResult(outcomes=tuple(outcomes))
        self.notify(f"Deleted {result.deleted_count} files")
        logger.info("Batch delete: %d deleted, %d failed", result.deleted_count, len(result.failed))
        return result

    # ------------------------------------------------------------------
    # Presentation pass-through
    # ------------------------------------------------------------------

    def open(self, identity: str) -> None:
        self.store.open_file(self.session.get(identity).handle, new_view=True)

    def open_in_place(self, identity: str) -> None:
        self.store.open_file(self.session.get(identity).handle, new_view=False)


def initialize(
    settings: Settings,
    store: NoteStore | None = None,
    notify: Notifier | None = None,
) -> Workflow:
    """Open a review workflow configured from `settings`."""
    return Workflow(
        store if store is not None else get_store(settings),
        settings.FZ_JOURNAL_TEMPLATE,
        notify=notify,
        batch_size=settings.FZ_SCAN_BATCH_SIZE,
        debug=settings.FZ_DEBUG_OUTPUT,
    )


def dispose(workflow: Workflow) -> None:
    """Drop all review state; nothing is persisted."""
    workflow.session._reset()
    workflow.session.state = SessionState.EMPTY
