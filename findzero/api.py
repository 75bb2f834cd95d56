from __future__ import annotations

import logging
import threading
from collections import deque

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from . import __version__
from .settings import Settings
from .vault import NoteStore
from .workflow import BatchDeleteResult, Workflow, initialize

_LOG = logging.getLogger("findzero.api")

# Notices kept for GET /session; older ones drop off.
_MAX_NOTICES = 50


class SelectAllIn(BaseModel):
    state: bool


class OpenIn(BaseModel):
    new_view: bool = True


def _candidate_payload(c) -> dict:
    return {
        "identity": c.identity,
        "title": c.title,
        "content_length": c.content_length,
        "selected": c.selected,
    }


def _batch_payload(result: BatchDeleteResult) -> dict:
    return {
        "deleted_count": result.deleted_count,
        "outcomes": [
            {"identity": o.identity, "deleted": o.deleted, "reason": o.reason}
            for o in result.outcomes
        ],
    }


def create_app(settings: Settings, store: NoteStore | None = None) -> FastAPI:
    """Build the API around a single review workflow.

    The app owns one `Workflow`. Sync endpoints run on a threadpool, so every
    read or write of the session holds `lock`; the workflow stays the single
    writer even when clients overlap.
    """
    app = FastAPI(title="findzero API", version=__version__)

    notices: deque[str] = deque(maxlen=_MAX_NOTICES)
    workflow: Workflow = initialize(settings, store=store, notify=notices.append)
    lock = threading.Lock()

    if settings.FZ_API_CORS_ALLOW_ALL:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _session_payload() -> dict:
        s = workflow.session
        return {
            "state": s.state.value,
            "scanned": s.scanned,
            "total": s.total,
            "failed_reads": list(s.failed_reads),
            "selected_count": s.selected_count,
            "select_all_intent": s.select_all_intent,
            "candidates": [_candidate_payload(c) for c in s.candidates],
            "notices": list(notices),
        }

    def _require(identity: str) -> None:
        if identity not in workflow.session:
            raise HTTPException(status_code=404, detail=f"Not a candidate: {identity}")

    @app.get("/health")
    def health():
        return {
            "ok": True,
            "vault": str(settings.FZ_VAULT_PATH),
            "template_set": bool(settings.FZ_JOURNAL_TEMPLATE.strip()),
            "api_version": __version__,
        }

    @app.get("/")
    def root():
        return {
            "service": "findzero API",
            "ok": True,
            "endpoints": {
                "health": "/health",
                "scan": "POST /scan",
                "session": "/session",
                "toggle": "POST /candidates/{identity}/toggle",
                "select_all": "POST /select-all",
                "delete": "DELETE /candidates/{identity}",
                "delete_selected": "POST /delete-selected",
                "docs": "/docs",
            },
        }

    @app.post("/scan")
    def scan():
        with lock:
            notices.clear()
            workflow.scan()
            _LOG.info("API scan: %d candidates", len(workflow.session.candidates))
            return _session_payload()

    @app.get("/session")
    def session():
        with lock:
            return _session_payload()

    @app.post("/candidates/{identity:path}/toggle")
    def toggle(identity: str):
        with lock:
            _require(identity)
            selected = workflow.toggle_selection(identity)
            return {"identity": identity, "selected": selected, "selected_count": workflow.session.selected_count}

    @app.post("/candidates/{identity:path}/open")
    def open_candidate(identity: str, payload: OpenIn = OpenIn()):
        with lock:
            _require(identity)
            try:
                if payload.new_view:
                    workflow.open(identity)
                else:
                    workflow.open_in_place(identity)
            except Exception as e:
                _LOG.warning("Open failed for %s: %s", identity, e)
                raise HTTPException(status_code=500, detail=f"Could not open {identity}: {e}")
        return {"ok": True, "identity": identity}

    @app.delete("/candidates/{identity:path}")
    def delete_candidate(identity: str):
        with lock:
            _require(identity)
            outcome = workflow.delete_one(identity)
            if not outcome.deleted:
                raise HTTPException(status_code=409, detail=f"Failed to delete {identity}: {outcome.reason}")
            return {"ok": True, "identity": identity, "selected_count": workflow.session.selected_count}

    @app.post("/select-all")
    def select_all(payload: SelectAllIn):
        with lock:
            workflow.select_all(payload.state)
            return {"selected_count": workflow.session.selected_count, "select_all_intent": payload.state}

    @app.post("/select-all/toggle")
    def toggle_select_all():
        with lock:
            state = workflow.toggle_select_all()
            return {"selected_count": workflow.session.selected_count, "select_all_intent": state}

    @app.post("/delete-selected")
    def delete_selected():
        with lock:
            result = workflow.delete_selected()
            payload = _batch_payload(result)
            payload["selected_count"] = workflow.session.selected_count
            payload["remaining"] = len(workflow.session.candidates)
            return payload

    return app
