from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path


def _resolve_log_dir(settings: object) -> Path:
    """Resolve the diagnostic log directory.

    - If FZ_LOG_DIR is absolute, use it directly.
    - Otherwise, treat it as relative to the project root.

    This keeps logs out of the vault that is being cleaned.
    """

    raw = getattr(settings, "FZ_LOG_DIR", Path("_logs"))
    p = raw if isinstance(raw, Path) else Path(str(raw))
    if p.is_absolute():
        return p

    project_root = Path(__file__).resolve().parents[1]
    return project_root / p


def _resolve_level(settings: object) -> tuple[str, int]:
    if bool(getattr(settings, "FZ_DEBUG_OUTPUT", False)):
        return "DEBUG", logging.DEBUG
    level_name = str(getattr(settings, "FZ_LOG_LEVEL", "INFO") or "INFO").upper().strip()
    return level_name, getattr(logging, level_name, logging.INFO)


def setup_logging(settings: object, *, console: bool = True) -> Path:
    """Configure Python + uvicorn logging to write to a rotating diagnostic log file.

    Returns the resolved log file path.

    Rotation:
      - Daily rotation at midnight.
      - Keep the last `FZ_LOG_BACKUP_COUNT` rotated files.

    Notes:
      - FZ_DEBUG_OUTPUT forces DEBUG so template comparisons are recorded.
      - The interactive menu passes console=False; the TUI owns the terminal.
      - Safe to call multiple times (it resets handlers).
    """

    log_dir = _resolve_log_dir(settings)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "findzero.log"

    level_name, level = _resolve_level(settings)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    file_handler = TimedRotatingFileHandler(
        filename=str(log_file),
        when="midnight",
        interval=1,
        backupCount=max(0, int(getattr(settings, "FZ_LOG_BACKUP_COUNT", 14) or 0)),
        encoding="utf-8",
        utc=False,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(fmt))

    # Reset root handlers so we don't duplicate logs on reload / repeated starts.
    root = logging.getLogger()
    root.handlers = []
    root.setLevel(level)
    root.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(console_handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers = []
        lg.setLevel(level)
        lg.propagate = True

    logging.getLogger("findzero").info(
        "findzero logging enabled (file=%s, level=%s)",
        os.fspath(log_file),
        level_name,
    )

    return log_file
