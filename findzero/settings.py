from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Configuration for the blank-note scanner.

    Values are loaded from environment variables and `.env`.

    Notes:
    - FZ_JOURNAL_TEMPLATE holds the unfilled journal text. Multi-line templates
      are easier to keep in a file; point FZ_JOURNAL_TEMPLATE_FILE at it.
    - Nothing here is written back; edit `.env` to change settings.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Vault
    FZ_VAULT_PATH: Path = Field(default=Path("."))

    # Blank detection
    FZ_JOURNAL_TEMPLATE: str = Field(default="")
    FZ_JOURNAL_TEMPLATE_FILE: Path | None = Field(default=None)
    # Logs normalized content/template pairs at DEBUG while scanning.
    FZ_DEBUG_OUTPUT: bool = Field(default=False)
    # Progress is reported (and the scan yields) every N files.
    FZ_SCAN_BATCH_SIZE: int = Field(default=10, ge=1)

    # Startup trigger for the interactive menu
    FZ_RUN_AT_STARTUP: bool = Field(default=False)
    FZ_STARTUP_DELAY_SECONDS: float = Field(default=1.0, ge=0)

    # Logging (diagnostic; stored outside the vault)
    FZ_LOG_DIR: Path = Field(default=Path("_logs"))
    FZ_LOG_LEVEL: str = Field(default="INFO")
    # Timed rotation retention count (days). Old log files are auto-deleted.
    FZ_LOG_BACKUP_COUNT: int = Field(default=14)

    # API
    FZ_API_HOST: str = Field(default="127.0.0.1")
    FZ_API_PORT: int = Field(default=8765)
    FZ_API_CORS_ALLOW_ALL: bool = Field(default=True)

    @field_validator("FZ_VAULT_PATH", "FZ_JOURNAL_TEMPLATE_FILE", "FZ_LOG_DIR")
    @classmethod
    def _expand_home(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None


def _read_template_file(path: Path) -> str | None:
    try:
        return path.expanduser().read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Journal template file unreadable (%s): %s", path, e)
        return None


def load_settings() -> Settings:
    s = Settings()
    if s.FZ_JOURNAL_TEMPLATE_FILE is not None:
        text = _read_template_file(s.FZ_JOURNAL_TEMPLATE_FILE)
        if text is not None:
            s.FZ_JOURNAL_TEMPLATE = text
    return s
