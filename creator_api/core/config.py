"""
Configuration helpers for the Creator Intelligence backend.

Settings are read from environment variables once and cached; tests call
``get_settings.cache_clear()`` after changing the environment.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_HISTORY_FILE = Path(__file__).resolve().parents[2] / "data" / "history.json"
DEFAULT_HISTORY_SLOT = "creator_intelligence_history"
DEFAULT_HISTORY_LIMIT = 999


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    history_file: Path
    history_slot: str
    history_limit: int
    backend_timeout_seconds: float
    remote_init_attempts: int
    log_level: str

    @property
    def remote_configured(self) -> bool:
        return bool(self.database_url)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str | None, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    history_file = (os.getenv("HISTORY_FILE") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        history_file=Path(history_file) if history_file else DEFAULT_HISTORY_FILE,
        history_slot=(os.getenv("HISTORY_SLOT") or DEFAULT_HISTORY_SLOT).strip(),
        history_limit=max(1, _int(os.getenv("HISTORY_LIMIT"), DEFAULT_HISTORY_LIMIT)),
        backend_timeout_seconds=max(0.1, _float(os.getenv("BACKEND_TIMEOUT_SECONDS"), 10.0)),
        remote_init_attempts=max(1, _int(os.getenv("REMOTE_INIT_ATTEMPTS"), 1)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
