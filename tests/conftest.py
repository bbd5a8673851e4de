from __future__ import annotations

import sys
from pathlib import Path

import pytest

# make the creator_api package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from creator_api.core import config as core_config  # noqa: E402
from creator_api.db import session as db_session  # noqa: E402


@pytest.fixture()
def local_env(tmp_path, monkeypatch):
    """Point the history file at a temp dir with no DATABASE_URL (local fallback)."""
    history_file = tmp_path / "history.json"
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("HISTORY_FILE", str(history_file))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    core_config.get_settings.cache_clear()
    yield history_file
    core_config.get_settings.cache_clear()


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Temporary SQLite database plus history file; resets cached settings/engine."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("HISTORY_FILE", str(tmp_path / "history.json"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    core_config.get_settings.cache_clear()
    db_session.reset_engine()

    yield db_file

    db_session.reset_engine()
    core_config.get_settings.cache_clear()
