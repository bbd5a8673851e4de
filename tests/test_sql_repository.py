"""
Smoke tests for the SQL record store against a temporary SQLite database.
"""
from __future__ import annotations

from sqlalchemy import Text

from creator_api.db.models import ContentRecord
from creator_api.domain.records import BACKEND_ID_FIELD, build_record
from creator_api.repositories.base import CancelToken
from creator_api.repositories.sql_repository import SQLRecordStore


def test_init_creates_schema_and_pushes_empty_list(temp_db):
    store = SQLRecordStore()
    pushes = []
    result = store.init(pushes.append)
    assert result.ok
    assert pushes == [[]]
    assert temp_db.exists()


def test_create_assigns_backend_identity_and_pushes_full_list(temp_db):
    store = SQLRecordStore()
    pushes = []
    store.init(pushes.append)

    first = store.create(build_record({"topic": "Vlogging Tips", "titles": ["T1", "T2", "T3"]}))
    second = store.create(build_record({"topic": "Editing"}))

    assert first.ok and second.ok
    assert first.record[BACKEND_ID_FIELD]
    assert first.record[BACKEND_ID_FIELD] != second.record[BACKEND_ID_FIELD]
    assert first.record["title_3"] == "T3"
    assert [r["topic"] for r in pushes[-1]] == ["Vlogging Tips", "Editing"]
    assert store.load_all() == pushes[-1]


def test_created_at_round_trips_verbatim(temp_db):
    store = SQLRecordStore()
    store.init(lambda records: None)
    record = build_record({"topic": "Timing"})
    result = store.create(record)
    assert result.record["created_at"] == record["created_at"]


def test_cancelled_create_is_rolled_back_and_not_pushed(temp_db):
    store = SQLRecordStore()
    pushes = []
    store.init(pushes.append)
    cancel = CancelToken()
    cancel.cancel()

    result = store.create(build_record({"topic": "Too late"}), cancel)

    assert not result.ok
    assert store.load_all() == []
    assert pushes == [[]]


def test_cancelled_init_registers_no_handler(temp_db):
    store = SQLRecordStore()
    pushes = []
    cancel = CancelToken()
    cancel.cancel()

    assert not store.init(pushes.append, cancel).ok
    store.create(build_record({"topic": "After"}))
    assert pushes == []


def test_free_form_fields_are_not_length_limited(temp_db):
    for column in ("tone", "audience", "video_type"):
        assert isinstance(ContentRecord.__table__.c[column].type, Text)

    store = SQLRecordStore()
    store.init(lambda records: None)
    long_tone = "Calm and reflective, " * 10
    result = store.create(
        build_record({"topic": "Long form", "tone": long_tone, "audience": "A" * 120, "video_type": "V" * 80})
    )

    assert result.ok
    saved = store.load_all()[0]
    assert saved["tone"] == long_tone
    assert saved["audience"] == "A" * 120
    assert saved["video_type"] == "V" * 80


def test_init_reports_failure_for_unreachable_database(tmp_path, monkeypatch):
    from creator_api.core import config as core_config
    from creator_api.db import session as db_session

    missing_dir = tmp_path / "does-not-exist" / "deeper"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{missing_dir / 'x.db'}")
    core_config.get_settings.cache_clear()
    db_session.reset_engine()
    try:
        pushes = []
        result = SQLRecordStore().init(pushes.append)
        assert not result.ok
        assert result.error
        assert pushes == []
    finally:
        db_session.reset_engine()
        core_config.get_settings.cache_clear()
