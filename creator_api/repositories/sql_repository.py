"""Remote history store backed by SQLAlchemy."""
from __future__ import annotations

import logging
import secrets

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError

from creator_api.db.create_tables import create_all
from creator_api.db.models import ContentRecord
from creator_api.db.session import get_session
from creator_api.domain.records import BACKEND_ID_FIELD, RECORD_FIELDS
from creator_api.repositories.base import CancelToken, ChangeHandler, RecordStore, StoreResult

logger = logging.getLogger(__name__)


def _entity_to_record(entity: ContentRecord) -> dict:
    record = {name: getattr(entity, name) or "" for name in RECORD_FIELDS}
    record[BACKEND_ID_FIELD] = entity.backend_id
    return record


def _cancelled(cancel: CancelToken | None) -> bool:
    return cancel is not None and cancel.cancelled


class SQLRecordStore(RecordStore):
    """Push-style record store: the change handler receives the full list after every write."""

    def __init__(self) -> None:
        self._on_change: ChangeHandler | None = None

    def init(self, on_change: ChangeHandler, cancel: CancelToken | None = None) -> StoreResult:
        try:
            create_all()
            with get_session() as session:
                session.execute(text("SELECT 1"))
            records = self.load_all()
        except SQLAlchemyError as exc:
            logger.warning("SQL history store unavailable: %s", exc)
            return StoreResult.failure(str(exc))
        if _cancelled(cancel):
            return StoreResult.failure("init cancelled by caller")
        self._on_change = on_change
        self._notify(records)
        return StoreResult.success()

    def create(self, record: dict, cancel: CancelToken | None = None) -> StoreResult:
        values = {name: record.get(name) or "" for name in RECORD_FIELDS}
        entity = ContentRecord(backend_id=secrets.token_hex(12), **values)
        try:
            with get_session() as session:
                session.add(entity)
                session.flush()
                if _cancelled(cancel):
                    session.rollback()
                    logger.warning("History insert rolled back; caller stopped waiting")
                    return StoreResult.failure("create cancelled by caller")
                session.commit()
                session.refresh(entity)
                stored = _entity_to_record(entity)
            records = self.load_all()
        except SQLAlchemyError as exc:
            logger.error("Failed to store history record: %s", exc)
            return StoreResult.failure(str(exc))
        if _cancelled(cancel):
            # committed after the caller gave up; the next push carries the row
            logger.warning("History record %s committed after its caller timed out", stored[BACKEND_ID_FIELD])
            return StoreResult.success(record=stored)
        self._notify(records)
        return StoreResult.success(record=stored)

    def load_all(self) -> list[dict]:
        with get_session() as session:
            stmt = select(ContentRecord).order_by(ContentRecord.id)
            return [_entity_to_record(entity) for entity in session.execute(stmt).scalars().all()]

    def _notify(self, records: list[dict]) -> None:
        if self._on_change:
            self._on_change(records)
