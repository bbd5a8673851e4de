"""
JSON slot persistence (local fallback backend).

The file holds an object of named slots; the history list lives in one slot
and is always read and rewritten as a whole.
"""

from __future__ import annotations

from pathlib import Path
import json
import logging

from creator_api.domain.records import BACKEND_ID_FIELD, new_local_id

logger = logging.getLogger(__name__)


class SerializationError(Exception):
    """Raised when the slot file cannot be written."""


class JSONRecordStore:
    """Synchronous get/set pair against a single named slot of a JSON file."""

    def __init__(self, path: Path | str, slot: str) -> None:
        self.path = Path(path)
        self.slot = slot

    def _read_file(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error("Error loading history file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> list[dict]:
        """Current slot value; absence or parse failure counts as an empty list."""
        value = self._read_file().get(self.slot)
        if value is None:
            return []
        if isinstance(value, str):
            # slot written as an already-serialized string
            try:
                value = json.loads(value)
            except ValueError as exc:
                logger.error("Corrupt history slot %r: %s", self.slot, exc)
                return []
        if not isinstance(value, list):
            logger.error("History slot %r does not hold a list; ignoring it", self.slot)
            return []
        return [item for item in value if isinstance(item, dict)]

    def save(self, records: list[dict]) -> None:
        data = self._read_file()
        data[self.slot] = records
        try:
            payload = json.dumps(data, ensure_ascii=False, indent=2)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error saving history file %s: %s", self.path, exc)
            raise SerializationError(str(exc)) from exc

    def append(self, record: dict) -> dict:
        records = self.load()
        new_record = {**record, BACKEND_ID_FIELD: new_local_id()}
        records.append(new_record)
        self.save(records)
        return new_record
