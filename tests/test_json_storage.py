from __future__ import annotations

import json

import pytest

from creator_api.domain.records import BACKEND_ID_FIELD, is_local_id
from creator_api.repositories.json_storage import JSONRecordStore, SerializationError

SLOT = "creator_intelligence_history"


def test_missing_file_or_slot_is_empty(tmp_path):
    store = JSONRecordStore(tmp_path / "history.json", SLOT)
    assert store.load() == []
    (tmp_path / "history.json").write_text(json.dumps({"other": [1, 2]}), encoding="utf-8")
    assert store.load() == []


def test_corrupt_file_is_treated_as_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")
    assert JSONRecordStore(path, SLOT).load() == []


def test_slot_holding_a_serialized_string_or_non_list(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps({SLOT: json.dumps([{"topic": "a"}])}), encoding="utf-8")
    assert JSONRecordStore(path, SLOT).load() == [{"topic": "a"}]
    path.write_text(json.dumps({SLOT: {"topic": "a"}}), encoding="utf-8")
    assert JSONRecordStore(path, SLOT).load() == []


def test_append_assigns_local_id_and_keeps_other_slots(tmp_path):
    path = tmp_path / "nested" / "history.json"
    store = JSONRecordStore(path, SLOT)
    store.save([])
    data = json.loads(path.read_text(encoding="utf-8"))
    data["theme"] = "dark"
    path.write_text(json.dumps(data), encoding="utf-8")

    first = store.append({"topic": "One"})
    second = store.append({"topic": "Two"})

    assert is_local_id(first[BACKEND_ID_FIELD])
    assert first[BACKEND_ID_FIELD] != second[BACKEND_ID_FIELD]
    assert [r["topic"] for r in store.load()] == ["One", "Two"]
    assert json.loads(path.read_text(encoding="utf-8"))["theme"] == "dark"


def test_save_fault_raises_serialization_error(tmp_path):
    store = JSONRecordStore(tmp_path / "history.json", SLOT)
    with pytest.raises(SerializationError):
        store.save([{"topic": object()}])
    assert store.load() == []
