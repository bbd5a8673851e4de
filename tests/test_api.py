from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from creator_api.app import create_app
from creator_api.core.config import get_settings
from creator_api.domain.records import BACKEND_ID_FIELD, LOCAL_ID_PATTERN


@pytest.fixture()
def client(local_env):
    app = create_app(get_settings())
    with TestClient(app) as test_client:
        yield test_client


def _generate(client, topic="Vlogging Tips"):
    response = client.post("/content/generate", json={"topic": topic, "tone": "Calm", "audience": "Creators"})
    assert response.status_code == 200
    return response.json()


def test_generate_requires_topic(client):
    response = client.post("/content/generate", json={"topic": ""})
    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter a video topic"


def test_generate_returns_all_sections(client):
    content = _generate(client)
    assert content["topic"] == "Vlogging Tips"
    assert content["video_type"] == "Long Video"
    assert len(content["titles"]) == 10
    assert len(content["thumbnails"]) == 5
    assert content["hashtags"].endswith("#vloggingtips #creators")


def test_export_downloads_plain_text(client):
    content = _generate(client)
    response = client.post("/content/export", json=content)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "youtube-content.txt" in response.headers["content-disposition"]
    assert response.text.startswith("TOPIC: Vlogging Tips")


def test_export_without_content_is_rejected(client):
    assert client.post("/content/export", json={}).status_code == 400


def test_save_then_list_and_detail(client, local_env):
    listing = client.get("/history").json()
    assert listing == {"mode": "local", "ready": True, "limit": 999, "records": []}

    saved = client.post("/history", json=_generate(client))
    assert saved.status_code == 201
    record = saved.json()["record"]
    assert LOCAL_ID_PATTERN.fullmatch(record[BACKEND_ID_FIELD])
    assert local_env.exists()

    records = client.get("/history").json()["records"]
    assert records == [record]

    detail = client.get(f"/history/{record[BACKEND_ID_FIELD]}")
    assert detail.status_code == 200
    assert detail.json()["topic"] == "Vlogging Tips"
    assert len(detail.json()["titles"]) == 3

    assert client.get("/history/unknown").status_code == 404


def test_history_page_renders_cards(client):
    empty = client.get("/history/page")
    assert empty.status_code == 200
    assert "No saved content yet" in empty.text

    client.post("/history", json=_generate(client, topic="Street Food"))
    page = client.get("/history/page")
    assert "Street Food" in page.text
    assert "history-card" in page.text


def test_save_over_capacity_returns_409(local_env, monkeypatch):
    monkeypatch.setenv("HISTORY_LIMIT", "1")
    get_settings.cache_clear()
    app = create_app(get_settings())
    with TestClient(app) as client:
        assert client.post("/history", json={"topic": "One"}).status_code == 201
        response = client.post("/history", json={"topic": "Two"})
        assert response.status_code == 409
        assert response.json() == {"error": "capacity_exceeded", "message": "History limit reached (1 items)"}


def test_remote_mode_when_database_configured(temp_db):
    app = create_app(get_settings())
    with TestClient(app) as client:
        assert client.get("/history").json()["mode"] == "remote"
        saved = client.post("/history", json={"topic": "Remote topic"})
        assert saved.status_code == 201
        assert saved.json()["message"] == "Saved to history successfully!"
        assert [r["topic"] for r in client.get("/history").json()["records"]] == ["Remote topic"]
