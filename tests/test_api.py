from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from src.server.app import create_app
from src.server.dependencies import clear_caches, get_summarizer


@pytest.fixture
def client(tmp_path, monkeypatch) -> TestClient:
    monkeypatch.setenv("DAYBOOK_DB_PATH", str(tmp_path / "api.db"))
    monkeypatch.setenv("DAYBOOK_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "daybook.log"))
    clear_caches()
    yield TestClient(create_app())
    clear_caches()


@pytest.fixture
def llm():
    """Replace the summarizer's Ollama client with a mock."""
    mock = MagicMock()
    get_summarizer().ollama_client = mock
    return mock


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_entries_upsert_flow(client):
    assert client.get("/entries").json() == []

    resp = client.post("/entries", json={"content": "first draft", "date": "2024-01-01"})
    assert resp.status_code == 200
    created = resp.json()
    assert set(created) == {"id", "content", "date", "createdAt", "updatedAt"}

    resp = client.post("/entries", json={"content": "final words", "date": "2024-01-01"})
    assert resp.status_code == 200
    assert resp.json()["id"] == created["id"]
    assert resp.json()["date"] == created["date"]

    client.post("/entries", json={"content": "next day", "date": "2024-01-02"})

    entries = client.get("/entries").json()
    assert [e["content"] for e in entries] == ["next day", "final words"]


def test_entries_filtered_by_day(client):
    client.post("/entries", json={"content": "leap day", "date": "2024-02-29"})
    client.post("/entries", json={"content": "next", "date": "2024-03-01"})

    resp = client.get("/entries", params={"day": "2024-02-29"})
    assert resp.status_code == 200
    assert [e["content"] for e in resp.json()] == ["leap day"]

    assert client.get("/entries", params={"day": "2024-03-02"}).json() == []

    resp = client.get("/entries", params={"day": "not-a-day"})
    assert resp.status_code == 400
    assert "day" in resp.json()["error"]


def test_entry_missing_field_is_400(client):
    resp = client.post("/entries", json={"content": "no date"})
    assert resp.status_code == 400
    assert "date" in resp.json()["error"]


def test_entry_invalid_date_is_400(client):
    resp = client.post("/entries", json={"content": "x", "date": "yesterday-ish"})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid date")


def test_todo_api_crud_flow(client):
    resp = client.get("/todos")
    assert resp.status_code == 200
    assert resp.json() == []

    todos = [client.post("/todos", json={"content": text}).json() for text in ("a", "b", "c")]
    assert [t["order"] for t in todos] == [0, 1, 2]
    assert todos[0]["ownerId"] == "placeholder"
    assert todos[0]["completed"] is False

    resp = client.put("/todos", json={"id": todos[1]["id"], "completed": True})
    assert resp.status_code == 200
    assert resp.json()["completed"] is True
    assert resp.json()["order"] == 1

    resp = client.put("/todos", json={"id": todos[2]["id"], "order": 0})
    assert resp.status_code == 200
    assert resp.json()["order"] == 0
    assert [t["content"] for t in client.get("/todos").json()] == ["c", "a", "b"]

    resp = client.delete("/todos", params={"id": todos[0]["id"]})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert [t["content"] for t in client.get("/todos").json()] == ["c", "b"]


def test_todo_reorder_endpoint(client):
    ids = [client.post("/todos", json={"content": text}).json()["id"] for text in "xyz"]

    resp = client.put("/todos/reorder", json={"ids": [ids[2], ids[1], ids[0]]})

    assert resp.status_code == 200
    assert [t["content"] for t in resp.json()] == ["z", "y", "x"]


def test_todo_errors(client):
    resp = client.delete("/todos")
    assert resp.status_code == 400
    assert resp.json() == {"error": "ID is required"}

    resp = client.delete("/todos", params={"id": "missing"})
    assert resp.status_code == 404
    assert "error" in resp.json()

    resp = client.put("/todos", json={"id": "missing", "completed": True})
    assert resp.status_code == 404

    resp = client.post("/todos", json={})
    assert resp.status_code == 400


def test_summary_rejects_empty_entries(client, llm):
    resp = client.post("/summary", json={"entries": [], "timeframe": "yesterday"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "No entries provided"}
    llm.chat.assert_not_called()


def test_summary_yesterday(client, llm):
    llm.chat.return_value = "You've noted that you slept badly."

    resp = client.post(
        "/summary",
        json={
            "entries": [{"date": "2024-01-01", "content": "slept badly"}],
            "timeframe": "yesterday",
        },
    )

    assert resp.status_code == 200
    summary = resp.json()["summary"]
    assert summary == "You've noted that you slept badly."
    assert len(summary) <= 1000
    prompt = llm.chat.call_args.args[0][0]["content"]
    assert "Date: 2024-01-01\nContent: slept badly" in prompt


def test_summary_upstream_error(client, llm):
    llm.chat.side_effect = RuntimeError("model not found")

    resp = client.post(
        "/summary",
        json={"entries": [{"date": "2024-01-01", "content": "x"}], "timeframe": "yesterday"},
    )

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate summary: model not found"}


def test_summary_recent_selects_previous_day(client, llm):
    llm.chat.return_value = "It seems yesterday was busy."
    today = datetime.now().astimezone().date()
    yesterday = today - timedelta(days=1)
    client.post("/entries", json={"content": "today's note", "date": today.isoformat()})
    client.post("/entries", json={"content": "yesterday's note", "date": yesterday.isoformat()})

    resp = client.post("/summary/recent", json={"timeframe": "yesterday"})

    assert resp.status_code == 200
    prompt = llm.chat.call_args.args[0][0]["content"]
    assert f"Date: {yesterday.isoformat()}\nContent: yesterday's note" in prompt
    assert "today's note" not in prompt


def test_summary_recent_without_entries(client, llm):
    resp = client.post("/summary/recent", json={"timeframe": "last week"})
    assert resp.status_code == 400
    llm.chat.assert_not_called()


def test_root_page_open_when_auth_disabled(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Journal Entry" in resp.text
