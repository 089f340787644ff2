from fastapi.testclient import TestClient

from app.main import create_app
from conftest import make_settings, make_store


def test_health_ok(client, store):
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body == {"status": "ok", "db": True, "backend": store.backend}


def test_health_degraded_when_store_does_not_answer(monkeypatch):
    store = make_store("sql")
    with TestClient(create_app(make_settings(), store)) as client:
        monkeypatch.setattr(store, "ping", lambda: False)
        body = client.get("/api/health").json()
    assert body["status"] == "degraded"
    assert body["db"] is False
