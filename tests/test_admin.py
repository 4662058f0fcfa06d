from fastapi.testclient import TestClient

from deps.game import registry
from main import app

client = TestClient(app)


def test_admin_purge_unauthorized(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    r = client.post("/admin/sessions/purge")
    assert r.status_code == 401


def test_admin_purge_not_configured(monkeypatch):
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)
    r = client.post("/admin/sessions/purge", headers={"x-admin-token": "secret"})
    assert r.status_code == 500


def test_admin_purge_ok(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    client.get("/game/addition", headers={"x-session-id": "admin-live-001"})
    r = client.post("/admin/sessions/purge", headers={"x-admin-token": "secret"})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    # nothing has been idle for the default TTL
    assert body["purged"] == 0
    assert "admin-live-001" in registry
