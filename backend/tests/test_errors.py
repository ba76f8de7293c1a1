from fastapi.testclient import TestClient

from defect_tracker.api.routers import projects as projects_router
from defect_tracker.main import app


def test_unexpected_error_becomes_generic_500(monkeypatch, manager_headers):
    def _boom(db):
        raise RuntimeError("database went away")

    monkeypatch.setattr(projects_router, "list_projects", _boom)
    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/projects", headers=manager_headers)
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}


def test_validation_errors_are_400(client, manager_headers):
    r = client.post("/projects", json={"name": 5}, headers=manager_headers)
    assert r.status_code == 400
    assert isinstance(r.json()["detail"], list)


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}
