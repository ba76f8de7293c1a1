import os

# must be set before the app (and its engine) is imported
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from defect_tracker.core.config import settings
from defect_tracker.core.security import create_access_token
from defect_tracker.crud.users import create_user
from defect_tracker.db.base import Base
from defect_tracker.db.models.user import Role
from defect_tracker.db.session import engine, SessionLocal
from defect_tracker.main import app
from defect_tracker.schemas.admin import UserCreateIn


@pytest.fixture(autouse=True)
def _schema(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "EXPORT_DIR", str(tmp_path / "exports"))
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(email: str, role: str, password: str = "secret123", name: str | None = None):
        return create_user(db, UserCreateIn(email=email, password=password, role=role, name=name))
    return _make


@pytest.fixture
def headers_for():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(email=user.email, role=user.role)}"}
    return _headers


@pytest.fixture
def manager(make_user):
    return make_user("manager@example.com", Role.manager.value, name="Mila Manager")


@pytest.fixture
def engineer(make_user):
    return make_user("engineer@example.com", Role.engineer.value, name="Egor Engineer")


@pytest.fixture
def observer(make_user):
    return make_user("observer@example.com", Role.observer.value, name="Olga Observer")


@pytest.fixture
def manager_headers(manager, headers_for):
    return headers_for(manager)


@pytest.fixture
def engineer_headers(engineer, headers_for):
    return headers_for(engineer)


@pytest.fixture
def observer_headers(observer, headers_for):
    return headers_for(observer)


@pytest.fixture
def site(client, manager_headers):
    """A project "P1" with a single site "S1"; returns the site JSON."""
    p = client.post("/projects", json={"name": "P1"}, headers=manager_headers).json()
    return client.post(f"/projects/{p['id']}/sites", json={"name": "S1"}, headers=manager_headers).json()
