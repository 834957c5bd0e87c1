"""
Shared test fixtures and utilities.

Every test gets a fresh in-memory SQLite database wired into the app through
the session dependency, so nothing touches the configured DATABASE_URL.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import timedelta
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from app.db.config import build_engine, get_session
from app.main import app
from app.models.user import User
from app.services.auth_service import hash_password
from app.utils.dates import utcnow


@pytest.fixture
def engine():
    """Fresh in-memory database with the schema created."""
    test_engine = build_engine("sqlite://", echo=False, poolclass=StaticPool)
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def client(engine):
    """TestClient whose requests use the per-test database."""
    def override_get_session():
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    """Insert a user row directly and return it."""
    def _make(email: str = "owner@example.com", password: str = "secret-pass") -> User:
        user = User(email=email, password_hash=hash_password(password))
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
    return _make


def register_and_login(client: TestClient, email: str, password: str = "secret-pass") -> dict[str, str]:
    """Create an account through the API and return bearer headers for it."""
    response = client.post("/api/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


def iso_from_now(**delta) -> str:
    """ISO timestamp offset from the current UTC time."""
    return (utcnow() + timedelta(**delta)).isoformat()


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    return register_and_login(client, "alice@example.com")
