"""Shared fixtures.

Services and endpoints run against a fresh in-memory SQLite database per
test, with foreign keys enforced as they are on Postgres.  The environment
is set before ``coachdesk`` is imported so the settings never point at a
real Postgres instance.
"""

import os

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

import coachdesk.db.base  # noqa: E402,F401
from coachdesk.core.security import get_password_hash  # noqa: E402
from coachdesk.db.session import enable_sqlite_foreign_keys, get_db  # noqa: E402
from coachdesk.main import app  # noqa: E402
from coachdesk.models.profile import Profile  # noqa: E402

PASSWORD = "correct-horse"


# ======================================================================
# Database
# ======================================================================


@pytest.fixture
def engine():
    engine = enable_sqlite_foreign_keys(
        create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool))
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


# ======================================================================
# Profiles
# ======================================================================


@pytest.fixture
def make_profile(db):
    """Factory creating a profile with the shared test password."""
    hashed = get_password_hash(PASSWORD)

    def _make(email: str, role: str | None, name: str | None = None, is_active: bool = True) -> Profile:
        profile = Profile(email=email, hashed_password=hashed, name=name or email.split("@")[0], role=role,
                          is_active=is_active)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    return _make


@pytest.fixture
def admin(make_profile) -> Profile:
    return make_profile("admin@example.com", "admin", "Ada Admin")


@pytest.fixture
def trainer(make_profile) -> Profile:
    return make_profile("trainer@example.com", "trainer", "Tara Trainer")


@pytest.fixture
def athletes(make_profile) -> list[Profile]:
    return [make_profile(f"athlete{i}@example.com", "athlete", f"Athlete {i}") for i in range(1, 4)]


# ======================================================================
# HTTP
# ======================================================================


@pytest.fixture
def client(engine):
    def _get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Sign in through the API; the client keeps the session cookie."""

    def _login(email: str, password: str = PASSWORD) -> str:
        response = client.post("/api/v1/auth/token", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["access_token"]

    return _login
