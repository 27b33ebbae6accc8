"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tracker.database import Base, get_db
from tracker.main import app

DEFAULT_PASSWORD = "Secret123!"


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/expense_tracker", "/expense_tracker_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def session_factory():
    """Factory for sessions independent of the per-test session."""
    return TestingSessionLocal


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def registration_payload(email: str, username: str, password: str = DEFAULT_PASSWORD) -> dict:
    """Build a valid registration body."""
    return {
        "email": email,
        "password": password,
        "username": username,
        "firstName": "Test",
        "lastName": "User",
        "termsAccepted": True,
        "privacyPolicyAccepted": True,
    }


def register_and_login(client, email: str, username: str) -> AuthHeaders:
    """Register a user, log in, and return bearer headers for them."""
    response = client.post("/api/users/register", json=registration_payload(email, username))
    assert response.status_code == 201
    user_id = response.json()["id"]

    response = client.post("/api/users/login", json={"email": email, "password": DEFAULT_PASSWORD})
    assert response.status_code == 200
    token = response.json()["accessToken"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=email)


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_and_login(client, "test@example.com", "testuser")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return register_and_login(client, "other@example.com", "otheruser")


@pytest.fixture
def make_user(client):
    """Factory fixture: register and log in an extra user."""

    def _make_user(email: str, username: str) -> AuthHeaders:
        return register_and_login(client, email, username)

    return _make_user


@pytest.fixture
def registration_data():
    """Factory fixture for registration bodies."""
    return registration_payload
