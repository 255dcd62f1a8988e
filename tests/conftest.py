"""Pytest configuration and fixtures."""

import os

# Configure the app before it is imported. Tests wipe every table after each
# test, so they never run against DATABASE_URL itself.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["STORAGE_BACKEND"] = "database"
os.environ["ADMIN_EMAILS"] = "admin@example.com"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from expense_tracker import models  # noqa: E402, F401
from expense_tracker.api.dependencies import get_storage  # noqa: E402
from expense_tracker.database import Base, engine, get_db  # noqa: E402
from expense_tracker.main import app  # noqa: E402
from expense_tracker.storage import JsonFileStorage  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


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


@pytest.fixture(scope="function")
def file_storage(tmp_path):
    """JSON document storage in a temporary directory."""
    return JsonFileStorage(tmp_path / "data")


@pytest.fixture(scope="function")
def file_client(file_storage):
    """Create a test client backed by the JSON document storage."""
    app.dependency_overrides[get_storage] = lambda: file_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, username: str, email: str, password: str = "testpass123") -> AuthHeaders:
    """Register a user and return auth headers for them."""
    response = client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "tester", "test@example.com")


@pytest.fixture
def other_headers(client):
    """A second, unrelated user."""
    return register(client, "other", "other@example.com")


@pytest.fixture
def admin_headers(client):
    """A user whose email is on the admin allow-list."""
    return register(client, "admin", "admin@example.com")


@pytest.fixture
def register_user(client):
    """Factory fixture registering extra users on the database-backed client."""

    def _register(username: str, email: str, password: str = "testpass123") -> AuthHeaders:
        return register(client, username, email, password)

    return _register
