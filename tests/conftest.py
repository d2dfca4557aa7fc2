"""Pytest configuration and fixtures."""

import os

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

# Settings are read once and cached, so the environment must be set before the app is imported
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from account_service.api.dependencies import get_balance_policy, get_password_hasher  # noqa: E402
from account_service.database import Base, get_db  # noqa: E402
from account_service.main import app  # noqa: E402
from account_service.models.user import User  # noqa: E402
from account_service.services.auth import PasswordHasher  # noqa: E402

TEST_BALANCE = 4242

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Minimum bcrypt cost keeps the suite fast
fast_hasher = PasswordHasher(rounds=4)


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's details."""

    def __init__(self, *args, user_id: int | None = None, username: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username


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
    """Create a test client with database and hashing overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: fast_hasher
    app.dependency_overrides[get_balance_policy] = lambda: lambda: TEST_BALANCE
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client, db):
    """Register a user and return bearer auth headers for them."""
    username = "test@example.com"
    response = client.post(
        "/api/v1/user/signup",
        json={
            "username": username,
            "firstName": "Test",
            "lastName": "User",
            "password": "testpass123",
        },
    )
    assert response.status_code == 200
    token = response.json()["token"]

    user = db.query(User).filter(User.username == username).one()
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user.id, username=username)


@pytest.fixture
def initial_balance():
    """Balance the client fixture's policy assigns to every new account."""
    return TEST_BALANCE
