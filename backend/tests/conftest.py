# backend/tests/conftest.py
import os
import tempfile

# Settings, the engine and the logger are built at import time, so the test
# environment must be in place before any application module is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="todoapp-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["SEED_DATA"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from database import Base, SessionLocal, engine, init_db  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_database():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def register(client, email="alice@example.com", password="secret123"):
    return client.post("/api/auth/register", json={"email": email, "password": password})


def login(client, email="alice@example.com", password="secret123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def sign_in_as(client, email, password="secret123"):
    """Register *email* and leave the client holding its session cookie."""
    register(client, email, password)
    response = login(client, email, password)
    assert response.status_code == 200
    return response.json()["user"]
