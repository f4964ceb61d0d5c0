# tests/conftest.py
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-0123456789"
os.environ["DEFAULT_DEPARTMENT"] = "Sistemas"

import pytest
from fastapi.testclient import TestClient

from app.auth.models import UserRole
from app.auth.services import create_user
from app.core.database import Base, SessionLocal, engine
from app.main import app

PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    def _make(email: str, role: UserRole = UserRole.USER, name: str | None = None):
        return create_user(db, name=name or email.split("@")[0], email=email, password=PASSWORD, role=role)

    return _make


@pytest.fixture
def login():
    """Return a TestClient holding a session cookie for the given email."""

    def _login(email: str, password: str = PASSWORD) -> TestClient:
        client = TestClient(app)
        r = client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return client

    return _login


@pytest.fixture
def anonymous():
    return TestClient(app)


@pytest.fixture
def alice(make_user, login):
    user = make_user("alice@example.com")
    return user, login(user.email)


@pytest.fixture
def bob(make_user, login):
    user = make_user("bob@example.com")
    return user, login(user.email)


@pytest.fixture
def admin(make_user, login):
    user = make_user("admin@example.com", role=UserRole.ADMIN_GLOBAL, name="Admin")
    return user, login(user.email)
