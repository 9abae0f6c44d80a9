"""Shared fixtures: in-memory SQLite database, service-level sessions and an API client.

Every test gets a fresh database. Environment is set before the app is imported
because settings, the engine and the password context are built at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mentor_connect.database import Base, enable_sqlite_foreign_keys, get_db
from mentor_connect.main import app
from mentor_connect.models import User
from mentor_connect.security import create_access_token


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """API client with get_db pointed at the test database."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Insert a user directly, skipping password hashing."""
    counter = {"n": 0}

    def _make_user(name=None, role="mentee", skills=(), interests=(), bio=None, email=None):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=name or f"User {n}",
            email=email or f"user{n}@mentorship.io",
            hashed_password="not-a-real-hash",
            role=role,
            bio=bio,
            skills=list(skills),
            interests=list(interests),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    """Build a Bearer header from a token string or a User."""
    def _auth_headers(user_or_token):
        if isinstance(user_or_token, str):
            token = user_or_token
        else:
            token = create_access_token(user_or_token.id)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def register(client):
    """Register through the API and return the response body (includes the token)."""
    counter = {"n": 0}

    def _register(role="mentee", name=None, email=None, password="secret123"):
        counter["n"] += 1
        body = {
            "name": name or f"{role.capitalize()} {counter['n']}",
            "email": email or f"{role}{counter['n']}@mentorship.io",
            "password": password,
            "role": role,
        }
        res = client.post("/api/auth/register", json=body)
        assert res.status_code == 201, res.text
        return res.json()

    return _register
