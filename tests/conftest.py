"""Shared fixtures: in-memory SQLite per test, app wired to it, seeded users."""

import os

# Must be set before app.config is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.hashing import Hasher
from app.core.security import create_access_token
from app.db.session import Base, get_db
from app.db.models.user import User
from app.main import app

PASSWORD = "Secret123"


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """TestClient with get_db overridden to the per-test database."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _make_user(db, email: str, name: str) -> User:
    user = User(email=email, name=name, hashed_password=Hasher.hash_password(PASSWORD))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def alice(db) -> User:
    return _make_user(db, "alice@example.com", "Alice")


@pytest.fixture
def bob(db) -> User:
    return _make_user(db, "bob@example.com", "Bob")


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


@pytest.fixture
def alice_headers(alice) -> dict:
    return auth_headers(alice)


@pytest.fixture
def bob_headers(bob) -> dict:
    return auth_headers(bob)
