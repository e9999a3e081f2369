# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.auth.jwt_handler import create_access_token
from taskboard.auth.security import hash_password
from taskboard.db import get_db
from taskboard.main import app
from taskboard.models import Base, User

from .factories import PASSWORD


@pytest.fixture(scope="session")
def password_hash() -> str:
    # hashed once for the whole run
    return hash_password(PASSWORD)


@pytest.fixture()
def session_factory():
    """
    In-memory SQLite shared by every session of a test through StaticPool.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    try:
        yield factory
    finally:
        engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _create_user(db, password_hash: str, name: str, email: str, role: str) -> SimpleNamespace:
    user = User(name=name, email=email, password=password_hash, role=role)
    db.add(user)
    db.commit()
    token = create_access_token({"sub": str(user.id), "role": role})
    return SimpleNamespace(
        id=user.id,
        name=name,
        email=email,
        role=role,
        headers={"Authorization": f"Bearer {token}"},
    )


@pytest.fixture()
def users(db, password_hash) -> SimpleNamespace:
    """An admin and two members, as plain values with ready-made auth headers."""
    return SimpleNamespace(
        admin=_create_user(db, password_hash, "Ada Admin", "ada@example.com", "admin"),
        alice=_create_user(db, password_hash, "Alice", "alice@example.com", "member"),
        bob=_create_user(db, password_hash, "Bob", "bob@example.com", "member"),
    )
