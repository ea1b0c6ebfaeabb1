"""Shared pytest fixtures: in-memory database, API client and users."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import codeqna.models  # noqa: F401
from codeqna.api.deps import get_db
from codeqna.core.security import create_access_token
from codeqna.crud import crud_user
from codeqna.database import Base, enable_sqlite_foreign_keys
from codeqna.main import app
from codeqna.schemas.user import UserCreate

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
event.listen(engine, "connect", enable_sqlite_foreign_keys)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Fresh schema per test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """TestClient wired to the test session"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    return crud_user.create_user(
        db,
        user_in=UserCreate(name="Grace Hopper", email="grace@example.com", password="cobol-1959"),
    )


@pytest.fixture
def other_user(db):
    return crud_user.create_user(
        db,
        user_in=UserCreate(name="Alan Turing", email="alan@example.com", password="enigma-1939"),
    )


@pytest.fixture
def admin(db):
    return crud_user.create_user(
        db,
        user_in=UserCreate(name="Root Admin", email="admin@example.com", password="admin-pass"),
        role="admin",
    )


def bearer(user) -> dict:
    """Authorization header for a user"""
    token = create_access_token(data={"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(user):
    return bearer(user)


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def other_headers(other_user):
    return bearer(other_user)
