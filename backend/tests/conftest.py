"""
Pytest fixtures for testing
"""
import os

# Settings and the engine are built at import time; point them at SQLite
# before anything from finance_api is imported.
os.environ.setdefault("FINANCE_DATABASE_URL", "sqlite://")
os.environ.setdefault("FINANCE_BCRYPT_ROUNDS", "4")
os.environ.setdefault("FINANCE_JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from finance_api.api.deps import get_db, get_password_hasher, get_token_issuer
from finance_api.core.security import PasswordHasher, TokenIssuer
from finance_api.domain.entities import Category
from finance_api.main import app
from finance_api.models.base import Base
from finance_api.repositories.categories import SqlAlchemyCategoryStore
from finance_api.repositories.transactions import SqlAlchemyTransactionStore
from finance_api.repositories.users import SqlAlchemyUserStore

TEST_EMAIL = "a@b.com"
TEST_PASSWORD = "Passw0rd!"
TEST_NAME = "Alice"


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenIssuer("test-secret", expire_seconds=3600)


@pytest.fixture
def transaction_store(db_session):
    return SqlAlchemyTransactionStore(db_session)


@pytest.fixture
def category_store(db_session):
    return SqlAlchemyCategoryStore(db_session)


@pytest.fixture
def user_store(db_session):
    return SqlAlchemyUserStore(db_session)


@pytest.fixture
def make_category(category_store):
    def _make(name="Groceries", parent_id=None, active=True):
        category = Category.create(name, parent_category_id=parent_id)
        if not active:
            category.activate(False)
        category_store.add(category)
        return category

    return _make


@pytest.fixture
def client(session_factory, hasher, tokens):
    """Test client with a per-request session bound to the test engine."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_token_issuer] = lambda: tokens
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def registered_user(client):
    response = client.post(
        "/api/auth/register",
        json={"email": TEST_EMAIL, "password": TEST_PASSWORD, "fullName": TEST_NAME},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(client, registered_user):
    response = client.post("/api/auth/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert response.status_code == 200
    # Drop the cookie so requests authenticate through the header only.
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
