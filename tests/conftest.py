# tests/conftest.py

import os

# Settings are read at import time; point the app at throwaway values first.
os.environ.setdefault("ENV", "local")
os.environ.setdefault("DATABASE_URL_LOCAL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from starlette.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import MagicMock

from app.main import app
from app.api import deps
from app.db.session import get_db
from app.models import Base


# --- Test Database Setup ---
# One in-memory SQLite database per test. SQLite honours the partial unique
# index on active visits, so conditional inserts behave as on PostgreSQL.
@pytest.fixture(scope="function")
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


# Two sessions on one file-backed database, for interleaving transactions the
# way two receptionists would.
@pytest.fixture(scope="function")
def session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'visit_desk.db'}")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


# --- Mock Dependencies Setup ---
class MockTokenPayload:
    def __init__(self, sub="user_123", role="recepcao"):
        self.sub = sub
        self.role = role


def override_get_current_user():
    return MockTokenPayload()


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def test_client():
    """
    Provides a TestClient where the database and authentication are mocked.
    This is for INTEGRATION tests that patch the CRUD/service objects.
    """
    app.dependency_overrides[get_db] = lambda: MagicMock()
    app.dependency_overrides[deps.get_current_user] = override_get_current_user

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_client_e2e(db_session):
    """
    Provides a TestClient backed by the in-memory test database, with auth mocked.
    This is for E2E tests.
    """

    def override_get_db_e2e():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db_e2e
    app.dependency_overrides[deps.get_current_user] = override_get_current_user

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def graphql_client(db_session):
    """TestClient for /graphql; auth comes from a real bearer token."""

    def override_get_db_e2e():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db_e2e

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
