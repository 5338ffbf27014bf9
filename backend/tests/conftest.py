"""
Shared fixtures: an in-memory SQLite database per test and an API client bound to it
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pokernight.core.db import enable_sqlite_foreign_keys
from pokernight.core.deps import get_db
from pokernight.core.security import issue_token
from pokernight.main import app
from pokernight.models.db import Base
from pokernight.services.group_service import GroupService
from pokernight.services.table_service import TableService
from pokernight.services.user_service import UserService


@pytest.fixture
def db_session():
    """Create test database session"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def group(db_session):
    return GroupService.create_group(db_session, "Thursday Night", "Weekly home game", created_by=None)


@pytest.fixture
def table(db_session, group):
    return TableService.create_table(db_session, "Game #1", small_blind=1, big_blind=2, group_id=group.id)


@pytest.fixture
def client(db_session):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _auth_headers(db_session, username, role):
    user = UserService.register(db_session, username, "secret-pass", role)
    token = issue_token(user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(db_session):
    return _auth_headers(db_session, "boss", "admin")


@pytest.fixture
def editor_headers(db_session):
    return _auth_headers(db_session, "dealer", "editor")


@pytest.fixture
def viewer_headers(db_session):
    return _auth_headers(db_session, "railbird", "viewer")
