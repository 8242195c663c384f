"""
Shared fixtures: in-memory database, frozen clock, API client.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from arcopersona.db.schema import Base
from arcopersona.api.app import app
from arcopersona.api.public import get_db_session


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def engine():
    """Fresh in-memory SQLite engine with the schema created."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture(scope="function")
def session(engine):
    """Get database session."""
    sess = sessionmaker(bind=engine)()
    yield sess
    sess.close()


@pytest.fixture
def clock():
    return FrozenClock(datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def client(session):
    """FastAPI test client bound to the in-memory database."""
    def override_session():
        yield session

    app.dependency_overrides[get_db_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()
