"""Shared fixtures: an isolated in-memory database per test."""
from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from msgboard.core.database import Base, create_session_factory, init_db
from msgboard.repositories.message_store import MessageStore
from msgboard.services.message_service import MessageService


class FakeClock:
    """Controllable clock; call it to read the current time."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine():
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def store(session_factory):
    return MessageStore(session_factory)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 15, 10, 0, 0))


@pytest.fixture
def service(store, clock):
    return MessageService(store, clock=clock)
