"""Root conftest for all tests.

Shared fixtures: a controllable clock for the session timer, an in-memory
snapshot store, and an isolated in-memory SQLite plan store.
"""

from collections.abc import Generator
from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from focusramp.session.store import InMemoryKeyValueStore


class FakeClock:
    """Wall clock in seconds since epoch, advanced by hand."""

    def __init__(self, start: float = 1_736_150_400.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    @property
    def now_ms(self) -> int:
        return int(self.now * 1000)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture(scope="function")
def db_session(monkeypatch) -> Generator[Session, None, None]:
    """Provides an isolated in-memory SQLite session per test.

    StaticPool keeps one connection so every commit lands in the same
    in-memory database. get_session() is patched to hand out this session.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    from focusramp.plans.models import Base

    Base.metadata.create_all(engine)

    def mock_get_engine():
        return engine

    monkeypatch.setattr("focusramp.db.session._get_engine", mock_get_engine)
    monkeypatch.setattr("focusramp.db.session.get_engine", mock_get_engine)

    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()

    @contextmanager
    def mock_get_session():
        yield session
        session.commit()

    import focusramp.db.session as session_module

    monkeypatch.setattr(session_module, "get_session", mock_get_session)

    try:
        yield session
    finally:
        session.close()
        engine.dispose()
