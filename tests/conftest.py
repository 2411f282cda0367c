# File: tests/conftest.py

import pytest
import os
import sys
import logging
from datetime import datetime, timedelta, timezone
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Point the project at a throwaway SQLite file before settings are read
os.environ.setdefault("INSIGHT_DATABASE_URL", "sqlite:///./test_insight_triage.db")

from insight_triage.core.config.settings import settings

# 3. Create Test Engine
from insight_triage.core.database.connection import build_engine

TEST_ENGINE = build_engine(settings.DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=TEST_ENGINE)


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Ensures DB exists and creates tables.
    """
    logging.getLogger("insight_triage").setLevel(logging.DEBUG)

    if not database_exists(TEST_ENGINE.url):
        create_database(TEST_ENGINE.url)

    # Import all models to ensure they are registered
    from insight_triage.core.database.base import Base
    import insight_triage.features.record_store.data.sql_models

    Base.metadata.create_all(bind=TEST_ENGINE)

    yield


@pytest.fixture(scope="function", autouse=True)
def clean_db(global_setup):
    """
    Runs before EVERY test.
    Empties every table.
    """
    from insight_triage.core.database.base import Base

    with TEST_ENGINE.connect() as conn:
        trans = conn.begin()
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(text(f'DELETE FROM "{table.name}";'))
        trans.commit()

    yield


@pytest.fixture(scope="function")
def db_session():
    """
    Provides a session for the test to use.
    """
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def memory_store():
    from insight_triage.features.record_store.data.memory import InMemoryRecordStore
    return InMemoryRecordStore()


@pytest.fixture
def sql_store():
    from insight_triage.features.record_store.data.repository import SqlRecordStore
    return SqlRecordStore(session_factory=TestingSessionLocal)


class FailingCommitSession(Session):
    def commit(self):
        raise OperationalError("COMMIT", {}, Exception("database is locked"))


@pytest.fixture
def failing_sql_store():
    """Store whose every commit fails, sharing the test database."""
    from insight_triage.features.record_store.data.repository import SqlRecordStore
    failing_factory = sessionmaker(bind=TEST_ENGINE, class_=FailingCommitSession)
    return SqlRecordStore(session_factory=failing_factory, create_tables=False)


class TickingClock:
    """Returns a strictly increasing time on every call."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def clock():
    return TickingClock()
