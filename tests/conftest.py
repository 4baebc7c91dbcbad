from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

import bulkups.services.attributes as attributes
from bulkups.database.db import get_engine
from tests.models import Base

FIXED_NOW = datetime(2024, 10, 14, 23, 14, 14, tzinfo=timezone.utc)


class RecordingConnection:
    """Stands in for a MySQL connection, keeps every executed statement."""

    def __init__(self, fail_on=None):
        self.executed = []
        self.fail_on = fail_on

    def execute(self, clause, params=None):
        self.executed.append((str(clause), params))
        if self.fail_on is not None and len(self.executed) == self.fail_on:
            raise OperationalError(str(clause), params, Exception("Lost connection to MySQL server"))


@pytest.fixture
def fixed_now(monkeypatch) -> datetime:
    """Freeze the wall clock used for created_at / updated_at."""
    monkeypatch.setattr(attributes, "current_time", lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def recording_conn() -> RecordingConnection:
    return RecordingConnection()


@pytest.fixture
def sqlite_engine():
    """In-memory SQLite engine with the test tables created."""
    engine = get_engine("sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()
