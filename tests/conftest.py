"""
Shared fixtures: an in-memory database and a fresh lookup context per test.
"""

import pytest

from lookupable import DatabaseService, lookup_context, teardown_lookups

from sample_models import Base, CountingSource


@pytest.fixture(autouse=True)
def no_leftover_context():
    """Make sure no lookup context leaks between tests."""
    yield
    teardown_lookups()


@pytest.fixture
def db_service():
    """Create a connected in-memory database with the sample schema."""
    db = DatabaseService(database_url="sqlite:///:memory:")
    db.connect()
    db.initialize_schema(Base.metadata)
    yield db
    db.disconnect()


@pytest.fixture
def seed(db_service):
    """Insert records and return them (detached, attributes loaded)."""

    def _seed(*records):
        with db_service.session_scope() as session:
            session.add_all(records)
        return records

    return _seed


@pytest.fixture
def source(db_service):
    """Counting record source over the test database."""
    return CountingSource(db_service)


@pytest.fixture
def context(source):
    """Fresh lookup context for a single test."""
    with lookup_context(source) as ctx:
        yield ctx
