"""Shared pytest fixtures for spinwheel tests."""

from datetime import datetime, timezone
from itertools import count

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from spinwheel.db.schema import Base, PortfolioEntry
from spinwheel.models.domain import EntryEntity, SpinRecordEntity

BASE_TIME = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def make_spin():
    """Factory for spin records with unique ids."""
    ids = count(1)

    def _make(
        entry_name: str = "Pizza",
        entry_type: str = "Food",
        session_id: str = "s1",
        timestamp: datetime = BASE_TIME,
    ) -> SpinRecordEntity:
        n = next(ids)
        return SpinRecordEntity(
            id=f"spin_{n:04d}",
            entry_id=f"e-{entry_name.lower()}",
            entry_name=entry_name,
            entry_type=entry_type,
            entry_who="Sam",
            filter="all",
            weighted_mode=False,
            timestamp=timestamp,
            session_id=session_id,
            created_at=timestamp,
        )

    return _make


@pytest.fixture
def add_entries(session):
    """Insert pool entries by (name, type) and return them as domain entities."""

    def _add(*items: tuple[str, str]) -> list[EntryEntity]:
        result = []
        for name, entry_type in items:
            entry_id = f"e-{name.lower()}"
            session.add(
                PortfolioEntry(id=entry_id, name=name, type=entry_type, who="Sam", why="because")
            )
            result.append(EntryEntity(id=entry_id, name=name, type=entry_type, who="Sam", why="because"))
        session.commit()
        return result

    return _add


def entry(name: str, entry_type: str = "Food") -> EntryEntity:
    """Build a pool entry without touching the database."""
    return EntryEntity(id=f"e-{name.lower()}", name=name, type=entry_type, who="Sam", why="because")


@pytest.fixture
def pool():
    """Three-entry pool [A, B, C]."""
    return [entry("A"), entry("B"), entry("C")]
