"""Tests for the metrics API endpoint."""

from datetime import datetime, timezone

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from spinwheel.db import repo
from spinwheel.db.schema import Base, PortfolioEntry
from spinwheel.errors import StoreError
from spinwheel.models.domain import SpinRecordEntity


def create_test_app_and_client():
    """Create app with test database and return (client, engine)."""
    from spinwheel.api.app import create_app, get_db_session

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    app = create_app()

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    return TestClient(app), engine


def setup_history(engine) -> None:
    """10 spins of X (in pool) and 5 of Y (deleted from pool)."""
    ts = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    with Session(engine) as session:
        session.add(PortfolioEntry(id="e-x", name="X", type="Food", who="Sam", why="tasty"))
        for i in range(15):
            name = "X" if i < 10 else "Y"
            repo.append_spin(
                session,
                SpinRecordEntity(
                    id=f"spin_{i:03d}",
                    entry_id=f"e-{name.lower()}",
                    entry_name=name,
                    entry_type="Food" if name == "X" else "Drink",
                    entry_who="Sam",
                    filter="all",
                    weighted_mode=False,
                    timestamp=ts,
                    session_id=f"s{i % 3}",
                    created_at=ts,
                ),
            )
        session.commit()


class TestMetricsEndpoint:
    """Test GET /metrics."""

    def test_snapshot_shape(self):
        """Snapshot is camelCase JSON with pool-filtered rankings."""
        client, engine = create_test_app_and_client()
        setup_history(engine)

        response = client.get("/metrics")

        assert response.status_code == 200
        data = response.json()
        assert data["totalSpins"] == 15
        assert data["uniqueUsers"] == 3
        assert data["topEntries"] == [{"name": "X", "count": 10}]
        assert data["typeDistribution"] == [{"type": "Food", "count": 10}]
        assert data["averageSpinsPerUser"] == 5.0
        assert data["todaySpins"] == 0
        assert data["weekSpins"] == 0
        assert "lastUpdated" in data

    def test_empty(self):
        """Empty history yields zeros."""
        client, _ = create_test_app_and_client()

        data = client.get("/metrics").json()

        assert data["totalSpins"] == 0
        assert data["averageSpinsPerUser"] == 0
        assert data["topEntries"] == []

    def test_store_error_returns_500(self, monkeypatch):
        """A failing pool read maps to 500."""
        client, _ = create_test_app_and_client()

        def broken_entries(session):
            raise StoreError("down")

        monkeypatch.setattr(repo, "list_entries", broken_entries)

        response = client.get("/metrics")
        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "*"
