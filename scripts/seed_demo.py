#!/usr/bin/env python3
"""Seed a demo database with pool entries and spin history.

Usage:
    python scripts/seed_demo.py [--spins N] [--db PATH]

This script:
1. Initializes the demo database
2. Seeds portfolio entries (normally owned by the entries service)
3. Spins the wheel N times across a few sessions and records each spin
"""

from __future__ import annotations

import argparse
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from spinwheel.aggregation.metrics import summarize_spins  # noqa: E402
from spinwheel.core.identity import new_session_id  # noqa: E402
from spinwheel.db import repo  # noqa: E402
from spinwheel.db.schema import PortfolioEntry  # noqa: E402
from spinwheel.db.session import get_db_session, init_db  # noqa: E402
from spinwheel.history.recorder import record_spin  # noqa: E402
from spinwheel.models.types import SpinSubmission  # noqa: E402
from spinwheel.selection.engine import SelectionEngine  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_SESSIONS = 4

DEMO_ENTRIES = [
    ("e-pizza", "Pizza", "Food", "Sam", "Friday tradition"),
    ("e-tacos", "Tacos", "Food", "Alex", "Cheap and fast"),
    ("e-hike", "Hike", "Activity", "Jordan", "Good weather"),
    ("e-movie", "Movie night", "Activity", "Riley", "New release"),
    ("e-book", "Read a book", "Relax", "Casey", "Backlog is long"),
]


def seed_entries(db_path: Path) -> None:
    """Insert demo entries if they are not there yet."""
    with get_db_session(db_path) as session:
        existing = {e.id for e in repo.list_entries(session)}
        for entry_id, name, entry_type, who, why in DEMO_ENTRIES:
            if entry_id in existing:
                continue
            session.add(PortfolioEntry(id=entry_id, name=name, type=entry_type, who=who, why=why))


def seed_spins(db_path: Path, count: int, seed: int = 42) -> None:
    """Spin the wheel `count` times and record every result."""
    rng = random.Random(seed)
    engine = SelectionEngine(rng=rng)
    sessions = [new_session_id(rng=rng) for _ in range(DEMO_SESSIONS)]
    now = datetime.now(timezone.utc)

    with get_db_session(db_path) as session:
        pool = repo.list_entries(session)
        for i in range(count):
            result = engine.spin(pool)
            engine.settle()
            record_spin(
                session,
                SpinSubmission(
                    entry_id=result.winner.id,
                    entry_name=result.winner.name,
                    entry_type=result.winner.type,
                    entry_who=result.winner.who,
                    session_id=rng.choice(sessions),
                    timestamp=now - timedelta(hours=rng.randint(0, 24 * 10), seconds=i),
                ),
            )


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed spinwheel demo data")
    parser.add_argument("--spins", type=int, default=40, help="Number of spins to record")
    parser.add_argument("--db", type=Path, default=DEMO_DB_PATH, help="SQLite database path")
    args = parser.parse_args()

    init_db(args.db)
    seed_entries(args.db)
    seed_spins(args.db, args.spins)

    with get_db_session(args.db) as session:
        snapshot = summarize_spins(session)

    print(f"Seeded {args.db}")
    print(snapshot.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
