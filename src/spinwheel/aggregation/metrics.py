"""Global spin metrics aggregation.

Computes a MetricsSnapshot from the full spin history and the live pool.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from datetime import datetime, timedelta

from spinwheel.db import repo
from spinwheel.db.repo import DbSession, to_utc
from spinwheel.models.domain import EntryEntity, SpinRecordEntity
from spinwheel.models.types import EntryCount, MetricsSnapshot, TypeCount

logger = logging.getLogger(__name__)

TOP_ENTRIES_LIMIT = 10
UNKNOWN_TYPE = "Unknown"


def summarize_spins(session: DbSession, now: datetime | None = None) -> MetricsSnapshot:
    """Compute global metrics from the store.

    Args:
        session: Database session.
        now: Reference time (defaults to server local time).

    Returns:
        Freshly computed MetricsSnapshot.
    """
    spins = repo.scan_spins(session)
    entries = repo.list_entries(session)

    snapshot = compute_metrics(spins, entries, now=now)
    logger.info(
        f"Metrics computed: {snapshot.total_spins} spins, {snapshot.unique_users} users"
    )
    return snapshot


def round_half_up(value: float, digits: int = 1) -> float:
    """Round halves away from zero for positive values (1.25 -> 1.3)."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def rank_counts(counts: Counter) -> list[tuple[str, int]]:
    """Sort by count descending, then key ascending."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def compute_metrics(
    spins: list[SpinRecordEntity],
    entries: list[EntryEntity],
    now: datetime | None = None,
) -> MetricsSnapshot:
    """Compute metrics from spins and pool entries.

    Pure function - no database access.

    Totals, distinct sessions and time windows count every spin.
    topEntries and typeDistribution only count spins whose entry name is
    still present in the pool.

    Args:
        spins: Every stored spin.
        entries: Every entry currently in the pool.
        now: Reference time. Naive values are local time.

    Returns:
        MetricsSnapshot.
    """
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()

    today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = now - timedelta(days=7)

    active_names = {entry.name for entry in entries}

    total_spins = len(spins)
    unique_users = len({spin.session_id for spin in spins})

    today_spins = 0
    week_spins = 0
    entry_counts: Counter = Counter()
    type_counts: Counter = Counter()

    for spin in spins:
        ts = to_utc(spin.timestamp)
        if ts >= today_start:
            today_spins += 1
        if ts >= week_start:
            week_spins += 1

        if spin.entry_name in active_names:
            entry_counts[spin.entry_name] += 1
            type_counts[spin.entry_type or UNKNOWN_TYPE] += 1

    top_entries = [
        EntryCount(name=name, count=count)
        for name, count in rank_counts(entry_counts)[:TOP_ENTRIES_LIMIT]
    ]
    type_distribution = [
        TypeCount(type=entry_type, count=count) for entry_type, count in rank_counts(type_counts)
    ]

    average = round_half_up(total_spins / unique_users) if unique_users > 0 else 0

    return MetricsSnapshot(
        total_spins=total_spins,
        unique_users=unique_users,
        today_spins=today_spins,
        week_spins=week_spins,
        top_entries=top_entries,
        type_distribution=type_distribution,
        average_spins_per_user=average,
        last_updated=now,
    )
