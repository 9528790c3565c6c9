"""History store reads and bulk clear.

The underlying store gives no ordering on a full scan, so reads sort by
timestamp before truncating. Bulk clear respects the store's per-call
deletion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from spinwheel.db import repo
from spinwheel.db.repo import BATCH_LIMIT, DbSession
from spinwheel.errors import PartialBatchFailure, StoreError
from spinwheel.models.domain import SpinKey, SpinRecordEntity

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50
MAX_HISTORY_LIMIT = 100
ALL_TYPES = "all"


@dataclass
class ClearOutcome:
    """Result of a bulk clear."""

    deleted: int
    batches: int


def normalize_limit(limit: int | str | None) -> int:
    """Clamp a requested history limit.

    Missing, non-numeric and non-positive values fall back to
    DEFAULT_HISTORY_LIMIT; anything above MAX_HISTORY_LIMIT is capped.
    """
    try:
        value = int(limit) if limit is not None else 0
    except (TypeError, ValueError):
        value = 0
    if value <= 0:
        value = DEFAULT_HISTORY_LIMIT
    return min(value, MAX_HISTORY_LIMIT)


def sort_newest_first(records: list[SpinRecordEntity]) -> list[SpinRecordEntity]:
    """Order records by timestamp descending."""
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


def query_history(
    session: DbSession,
    limit: int | str | None = None,
    entry_type: str | None = None,
) -> list[SpinRecordEntity]:
    """Get the most recent spins.

    Args:
        session: Database session.
        limit: Requested maximum (clamped by normalize_limit).
        entry_type: Restrict to one entry type; None, "" or "all" means no filter.

    Returns:
        At most `limit` records, newest first.
    """
    if not entry_type or entry_type == ALL_TYPES:
        entry_type = None

    records = repo.scan_spins(session, entry_type=entry_type)
    result = sort_newest_first(records)[: normalize_limit(limit)]

    logger.info(f"Returning {len(result)} spins")
    return result


def chunk_keys(keys: list[SpinKey], size: int = BATCH_LIMIT) -> list[list[SpinKey]]:
    """Partition keys into consecutive chunks of at most `size`."""
    if size <= 0:
        raise ValueError("Chunk size must be positive")
    return [keys[i : i + size] for i in range(0, len(keys), size)]


def clear_all(
    session: DbSession,
    batch_size: int = BATCH_LIMIT,
    delete_batch: Callable[[DbSession, list[SpinKey]], int] | None = None,
) -> ClearOutcome:
    """Delete every stored spin, one batch per store call.

    Batches run sequentially. An empty store returns immediately without
    any delete call. Keys that vanish between the scan and the delete
    (a concurrent clear) are not an error.

    Args:
        session: Database session.
        batch_size: Keys per delete call, at most BATCH_LIMIT.
        delete_batch: Batch delete function (defaults to repo.delete_spin_batch).

    Returns:
        ClearOutcome with the number of keys cleared and batches issued.

    Raises:
        PartialBatchFailure: If a batch fails; earlier batches stay deleted.
        StoreError: If the key scan fails.
    """
    if batch_size > BATCH_LIMIT:
        raise ValueError(f"Batch size {batch_size} exceeds store limit of {BATCH_LIMIT}")
    delete_batch = delete_batch or repo.delete_spin_batch

    keys = repo.list_spin_keys(session)
    if not keys:
        logger.info("No spin records to clear")
        return ClearOutcome(deleted=0, batches=0)

    deleted = 0
    batches = 0
    for batch in chunk_keys(keys, batch_size):
        try:
            delete_batch(session, batch)
        except StoreError as e:
            logger.error(f"Clear aborted after {batches} batches ({deleted} deleted): {e}")
            raise PartialBatchFailure(deleted=deleted, batches_completed=batches, cause=e) from e
        deleted += len(batch)
        batches += 1

    logger.info(f"Cleared {deleted} spin records in {batches} batches")
    return ClearOutcome(deleted=deleted, batches=batches)
