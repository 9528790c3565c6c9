"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
Any SQLAlchemy failure surfaces as StoreError.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterator

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from spinwheel.db.schema import PortfolioEntry, SpinHistory
from spinwheel.errors import StoreError
from spinwheel.models.domain import EntryEntity, SpinKey, SpinRecordEntity

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["BATCH_LIMIT", "DbSession"]

# Maximum number of deletions the store accepts in one call
BATCH_LIMIT = 25


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into StoreError."""
    try:
        yield
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to {action}: {e}") from e


# ============================================================================
# Converters: SQLAlchemy <-> Domain
# ============================================================================


def to_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_db_time(value: datetime) -> datetime:
    """SQLite DateTime columns hold naive UTC."""
    return to_utc(value).replace(tzinfo=None)


def _spin_to_entity(row: SpinHistory) -> SpinRecordEntity:
    """Convert SQLAlchemy SpinHistory to domain entity."""
    return SpinRecordEntity(
        id=row.id,
        entry_id=row.entry_id,
        entry_name=row.entry_name,
        entry_type=row.entry_type,
        entry_who=row.entry_who,
        filter=row.filter,
        weighted_mode=row.weighted_mode,
        timestamp=to_utc(row.timestamp),
        session_id=row.session_id,
        created_at=to_utc(row.created_at),
    )


def _entry_to_entity(row: PortfolioEntry) -> EntryEntity:
    """Convert SQLAlchemy PortfolioEntry to domain entity."""
    return EntryEntity(
        id=row.id,
        name=row.name,
        type=row.type,
        who=row.who,
        why=row.why,
        created_at=to_utc(row.created_at) if row.created_at else None,
    )


# ============================================================================
# Spin History Repository
# ============================================================================


def append_spin(session: DbSession, entity: SpinRecordEntity) -> SpinRecordEntity:
    """Insert one spin record. Caller commits."""
    row = SpinHistory(
        id=entity.id,
        timestamp=_to_db_time(entity.timestamp),
        entry_id=entity.entry_id,
        entry_name=entity.entry_name,
        entry_type=entity.entry_type,
        entry_who=entity.entry_who,
        filter=entity.filter,
        weighted_mode=entity.weighted_mode,
        session_id=entity.session_id,
        created_at=_to_db_time(entity.created_at),
    )
    with _store_errors("append spin"):
        session.add(row)
    return entity


def scan_spins(session: DbSession, entry_type: str | None = None) -> list[SpinRecordEntity]:
    """Full scan of spin history, optionally restricted to one entry type.

    No ordering is guaranteed; callers sort.
    """
    stmt = select(SpinHistory)
    if entry_type is not None:
        stmt = stmt.where(SpinHistory.entry_type == entry_type)
    with _store_errors("scan spin history"):
        rows = session.scalars(stmt).all()
    return [_spin_to_entity(r) for r in rows]


def list_spin_keys(session: DbSession) -> list[SpinKey]:
    """Get the natural key of every stored spin."""
    with _store_errors("list spin keys"):
        rows = session.execute(select(SpinHistory.id, SpinHistory.timestamp)).all()
    return [SpinKey(id=r[0], timestamp=to_utc(r[1])) for r in rows]


def count_spins(session: DbSession) -> int:
    """Count stored spins."""
    with _store_errors("count spins"):
        return session.scalar(select(func.count()).select_from(SpinHistory)) or 0


def delete_spin_batch(session: DbSession, keys: list[SpinKey]) -> int:
    """Delete one batch of spins by natural key and commit.

    Keys that no longer exist are ignored.

    Args:
        session: Database session.
        keys: At most BATCH_LIMIT keys.

    Returns:
        Number of rows actually removed.

    Raises:
        ValueError: If the batch exceeds BATCH_LIMIT.
        StoreError: If the delete fails.
    """
    if len(keys) > BATCH_LIMIT:
        raise ValueError(f"Batch of {len(keys)} exceeds limit of {BATCH_LIMIT}")
    if not keys:
        return 0

    condition = or_(
        *(
            and_(SpinHistory.id == k.id, SpinHistory.timestamp == _to_db_time(k.timestamp))
            for k in keys
        )
    )
    with _store_errors("delete spin batch"):
        try:
            result = session.execute(delete(SpinHistory).where(condition))
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise
    return result.rowcount or 0


# ============================================================================
# Entry Pool Repository (read-only)
# ============================================================================


def list_entries(session: DbSession) -> list[EntryEntity]:
    """Get every entry currently in the pool."""
    with _store_errors("list entries"):
        rows = session.scalars(select(PortfolioEntry)).all()
    return [_entry_to_entity(r) for r in rows]


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    with _store_errors("commit"):
        try:
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise
