"""Domain models for spinwheel.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


# ============================================================================
# Entry Pool Domain
# ============================================================================


@dataclass(frozen=True)
class EntryEntity:
    """Domain model for a selectable pool entry (owned by the pool service)."""

    id: str
    name: str
    type: str
    who: str
    why: str
    created_at: datetime | None = None


# ============================================================================
# Spin History Domain
# ============================================================================


@dataclass(frozen=True)
class SpinKey:
    """Natural key of a stored spin."""

    id: str
    timestamp: datetime


@dataclass(frozen=True)
class SpinRecordEntity:
    """Domain model for a stored spin. Immutable once created."""

    id: str
    entry_id: str
    entry_name: str
    entry_type: str
    entry_who: str
    filter: str
    weighted_mode: bool
    timestamp: datetime
    session_id: str
    created_at: datetime

    @property
    def key(self) -> SpinKey:
        return SpinKey(id=self.id, timestamp=self.timestamp)


# ============================================================================
# Selection Domain
# ============================================================================


@dataclass(frozen=True)
class SpinResult:
    """Outcome of one spin: cumulative rotation and the winning entry."""

    rotation: float
    winner: EntryEntity
    winner_index: int
