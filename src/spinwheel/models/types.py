"""Pydantic models for the spinwheel API.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for camelCase wire models."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SpinSubmission(WireModel):
    """Spin recording request.

    Required fields are checked by the recorder rather than by pydantic so
    that a missing field maps to 400 instead of 422.
    """

    entry_id: str | None = None
    entry_name: str | None = None
    entry_type: str | None = None
    entry_who: str | None = None
    filter: str | None = None
    weighted_mode: bool | None = None
    timestamp: datetime | None = None
    session_id: str | None = None


class SpinRecord(WireModel):
    """Stored spin record for API response."""

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


class EntryCount(WireModel):
    """Spin count for one entry name."""

    name: str
    count: int


class TypeCount(WireModel):
    """Spin count for one entry type."""

    type: str
    count: int


class MetricsSnapshot(WireModel):
    """Aggregate statistics over the full spin history."""

    total_spins: int
    unique_users: int
    today_spins: int
    week_spins: int
    top_entries: list[EntryCount]
    type_distribution: list[TypeCount]
    average_spins_per_user: float
    last_updated: datetime


class ClearResult(WireModel):
    """Response for a bulk history clear."""

    message: str
    deleted: int


class Entry(WireModel):
    """Pool entry as served by the external entries service."""

    id: str
    name: str
    type: str
    who: str
    why: str
    created_at: datetime | None = None
