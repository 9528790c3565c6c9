"""Spin recording.

Validates a submission, fills defaults and appends an immutable record.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from spinwheel.core.identity import new_spin_id
from spinwheel.db import repo
from spinwheel.db.repo import DbSession, to_utc
from spinwheel.errors import ValidationError
from spinwheel.models.domain import SpinRecordEntity
from spinwheel.models.types import SpinSubmission

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
DEFAULT_FILTER = "all"

# Wire name -> attribute for fields that must be present and non-empty
REQUIRED_FIELDS = {
    "entryId": "entry_id",
    "entryName": "entry_name",
    "sessionId": "session_id",
}


def validate_submission(submission: SpinSubmission) -> None:
    """Check required fields.

    Raises:
        ValidationError: Listing every missing field by its wire name.
    """
    missing = [
        wire_name
        for wire_name, attr in REQUIRED_FIELDS.items()
        if not getattr(submission, attr)
    ]
    if missing:
        raise ValidationError(missing)


def build_spin_record(
    submission: SpinSubmission,
    now: datetime | None = None,
) -> SpinRecordEntity:
    """Create a spin record from a validated submission.

    Pure function - no database access.

    Args:
        submission: Validated submission.
        now: Server time (defaults to current UTC time).

    Returns:
        SpinRecordEntity with defaults applied.
    """
    now = to_utc(now) if now else datetime.now(timezone.utc)
    return SpinRecordEntity(
        id=new_spin_id(),
        entry_id=submission.entry_id,
        entry_name=submission.entry_name,
        entry_type=submission.entry_type or UNKNOWN,
        entry_who=submission.entry_who or UNKNOWN,
        filter=submission.filter or DEFAULT_FILTER,
        weighted_mode=bool(submission.weighted_mode),
        timestamp=to_utc(submission.timestamp) if submission.timestamp else now,
        session_id=submission.session_id,
        created_at=now,
    )


def record_spin(
    session: DbSession,
    submission: SpinSubmission,
    now: datetime | None = None,
) -> SpinRecordEntity:
    """Validate and persist a spin.

    Args:
        session: Database session.
        submission: Incoming spin data.
        now: Server time override.

    Returns:
        The stored record.

    Raises:
        ValidationError: If entryId, entryName or sessionId is missing.
        StoreError: If the append fails.
    """
    validate_submission(submission)
    record = build_spin_record(submission, now=now)

    repo.append_spin(session, record)
    repo.commit(session)

    logger.info(f"Spin recorded: {record.id} ({record.entry_name})")
    return record
