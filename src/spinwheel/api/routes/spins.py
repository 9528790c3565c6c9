"""Spin history API endpoints.

POST /spins - Record a spin
GET /spins - List recent spins
DELETE /spins - Clear all spin history
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from spinwheel.api.app import get_db_session
from spinwheel.db.repo import DbSession
from spinwheel.errors import PartialBatchFailure, StoreError, ValidationError
from spinwheel.history.recorder import record_spin
from spinwheel.history.store import clear_all, query_history
from spinwheel.models.domain import SpinRecordEntity
from spinwheel.models.types import ClearResult, SpinRecord, SpinSubmission

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR = "Internal server error"


def _to_response(record: SpinRecordEntity) -> SpinRecord:
    """Build API model from domain record."""
    return SpinRecord(
        id=record.id,
        entry_id=record.entry_id,
        entry_name=record.entry_name,
        entry_type=record.entry_type,
        entry_who=record.entry_who,
        filter=record.filter,
        weighted_mode=record.weighted_mode,
        timestamp=record.timestamp,
        session_id=record.session_id,
        created_at=record.created_at,
    )


@router.post("/spins", response_model=SpinRecord)
def create_spin(
    submission: SpinSubmission,
    session: DbSession = Depends(get_db_session),
) -> SpinRecord:
    """Record a spin.

    Args:
        submission: Spin data from the client.
        session: Database session (injected).

    Returns:
        The stored record, including server-assigned fields.

    Raises:
        HTTPException: 400 if a required field is missing, 500 on store failure.
    """
    try:
        record = record_spin(session, submission)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except StoreError as e:
        logger.exception("Error recording spin")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR) from e

    return _to_response(record)


@router.get("/spins", response_model=list[SpinRecord])
def list_spins(
    limit: str | None = None,
    type: str | None = None,
    session: DbSession = Depends(get_db_session),
) -> list[SpinRecord]:
    """List recent spins, newest first.

    Args:
        limit: Maximum records (default 50, capped at 100).
        type: Only spins of this entry type; "all" disables the filter.
        session: Database session (injected).

    Raises:
        HTTPException: 500 on store failure.
    """
    try:
        records = query_history(session, limit=limit, entry_type=type)
    except StoreError as e:
        logger.exception("Error getting spin history")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR) from e

    return [_to_response(r) for r in records]


@router.delete("/spins", response_model=ClearResult)
def clear_spins(session: DbSession = Depends(get_db_session)) -> ClearResult:
    """Delete every stored spin.

    Raises:
        HTTPException: 500 on store failure. A partial failure reports how
            many records were deleted before it.
    """
    try:
        outcome = clear_all(session)
    except PartialBatchFailure as e:
        logger.exception("Spin history clear aborted")
        raise HTTPException(
            status_code=500,
            detail={"error": INTERNAL_ERROR, "deleted": e.deleted},
        ) from e
    except StoreError as e:
        logger.exception("Error clearing spin history")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR) from e

    if outcome.deleted == 0:
        return ClearResult(message="No items to delete", deleted=0)
    return ClearResult(message="Spin history cleared successfully", deleted=outcome.deleted)
