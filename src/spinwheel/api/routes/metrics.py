"""Metrics API endpoint.

GET /metrics - Global spin statistics
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from spinwheel.aggregation.metrics import summarize_spins
from spinwheel.api.app import get_db_session
from spinwheel.db.repo import DbSession
from spinwheel.errors import StoreError
from spinwheel.models.types import MetricsSnapshot

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/metrics", response_model=MetricsSnapshot)
def get_metrics(session: DbSession = Depends(get_db_session)) -> MetricsSnapshot:
    """Compute global metrics from the full spin history.

    Raises:
        HTTPException: 500 on store failure.
    """
    try:
        return summarize_spins(session)
    except StoreError as e:
        logger.exception("Error calculating metrics")
        raise HTTPException(status_code=500, detail="Internal server error") from e
