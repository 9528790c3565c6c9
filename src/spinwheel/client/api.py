"""HTTP client for the spin history service and the entries service."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from spinwheel.client.session import SessionIdentity
from spinwheel.errors import StoreError
from spinwheel.models.domain import EntryEntity
from spinwheel.models.types import Entry, MetricsSnapshot, SpinRecord

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://127.0.0.1:8000"
DEFAULT_TIMEOUT = 10.0


def default_api_url() -> str:
    """SPINWHEEL_API_URL if set, else DEFAULT_API_URL."""
    return os.environ.get("SPINWHEEL_API_URL", DEFAULT_API_URL)


class WheelApiClient:
    """Explicitly constructed API client.

    Owns one httpx.Client; call close() (or use as a context manager)
    when done.
    """

    def __init__(
        self,
        session_identity: SessionIdentity,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.session_identity = session_identity
        self._http = httpx.Client(
            base_url=base_url or default_api_url(),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def __enter__(self) -> WheelApiClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """Send a request and decode the JSON body.

        Raises:
            StoreError: On transport failure, non-2xx status or bad JSON.
        """
        try:
            response = self._http.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise StoreError(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            raise StoreError(f"{method} {path} returned invalid JSON") from e

    # ------------------------------------------------------------------
    # Entries (external pool service)
    # ------------------------------------------------------------------

    def get_entries(self) -> list[EntryEntity]:
        """Fetch the pool, newest first."""
        data = self._request("GET", "/entries")
        try:
            entries = [Entry.model_validate(item) for item in data]
        except (TypeError, PydanticValidationError) as e:
            raise StoreError(f"Malformed entries payload: {e}") from e

        entries.sort(key=lambda e: e.created_at.timestamp() if e.created_at else 0, reverse=True)
        logger.info(f"Fetched {len(entries)} entries")
        return [
            EntryEntity(
                id=e.id, name=e.name, type=e.type, who=e.who, why=e.why, created_at=e.created_at
            )
            for e in entries
        ]

    # ------------------------------------------------------------------
    # Spins
    # ------------------------------------------------------------------

    def record_spin(
        self,
        winner: EntryEntity,
        filter: str = "all",
        weighted_mode: bool = False,
    ) -> SpinRecord | None:
        """Record a completed spin.

        Best effort: any failure is logged and None is returned so the
        selection already shown to the user stands.
        """
        payload = {
            "entryId": winner.id,
            "entryName": winner.name,
            "entryType": winner.type,
            "entryWho": winner.who,
            "filter": filter or "all",
            "weightedMode": bool(weighted_mode),
            "sessionId": self.session_identity.get_or_create(),
        }
        try:
            data = self._request("POST", "/spins", json=payload)
            record = SpinRecord.model_validate(data)
        except (StoreError, PydanticValidationError) as e:
            logger.warning(f"Error recording spin: {e}")
            return None

        logger.info(f"Spin recorded: {record.id}")
        return record

    def get_spin_history(self, limit: int = 50, type: str | None = None) -> list[SpinRecord]:
        """Fetch recent spins, newest first.

        Raises:
            StoreError: If the request fails.
        """
        params: dict[str, Any] = {"limit": limit}
        if type and type != "all":
            params["type"] = type
        data = self._request("GET", "/spins", params=params)
        try:
            records = [SpinRecord.model_validate(item) for item in data]
        except (TypeError, PydanticValidationError) as e:
            raise StoreError(f"Malformed spin history payload: {e}") from e
        return sorted(records, key=lambda r: r.timestamp, reverse=True)

    def get_global_metrics(self) -> MetricsSnapshot | None:
        """Fetch global metrics.

        Returns None when metrics are unavailable; callers render nothing.
        """
        try:
            data = self._request("GET", "/metrics")
            return MetricsSnapshot.model_validate(data)
        except (StoreError, PydanticValidationError) as e:
            logger.warning(f"Global metrics unavailable: {e}")
            return None

    def clear_spin_history(self) -> int:
        """Delete all spin history.

        Returns:
            Number of records deleted.

        Raises:
            StoreError: If the request fails.
        """
        data = self._request("DELETE", "/spins")
        deleted = int(data.get("deleted", 0)) if isinstance(data, dict) else 0
        logger.info(f"Spin history cleared ({deleted} records)")
        return deleted
