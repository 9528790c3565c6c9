"""Session identity.

One opaque id per client, generated on first use and kept in local
storage for as long as that storage lives. No expiry, no rotation.
"""

from __future__ import annotations

from spinwheel.client.storage import LocalStorage
from spinwheel.core.identity import new_session_id

SESSION_STORAGE_KEY = "wheelSessionId"


class SessionIdentity:
    """Get-or-create access to the client's session id."""

    def __init__(self, storage: LocalStorage):
        self._storage = storage
        self._cached: str | None = None

    def get_or_create(self) -> str:
        """Return the stored session id, generating and persisting it first if absent."""
        if self._cached:
            return self._cached

        session_id = self._storage.get_item(SESSION_STORAGE_KEY)
        if not session_id:
            session_id = new_session_id()
            self._storage.set_item(SESSION_STORAGE_KEY, session_id)

        self._cached = session_id
        return session_id
