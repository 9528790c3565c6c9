"""Pool update channel.

Publishers push the full current pool; subscribers are called in
subscription order with that list. Delivery is to current subscribers
only; nothing is replayed to late subscribers.
"""

from __future__ import annotations

import logging
from typing import Callable

from spinwheel.models.domain import EntryEntity

logger = logging.getLogger(__name__)

PoolListener = Callable[[list[EntryEntity]], None]


class PoolChannel:
    """Explicit publish/subscribe channel for entry pool updates."""

    def __init__(self):
        self._listeners: list[PoolListener] = []

    def subscribe(self, listener: PoolListener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            Function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, entries: list[EntryEntity]) -> None:
        """Deliver entries to every current subscriber.

        A failing listener is logged and does not stop delivery to the rest.
        """
        for listener in list(self._listeners):
            try:
                listener(list(entries))
            except Exception:
                logger.exception("Pool listener failed")

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)
