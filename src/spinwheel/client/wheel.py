"""Wheel controller.

Holds the pool view (type filter + search), drives the selection engine
and hands finished spins to the API client in the background. The
selection shown to the user never waits on, or is undone by, recording.
"""

from __future__ import annotations

import logging
from collections import Counter, deque
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from spinwheel.aggregation.metrics import rank_counts
from spinwheel.client.api import WheelApiClient
from spinwheel.client.pool import PoolChannel
from spinwheel.models.domain import EntryEntity, SpinResult
from spinwheel.models.types import EntryCount
from spinwheel.selection.engine import SelectionEngine

logger = logging.getLogger(__name__)

ALL_TYPES = "all"
LOCAL_HISTORY_SIZE = 50
LOCAL_TOP_SPUN = 3
RECENT_WINDOW = timedelta(hours=1)


@dataclass(frozen=True)
class LocalSpin:
    """A spin as remembered by this client."""

    entry: EntryEntity
    timestamp: datetime
    filter_used: str
    total_options: int


@dataclass(frozen=True)
class LocalMetrics:
    """Summary of the loaded pool and this client's own spins."""

    total_entries: int
    visible_entries: int
    type_counts: dict[str, int]
    recent_spins: int
    top_spun: list[EntryCount]
    total_spins: int


class Wheel:
    """One client's decision wheel.

    Construct with its collaborators, call load() once the pool is
    wanted, and close() when finished.
    """

    def __init__(
        self,
        api: WheelApiClient,
        channel: PoolChannel,
        engine: SelectionEngine | None = None,
        executor: Executor | None = None,
        animate: Callable[[SpinResult], None] | None = None,
    ):
        self.api = api
        self.channel = channel
        self.engine = engine or SelectionEngine()
        self._executor = executor or ThreadPoolExecutor(max_workers=1)
        self._owns_executor = executor is None
        self._animate = animate

        self.entries: list[EntryEntity] = []
        self.active_filter = ALL_TYPES
        self.search_term = ""
        self.weighted_mode = False
        self.selected: EntryEntity | None = None
        self.history: deque[LocalSpin] = deque(maxlen=LOCAL_HISTORY_SIZE)
        self._pending: list[Future] = []

        self._unsubscribe = channel.subscribe(self._on_pool_update)

    def _on_pool_update(self, entries: list[EntryEntity]) -> None:
        self.entries = entries

    def load(self) -> list[EntryEntity]:
        """Fetch the pool and publish it to every subscriber.

        Raises:
            StoreError: If the pool cannot be fetched.
        """
        entries = self.api.get_entries()
        self.channel.publish(entries)
        return entries

    # ------------------------------------------------------------------
    # Pool view
    # ------------------------------------------------------------------

    @property
    def visible_entries(self) -> list[EntryEntity]:
        """Entries matching the active type filter and search term."""
        filtered = self.entries
        if self.active_filter != ALL_TYPES:
            filtered = [e for e in filtered if e.type == self.active_filter]

        if self.search_term:
            term = self.search_term.lower()
            filtered = [
                e
                for e in filtered
                if term in e.name.lower()
                or term in e.type.lower()
                or term in e.who.lower()
                or term in e.why.lower()
            ]
        return filtered

    def available_types(self) -> list[str]:
        return sorted({e.type for e in self.entries})

    def set_filter(self, entry_type: str) -> None:
        self.active_filter = entry_type or ALL_TYPES
        self.selected = None

    def set_search(self, term: str) -> None:
        self.search_term = term or ""

    def clear_filters(self) -> None:
        self.set_filter(ALL_TYPES)
        self.search_term = ""

    # ------------------------------------------------------------------
    # Spinning
    # ------------------------------------------------------------------

    def spin(self) -> SpinResult:
        """Spin over the visible entries.

        The engine stays locked while the animate hook runs. Recording is
        queued only after the spin settles and never raises here.

        Raises:
            NoSelectableEntries: If no entries are visible. Nothing is recorded.
            SpinInProgress: If a spin is already running.
        """
        pool = self.visible_entries
        result = self.engine.spin(pool)
        self.selected = None
        try:
            if self._animate is not None:
                self._animate(result)
        finally:
            self.engine.settle()

        self.selected = result.winner
        self.history.appendleft(
            LocalSpin(
                entry=result.winner,
                timestamp=datetime.now(timezone.utc),
                filter_used=self.active_filter,
                total_options=len(pool),
            )
        )
        self._pending = [f for f in self._pending if not f.done()]
        self._pending.append(
            self._executor.submit(
                self.api.record_spin, result.winner, self.active_filter, self.weighted_mode
            )
        )
        logger.info(f"Selected: {result.winner.name}")
        return result

    def local_metrics(self, now: datetime | None = None) -> LocalMetrics:
        """Summarize the pool and the local spin log.

        recent_spins covers the hour before `now`. top_spun lists the three
        most selected names, ties broken by name.
        """
        now = now or datetime.now(timezone.utc)
        since = now - RECENT_WINDOW

        spun = Counter(spin.entry.name for spin in self.history)
        return LocalMetrics(
            total_entries=len(self.entries),
            visible_entries=len(self.visible_entries),
            type_counts=dict(Counter(e.type for e in self.entries)),
            recent_spins=sum(1 for spin in self.history if spin.timestamp >= since),
            top_spun=[
                EntryCount(name=name, count=count)
                for name, count in rank_counts(spun)[:LOCAL_TOP_SPUN]
            ],
            total_spins=len(self.history),
        )

    def clear_local_history(self) -> None:
        self.history.clear()

    def flush(self) -> None:
        """Wait for queued recordings to finish."""
        pending, self._pending = self._pending, []
        for future in pending:
            future.result()

    def close(self) -> None:
        """Finish queued recordings and detach from the pool channel."""
        self.flush()
        self._unsubscribe()
        if self._owns_executor:
            self._executor.shutdown(wait=True)
