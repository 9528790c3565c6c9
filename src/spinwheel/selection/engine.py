"""Wheel selection.

Maps a random cumulative rotation onto one of N equal segments. The
pointer sits at the top of the wheel, so the landing angle is shifted by
90 degrees before the segment lookup.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Sequence

from spinwheel.errors import NoSelectableEntries, SpinInProgress
from spinwheel.models.domain import EntryEntity, SpinResult

logger = logging.getLogger(__name__)

MIN_SPINS = 5
MAX_SPINS = 10
POINTER_OFFSET = 90.0


def winner_index(rotation: float, pool_size: int) -> int:
    """Index of the segment under the pointer for a given rotation.

    Args:
        rotation: Cumulative rotation in degrees.
        pool_size: Number of equal segments.

    Returns:
        Index in [0, pool_size).

    Examples:
        >>> winner_index(750, 3)
        1
    """
    if pool_size <= 0:
        raise NoSelectableEntries()
    segment_size = 360.0 / pool_size
    adjusted = (rotation % 360 + POINTER_OFFSET) % 360
    return math.floor(adjusted / segment_size) % pool_size


class SelectionEngine:
    """Single-flight wheel.

    Rotation accumulates for the lifetime of the engine so consecutive
    spins always turn further in the same direction. While a spin is
    settling the engine is locked; another spin is rejected, not queued.
    """

    def __init__(self, rng: random.Random | None = None, initial_rotation: float = 0.0):
        self._rng = rng or random.Random()
        self._rotation = initial_rotation
        self._spinning = False

    @property
    def rotation(self) -> float:
        return self._rotation

    @property
    def is_spinning(self) -> bool:
        return self._spinning

    def spin(self, pool: Sequence[EntryEntity]) -> SpinResult:
        """Start a spin and pick the winner.

        The lock stays held until settle() is called.

        Args:
            pool: Current selectable entries, in display order.

        Returns:
            SpinResult with the new cumulative rotation and the winner.

        Raises:
            NoSelectableEntries: If the pool is empty.
            SpinInProgress: If a previous spin has not settled.
        """
        if not pool:
            raise NoSelectableEntries()
        if self._spinning:
            raise SpinInProgress()

        self._spinning = True
        spins = MIN_SPINS + self._rng.random() * (MAX_SPINS - MIN_SPINS)
        offset = self._rng.random() * 360
        rotation = self._rotation + spins * 360 + offset
        self._rotation = rotation

        index = winner_index(rotation, len(pool))
        winner = pool[index]
        logger.debug(f"Spin landed at {rotation:.1f} degrees -> {winner.name}")
        return SpinResult(rotation=rotation, winner=winner, winner_index=index)

    def settle(self) -> None:
        """Release the spin lock."""
        self._spinning = False
