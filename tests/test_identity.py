"""Tests for identity utilities."""

import random
import re

from spinwheel.core.identity import new_session_id, new_spin_id

SESSION_PATTERN = re.compile(r"^session_\d+_[0-9a-z]{9}$")


class TestSessionId:
    """Test new_session_id."""

    def test_format(self):
        """Session id has time and base36 random components."""
        assert SESSION_PATTERN.match(new_session_id())

    def test_embeds_given_time(self):
        """Time component is the supplied epoch millis."""
        sid = new_session_id(now_ms=1700000000000, rng=random.Random(7))
        assert sid.startswith("session_1700000000000_")

    def test_deterministic_with_seeded_rng(self):
        """Same seed and time produce the same id."""
        a = new_session_id(now_ms=1, rng=random.Random(3))
        b = new_session_id(now_ms=1, rng=random.Random(3))
        assert a == b

    def test_distinct_ids(self):
        """Independent calls do not collide."""
        ids = {new_session_id(now_ms=1) for _ in range(50)}
        assert len(ids) == 50


class TestSpinId:
    """Test new_spin_id."""

    def test_prefix_and_uniqueness(self):
        """Spin ids are prefixed and unique."""
        a, b = new_spin_id(), new_spin_id()
        assert a.startswith("spin_")
        assert a != b
