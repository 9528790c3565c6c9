"""Identity utilities.

- new_session_id: opaque client token (time component + random component)
- new_spin_id: record id for a stored spin
"""

import random
import string
import time
import uuid

SESSION_PREFIX = "session_"
SPIN_PREFIX = "spin_"

_BASE36 = string.digits + string.ascii_lowercase


def new_session_id(now_ms: int | None = None, rng: random.Random | None = None) -> str:
    """Generate an opaque session identifier.

    Format: session_<epoch millis>_<9 base36 chars>. The value is only a
    grouping key for counting distinct participants, never a credential.

    Args:
        now_ms: Epoch milliseconds (defaults to current time).
        rng: Random source (defaults to the module-level generator).

    Returns:
        Session identifier string.

    Examples:
        >>> new_session_id(1700000000000, random.Random(1)).startswith("session_1700000000000_")
        True
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    rng = rng or random
    suffix = "".join(rng.choice(_BASE36) for _ in range(9))
    return f"{SESSION_PREFIX}{now_ms}_{suffix}"


def new_spin_id() -> str:
    """Generate a spin record id (spin_<uuid4>)."""
    return f"{SPIN_PREFIX}{uuid.uuid4()}"
