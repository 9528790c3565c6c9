"""Error taxonomy for the wheel.

Server routes translate these into HTTP status codes; client code
decides which of them are swallowed.
"""

from __future__ import annotations


class WheelError(Exception):
    """Base class for all spinwheel errors."""


class ValidationError(WheelError):
    """A spin record is missing one or more required fields."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required fields: {', '.join(missing)}")


class NoSelectableEntries(WheelError):
    """Spin requested against an empty pool."""

    def __init__(self, message: str = "No entries available to spin"):
        super().__init__(message)


class SpinInProgress(WheelError):
    """A spin was requested while another one is still settling."""

    def __init__(self, message: str = "Wheel is already spinning"):
        super().__init__(message)


class StoreError(WheelError):
    """Failure reaching, reading or writing the history store or entry pool."""


class PartialBatchFailure(StoreError):
    """A chunk of a bulk clear failed after earlier chunks were deleted.

    Deleted chunks stay deleted. Running the clear again removes
    whatever is left.
    """

    def __init__(self, deleted: int, batches_completed: int, cause: Exception | None = None):
        self.deleted = deleted
        self.batches_completed = batches_completed
        self.cause = cause
        super().__init__(
            f"Clear aborted after {batches_completed} batches ({deleted} records deleted)"
        )
