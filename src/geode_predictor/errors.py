"""Error types raised by the prediction core."""

from __future__ import annotations


class PredictionRangeError(ValueError):
    """Raised when a caller asks for an impossible position range."""


class StateRestoreError(RuntimeError):
    """Raised when simulation state could not be restored after a temporary change.

    ``original_error`` holds the exception raised inside the guarded block, if any.
    """

    def __init__(self, message: str, *, original_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error
