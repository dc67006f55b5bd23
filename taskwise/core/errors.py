"""Error types raised at the engine boundary."""
from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when a task or preferences payload fails boundary validation.

    The scheduling algorithms assume validated input; this is the only error they signal.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message
