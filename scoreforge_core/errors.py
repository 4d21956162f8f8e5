"""Error taxonomy shared by every scoring operation."""
from __future__ import annotations

INVALID_STATE = "INVALID_STATE"
INVALID_INPUT = "INVALID_INPUT"


class ScoringError(ValueError):
    """Base error for rejected scoring operations.

    ``code`` is one of ``INVALID_STATE`` / ``INVALID_INPUT`` so the calling
    layer can map it to its own user-facing messaging.
    """

    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class InvalidStateError(ScoringError):
    """Operation not allowed in the current match state."""

    code = INVALID_STATE


class InvalidInputError(ScoringError):
    """Malformed side, counter, event or configuration."""

    code = INVALID_INPUT
