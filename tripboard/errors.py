from __future__ import annotations

from typing import Optional


class TripApiError(RuntimeError):
    """Failure while talking to the trip service."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class LoadFailure(RuntimeError):
    """A dataset could not be loaded; the model now holds an empty one."""


class WriteFailure(RuntimeError):
    """The service rejected a create, update or delete."""


class PreconditionViolation(RuntimeError):
    """A caller broke a contract the presenters are meant to enforce."""


__all__ = ["TripApiError", "LoadFailure", "WriteFailure", "PreconditionViolation"]
