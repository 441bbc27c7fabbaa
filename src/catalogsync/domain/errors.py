"""Errors raised by a reconciliation pass."""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for failures that end a reconciliation phase."""


class FetchError(ReconciliationError):
    """Raised when one of the list fetches of a pass fails."""

    def __init__(self, source: str, cause: BaseException) -> None:
        super().__init__(f"Fetching {source} failed: {cause}")
        self.source = source
        self.cause = cause


class PersistenceError(ReconciliationError):
    """Raised when the backing store rejects a write or cannot be reached."""
