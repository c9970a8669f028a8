"""Exceptions raised by the editing engine for unexpected faults."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for engine failures that callers should not expect."""


class SuggestionApplyError(EngineError):
    """Raised when applying a suggestion fails inside the tree library."""

    def __init__(self, suggestion_id: str, message: str) -> None:
        super().__init__(f"Failed to apply suggestion {suggestion_id}: {message}")
        self.suggestion_id = suggestion_id
