"""
Error hierarchy for the ENS name tracker.

Per-name failures (UpstreamError, NormalizationError) are caught by the
synchronizer and counted; input and store failures abort the command.
"""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for all tracker errors."""


class UpstreamError(TrackerError):
    """Raised when a registry call fails or returns an unexpected shape."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"{name}: {message}")
        self.name = name
        self.message = message


class NormalizationError(TrackerError, ValueError):
    """Raised when a candidate cannot be turned into a canonical ENS name."""

    def __init__(self, candidate: str, reason: str) -> None:
        super().__init__(f"Cannot normalize '{candidate}': {reason}")
        self.candidate = candidate
        self.reason = reason


class MalformedInputError(TrackerError, ValueError):
    """Raised when an input file is not a JSON list of candidate strings."""


class StoreError(TrackerError):
    """Raised when the persisted store document cannot be read or written."""


class DuplicateNameError(TrackerError, KeyError):
    """Raised when appending a record whose name is already in the store."""


__all__ = [
    "TrackerError",
    "UpstreamError",
    "NormalizationError",
    "MalformedInputError",
    "StoreError",
    "DuplicateNameError",
]
