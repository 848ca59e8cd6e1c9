"""
Candidate pre-filtering and canonical ENS name normalization.

Normalization follows ENSIP-15 through the `ens` package bundled with web3.py.
A candidate that cannot be normalized is rejected rather than rewritten.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from ens.exceptions import InvalidName
from ens.utils import normalize_name

from ens_tracker.domain.models import ETH_SUFFIX
from ens_tracker.errors import NormalizationError

MIN_CANDIDATE_LENGTH = 3


def passes_prefilter(candidate: str) -> bool:
    """Keep candidates with at least three characters and no whitespace."""
    return len(candidate) >= MIN_CANDIDATE_LENGTH and not any(ch.isspace() for ch in candidate)


def prefilter(candidates: Iterable[str]) -> Iterator[str]:
    """Yield candidates that pass the length/whitespace filter, in input order."""
    return (c for c in candidates if passes_prefilter(c))


def normalize_candidate(candidate: str) -> str:
    """
    Turn a bare candidate word into its canonical `<label>.eth` form.

    Raises
    ------
    NormalizationError
        If the candidate contains disallowed characters or would not be a
        second-level `.eth` name.
    """
    if "." in candidate:
        raise NormalizationError(candidate, "only second-level .eth names are tracked")
    try:
        normalized = normalize_name(f"{candidate}{ETH_SUFFIX}")
    except InvalidName as exc:
        raise NormalizationError(candidate, str(exc)) from exc
    label, _, suffix = normalized.rpartition(".")
    if not label or "." in label or f".{suffix}" != ETH_SUFFIX:
        raise NormalizationError(candidate, f"normalized to unexpected name '{normalized}'")
    return normalized


__all__ = [
    "MIN_CANDIDATE_LENGTH",
    "normalize_candidate",
    "passes_prefilter",
    "prefilter",
]
