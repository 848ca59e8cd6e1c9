"""
Domain package for the ENS name tracker.

Exports the record model, candidate sources, and normalization helpers.
Keep this package free of network and file-store concerns.
"""

from ens_tracker.domain.candidates import (
    digit_strings,
    generate_strings,
    letter_strings,
    load_word_list,
    unique,
)
from ens_tracker.domain.models import (
    ETH_SUFFIX,
    NameRecord,
    NameStatus,
    ResolutionResult,
    SyncReport,
)
from ens_tracker.domain.normalization import normalize_candidate, prefilter

__all__ = [
    "ETH_SUFFIX",
    "NameRecord",
    "NameStatus",
    "ResolutionResult",
    "SyncReport",
    "digit_strings",
    "generate_strings",
    "letter_strings",
    "load_word_list",
    "normalize_candidate",
    "prefilter",
    "unique",
]
