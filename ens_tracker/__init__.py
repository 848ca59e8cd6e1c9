"""
ENS Name Tracker - availability, expiry, and price tracking for .eth names.

This package keeps a local JSON store of classified ENS names and provides:

- A resolver that classifies a name from on-chain registry answers
- A synchronizer that ingests new candidates, refreshes names nearing expiry,
  and seeds a fresh store from generated candidate sets
- A filter/sort/paginate report over the stored records
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from ens_tracker.config import Settings, get_settings
from ens_tracker.domain.models import NameRecord, NameStatus, ResolutionResult, SyncReport
from ens_tracker.infrastructure.store import NameStore
from ens_tracker.query import ReportPage, ReportQuery, run_query
from ens_tracker.registry.abstract import ExpiryInfo, PriceQuote, RegistryClient
from ens_tracker.resolver import resolve, try_resolve
from ens_tracker.synchronizer import Synchronizer
from ens_tracker.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "NameRecord",
    "NameStatus",
    "ResolutionResult",
    "SyncReport",
    # Storage
    "NameStore",
    # Registry abstractions
    "ExpiryInfo",
    "PriceQuote",
    "RegistryClient",
    # Resolution and synchronization
    "resolve",
    "try_resolve",
    "Synchronizer",
    # Reporting
    "ReportPage",
    "ReportQuery",
    "run_query",
    # Logging
    "configure_logging",
    "get_logger",
]
