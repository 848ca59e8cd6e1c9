"""
Registry package for the ENS name tracker.

Re-exports the registry protocol and the concrete backends so downstream code
can import from `ens_tracker.registry` directly.
"""

from ens_tracker.registry.abstract import (
    AbstractRegistryClient,
    ExpiryInfo,
    PriceQuote,
    RegistryClient,
)
from ens_tracker.registry.ens_client import EnsRegistryClient

__all__ = [
    # Abstracts
    "AbstractRegistryClient",
    "ExpiryInfo",
    "PriceQuote",
    "RegistryClient",
    # Concrete backends
    "EnsRegistryClient",
]
