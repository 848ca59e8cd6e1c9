"""
Infrastructure package for the ENS name tracker.

Centralizes I/O concerns: the JSON-RPC connection factory and the JSON file
store. Keep this layer focused on I/O and resource management, decoupled from
resolver/synchronizer logic.
"""

from ens_tracker.infrastructure.store import NameStore
from ens_tracker.infrastructure.web3_factory import build_provider, connect_web3

__all__ = [
    "NameStore",
    "build_provider",
    "connect_web3",
]
