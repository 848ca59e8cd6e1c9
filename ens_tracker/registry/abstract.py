"""
Registry client interfaces and result contracts for the ENS name tracker.

Concrete registries (the on-chain ENS client, the in-memory fake used by tests)
implement the RegistryClient protocol so the resolver can classify names
without knowing where the answers come from.
"""

from __future__ import annotations

import abc
from typing import NamedTuple, Protocol, runtime_checkable

from ens_tracker.domain.models import NameStatus


class ExpiryInfo(NamedTuple):
    """Registration status and expiry of a name that is not available."""

    status: NameStatus
    expiry_ms: int


class PriceQuote(NamedTuple):
    """Registration price in wei, split the way the registrar reports it."""

    base: int
    premium: int

    @property
    def total(self) -> int:
        return self.base + self.premium


@runtime_checkable
class RegistryClient(Protocol):
    """
    Common interface all registry backends must implement.

    Every method raises `UpstreamError` when the backend cannot answer.
    """

    def is_available(self, name: str) -> bool:
        """Whether `name` can be registered right now."""
        ...

    def get_expiry(self, name: str) -> ExpiryInfo:
        """Status and expiry of `name`; only meaningful when it is not available."""
        ...

    def get_price(self, name: str, duration_seconds: int) -> PriceQuote:
        """Price to register `name` for `duration_seconds`; only meaningful when available."""
        ...


class AbstractRegistryClient(abc.ABC):
    """
    Optional ABC helper for class-based implementations.
    """

    @abc.abstractmethod
    def is_available(self, name: str) -> bool:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def get_expiry(self, name: str) -> ExpiryInfo:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def get_price(self, name: str, duration_seconds: int) -> PriceQuote:  # pragma: no cover
        raise NotImplementedError


__all__ = [
    "AbstractRegistryClient",
    "ExpiryInfo",
    "PriceQuote",
    "RegistryClient",
]
