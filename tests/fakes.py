"""
In-memory registry backend for the test suite.

Serves canned answers, records every call it receives, and can be told to fail
for specific names.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Optional, Set

from ens_tracker.domain.models import NameStatus
from ens_tracker.errors import UpstreamError
from ens_tracker.registry.abstract import AbstractRegistryClient, ExpiryInfo, PriceQuote


@dataclass(frozen=True)
class FakeEntry:
    """Canned registry state for one name."""

    available: bool
    status: NameStatus = NameStatus.EXPIRED
    expiry_ms: int = 0
    base: int = 0
    premium: int = 0


class FakeRegistry(AbstractRegistryClient):
    """
    Dict-backed registry.

    Unknown names are reported as available at `default_price` wei.
    """

    def __init__(
        self,
        entries: Optional[Dict[str, FakeEntry]] = None,
        default_price: int = 0,
    ) -> None:
        self.entries: Dict[str, FakeEntry] = dict(entries or {})
        self.default_price = default_price
        self.failing: Set[str] = set()
        self.calls: Counter[str] = Counter()
        self.operations: Counter[str] = Counter()
        self.price_durations: list[int] = []

    def set(self, name: str, entry: FakeEntry) -> None:
        self.entries[name] = entry

    def fail_for(self, *names: str) -> None:
        self.failing.update(names)

    def _entry(self, name: str, operation: str) -> FakeEntry:
        self.calls[name] += 1
        self.operations[operation] += 1
        if name in self.failing:
            raise UpstreamError(name, f"{operation} failed: injected failure")
        return self.entries.get(name, FakeEntry(available=True, base=self.default_price))

    def is_available(self, name: str) -> bool:
        return self._entry(name, "is_available").available

    def get_expiry(self, name: str) -> ExpiryInfo:
        entry = self._entry(name, "get_expiry")
        return ExpiryInfo(status=entry.status, expiry_ms=entry.expiry_ms)

    def get_price(self, name: str, duration_seconds: int) -> PriceQuote:
        entry = self._entry(name, "get_price")
        self.price_durations.append(duration_seconds)
        return PriceQuote(base=entry.base, premium=entry.premium)


__all__ = ["FakeEntry", "FakeRegistry"]
