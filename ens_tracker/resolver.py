"""
Name-status resolution.

Turns the registry's answers for one name into a classified NameRecord:

- not available: status and expiry come from the registry, price is 0, and
  `available` is true only when the registry already reports the name as
  expired (the registrar can lag behind the expiry during release);
- available: priced for one 365.25-day year in ETH, expiry 0, status expired.
"""

from __future__ import annotations

from typing import Optional

from ens_tracker.domain.models import NameRecord, NameStatus, ResolutionResult
from ens_tracker.errors import UpstreamError
from ens_tracker.registry.abstract import RegistryClient
from ens_tracker.utils.logging import get_logger

log = get_logger(__name__)

ONE_YEAR_SECONDS = 31_557_600
WEI_PER_ETHER = 10**18


def wei_to_ether(wei: int) -> float:
    return wei / WEI_PER_ETHER


def resolve(client: RegistryClient, name: str, label: Optional[str] = None) -> NameRecord:
    """
    Query the registry for `name` and classify the answer.

    Raises
    ------
    UpstreamError
        If any registry call fails or returns an unexpected shape.
    """
    try:
        if not client.is_available(name):
            info = client.get_expiry(name)
            return NameRecord(
                name=name,
                available=NameStatus(info.status) == NameStatus.EXPIRED,
                expiry=int(info.expiry_ms),
                price=0,
                status=info.status,
                label=label,
            )

        quote = client.get_price(name, ONE_YEAR_SECONDS)
        return NameRecord(
            name=name,
            available=True,
            expiry=0,
            price=wei_to_ether(quote.base + quote.premium),
            status=NameStatus.EXPIRED,
            label=label,
        )
    except UpstreamError:
        raise
    except Exception as exc:  # noqa: BLE001 - any backend failure is an upstream failure
        raise UpstreamError(name, f"unexpected registry response: {exc}") from exc


def try_resolve(client: RegistryClient, name: str, label: Optional[str] = None) -> ResolutionResult:
    """Resolve `name`, returning the failure as a result instead of raising."""
    try:
        return ResolutionResult(name=name, record=resolve(client, name, label))
    except UpstreamError as exc:
        log.error(
            f"Error checking name: {name}",
            extra={"ens_name": name, "error": exc.message},
        )
        return ResolutionResult(name=name, error=exc.message)


__all__ = [
    "ONE_YEAR_SECONDS",
    "WEI_PER_ETHER",
    "resolve",
    "try_resolve",
    "wei_to_ether",
]
