"""
On-chain ENS registry client.

Answers availability, expiry, and price questions for second-level `.eth`
names by calling the ETHRegistrarController and BaseRegistrar contracts over
JSON-RPC. Each method performs plain `eth_call`s, one name at a time.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from web3 import Web3
from web3.exceptions import Web3Exception

from ens_tracker.config import get_settings
from ens_tracker.domain.models import ETH_SUFFIX, NameStatus
from ens_tracker.errors import UpstreamError
from ens_tracker.infrastructure.web3_factory import connect_web3
from ens_tracker.registry.abstract import AbstractRegistryClient, ExpiryInfo, PriceQuote
from ens_tracker.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")

CONTROLLER_ABI = [
    {
        "type": "function",
        "name": "available",
        "stateMutability": "view",
        "inputs": [{"name": "name", "type": "string"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "rentPrice",
        "stateMutability": "view",
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "duration", "type": "uint256"},
        ],
        "outputs": [
            {
                "name": "price",
                "type": "tuple",
                "components": [
                    {"name": "base", "type": "uint256"},
                    {"name": "premium", "type": "uint256"},
                ],
            }
        ],
    },
]

BASE_REGISTRAR_ABI = [
    {
        "type": "function",
        "name": "nameExpires",
        "stateMutability": "view",
        "inputs": [{"name": "id", "type": "uint256"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "GRACE_PERIOD",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]


def label_of(name: str) -> str:
    """Strip the `.eth` suffix from a second-level name."""
    if not name.endswith(ETH_SUFFIX):
        raise UpstreamError(name, "not a .eth name")
    label = name[: -len(ETH_SUFFIX)]
    if not label or "." in label:
        raise UpstreamError(name, "only second-level .eth names can be queried")
    return label


def token_id(label: str) -> int:
    """BaseRegistrar token id: uint256(keccak256(label))."""
    return int.from_bytes(Web3.keccak(text=label), "big")


def classify_expiry(expiry_seconds: int, grace_period_seconds: int, now_seconds: int) -> NameStatus:
    """Status of a registration relative to the chain's current time."""
    if expiry_seconds + grace_period_seconds < now_seconds:
        return NameStatus.EXPIRED
    if expiry_seconds < now_seconds:
        return NameStatus.GRACE_PERIOD
    return NameStatus.ACTIVE


class EnsRegistryClient(AbstractRegistryClient):
    """
    Registry backend for ENS on Ethereum mainnet (or any chain with the same contracts).

    The grace period is read from the BaseRegistrar once and cached.
    """

    def __init__(
        self,
        w3: Web3,
        controller_address: Optional[str] = None,
        base_registrar_address: Optional[str] = None,
    ) -> None:
        settings = get_settings()
        self._w3 = w3
        self._controller = w3.eth.contract(
            address=Web3.to_checksum_address(controller_address or settings.eth_controller_address),
            abi=CONTROLLER_ABI,
        )
        self._base_registrar = w3.eth.contract(
            address=Web3.to_checksum_address(
                base_registrar_address or settings.base_registrar_address
            ),
            abi=BASE_REGISTRAR_ABI,
        )
        self._grace_period: Optional[int] = None

    @classmethod
    def from_settings(cls) -> "EnsRegistryClient":
        """Connect to the configured RPC endpoint and bind the configured contracts."""
        return cls(connect_web3())

    def _call(self, name: str, what: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except UpstreamError:
            raise
        except (Web3Exception, OSError, ValueError) as exc:
            raise UpstreamError(name, f"{what} failed: {exc}") from exc

    def _grace_period_seconds(self, name: str) -> int:
        if self._grace_period is None:
            value = self._call(
                name, "GRACE_PERIOD", lambda: self._base_registrar.functions.GRACE_PERIOD().call()
            )
            self._grace_period = _expect_int(name, "GRACE_PERIOD", value)
        return self._grace_period

    def is_available(self, name: str) -> bool:
        label = label_of(name)
        value = self._call(
            name, "available", lambda: self._controller.functions.available(label).call()
        )
        if not isinstance(value, bool):
            raise UpstreamError(name, f"available returned {type(value).__name__}, expected bool")
        return value

    def get_expiry(self, name: str) -> ExpiryInfo:
        label = label_of(name)
        expiry_seconds = _expect_int(
            name,
            "nameExpires",
            self._call(
                name,
                "nameExpires",
                lambda: self._base_registrar.functions.nameExpires(token_id(label)).call(),
            ),
        )
        grace = self._grace_period_seconds(name)
        block = self._call(name, "get_block", lambda: self._w3.eth.get_block("latest"))
        now_seconds = _expect_int(name, "block timestamp", _get(block, "timestamp"))
        status = classify_expiry(expiry_seconds, grace, now_seconds)
        log.debug(
            "Expiry fetched",
            extra={"ens_name": name, "expiry_seconds": expiry_seconds, "status": status.value},
        )
        return ExpiryInfo(status=status, expiry_ms=expiry_seconds * 1000)

    def get_price(self, name: str, duration_seconds: int) -> PriceQuote:
        label = label_of(name)
        value = self._call(
            name,
            "rentPrice",
            lambda: self._controller.functions.rentPrice(label, duration_seconds).call(),
        )
        if not isinstance(value, (tuple, list)) or len(value) != 2:
            raise UpstreamError(name, f"rentPrice returned unexpected value {value!r}")
        base, premium = value
        return PriceQuote(
            base=_expect_int(name, "rentPrice.base", base),
            premium=_expect_int(name, "rentPrice.premium", premium),
        )


def _get(mapping: Any, key: str) -> Any:
    try:
        return mapping[key]
    except (KeyError, TypeError):
        return None


def _expect_int(name: str, what: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise UpstreamError(name, f"{what} returned {value!r}, expected an integer")
    return value


__all__ = [
    "BASE_REGISTRAR_ABI",
    "CONTROLLER_ABI",
    "EnsRegistryClient",
    "classify_expiry",
    "label_of",
    "token_id",
]
