"""
Web3 connection factory for the ENS name tracker.

Centralizes construction of the JSON-RPC provider from settings. Establishing
the connection retries transient failures using tenacity; individual registry
queries made over the connection are never retried.
"""

from __future__ import annotations

from typing import Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential
from web3 import Web3
from web3.providers import HTTPProvider

from ens_tracker.config import get_settings
from ens_tracker.utils.logging import get_logger

log = get_logger(__name__)


def build_provider(rpc_url: Optional[str] = None, timeout: Optional[float] = None) -> HTTPProvider:
    """Create an HTTP provider, defaulting URL and timeout from settings."""
    settings = get_settings()
    return HTTPProvider(
        rpc_url or settings.rpc_url,
        request_kwargs={"timeout": timeout or settings.rpc_timeout_seconds},
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(ConnectionError),
    reraise=True,
)
def connect_web3(rpc_url: Optional[str] = None, timeout: Optional[float] = None) -> Web3:
    """
    Build a Web3 instance and verify the endpoint answers.

    Retries up to 3 times with exponential backoff when the endpoint is unreachable.

    Raises
    ------
    ConnectionError
        If the endpoint is still unreachable after all retry attempts.
    """
    w3 = Web3(build_provider(rpc_url, timeout))
    if not w3.is_connected():
        log.warning("RPC endpoint not reachable", extra={"rpc_url": get_settings().masked_rpc_url})
        raise ConnectionError("RPC endpoint is not reachable")
    return w3


__all__ = ["build_provider", "connect_web3"]
