"""
Configuration settings for the ENS name tracker.

Uses Pydantic Settings to load environment variables for the RPC endpoint,
ENS contract addresses, local storage paths, and logging.
"""
from __future__ import annotations

from functools import lru_cache
from urllib.parse import urlsplit, urlunsplit

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ENS mainnet deployments
MAINNET_ETH_REGISTRAR_CONTROLLER = "0x253553366Da8546fC250F225fe3d25d0C782303b"
MAINNET_BASE_REGISTRAR = "0x57f1887a8BF19b14fC0dF6Fd9B2acc9Af147eA85"


class Settings(BaseSettings):
    # Registry endpoint
    rpc_url: str = Field("https://cloudflare-eth.com", alias="RPC_URL")
    rpc_timeout_seconds: float = Field(30.0, alias="RPC_TIMEOUT_SECONDS")
    eth_controller_address: str = Field(
        MAINNET_ETH_REGISTRAR_CONTROLLER, alias="ENS_CONTROLLER_ADDRESS"
    )
    base_registrar_address: str = Field(MAINNET_BASE_REGISTRAR, alias="ENS_BASE_REGISTRAR_ADDRESS")

    # Storage
    store_path: str = Field("db.json", alias="STORE_PATH")
    common_names_path: str = Field("commonNames.json", alias="COMMON_NAMES_PATH")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Report defaults
    report_page_size: int = Field(100, alias="REPORT_PAGE_SIZE", ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def masked_rpc_url(self) -> str:
        """RPC URL with any credentials or trailing API key path hidden."""
        parts = urlsplit(self.rpc_url)
        netloc = parts.hostname or ""
        if parts.port:
            netloc = f"{netloc}:{parts.port}"
        path = parts.path
        # Hosted providers carry the API key as the last path segment.
        head, _, key = path.rpartition("/")
        if key:
            path = f"{head}/***"
        return urlunsplit((parts.scheme, netloc, path, "", ""))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = [
    "MAINNET_BASE_REGISTRAR",
    "MAINNET_ETH_REGISTRAR_CONTROLLER",
    "Settings",
    "get_settings",
]
