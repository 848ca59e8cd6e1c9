"""
Domain models for the ENS name tracker.

`NameRecord` is the persisted unit of knowledge about one candidate name and
mirrors one entry of the store document's `names` array. The remaining types
describe per-name resolution outcomes and the aggregated result of a
synchronizer run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

ETH_SUFFIX = ".eth"


class NameStatus(str, Enum):
    """Registration status as reported by the registry."""

    ACTIVE = "active"
    EXPIRED = "expired"
    GRACE_PERIOD = "gracePeriod"


class NameRecord(BaseModel):
    """
    Classification of a single ENS name.

    A currently available name carries `expiry == 0` and status `expired`
    (the previous registration, if any, has lapsed).
    """

    name: str = Field(..., description="Normalized name including the .eth suffix.")
    available: bool = Field(..., description="Whether the name can be registered now.")
    expiry: int = Field(0, description="Expiry as epoch milliseconds; 0 when not applicable.")
    price: float = Field(0.0, description="One-year registration price in ETH; 0 when not priced.")
    status: NameStatus = Field(..., description="Registration status.")
    label: Optional[str] = Field(None, description="Free-text tag assigned at ingestion.")

    model_config = {"frozen": True}

    @property
    def bare_name(self) -> str:
        """Name without the `.eth` suffix."""
        if self.name.endswith(ETH_SUFFIX):
            return self.name[: -len(ETH_SUFFIX)]
        return self.name

    def to_document(self) -> Dict[str, Any]:
        """Serialize for the store document; `label` is omitted when unset."""
        return self.model_dump(mode="json", exclude_none=True)


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving one name: either a record or an error message."""

    name: str
    record: Optional[NameRecord] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass
class SyncReport:
    """
    Aggregated counts for one synchronizer run.

    `failed` counts registry errors and `rejected` counts candidates that
    could not be normalized; neither is included in `added` or `skipped`.
    """

    mode: str
    added: int = 0
    skipped: int = 0
    updated: int = 0
    failed: int = 0
    rejected: int = 0
    results: List[ResolutionResult] = field(default_factory=list)

    @property
    def failures(self) -> List[ResolutionResult]:
        return [r for r in self.results if not r.ok]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "added": self.added,
            "skipped": self.skipped,
            "updated": self.updated,
            "failed": self.failed,
            "rejected": self.rejected,
        }


__all__ = [
    "ETH_SUFFIX",
    "NameRecord",
    "NameStatus",
    "ResolutionResult",
    "SyncReport",
]
