"""
Read-side filtering, sorting, and pagination over stored records.

All supplied filters must hold for a record to be kept. Sorting is ascending
and stable, so records with equal keys keep their store order. Pages are
1-indexed and the requested page is clamped into range.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, FrozenSet, Iterable, List, Optional

from pydantic import BaseModel, Field

from ens_tracker.domain.candidates import load_word_list
from ens_tracker.domain.models import NameRecord, NameStatus
from ens_tracker.synchronizer import MS_PER_DAY, current_millis

DEFAULT_PAGE_SIZE = 100


class SortKey(str, Enum):
    NAME = "name"
    PRICE = "price"
    EXPIRY = "expiry"


_SORT_KEYS: dict[SortKey, Callable[[NameRecord], Any]] = {
    SortKey.NAME: lambda r: r.name,
    SortKey.PRICE: lambda r: r.price,
    SortKey.EXPIRY: lambda r: r.expiry,
}


class ReportQuery(BaseModel):
    """Filter, sort, and pagination options for a report."""

    available: Optional[bool] = None
    status: Optional[NameStatus] = None
    max_price: Optional[float] = Field(None, description="Maximum price in ETH (inclusive).")
    expiring_within_days: Optional[float] = Field(
        None, description="Keep names whose expiry is set and falls within this many days."
    )
    max_name_length: Optional[int] = Field(
        None, description="Maximum name length, excluding the .eth suffix."
    )
    label: Optional[str] = None
    common_names_only: bool = False
    common_names: FrozenSet[str] = Field(
        default_factory=frozenset, description="Lower-cased bare names treated as common."
    )
    filter_set: Optional[FrozenSet[str]] = Field(
        None, description="Keep only names in this set (bare or with .eth)."
    )
    sort: Optional[SortKey] = None
    page: int = 1
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1)

    model_config = {"frozen": True}


@dataclass(frozen=True)
class ReportPage:
    records: List[NameRecord]
    page: int
    total_pages: int
    total_items: int


def _predicates(query: ReportQuery, now_ms: int) -> List[Callable[[NameRecord], bool]]:
    checks: List[Callable[[NameRecord], bool]] = []
    if query.available is not None:
        checks.append(lambda r: r.available == query.available)
    if query.status is not None:
        checks.append(lambda r: r.status == query.status)
    if query.max_price is not None:
        checks.append(lambda r: r.price <= query.max_price)
    if query.expiring_within_days is not None:
        threshold = now_ms + query.expiring_within_days * MS_PER_DAY
        checks.append(lambda r: 0 < r.expiry <= threshold)
    if query.max_name_length is not None:
        checks.append(lambda r: len(r.bare_name) <= query.max_name_length)
    if query.label is not None:
        checks.append(lambda r: r.label == query.label)
    if query.common_names_only:
        checks.append(lambda r: r.bare_name.lower() in query.common_names)
    if query.filter_set is not None:
        checks.append(lambda r: r.bare_name in query.filter_set or r.name in query.filter_set)
    return checks


def filter_records(
    records: Iterable[NameRecord], query: ReportQuery, now_ms: Optional[int] = None
) -> List[NameRecord]:
    checks = _predicates(query, current_millis() if now_ms is None else now_ms)
    return [r for r in records if all(check(r) for check in checks)]


def sort_records(records: List[NameRecord], key: Optional[SortKey]) -> List[NameRecord]:
    if key is None:
        return list(records)
    return sorted(records, key=_SORT_KEYS[SortKey(key)])


def paginate(records: List[NameRecord], page: int, page_size: int) -> ReportPage:
    total_items = len(records)
    total_pages = math.ceil(total_items / page_size)
    current_page = min(max(1, page), max(total_pages, 1))
    start = (current_page - 1) * page_size
    return ReportPage(
        records=records[start : start + page_size],
        page=current_page,
        total_pages=total_pages,
        total_items=total_items,
    )


def run_query(
    records: Iterable[NameRecord], query: ReportQuery, now_ms: Optional[int] = None
) -> ReportPage:
    """Filter, then sort, then slice out the requested page."""
    filtered = filter_records(records, query, now_ms)
    return paginate(sort_records(filtered, query.sort), query.page, query.page_size)


def load_name_set(path: Path | str) -> FrozenSet[str]:
    """Read a JSON array of names into a lower-cased set (e.g. commonNames.json)."""
    return frozenset(word.lower() for word in load_word_list(path))


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "ReportPage",
    "ReportQuery",
    "SortKey",
    "filter_records",
    "load_name_set",
    "paginate",
    "run_query",
    "sort_records",
]
