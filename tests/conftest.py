"""
Pytest configuration for the ENS name tracker.

Provides fixtures for:
- A fixed wall-clock time in epoch milliseconds
- An in-memory registry with canned answers
- Empty and pre-populated stores
- Settings pointed at a temporary store file
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Generator

import pytest

from ens_tracker.config import Settings, get_settings
from ens_tracker.domain.models import NameRecord, NameStatus
from ens_tracker.infrastructure.store import NameStore
from ens_tracker.synchronizer import MS_PER_DAY

from fakes import FakeEntry, FakeRegistry

NOW_MS = 1_760_000_000_000


@pytest.fixture
def now_ms() -> int:
    return NOW_MS


@pytest.fixture
def fake_registry() -> FakeRegistry:
    """
    Registry with one name of each kind.

    - vitalik.eth: active, expires in 200 days
    - nick.eth: in grace period
    - lapsed.eth: unavailable but already reported expired
    - free.eth (and any unknown name): available at 0.005 ETH
    """
    return FakeRegistry(
        entries={
            "vitalik.eth": FakeEntry(
                available=False, status=NameStatus.ACTIVE, expiry_ms=NOW_MS + 200 * MS_PER_DAY
            ),
            "nick.eth": FakeEntry(
                available=False, status=NameStatus.GRACE_PERIOD, expiry_ms=NOW_MS - 5 * MS_PER_DAY
            ),
            "lapsed.eth": FakeEntry(
                available=False, status=NameStatus.EXPIRED, expiry_ms=NOW_MS - 100 * MS_PER_DAY
            ),
            "free.eth": FakeEntry(available=True, base=5 * 10**15, premium=0),
        },
        default_price=5 * 10**15,
    )


@pytest.fixture
def store() -> NameStore:
    return NameStore()


@pytest.fixture
def make_record():
    """Build a record with sensible defaults: active, expiring in a year, unpriced."""

    def _make(name: str, **overrides) -> NameRecord:
        fields = {
            "name": name,
            "available": False,
            "expiry": NOW_MS + 365 * MS_PER_DAY,
            "price": 0,
            "status": NameStatus.ACTIVE,
        }
        fields.update(overrides)
        return NameRecord(**fields)

    return _make


@pytest.fixture
def test_settings(tmp_path: Path, monkeypatch) -> Generator[Settings, None, None]:
    """
    Settings with the store and common-names files inside a temporary directory.
    """
    store_path = tmp_path / "db.json"
    common_names_path = tmp_path / "commonNames.json"
    monkeypatch.setenv("STORE_PATH", str(store_path))
    monkeypatch.setenv("COMMON_NAMES_PATH", str(common_names_path))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON payload to a file under tmp_path and return its path."""

    def _write(filename: str, payload: object) -> Path:
        path = tmp_path / filename
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
