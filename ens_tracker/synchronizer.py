"""
Synchronizer: decides which names need resolution and merges results into the store.

Three modes share one sequential loop, one registry round-trip at a time:

- ingest: new candidates from a word list, tagged with a label;
- refresh: stored records whose expiry falls inside the lookahead window;
- seed: the deduplicated union of generated and supplied candidate sources.

A failure for one name is logged and counted; the batch always continues.
Persisting the store is left to the caller, once the batch has completed.

Usage:
    from ens_tracker.synchronizer import Synchronizer

    sync = Synchronizer(client, store)
    report = sync.ingest(["vitalik", "nick"], label="people")
    store.save("db.json")
"""

from __future__ import annotations

import time
from typing import Iterable, List, Optional, Set

from ens_tracker.domain.candidates import unique
from ens_tracker.domain.models import NameRecord, SyncReport
from ens_tracker.domain.normalization import normalize_candidate, prefilter
from ens_tracker.errors import NormalizationError
from ens_tracker.infrastructure.store import NameStore
from ens_tracker.registry.abstract import RegistryClient
from ens_tracker.resolver import try_resolve
from ens_tracker.utils.logging import get_logger

log = get_logger(__name__)

REFRESH_WINDOW_DAYS = 30
MS_PER_DAY = 24 * 60 * 60 * 1000
REFRESH_WINDOW_MS = REFRESH_WINDOW_DAYS * MS_PER_DAY


def current_millis() -> int:
    return int(time.time() * 1000)


def is_due_for_refresh(record: NameRecord, now_ms: int) -> bool:
    """Records with an expiry inside the lookahead window; expiry 0 is never due."""
    return 0 < record.expiry < now_ms + REFRESH_WINDOW_MS


def select_due(records: Iterable[NameRecord], now_ms: int) -> List[NameRecord]:
    return [record for record in records if is_due_for_refresh(record, now_ms)]


def records_differ(old: NameRecord, new: NameRecord) -> bool:
    """Field-by-field comparison; how a record was constructed does not matter."""
    return old.model_dump() != new.model_dump()


class Synchronizer:
    """
    Applies ingestion, refresh, and seed runs to an explicit store.

    Parameters
    ----------
    client : RegistryClient
        Backend answering availability, expiry, and price queries.
    store : NameStore
        Records to read and mutate in place.
    """

    def __init__(self, client: RegistryClient, store: NameStore) -> None:
        self.client = client
        self.store = store

    def ingest(self, candidates: Iterable[str], label: Optional[str]) -> SyncReport:
        """
        Resolve and add every candidate that is not stored yet.

        Candidates shorter than three characters or containing whitespace are
        dropped before normalization and are not counted.
        """
        report = SyncReport(mode="ingest")
        self._add_candidates(prefilter(candidates), label, report)
        log.info(
            f"Added {report.added} new words to the database with label: {label}",
            extra={"added": report.added, "label": label},
        )
        log.info(
            f"Skipped {report.skipped} words that already existed.",
            extra={"skipped": report.skipped, "failed": report.failed, "rejected": report.rejected},
        )
        return report

    def seed(self, *sources: Iterable[str]) -> SyncReport:
        """
        Initialize the store from several candidate sources.

        Sources are merged and deduplicated before resolution, so a name found
        in more than one source is resolved at most once.
        """
        report = SyncReport(mode="seed")
        if len(self.store):
            log.warning(
                "Seeding a non-empty store; existing names will be skipped",
                extra={"records": len(self.store)},
            )
        self._add_candidates(prefilter(unique(*sources)), None, report, attempted=set())
        log.info(
            f"Seeded {report.added} names ({report.skipped} skipped, {report.failed} failed)",
            extra=report.as_dict(),
        )
        return report

    def refresh(self, now_ms: Optional[int] = None) -> SyncReport:
        """Re-resolve records nearing expiry and replace those that changed."""
        report = SyncReport(mode="refresh")
        now = current_millis() if now_ms is None else now_ms

        due = select_due(self.store, now)
        log.info(f"Found {len(due)} names to check.", extra={"due": len(due)})

        for record in due:
            result = try_resolve(self.client, record.name, record.label)
            report.results.append(result)
            if result.record is None:
                report.failed += 1
                continue
            if records_differ(record, result.record):
                self.store.replace(result.record)
                report.updated += 1
                log.info(f"Updated: {record.name}", extra={"ens_name": record.name})

        log.info(f"Updated {report.updated} names.", extra=report.as_dict())
        return report

    def _add_candidates(
        self,
        candidates: Iterable[str],
        label: Optional[str],
        report: SyncReport,
        attempted: Optional[Set[str]] = None,
    ) -> None:
        for candidate in candidates:
            try:
                name = normalize_candidate(candidate)
            except NormalizationError as exc:
                report.rejected += 1
                log.warning(
                    f"Rejected: {candidate} ({exc.reason})",
                    extra={"candidate": candidate, "reason": exc.reason},
                )
                continue

            if name in self.store or (attempted is not None and name in attempted):
                report.skipped += 1
                log.info(f"Skipped: {name} (already exists)", extra={"ens_name": name})
                continue
            if attempted is not None:
                attempted.add(name)

            result = try_resolve(self.client, name, label)
            report.results.append(result)
            if result.record is None:
                report.failed += 1
                continue

            self.store.append(result.record)
            report.added += 1
            log.info(f"Added: {name} (Label: {label})", extra={"ens_name": name, "label": label})


__all__ = [
    "REFRESH_WINDOW_DAYS",
    "REFRESH_WINDOW_MS",
    "Synchronizer",
    "current_millis",
    "is_due_for_refresh",
    "records_differ",
    "select_due",
]
