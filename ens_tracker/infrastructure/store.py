"""
JSON file store for name records.

The whole document (`{"names": [...]}`) is read once when a command starts and
written once when it finishes. Writes go to a sibling temp file that replaces
the document only once complete, so an interrupted save leaves the previous
version intact. There is no schema versioning. Records without a `label` key
are accepted.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from pydantic import ValidationError

from ens_tracker.domain.models import NameRecord
from ens_tracker.errors import DuplicateNameError, StoreError
from ens_tracker.utils.logging import get_logger

log = get_logger(__name__)


class NameStore:
    """
    Ordered collection of records keyed by normalized name.

    Mutated in place by the synchronizer and flushed by the caller.
    """

    def __init__(self, records: Optional[List[NameRecord]] = None) -> None:
        self._records: List[NameRecord] = []
        self._index: Dict[str, int] = {}
        for record in records or []:
            self.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[NameRecord]:
        return iter(list(self._records))

    def __contains__(self, name: object) -> bool:
        return name in self._index

    @property
    def records(self) -> List[NameRecord]:
        """Snapshot of the records in store order."""
        return list(self._records)

    def get(self, name: str) -> Optional[NameRecord]:
        position = self._index.get(name)
        return None if position is None else self._records[position]

    def append(self, record: NameRecord) -> None:
        if record.name in self._index:
            raise DuplicateNameError(record.name)
        self._index[record.name] = len(self._records)
        self._records.append(record)

    def replace(self, record: NameRecord) -> None:
        """Swap the stored record with the same name, keeping its position."""
        try:
            position = self._index[record.name]
        except KeyError:
            raise KeyError(f"'{record.name}' is not in the store") from None
        self._records[position] = record

    def to_document(self) -> dict:
        return {"names": [record.to_document() for record in self._records]}

    @classmethod
    def from_document(cls, payload: object) -> "NameStore":
        if not isinstance(payload, dict) or not isinstance(payload.get("names", []), list):
            raise StoreError("Store document must be an object with a 'names' array.")
        try:
            records = [NameRecord.model_validate(entry) for entry in payload.get("names", [])]
        except ValidationError as exc:
            raise StoreError(f"Store document contains an invalid record: {exc}") from exc
        try:
            return cls(records)
        except DuplicateNameError as exc:
            raise StoreError(f"Store document lists '{exc.args[0]}' more than once.") from exc

    @classmethod
    def load(cls, path: Path | str) -> "NameStore":
        """Read the store document, or start empty when it does not exist yet."""
        path = Path(path)
        if not path.exists():
            log.info("No store found, starting empty", extra={"path": str(path)})
            return cls()
        try:
            with path.open("r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read store '{path}': {exc}") from exc
        store = cls.from_document(payload)
        log.debug("Store loaded", extra={"path": str(path), "records": len(store)})
        return store

    def save(self, path: Path | str) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path: Optional[Path] = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                json.dump(self.to_document(), f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as exc:
            raise StoreError(f"Cannot write store '{path}': {exc}") from exc
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
        log.info("Store persisted", extra={"path": str(path), "records": len(self)})


__all__ = ["NameStore"]
