"""
Font Record Stores
==================

Keyed persistence for installed font families. A record holds a title, a
unique key (the family slug) and the serialized family as content.
"""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from src.font_library.core.exceptions import (
    DuplicateRecordKeyError,
    RecordIdNotFoundError,
    RecordsFileCorruptError,
    StorageError,
)
from src.font_library.core.models import FontRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class RecordStore(Protocol):
    """Keyed record store used by the font library. Failures raise StorageError."""

    def get_by_key(self, key: str) -> FontRecord | None: ...

    def create(self, title: str, key: str, content: str) -> int: ...

    def update(self, record_id: int, content: str, title: str | None = None) -> int: ...

    def delete(self, record_id: int) -> None: ...

    def list_records(self) -> list[FontRecord]: ...


class InMemoryRecordStore:
    """Record store kept in process memory."""

    def __init__(self):
        self._records: dict[int, FontRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get_by_key(self, key: str) -> FontRecord | None:
        with self._lock:
            for record in self._records.values():
                if record.key == key:
                    return record
        return None

    def create(self, title: str, key: str, content: str) -> int:
        with self._lock:
            if any(record.key == key for record in self._records.values()):
                raise DuplicateRecordKeyError(key)
            record = FontRecord(id=self._next_id, title=title, key=key, content=content)
            self._records[record.id] = record
            try:
                self._commit()
            except StorageError:
                del self._records[record.id]
                raise
            self._next_id += 1
        logger.debug(f"Created font record {record.id} for {key}")
        return record.id

    def update(self, record_id: int, content: str, title: str | None = None) -> int:
        with self._lock:
            record = self._records.get(record_id)
            if record is None:
                raise RecordIdNotFoundError(record_id)
            self._records[record_id] = record.model_copy(
                update={"content": content, "title": title or record.title}
            )
            try:
                self._commit()
            except StorageError:
                self._records[record_id] = record
                raise
        logger.debug(f"Updated font record {record_id}")
        return record_id

    def delete(self, record_id: int) -> None:
        with self._lock:
            if record_id not in self._records:
                raise RecordIdNotFoundError(record_id)
            record = self._records.pop(record_id)
            try:
                self._commit()
            except StorageError:
                self._records[record_id] = record
                raise
        logger.debug(f"Deleted font record {record_id}")

    def list_records(self) -> list[FontRecord]:
        with self._lock:
            return sorted(self._records.values(), key=lambda record: record.id)

    def _commit(self) -> None:
        """Hook run after each change while the lock is held."""


class JsonFileRecordStore(InMemoryRecordStore):
    """Record store persisted to a single JSON file, rewritten atomically on every change."""

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            with open(self.path) as f:
                data = json.load(f)
            records = [FontRecord.model_validate(item) for item in data.get("records", [])]
        except (OSError, json.JSONDecodeError, AttributeError, ValidationError) as e:
            raise RecordsFileCorruptError(str(self.path), str(e)) from e

        self._records = {record.id: record for record in records}
        self._next_id = max(self._records, default=0) + 1
        logger.info(f"Loaded {len(self._records)} font records from {self.path}")

    def _commit(self) -> None:
        data = {
            "records": [record.model_dump() for record in self._records.values()],
            "last_updated": datetime.now().isoformat(),
        }
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", dir=self.path.parent, delete=False, prefix=".", suffix=".tmp"
            ) as f:
                temp_path = Path(f.name)
                json.dump(data, f, indent=2)
            os.replace(temp_path, self.path)
        except OSError as e:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to save font records to {self.path}: {e}") from e
        logger.debug(f"Font records saved to {self.path}")
