"""
Record Store

The ordered collection of purchase records and the only place that
mutates it.

DESIGN DECISION: Position is identity. Records carry no ID; edits and
deletes address a record by its index in the sequence. Removing a record
shifts everything after it, so any other index held elsewhere goes stale.
This is accepted because only one edit target exists at a time and it is
cleared as soon as it is used.

Every mutation is written through to the storage provider before the
method returns. A provider failure on write propagates to the caller.
"""

import json
from typing import Iterable, Iterator, Optional

from purchase_manager.audit import AuditLogger
from purchase_manager.models.record import PurchaseRecord
from purchase_manager.services.storage import StorageError, StorageProviderInterface
from purchase_manager.transfer.documents import (
    MalformedDocument,
    export_document,
    normalize_records,
)


DEFAULT_STORAGE_KEY = "purchases"


class RecordStoreError(Exception):
    """Base exception for record store operations."""
    pass


class IndexOutOfRange(RecordStoreError, IndexError):
    """An edit or delete addressed a position outside the collection."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(
            f"Record index {index} is out of range for a collection of {size}"
        )


class RecordStore:
    """
    Ordered, persisted collection of PurchaseRecord.

    On construction the store loads its collection from the provider.
    A missing or unreadable stored value yields an empty collection
    without raising.
    """

    def __init__(
        self,
        provider: StorageProviderInterface,
        key: str = DEFAULT_STORAGE_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._provider = provider
        self._key = key
        self._audit_logger = audit_logger
        self._records: list[PurchaseRecord] = self._load()

    @property
    def key(self) -> str:
        return self._key

    @property
    def records(self) -> tuple[PurchaseRecord, ...]:
        """Read-only snapshot of the collection in order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PurchaseRecord]:
        return iter(tuple(self._records))

    def __getitem__(self, index: int) -> PurchaseRecord:
        self._check_index(index)
        return self._records[index]

    def _load(self) -> list[PurchaseRecord]:
        try:
            raw = self._provider.get(self._key)
        except StorageError as e:
            self._log_fallback(str(e))
            return []

        if raw is None:
            return []

        try:
            records = normalize_records(json.loads(raw))
        except (json.JSONDecodeError, RecursionError, MalformedDocument) as e:
            self._log_fallback(str(e))
            return []

        if self._audit_logger:
            self._audit_logger.log_collection_loaded(len(records), self._key)
        return records

    def _log_fallback(self, reason: str) -> None:
        if self._audit_logger:
            self._audit_logger.log_storage_load_fallback(self._key, reason)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._records):
            raise IndexOutOfRange(index, len(self._records))

    def persist(self) -> None:
        """
        Write the whole collection to the storage provider.

        Raises:
            StorageError: If the provider rejects the write
        """
        self._provider.set(self._key, export_document(self._records, indent=None))

    def append(self, record: PurchaseRecord) -> int:
        """
        Add a record at the end. Duplicates are allowed.

        Returns:
            The index of the new record
        """
        self._records.append(record)
        self.persist()
        index = len(self._records) - 1
        if self._audit_logger:
            self._audit_logger.log_record_appended(index, record.product_code)
        return index

    def replace_at(self, index: int, record: PurchaseRecord) -> PurchaseRecord:
        """
        Replace the record at an index.

        Returns:
            The record that was replaced

        Raises:
            IndexOutOfRange: If index is outside the collection
        """
        self._check_index(index)
        previous = self._records[index]
        self._records[index] = record
        self.persist()
        if self._audit_logger:
            self._audit_logger.log_record_updated(index, record.product_code)
        return previous

    def remove_at(self, index: int) -> PurchaseRecord:
        """
        Remove the record at an index, shifting later records down.

        Returns:
            The removed record

        Raises:
            IndexOutOfRange: If index is outside the collection
        """
        self._check_index(index)
        removed = self._records.pop(index)
        self.persist()
        if self._audit_logger:
            self._audit_logger.log_record_deleted(index, removed.product_code)
        return removed

    def replace_all(self, records: Iterable[PurchaseRecord]) -> None:
        """Discard the current collection and store the given records."""
        previous_count = len(self._records)
        self._records = list(records)
        self.persist()
        if self._audit_logger:
            self._audit_logger.log_collection_replaced(previous_count, len(self._records))
