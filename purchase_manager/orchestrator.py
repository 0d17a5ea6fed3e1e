"""
Main Orchestrator for Purchase Manager

This module ties together all the components and defines the flows the
presentation layer drives:
1. Entry (type fields → validate → commit → persisted)
2. Edit/delete (pick a row → load into the draft → commit, cancel or delete)
3. Browse (change filter → filtered rows + totals)
4. Transfer (export the collection / import a document wholesale)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches the store without passing the required-field check
- Only one record is ever being edited, and its index is cleared on use
- A failed import changes nothing

Every operation runs to completion before returning. There is no
background work and nothing to lock.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from purchase_manager.audit import AuditLogger
from purchase_manager.config import Settings, get_settings
from purchase_manager.forms import DraftForm
from purchase_manager.models.record import (
    FIELD_ORDER,
    NUMERIC_FIELDS,
    REQUIRED_FIELDS,
    FilterCriteria,
    PurchaseRecord,
    Totals,
    ValidationResult,
    field_labels,
    number_to_text,
)
from purchase_manager.queries import aggregate, filter_with_indices
from purchase_manager.services.storage import create_storage_provider
from purchase_manager.services.transfer import (
    LocalFileChannel,
    TransferChannelInterface,
    TransferError,
)
from purchase_manager.store import RecordStore
from purchase_manager.transfer import MalformedDocument, export_document, import_document
from purchase_manager.validation import DraftValidator


class PurchaseRow(BaseModel):
    """A row of the filtered view, with its index in the full collection."""

    index: int = Field(..., ge=0)
    record: PurchaseRecord


class PurchaseView(BaseModel):
    """Everything the presentation layer needs to render one screen."""

    rows: list[PurchaseRow] = Field(default_factory=list)
    totals: Totals
    collection_size: int = Field(..., ge=0)
    criteria: FilterCriteria
    draft: dict[str, str]
    is_editing: bool
    required_fields: list[str]
    field_labels: list[tuple[str, str]]


class PurchaseManager:
    """
    Facade over store, draft, filter and transfer for one user session.

    Holds the only DraftForm and the current FilterCriteria.
    """

    def __init__(
        self,
        store: RecordStore,
        transfer_channel: Optional[TransferChannelInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        locale: str = "ko",
        export_filename: str = "purchases.json",
        export_indent: int = 2,
    ):
        self._store = store
        self._draft = DraftForm(store)
        self._criteria = FilterCriteria()
        self._channel = transfer_channel
        self._audit_logger = audit_logger
        self._validator = DraftValidator(locale)
        self._locale = locale
        self._export_filename = export_filename
        self._export_indent = export_indent

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def draft(self) -> DraftForm:
        return self._draft

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def export_filename(self) -> str:
        return self._export_filename

    # -------------------------------------------------------------------------
    # Draft
    # -------------------------------------------------------------------------

    def set_field(self, name: str, value: str) -> None:
        self._draft.set_field(name, value)

    def edit(self, index: int) -> PurchaseRecord:
        """
        Load the record at a collection index into the draft.

        Raises:
            IndexOutOfRange: If there is no record at index
        """
        record = self._store[index]
        self._draft.load(record, index)
        return record

    def validate_draft(self) -> ValidationResult:
        return self._validator.validate(self._draft.values)

    def submit(self) -> ValidationResult:
        """
        Commit the draft if its required fields are filled in.

        An invalid draft is left as it is so the user can complete it.
        """
        result = self.validate_draft()
        if not result.is_valid:
            if self._audit_logger:
                self._audit_logger.log_draft_rejected(result.missing_fields)
            return result

        self._draft.commit()
        return result

    def cancel(self) -> None:
        self._draft.cancel()

    def delete(self) -> Optional[PurchaseRecord]:
        """Delete the record being edited. No-op for a blank draft."""
        return self._draft.delete_target()

    def describe_validation(self, result: ValidationResult) -> str:
        return self._validator.get_user_friendly_summary(result)

    # -------------------------------------------------------------------------
    # Filter and view
    # -------------------------------------------------------------------------

    def set_filter(self, **changes: str) -> FilterCriteria:
        """
        Change one or more filter fields, keeping the others.

        Raises:
            pydantic.ValidationError: For a name that is not a filter field
        """
        self._criteria = FilterCriteria(**{**self._criteria.model_dump(), **changes})
        return self._criteria

    def reset_filter(self) -> None:
        self._criteria = FilterCriteria()

    def filtered_rows(self) -> list[PurchaseRow]:
        return [
            PurchaseRow(index=index, record=record)
            for index, record in filter_with_indices(self._store.records, self._criteria)
        ]

    def totals(self) -> Totals:
        return aggregate(row.record for row in self.filtered_rows())

    def view(self) -> PurchaseView:
        rows = self.filtered_rows()
        return PurchaseView(
            rows=rows,
            totals=aggregate(row.record for row in rows),
            collection_size=len(self._store),
            criteria=self._criteria,
            draft=self._draft.values,
            is_editing=self._draft.is_editing,
            required_fields=[name for name in FIELD_ORDER if name in REQUIRED_FIELDS],
            field_labels=field_labels(self._locale),
        )

    def suggestions(self, name: str) -> list[str]:
        """
        Distinct non-empty values of a field across the collection.

        Used as input suggestions, in first-seen order.
        """
        if name not in FIELD_ORDER:
            raise KeyError(name)

        seen: dict[str, None] = {}
        for record in self._store.records:
            value: Any = getattr(record, name)
            if name in NUMERIC_FIELDS:
                if not value:
                    continue
                value = number_to_text(value)
            if value:
                seen.setdefault(value, None)
        return list(seen)

    # -------------------------------------------------------------------------
    # Import / export
    # -------------------------------------------------------------------------

    def export_text(self) -> str:
        """The full collection as a JSON document."""
        return export_document(self._store.records, indent=self._export_indent)

    def save_export(self) -> str:
        """
        Hand the exported document to the transfer channel.

        Returns:
            Where the channel put the document

        Raises:
            TransferError: If no channel is configured or the write fails
        """
        if self._channel is None:
            raise TransferError("No transfer channel configured")

        location = self._channel.save_document(self._export_filename, self.export_text())
        if self._audit_logger:
            self._audit_logger.log_document_exported(len(self._store), location)
        return location

    def import_text(self, text: str) -> int:
        """
        Replace the whole collection with the records of a document.

        The filter is cleared. A draft that was editing a record of the
        old collection is cancelled, since its index no longer means
        anything.

        Returns:
            Number of imported records

        Raises:
            MalformedDocument: If the document is not an array of objects;
                the collection, filter and draft are left unchanged
        """
        try:
            records = import_document(text)
        except MalformedDocument as e:
            if self._audit_logger:
                self._audit_logger.log_import_failed(str(e))
            raise

        self._store.replace_all(records)
        self.reset_filter()
        # The edit target indexes the old collection
        if self._draft.is_editing:
            self._draft.cancel()

        if self._audit_logger:
            self._audit_logger.log_document_imported(len(records))
        return len(records)

    def import_from_channel(self, source: str) -> int:
        """
        Read a document through the transfer channel and import it.

        Raises:
            TransferError: If no channel is configured or the read fails
            MalformedDocument: If the document is malformed
        """
        if self._channel is None:
            raise TransferError("No transfer channel configured")
        return self.import_text(self._channel.read_document(source))


def create_app_components(
    settings: Optional[Settings] = None,
) -> PurchaseManager:
    """
    Factory function to create a fully wired PurchaseManager.

    Args:
        settings: Settings to build from. Defaults to get_settings().

    Returns:
        A manager whose store has already loaded from storage
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    transfer_settings = settings.transfer
    app_settings = settings.app

    audit_logger = AuditLogger()
    store = RecordStore(
        provider=create_storage_provider(storage_settings),
        key=storage_settings.key,
        audit_logger=audit_logger,
    )

    return PurchaseManager(
        store=store,
        transfer_channel=LocalFileChannel(transfer_settings.export_dir),
        audit_logger=audit_logger,
        locale=app_settings.label_locale,
        export_filename=transfer_settings.export_filename,
        export_indent=transfer_settings.indent,
    )
