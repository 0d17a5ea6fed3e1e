"""
Draft Form

The single in-progress purchase being typed in or edited.

The draft holds raw text for every field, numbers included; nothing is
coerced until commit. It is either blank (new entry) or a copy of an
existing record together with that record's index (EditingAt).

Every way out of the draft (commit, cancel, delete) resets it to blank
with no edit target.
"""

from typing import Optional

from purchase_manager.models.record import (
    FIELD_ORDER,
    REQUIRED_FIELDS,
    EditingAt,
    EditTarget,
    PurchaseRecord,
)
from purchase_manager.store.record_store import RecordStore


class DraftFormError(Exception):
    """Base exception for draft form operations."""
    pass


class UnknownFieldError(DraftFormError, KeyError):
    """A field name outside the nine purchase fields."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown purchase field: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


def blank_values() -> dict[str, str]:
    return {name: "" for name in FIELD_ORDER}


class DraftForm:
    """Editable draft bound to a record store."""

    required_fields = REQUIRED_FIELDS

    def __init__(self, store: RecordStore):
        self._store = store
        self._values = blank_values()
        self._edit_target: EditTarget = None

    @property
    def values(self) -> dict[str, str]:
        """Current raw field values, in field order."""
        return dict(self._values)

    @property
    def edit_target(self) -> EditTarget:
        return self._edit_target

    @property
    def is_editing(self) -> bool:
        return self._edit_target is not None

    def get_field(self, name: str) -> str:
        if name not in self._values:
            raise UnknownFieldError(name)
        return self._values[name]

    def missing_required_fields(self) -> list[str]:
        """Required fields that are still empty, in field order."""
        return [
            name for name in FIELD_ORDER
            if name in REQUIRED_FIELDS and self._values[name] == ""
        ]

    def load(self, record: PurchaseRecord, index: int) -> None:
        """Copy a record into the draft for editing at the given index."""
        self._values = record.to_text_values()
        self._edit_target = EditingAt(index=index)

    def set_field(self, name: str, value: str) -> None:
        """Assign raw text to a field. No coercion happens here."""
        if name not in self._values:
            raise UnknownFieldError(name)
        self._values[name] = value

    def to_record(self) -> PurchaseRecord:
        """Build the record this draft would commit."""
        return PurchaseRecord(**self._values)

    def commit(self) -> PurchaseRecord:
        """
        Write the draft to the store and reset.

        Replaces the record at the edit target when editing, appends
        otherwise. The draft is reset even if the store raises.

        Raises:
            IndexOutOfRange: If the edit target no longer exists
        """
        record = self.to_record()
        target = self._edit_target
        try:
            if target is not None:
                self._store.replace_at(target.index, record)
            else:
                self._store.append(record)
        finally:
            self.reset()
        return record

    def cancel(self) -> None:
        """Drop the draft without touching the store."""
        self.reset()

    def delete_target(self) -> Optional[PurchaseRecord]:
        """
        Remove the record being edited and reset.

        Does nothing (returns None) when no record is being edited.
        """
        target = self._edit_target
        if target is None:
            return None
        try:
            return self._store.remove_at(target.index)
        finally:
            self.reset()

    def reset(self) -> None:
        self._values = blank_values()
        self._edit_target = None
