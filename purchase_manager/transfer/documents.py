"""
Purchase Document Codec

Serializes the purchase collection to a JSON document and back.

The document is a JSON array of objects with camelCase keys:

    [{"date": "2024-01-01", "productCode": "P1", "productName": "Widget",
      "spec": "", "unit": "", "quantity": 3, "price": 12.5,
      "supplier": "", "note": ""}]

IMPORTANT: Import is all-or-nothing. Every element is normalized before
anything is returned, so a bad element anywhere leaves the caller's
collection untouched.
"""

import json
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from purchase_manager.models.record import PurchaseRecord


class ImportExportError(Exception):
    """Base exception for document import/export."""
    pass


class MalformedDocument(ImportExportError, ValueError):
    """The document is not a JSON array of record-shaped objects."""

    def __init__(self, message: str, position: Optional[int] = None):
        self.position = position
        if position is not None:
            message = f"Element {position}: {message}"
        super().__init__(message)


def export_document(records: Iterable[PurchaseRecord], indent: Optional[int] = 2) -> str:
    """
    Serialize records to a JSON document.

    Numbers stay numbers and text stays text. Pass indent=None (or 0)
    for a compact single-line document.
    """
    payload = [record.to_document_dict() for record in records]
    return json.dumps(payload, ensure_ascii=False, indent=indent or None)


def normalize_records(data: Any) -> list[PurchaseRecord]:
    """
    Normalize already-parsed JSON data into records.

    Raises:
        MalformedDocument: If data is not a list of objects
    """
    if not isinstance(data, list):
        raise MalformedDocument(
            f"expected a JSON array of purchases, got {type(data).__name__}"
        )

    records = []
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedDocument(
                f"expected an object, got {type(item).__name__}",
                position=position,
            )
        try:
            records.append(PurchaseRecord.from_document_item(item))
        except ValidationError as e:
            raise MalformedDocument(str(e), position=position) from e
    return records


def import_document(text: Union[str, bytes]) -> list[PurchaseRecord]:
    """
    Parse a JSON document into normalized records.

    Text fields that are absent or null become "", quantity and price are
    coerced with the usual fallback to 0, and unknown keys are dropped.

    Raises:
        MalformedDocument: If the text is not a JSON array of objects
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedDocument(f"not valid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedDocument("document is nested too deeply") from e
    return normalize_records(data)
