"""
Filter Engine

Pure, non-mutating projection of the purchase list through FilterCriteria.
The view is recomputed from scratch whenever the records or the criteria
change; nothing is maintained incrementally.

A record matches when all four predicates hold:
- keyword: substring of product code OR product name (case-insensitive)
- date: exact match
- supplier: substring (case-insensitive)
- note: substring (case-insensitive)
An empty criterion matches everything.
"""

from typing import Iterable

from purchase_manager.models.record import FilterCriteria, PurchaseRecord


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def matches(record: PurchaseRecord, criteria: FilterCriteria) -> bool:
    keyword_match = (
        _contains(record.product_code, criteria.keyword)
        or _contains(record.product_name, criteria.keyword)
    )
    date_match = criteria.date == "" or record.date == criteria.date
    supplier_match = _contains(record.supplier, criteria.supplier)
    note_match = _contains(record.note, criteria.note)

    return keyword_match and date_match and supplier_match and note_match


def filter_records(
    records: Iterable[PurchaseRecord],
    criteria: FilterCriteria,
) -> list[PurchaseRecord]:
    """Records satisfying the criteria, in their original order."""
    return [record for record in records if matches(record, criteria)]


def filter_with_indices(
    records: Iterable[PurchaseRecord],
    criteria: FilterCriteria,
) -> list[tuple[int, PurchaseRecord]]:
    """
    Like filter_records, but keeps each record's index in the full list.

    The index is what the draft form needs to edit a row of the view.
    """
    return [
        (index, record)
        for index, record in enumerate(records)
        if matches(record, criteria)
    ]
