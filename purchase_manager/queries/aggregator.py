"""
Aggregator

Totals over a (filtered) purchase view: count, quantity and amount.

Totals are recomputed from the records every time and are never rounded.
Rounding to two decimals is done only by format_number, for display.
"""

from typing import Iterable

from purchase_manager.models.record import PurchaseRecord, Totals


def aggregate(records: Iterable[PurchaseRecord]) -> Totals:
    count = 0
    total_quantity = 0.0
    total_amount = 0.0
    for record in records:
        count += 1
        total_quantity += record.quantity
        total_amount += record.quantity * record.price

    return Totals(
        count=count,
        total_quantity=total_quantity,
        total_amount=total_amount,
    )


def format_number(value: float) -> str:
    """Display form of a number: thousands separator, two decimals."""
    return f"{value:,.2f}"
