"""
Data Models Package

This package contains all Pydantic models used in Purchase Manager.
All data flowing through the system must conform to these schemas.
"""

from purchase_manager.models.record import (
    FIELD_LABELS,
    FIELD_ORDER,
    NUMERIC_FIELDS,
    REQUIRED_FIELDS,
    EditingAt,
    EditTarget,
    FilterCriteria,
    PurchaseRecord,
    Totals,
    ValidationIssue,
    ValidationResult,
    coerce_number,
    field_labels,
    number_to_text,
)
from purchase_manager.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Record models
    "FIELD_LABELS",
    "FIELD_ORDER",
    "NUMERIC_FIELDS",
    "REQUIRED_FIELDS",
    "EditingAt",
    "EditTarget",
    "FilterCriteria",
    "PurchaseRecord",
    "Totals",
    "ValidationIssue",
    "ValidationResult",
    "coerce_number",
    "field_labels",
    "number_to_text",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
