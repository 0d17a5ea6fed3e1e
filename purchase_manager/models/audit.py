"""
Audit Models for Purchase Manager

Every change to the purchase collection is described by an AuditEvent.
This provides:
1. Traceability of edits, deletes and bulk imports
2. Debugging information when a stored document could not be loaded
3. A record of which actions came from the user

DESIGN DECISION: Records have no identity field, so events refer to
records by their index at the time of the change.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Record changes
    RECORD_APPENDED = "record_appended"
    RECORD_UPDATED = "record_updated"
    RECORD_DELETED = "record_deleted"

    # Whole-collection changes
    COLLECTION_LOADED = "collection_loaded"
    COLLECTION_REPLACED = "collection_replaced"
    STORAGE_LOAD_FALLBACK = "storage_load_fallback"

    # Import / export
    DOCUMENT_EXPORTED = "document_exported"
    DOCUMENT_IMPORTED = "document_imported"
    IMPORT_FAILED = "import_failed"

    # Draft form
    DRAFT_REJECTED = "draft_rejected"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """A single audit event."""

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Which record this is about, if any
    record_index: Optional[int] = Field(
        default=None,
        ge=0,
        description="Index of the affected record at the time of the change"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "record_index": self.record_index,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_appended(index, "P-001")
        event = AuditEventBuilder.import_failed("not a JSON array")
    """

    @staticmethod
    def record_appended(index: int, product_code: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_APPENDED,
            record_index=index,
            description=f"Purchase added: {product_code}",
            details={"product_code": product_code},
            is_user_action=True,
        )

    @staticmethod
    def record_updated(index: int, product_code: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_UPDATED,
            record_index=index,
            description=f"Purchase updated at position {index}: {product_code}",
            details={"product_code": product_code},
            is_user_action=True,
        )

    @staticmethod
    def record_deleted(index: int, product_code: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_DELETED,
            record_index=index,
            description=f"Purchase deleted at position {index}: {product_code}",
            details={"product_code": product_code},
            is_user_action=True,
        )

    @staticmethod
    def collection_loaded(count: int, key: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COLLECTION_LOADED,
            severity=AuditSeverity.DEBUG,
            description=f"Loaded {count} purchases from storage",
            details={"count": count, "key": key},
        )

    @staticmethod
    def collection_replaced(previous_count: int, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COLLECTION_REPLACED,
            description=f"Collection replaced: {previous_count} -> {count} purchases",
            details={"previous_count": previous_count, "count": count},
        )

    @staticmethod
    def storage_load_fallback(key: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_LOAD_FALLBACK,
            severity=AuditSeverity.WARNING,
            description="Stored purchases could not be read; starting empty",
            details={"key": key},
            error_message=reason,
        )

    @staticmethod
    def document_exported(count: int, location: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENT_EXPORTED,
            description=f"Exported {count} purchases to {location}",
            details={"count": count, "location": location},
            is_user_action=True,
        )

    @staticmethod
    def document_imported(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENT_IMPORTED,
            description=f"Imported {count} purchases",
            details={"count": count},
            is_user_action=True,
        )

    @staticmethod
    def import_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.IMPORT_FAILED,
            severity=AuditSeverity.WARNING,
            description="Import rejected; collection left unchanged",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def draft_rejected(missing_fields: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DRAFT_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Draft not committed: {len(missing_fields)} required fields empty",
            details={"missing_fields": missing_fields},
            is_user_action=True,
        )
