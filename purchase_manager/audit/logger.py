"""
Audit Logger

DESIGN DECISION: Every change to the purchase collection is logged.
This provides:
1. Traceability of edits, deletes and imports
2. Debugging capability when stored data is silently discarded
3. A history the user can consult in the log output

The audit logger:
- Is synchronous; every operation runs to completion before the next one
- Never raises into the caller (a logging failure must not undo an edit)
"""

import structlog

from purchase_manager.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Emits each AuditEvent as a structured log line at the event's severity.
    """

    def __init__(self):
        self._logger = structlog.get_logger("purchase_manager.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was emitted.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # Logging must never break a user action
            return False

        return True

    def log_record_appended(self, index: int, product_code: str) -> None:
        """Log a new purchase at the end of the collection."""
        self.log(AuditEventBuilder.record_appended(index, product_code))

    def log_record_updated(self, index: int, product_code: str) -> None:
        """Log an edit committed over an existing purchase."""
        self.log(AuditEventBuilder.record_updated(index, product_code))

    def log_record_deleted(self, index: int, product_code: str) -> None:
        """Log removal of a purchase."""
        self.log(AuditEventBuilder.record_deleted(index, product_code))

    def log_collection_loaded(self, count: int, key: str) -> None:
        self.log(AuditEventBuilder.collection_loaded(count, key))

    def log_collection_replaced(self, previous_count: int, count: int) -> None:
        self.log(AuditEventBuilder.collection_replaced(previous_count, count))

    def log_storage_load_fallback(self, key: str, reason: str) -> None:
        """Log that stored data was unreadable and replaced by an empty list."""
        self.log(AuditEventBuilder.storage_load_fallback(key, reason))

    def log_document_exported(self, count: int, location: str) -> None:
        self.log(AuditEventBuilder.document_exported(count, location))

    def log_document_imported(self, count: int) -> None:
        self.log(AuditEventBuilder.document_imported(count))

    def log_import_failed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.import_failed(error_message))

    def log_draft_rejected(self, missing_fields: list[str]) -> None:
        self.log(AuditEventBuilder.draft_rejected(missing_fields))
