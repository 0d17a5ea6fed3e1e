"""Audit logging package."""

from purchase_manager.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
