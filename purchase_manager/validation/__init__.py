"""Draft validation package."""

from purchase_manager.validation.validator import DraftValidator

__all__ = ["DraftValidator"]
