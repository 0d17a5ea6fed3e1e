"""Draft form package."""

from purchase_manager.forms.draft import (
    DraftForm,
    DraftFormError,
    UnknownFieldError,
    blank_values,
)

__all__ = [
    "DraftForm",
    "DraftFormError",
    "UnknownFieldError",
    "blank_values",
]
