"""
Draft Validation

DESIGN DECISION: The only check before commit is that the required fields
are filled in. Everything else is accepted as typed:
- Quantity and price are NOT checked for being numeric; unparseable
  input silently becomes 0 on commit
- Dates are not checked against a calendar
- The record store does not re-validate what it is given

The validator exists so the presentation layer can block submission and
highlight the empty fields without knowing the policy itself.
"""

from typing import Mapping

from purchase_manager.models.record import (
    FIELD_ORDER,
    REQUIRED_FIELDS,
    ValidationIssue,
    ValidationResult,
    field_labels,
)


class DraftValidator:
    """Checks raw draft values against the required-field policy."""

    def __init__(self, locale: str = "ko"):
        self._labels = dict(field_labels(locale))

    def validate(self, values: Mapping[str, str]) -> ValidationResult:
        issues = []
        for name in FIELD_ORDER:
            if name in REQUIRED_FIELDS and not values.get(name, ""):
                issues.append(ValidationIssue(
                    field=name,
                    issue_type="missing",
                    message=f"{self._labels[name]} is required",
                    severity="error",
                ))

        return ValidationResult(
            is_valid=not issues,
            issues=issues,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """One line for the user; empty when the draft is valid."""
        if result.is_valid:
            return ""
        labels = ", ".join(self._labels[name] for name in result.missing_fields)
        return f"Please fill in: {labels}"
