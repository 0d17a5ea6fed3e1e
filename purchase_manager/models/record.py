"""
Core Data Models for Purchase Manager

These models define the shapes that flow between the draft form, the
record store, the filter engine and the import/export layer.

DESIGN DECISION: Records are lenient on input and strict on storage.
Quantity and price accept anything (raw text from a form, numbers from a
JSON document, nothing at all) and are coerced to floats on construction.
Once a PurchaseRecord exists, its numeric fields are always numbers.
"""

import json
import math
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# FIELD METADATA
# =============================================================================

# Fixed display and document order of the nine record fields
FIELD_ORDER = (
    "date",
    "product_code",
    "product_name",
    "spec",
    "unit",
    "quantity",
    "price",
    "supplier",
    "note",
)

# Fields that must be non-empty before a draft may be committed
REQUIRED_FIELDS = frozenset({
    "date",
    "product_code",
    "product_name",
    "quantity",
    "price",
})

NUMERIC_FIELDS = frozenset({"quantity", "price"})

FIELD_LABELS = {
    "ko": {
        "date": "날짜",
        "product_code": "제품코드",
        "product_name": "제품명",
        "spec": "규격",
        "unit": "단위",
        "quantity": "수량",
        "price": "단가",
        "supplier": "매입처",
        "note": "창고명",
    },
    "en": {
        "date": "Date",
        "product_code": "Product Code",
        "product_name": "Product Name",
        "spec": "Spec",
        "unit": "Unit",
        "quantity": "Quantity",
        "price": "Unit Price",
        "supplier": "Supplier",
        "note": "Warehouse",
    },
}


def field_labels(locale: str = "ko") -> list[tuple[str, str]]:
    """Return (field, label) pairs in display order for a locale."""
    labels = FIELD_LABELS.get(locale, FIELD_LABELS["ko"])
    return [(name, labels[name]) for name in FIELD_ORDER]


# =============================================================================
# NUMERIC COERCION
# =============================================================================

_NUMERIC_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def coerce_number(value: Any) -> float:
    """
    Coerce raw input to a float, falling back to zero.

    Strings are read from their longest leading numeric prefix, so
    "3.5kg" becomes 3.5 and "bad" becomes 0. Anything that does not
    yield a finite number becomes 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value.lstrip())
        if match is None:
            return 0.0
        number = float(match.group(0).replace("Infinity", "inf"))
    else:
        return 0.0

    if not math.isfinite(number) or number == 0:
        return 0.0
    return number


def number_to_text(value: float) -> str:
    """Render a stored number back into editable text ("3", "2.5")."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


# =============================================================================
# RECORD MODELS
# =============================================================================

class PurchaseRecord(BaseModel):
    """
    One purchase line item.

    Python attributes are snake_case; the document and persisted form use
    the camelCase aliases (productCode, productName). Records are frozen:
    edits produce a new record that replaces the old one by index.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    date: str = Field(default="", description="Purchase date, YYYY-MM-DD")
    product_code: str = Field(default="", alias="productCode")
    product_name: str = Field(default="", alias="productName")
    spec: str = Field(default="", description="Size or grade, 규격 (optional)")
    unit: str = Field(default="", description="Unit of measure (optional)")
    quantity: float = Field(default=0.0, description="Quantity purchased")
    price: float = Field(default=0.0, description="Unit price")
    supplier: str = Field(default="", description="Supplier (optional)")
    note: str = Field(
        default="",
        description="Free note, used as the warehouse label",
    )

    @field_validator(
        "date", "product_code", "product_name", "spec", "unit",
        "supplier", "note",
        mode="before",
    )
    @classmethod
    def normalize_text(cls, v: Any) -> str:
        """
        Missing text becomes an empty string; scalars become text.
        Nested objects and arrays are kept as their JSON text.
        """
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        if isinstance(v, (dict, list)):
            return json.dumps(v, ensure_ascii=False)
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        return str(v)

    @field_validator("quantity", "price", mode="before")
    @classmethod
    def normalize_number(cls, v: Any) -> float:
        return coerce_number(v)

    @property
    def amount(self) -> float:
        """Line amount (quantity × unit price)."""
        return self.quantity * self.price

    @classmethod
    def document_keys(cls) -> tuple[str, ...]:
        """The nine camelCase document keys, in field order."""
        return tuple(cls.model_fields[name].alias or name for name in FIELD_ORDER)

    @classmethod
    def from_document_item(cls, item: dict) -> "PurchaseRecord":
        """
        Build a record from one document object.

        Only the camelCase document keys are read; snake_case attribute
        names and any other keys are dropped like unknown fields.
        """
        keys = cls.document_keys()
        return cls.model_validate({k: v for k, v in item.items() if k in keys})

    def to_document_dict(self) -> dict:
        """Typed dict with camelCase keys, in field order."""
        return self.model_dump(by_alias=True)

    def to_text_values(self) -> dict[str, str]:
        """All fields as editable text, keyed by snake_case field name."""
        values = {}
        for name in FIELD_ORDER:
            value = getattr(self, name)
            values[name] = number_to_text(value) if name in NUMERIC_FIELDS else value
        return values


class FilterCriteria(BaseModel):
    """
    Four independent string predicates over the record list.

    An empty value matches every record.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    keyword: str = Field(default="", description="Matches product code or name")
    date: str = Field(default="", description="Exact date match")
    supplier: str = Field(default="", description="Supplier substring")
    note: str = Field(default="", description="Warehouse/note substring")

    @property
    def is_empty(self) -> bool:
        return not (self.keyword or self.date or self.supplier or self.note)


class Totals(BaseModel):
    """Running totals over a filtered view. Values are unrounded."""

    count: int = Field(default=0, ge=0)
    total_quantity: float = 0.0
    total_amount: float = 0.0


class EditingAt(BaseModel):
    """
    Edit target of the draft form: the index of the record being edited.

    A draft that is not editing anything has no EditingAt at all (None).
    """
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)


EditTarget = Optional[EditingAt]


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found on the draft."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of checking a draft before commit."""

    is_valid: bool = Field(
        ...,
        description="May the draft be committed?"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def missing_fields(self) -> list[str]:
        return [i.field for i in self.issues if i.issue_type == "missing"]
