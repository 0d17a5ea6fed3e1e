"""Import/export package."""

from purchase_manager.transfer.documents import (
    ImportExportError,
    MalformedDocument,
    export_document,
    import_document,
    normalize_records,
)

__all__ = [
    "ImportExportError",
    "MalformedDocument",
    "export_document",
    "import_document",
    "normalize_records",
]
