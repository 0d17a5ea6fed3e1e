"""Tests for the JSON document codec."""

import json

import pytest

from purchase_manager.models.record import PurchaseRecord
from purchase_manager.transfer import (
    ImportExportError,
    MalformedDocument,
    export_document,
    import_document,
)


@pytest.fixture
def records():
    return [
        PurchaseRecord(date="2024-01-01", product_code="P1", product_name="위젯",
                       spec="S", unit="EA", quantity=3, price=12.5,
                       supplier="Acme", note="창고1"),
        PurchaseRecord(date="2024-01-02", product_code="P2", product_name="Gadget",
                       quantity=0.25, price=1000),
    ]


class TestExport:
    """Tests for export_document."""

    def test_exports_typed_values(self, records):
        """Test numbers are exported as JSON numbers."""
        data = json.loads(export_document(records))
        assert data[0]["productCode"] == "P1"
        assert data[0]["quantity"] == 3
        assert data[0]["price"] == 12.5
        assert isinstance(data[1]["quantity"], float)

    def test_export_keeps_order_and_all_fields(self, records):
        """Test export keeps record order and all nine keys."""
        data = json.loads(export_document(records))
        assert [item["productCode"] for item in data] == ["P1", "P2"]
        assert set(data[1]) == {
            "date", "productCode", "productName", "spec", "unit",
            "quantity", "price", "supplier", "note",
        }

    def test_export_is_pretty_printed_by_default(self, records):
        """Test the default export is indented."""
        assert "\n  {" in export_document(records)

    def test_compact_export(self, records):
        """Test indent None or 0 gives a single line."""
        assert "\n" not in export_document(records, indent=None)
        assert "\n" not in export_document(records, indent=0)

    def test_non_ascii_is_written_verbatim(self, records):
        """Test Korean text is not escaped."""
        assert "위젯" in export_document(records)

    def test_empty_collection(self):
        """Test an empty collection exports as an empty array."""
        assert json.loads(export_document([])) == []


class TestImport:
    """Tests for import_document."""

    def test_round_trip(self, records):
        """Test exported records import back equal."""
        assert import_document(export_document(records)) == records

    def test_normalizes_missing_fields(self):
        """Test absent fields default and bad numbers become 0."""
        document = (
            '[{"date":"2024-01-01","productCode":"P1","productName":"Widget",'
            '"quantity":"3","price":"bad"}]'
        )
        [record] = import_document(document)
        assert record.quantity == 3.0
        assert record.price == 0.0
        assert record.spec == ""
        assert record.unit == ""
        assert record.supplier == ""
        assert record.note == ""

    def test_null_fields(self):
        """Test null text and numbers become empty and 0."""
        [record] = import_document('[{"productCode": null, "quantity": null}]')
        assert record.product_code == ""
        assert record.quantity == 0.0

    def test_drops_unknown_fields(self):
        """Test keys outside the document schema are dropped."""
        [record] = import_document('[{"productCode": "P1", "id": 7, "extra": [1]}]')
        assert record.to_document_dict()["productCode"] == "P1"
        assert "id" not in record.to_document_dict()

    def test_accepts_bytes(self):
        """Test a bytes document is decoded."""
        assert len(import_document(b'[{"productCode": "P1"}]')) == 1

    def test_empty_array(self):
        """Test an empty array imports as no records."""
        assert import_document("[]") == []

    @pytest.mark.parametrize("text", [
        "",
        "not json",
        "{\"productCode\": \"P1\"}",
        "\"purchases\"",
        "null",
        "[1]",
        "[{\"productCode\": \"P1\"}, \"oops\"]",
        "[[]]",
    ])
    def test_rejects_non_array_of_objects(self, text):
        """Test anything but an array of objects is malformed."""
        with pytest.raises(MalformedDocument):
            import_document(text)

    def test_reports_position_of_bad_element(self):
        """Test the bad element's position is reported."""
        with pytest.raises(MalformedDocument, match="Element 1") as exc_info:
            import_document('[{"productCode": "P1"}, 42]')
        assert exc_info.value.position == 1

    def test_nested_text_field_is_normalized(self):
        """Test a nested value in one field does not reject the element."""
        records = import_document(
            '[{"productCode": "P1"}, {"productCode": "P2", "spec": {"w": 1}}]'
        )
        assert [r.product_code for r in records] == ["P1", "P2"]
        assert records[1].spec == '{"w": 1}'

    def test_ignores_snake_case_keys(self):
        """Test attribute names are not read as document fields."""
        [record] = import_document('[{"product_name": "Sneaky", "product_code": "X"}]')
        assert record.product_name == ""
        assert record.product_code == ""

    def test_deeply_nested_document_is_malformed(self):
        """Test nesting beyond the parser limit is reported as malformed."""
        with pytest.raises(MalformedDocument, match="nested too deeply"):
            import_document("[" * 100000 + "]" * 100000)

    def test_malformed_document_hierarchy(self):
        """Test MalformedDocument is an ImportExportError and a ValueError."""
        with pytest.raises(ImportExportError):
            import_document("[1]")
        with pytest.raises(ValueError):
            import_document("[1]")
