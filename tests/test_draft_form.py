"""Tests for the DraftForm state machine."""

import pytest

from purchase_manager.forms import DraftForm, UnknownFieldError, blank_values
from purchase_manager.models.record import EditingAt, PurchaseRecord
from purchase_manager.services.storage import InMemoryStorageProvider
from purchase_manager.store import IndexOutOfRange, RecordStore


def fill(draft: DraftForm, **values: str) -> None:
    for name, value in values.items():
        draft.set_field(name, value)


def make_record(code: str, **overrides) -> PurchaseRecord:
    fields = dict(
        date="2024-03-01",
        product_code=code,
        product_name=f"Item {code}",
        spec="10x10",
        unit="EA",
        quantity=2,
        price=1500,
        supplier="Acme",
        note="Main",
    )
    fields.update(overrides)
    return PurchaseRecord(**fields)


@pytest.fixture
def store():
    return RecordStore(InMemoryStorageProvider())


@pytest.fixture
def draft(store):
    return DraftForm(store)


@pytest.fixture
def five_records(store):
    for n in range(5):
        store.append(make_record(f"P{n}"))
    return store


class TestDraftState:
    """Tests for the blank draft and field assignment."""

    def test_starts_blank(self, draft):
        """Test a new draft is blank and not editing."""
        assert draft.values == blank_values()
        assert draft.edit_target is None
        assert draft.is_editing is False

    def test_set_field_stores_raw_text(self, draft):
        """Test field values are kept as typed."""
        draft.set_field("quantity", "12 boxes")
        assert draft.get_field("quantity") == "12 boxes"

    def test_set_unknown_field(self, draft):
        """Test setting a field outside the nine raises."""
        with pytest.raises(UnknownFieldError):
            draft.set_field("color", "red")

    def test_unknown_field_is_a_key_error(self, draft):
        """Test unknown field names raise KeyError."""
        with pytest.raises(KeyError):
            draft.get_field("productCode")

    def test_values_is_a_copy(self, draft):
        """Test changing the returned values leaves the draft alone."""
        draft.values["date"] = "2024-01-01"
        assert draft.get_field("date") == ""

    def test_missing_required_fields(self, draft):
        """Test empty required fields are listed in field order."""
        fill(draft, date="2024-01-01", product_name="Widget")
        assert draft.missing_required_fields() == ["product_code", "quantity", "price"]


class TestCommit:
    """Tests for commit in both modes."""

    def test_commit_without_target_appends(self, draft, store):
        """Test committing a blank-mode draft appends a record."""
        fill(draft, date="2024-01-01", product_code="P1", product_name="Widget",
             quantity="3", price="12.5")
        record = draft.commit()
        assert len(store) == 1
        assert store[0] == record
        assert record.quantity == 3.0
        assert record.price == 12.5

    def test_commit_coerces_bad_numbers_to_zero(self, draft, store):
        """Test unparseable quantity and price commit as 0."""
        fill(draft, product_code="P1", quantity="lots", price="")
        draft.commit()
        assert store[0].quantity == 0.0
        assert store[0].price == 0.0

    def test_commit_keeps_optional_fields_empty(self, draft, store):
        """Test untouched optional fields commit as empty text."""
        fill(draft, product_code="P1")
        draft.commit()
        assert store[0].spec == ""
        assert store[0].note == ""

    def test_commit_resets_draft(self, draft):
        """Test the draft is blank again after commit."""
        fill(draft, product_code="P1", quantity="1")
        draft.commit()
        assert draft.values == blank_values()
        assert draft.edit_target is None

    def test_commit_appends_exactly_one(self, draft, five_records):
        """Test commit adds one record at the end."""
        fill(draft, product_code="NEW")
        draft.commit()
        assert len(five_records) == 6
        assert five_records[5].product_code == "NEW"

    def test_commit_with_target_replaces_only_that_index(self, draft, five_records):
        """Test committing an edit changes only the edited record."""
        before = five_records.records
        draft.load(five_records[2], 2)
        draft.set_field("quantity", "99")
        draft.commit()

        after = five_records.records
        assert len(after) == 5
        assert after[2].quantity == 99.0
        assert [i for i in range(5) if before[i] != after[i]] == [2]
        assert draft.is_editing is False

    def test_edit_without_change_round_trips(self, draft, five_records):
        """Test loading and committing unchanged keeps the record equal."""
        original = five_records[3]
        draft.load(original, 3)
        draft.commit()
        assert five_records[3] == original

    @pytest.mark.parametrize("quantity, price", [
        (0, 0), (2.5, 0.1), (1234567.0, 0.001), (1e-7, 3),
    ])
    def test_round_trip_with_fractional_numbers(self, draft, store, quantity, price):
        """Test numbers survive the text round trip through the draft."""
        original = make_record("P1", quantity=quantity, price=price)
        store.append(original)
        draft.load(store[0], 0)
        draft.commit()
        assert store[0] == original

    def test_commit_to_stale_target_raises_and_resets(self, draft, store):
        """Test a removed edit target raises and still resets the draft."""
        store.append(make_record("P1"))
        draft.load(store[0], 0)
        store.remove_at(0)
        with pytest.raises(IndexOutOfRange):
            draft.commit()
        assert draft.edit_target is None
        assert len(store) == 0


class TestLoad:
    """Tests for loading a record into the draft."""

    def test_load_copies_fields_as_text(self, draft):
        """Test loading renders every field as text."""
        draft.load(make_record("P7", quantity=4, price=2.75), 7)
        values = draft.values
        assert values["product_code"] == "P7"
        assert values["quantity"] == "4"
        assert values["price"] == "2.75"
        assert values["supplier"] == "Acme"

    def test_load_sets_edit_target(self, draft):
        """Test loading marks the draft as editing that index."""
        draft.load(make_record("P1"), 4)
        assert draft.edit_target == EditingAt(index=4)
        assert draft.is_editing is True


class TestCancelAndDelete:
    """Tests for cancel and delete_target."""

    def test_cancel_resets_without_mutation(self, draft, five_records):
        """Test cancel clears the draft and leaves the store alone."""
        before = five_records.records
        draft.load(five_records[1], 1)
        draft.set_field("product_name", "changed")
        draft.cancel()
        assert five_records.records == before
        assert draft.values == blank_values()
        assert draft.edit_target is None

    def test_delete_without_target_is_noop(self, draft, five_records):
        """Test delete does nothing on a blank draft."""
        fill(draft, product_code="typed")
        assert draft.delete_target() is None
        assert len(five_records) == 5
        assert draft.get_field("product_code") == "typed"

    def test_delete_removes_exactly_the_target(self, draft, five_records):
        """Test delete removes only the edited record."""
        before = five_records.records
        draft.load(five_records[2], 2)
        removed = draft.delete_target()

        assert removed == before[2]
        assert five_records.records == before[:2] + before[3:]
        assert draft.values == blank_values()
        assert draft.edit_target is None
