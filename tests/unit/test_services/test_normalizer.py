"""Unit tests for record normalization."""
from datetime import datetime, timezone

import pytest

from careforme.models.doctor import DoctorRecord
from careforme.services.normalizer import (
    display_normalize, format_member_since, normalize_record
)


class TestNormalizeRecord:
    """Test storage defaults."""

    @pytest.mark.parametrize("raw", [None, {}, "not a document", 42])
    def test_total_for_any_input(self, raw):
        """Test every field gets a value whatever the input."""
        record = normalize_record(raw)

        assert record.name == ""
        assert record.rating == 0.0
        assert record.review_count == 0
        assert record.available_days == []
        assert record.is_available is True
        assert record.suspended is False

    def test_missing_is_available_defaults_to_true(self):
        assert normalize_record({"name": "Dr. A"}).is_available is True

    def test_explicit_false_kept(self):
        record = normalize_record({"isAvailable": False, "suspended": True})

        assert record.is_available is False
        assert record.suspended is True

    def test_non_boolean_flags_fall_back_to_defaults(self):
        record = normalize_record({"isAvailable": "no", "suspended": 1})

        assert record.is_available is True
        assert record.suspended is False

    def test_numeric_strings_accepted(self):
        record = normalize_record({"rating": "4.5", "latitude": " 40.7 ", "reviewCount": "12"})

        assert record.rating == 4.5
        assert record.latitude == 40.7
        assert record.review_count == 12

    @pytest.mark.parametrize("value", ["abc", "nan", "inf", True, [1], {"a": 1}])
    def test_bad_numbers_default_to_zero(self, value):
        assert normalize_record({"rating": value}).rating == 0.0

    def test_negative_review_count_clamped(self):
        assert normalize_record({"reviewCount": -5}).review_count == 0

    def test_weekdays_canonical_order_and_unknown_dropped(self):
        record = normalize_record({"availableDays": ["Friday", "Funday", "Monday", 3]})

        assert record.available_days == ["Monday", "Friday"]

    def test_weekdays_string_is_not_a_list(self):
        assert normalize_record({"availableDays": "Monday"}).available_days == []

    def test_doc_id_wins_over_payload_id(self):
        assert normalize_record({"id": "payload"}, "store").id == "store"
        assert normalize_record({"id": "payload"}).id == "payload"

    def test_datetime_created_at_becomes_iso(self):
        created = datetime(2024, 3, 5, 10, 0, tzinfo=timezone.utc)

        assert normalize_record({"createdAt": created}).created_at == created.isoformat()

    def test_text_fields_coerced(self):
        record = normalize_record({"name": None, "phone": 5551234})

        assert record.name == ""
        assert record.phone == "5551234"


class TestDisplayNormalize:
    """Test display placeholders."""

    def test_placeholders_for_empty_fields(self):
        data = display_normalize({"name": "Dr. A", "bio": "   "})

        assert data["name"] == "Dr. A"
        assert data["specialty"] == "N/A"
        assert data["bio"] == "N/A"
        assert data["memberSince"] == "N/A"

    def test_storage_defaults_not_replaced(self):
        """Test numeric and boolean defaults stay as values, not placeholders."""
        data = display_normalize({})

        assert data["rating"] == 0.0
        assert data["reviewCount"] == 0
        assert data["isAvailable"] is True
        assert data["status"] == "Available"

    def test_accepts_record_and_rounds_rating(self):
        record = DoctorRecord(id="doc1", name="Dr. A", rating=4.76, created_at="2026-03-05T08:00:00Z")

        data = display_normalize(record)

        assert data["id"] == "doc1"
        assert data["rating"] == 4.8
        assert data["memberSince"] == "March 5, 2026"

    def test_custom_placeholder(self):
        assert display_normalize({}, placeholder="-")["city"] == "-"


class TestFormatMemberSince:
    def test_valid(self):
        assert format_member_since("2024-12-25T00:00:00") == "December 25, 2024"

    @pytest.mark.parametrize("value", ["", "yesterday", None])
    def test_invalid(self, value):
        assert format_member_since(value) is None
