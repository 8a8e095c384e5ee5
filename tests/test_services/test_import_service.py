"""Tests for bulk import validation (hard-blocking)."""

from datetime import date
from decimal import Decimal

from roomi.availability import BookingStatus
from roomi.services.import_service import ImportRow, validate_import


def _row(n: int, check_in: date, check_out: date, property_id: str = "villa-1", **kwargs) -> ImportRow:
    return ImportRow(row=n, property_id=property_id, check_in=check_in, check_out=check_out, **kwargs)


class TestValidateImport:
    def test_clean_batch_is_accepted(self, make_booking):
        existing = [make_booking(date(2025, 1, 1), date(2025, 1, 5))]
        rows = [
            _row(2, date(2025, 1, 5), date(2025, 1, 8), guest_name="Ivan", total_price=Decimal("900")),
            _row(3, date(2025, 1, 1), date(2025, 1, 5), property_id="villa-2"),
        ]

        result = validate_import(rows, existing)

        assert result.imported == 2
        assert result.errors == []
        assert [b.guest_name for b in result.accepted] == ["Ivan", ""]
        assert all(b.status == BookingStatus.CONFIRMED for b in result.accepted)
        assert result.accepted[0].total_price == Decimal("900")

    def test_single_conflict_blocks_whole_batch(self, make_booking):
        existing = [make_booking(date(2025, 1, 10), date(2025, 1, 15), guest_name="Anna")]
        rows = [
            _row(2, date(2025, 1, 1), date(2025, 1, 5)),
            _row(3, date(2025, 1, 14), date(2025, 1, 20)),
        ]

        result = validate_import(rows, existing)

        assert result.imported == 0
        assert result.accepted == []
        assert len(result.errors) == 1
        assert result.errors[0].row == 3
        assert "Anna (2025-01-10 - 2025-01-15)" in result.errors[0].message

    def test_touching_rows_are_not_conflicts(self, make_booking):
        existing = [make_booking(date(2025, 1, 10), date(2025, 1, 15))]

        result = validate_import([_row(2, date(2025, 1, 15), date(2025, 1, 20))], existing)

        assert result.imported == 1

    def test_cancelled_existing_booking_does_not_block(self, make_booking):
        existing = [make_booking(date(2025, 1, 10), date(2025, 1, 15), status="cancelled")]

        result = validate_import([_row(2, date(2025, 1, 10), date(2025, 1, 15))], existing)

        assert result.imported == 1

    def test_rows_conflicting_with_each_other(self):
        rows = [
            _row(2, date(2025, 1, 10), date(2025, 1, 15), guest_name="First"),
            _row(3, date(2025, 1, 12), date(2025, 1, 14), guest_name="Second"),
        ]

        result = validate_import(rows, [])

        assert result.imported == 0
        assert [e.row for e in result.errors] == [3]
        assert "First" in result.errors[0].message

    def test_bad_dates_reported_per_row(self):
        rows = [
            _row(2, date(2025, 1, 10), date(2025, 1, 10)),
            _row(3, date(2025, 1, 12), date(2025, 1, 11)),
        ]

        result = validate_import(rows, [])

        assert result.imported == 0
        assert [e.row for e in result.errors] == [2, 3]
        assert all("check_out must be after check_in" in e.message for e in result.errors)

    def test_unknown_property(self):
        rows = [_row(2, date(2025, 1, 10), date(2025, 1, 12), property_id="ghost")]

        result = validate_import(rows, [], known_property_ids={"villa-1"})

        assert result.imported == 0
        assert result.errors[0].property_id == "ghost"
        assert "Unknown property" in result.errors[0].message

    def test_all_errors_reported_together(self, make_booking):
        existing = [make_booking(date(2025, 1, 10), date(2025, 1, 15))]
        rows = [
            _row(2, date(2025, 1, 11), date(2025, 1, 12)),
            _row(3, date(2025, 1, 20), date(2025, 1, 19)),
            _row(4, date(2025, 1, 20), date(2025, 1, 22), property_id="ghost"),
            _row(5, date(2025, 2, 1), date(2025, 2, 3)),
        ]

        result = validate_import(rows, existing, known_property_ids={"villa-1"})

        assert result.imported == 0
        assert [e.row for e in result.errors] == [2, 3, 4]

    def test_row_dates_truncate_time(self):
        row = ImportRow(row=1, property_id="villa-1", check_in="2025-01-10T12:00:00", check_out="2025-01-12T00:00:00")

        assert (row.check_in, row.check_out) == (date(2025, 1, 10), date(2025, 1, 12))

    def test_row_dates_truncate_time_with_space_separator(self):
        row = ImportRow(row=1, property_id="villa-1", check_in="2025-01-10 14:00:00", check_out="2025-01-12 11:00:00")

        assert (row.check_in, row.check_out) == (date(2025, 1, 10), date(2025, 1, 12))

    def test_row_status_is_case_insensitive(self):
        row = _row(1, date(2025, 1, 10), date(2025, 1, 12), status=" Confirmed ")

        assert row.status == BookingStatus.CONFIRMED

    def test_cancelled_row_skips_conflict_check(self, make_booking):
        existing = [make_booking(date(2025, 1, 10), date(2025, 1, 15), guest_name="Anna")]
        rows = [_row(2, date(2025, 1, 11), date(2025, 1, 12), status="cancelled")]

        result = validate_import(rows, existing)

        assert result.imported == 1
        assert result.errors == []
        assert result.accepted[0].status == BookingStatus.CANCELLED

    def test_cancelled_row_does_not_block_later_rows(self):
        rows = [
            _row(2, date(2025, 1, 10), date(2025, 1, 15), status="cancelled"),
            _row(3, date(2025, 1, 11), date(2025, 1, 13)),
        ]

        result = validate_import(rows, [])

        assert result.imported == 2

    def test_cancelled_row_with_bad_dates_is_still_rejected(self):
        rows = [_row(2, date(2025, 1, 15), date(2025, 1, 10), status="cancelled")]

        result = validate_import(rows, [])

        assert result.imported == 0
        assert [e.row for e in result.errors] == [2]
