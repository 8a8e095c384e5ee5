"""Unit tests for the conflict detector."""

from datetime import date

from roomi.availability import describe_conflicts, detect_conflicts

JAN_10 = date(2025, 1, 10)
JAN_14 = date(2025, 1, 14)
JAN_15 = date(2025, 1, 15)
JAN_20 = date(2025, 1, 20)


class TestDetectConflicts:
    """Overlap detection against a candidate stay."""

    def test_overlap_on_last_night_conflicts(self, make_booking):
        existing = make_booking(JAN_10, JAN_15)

        assert detect_conflicts("villa-1", JAN_14, JAN_20, [existing]) == [existing]

    def test_touching_is_not_a_conflict(self, make_booking):
        existing = make_booking(JAN_10, JAN_15)

        assert detect_conflicts("villa-1", JAN_15, JAN_20, [existing]) == []

    def test_touching_from_the_other_side(self, make_booking):
        existing = make_booking(JAN_15, JAN_20)

        assert detect_conflicts("villa-1", JAN_10, JAN_15, [existing]) == []

    def test_other_property_is_ignored(self, make_booking):
        existing = make_booking(JAN_10, JAN_15, property_id="villa-2")

        assert detect_conflicts("villa-1", JAN_10, JAN_15, [existing]) == []

    def test_cancelled_booking_is_ignored(self, make_booking):
        existing = make_booking(JAN_10, JAN_15, status="cancelled")

        assert detect_conflicts("villa-1", JAN_10, JAN_15, [existing]) == []

    def test_pending_booking_conflicts(self, make_booking):
        existing = make_booking(JAN_10, JAN_15, status="pending")

        assert detect_conflicts("villa-1", JAN_14, JAN_20, [existing]) == [existing]

    def test_returns_all_matches_in_snapshot_order(self, make_booking):
        late = make_booking(date(2025, 1, 18), date(2025, 1, 22))
        early = make_booking(date(2025, 1, 5), date(2025, 1, 12))
        unrelated = make_booking(date(2025, 2, 1), date(2025, 2, 5))

        conflicts = detect_conflicts("villa-1", JAN_10, JAN_20, [late, unrelated, early])

        assert conflicts == [late, early]

    def test_exclude_booking_being_edited(self, make_booking):
        edited = make_booking(JAN_10, JAN_15, id="edit-me")
        other = make_booking(JAN_15, JAN_20)

        assert detect_conflicts("villa-1", JAN_10, JAN_14, [edited, other], exclude_booking_id="edit-me") == []
        assert detect_conflicts("villa-1", JAN_10, JAN_20, [edited, other], exclude_booking_id="edit-me") == [other]

    def test_empty_snapshot(self):
        assert detect_conflicts("villa-1", JAN_10, JAN_15, []) == []

    def test_touching_bookings_never_in_each_others_conflict_set(self, make_booking):
        a = make_booking(JAN_10, JAN_15)
        b = make_booking(JAN_15, JAN_20)

        assert b not in detect_conflicts(a.property_id, a.check_in, a.check_out, [b])
        assert a not in detect_conflicts(b.property_id, b.check_in, b.check_out, [a])


class TestDescribeConflicts:
    def test_uses_guest_name_and_dates(self, make_booking):
        conflicts = [make_booking(JAN_10, JAN_15, guest_name="Anna")]

        assert describe_conflicts(conflicts) == "Anna (2025-01-10 - 2025-01-15)"

    def test_falls_back_to_id(self, make_booking):
        conflicts = [make_booking(JAN_10, JAN_15, id="bk-7")]

        assert describe_conflicts(conflicts) == "bk-7 (2025-01-10 - 2025-01-15)"
