"""Conflict detector — which existing bookings a candidate stay would collide with.

The detector only reports. Whether a conflict blocks the write is decided by
the calling workflow (see ``roomi.services``).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from roomi.availability.interval import BookingInterval, DateSpan, is_active, overlaps


def detect_conflicts(
    property_id: str,
    check_in: date,
    check_out: date,
    bookings: Iterable[BookingInterval],
    *,
    exclude_booking_id: str | None = None,
) -> list[BookingInterval]:
    """Return the non-cancelled bookings of ``property_id`` overlapping ``[check_in, check_out)``.

    Results keep the snapshot order. A booking that checks out on the
    candidate's check-in day (or checks in on its check-out day) is not a
    conflict. Pass ``exclude_booking_id`` when re-checking an edited booking
    so it is not compared against itself.
    """
    candidate = DateSpan(check_in, check_out)
    return [
        booking
        for booking in bookings
        if booking.property_id == property_id
        and booking.id != exclude_booking_id
        and is_active(booking)
        and overlaps(candidate, booking)
    ]


def describe_conflicts(conflicts: Iterable[BookingInterval]) -> str:
    """Human-readable list, e.g. ``"Anna (2025-01-10 - 2025-01-15)"``."""
    return ", ".join(
        f"{b.guest_name or b.id} ({b.check_in.isoformat()} - {b.check_out.isoformat()})"
        for b in conflicts
    )
