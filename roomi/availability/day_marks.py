"""Day marker — one resolved status per calendar day for month-view dots."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from enum import Enum

from roomi.availability.interval import (
    ONE_DAY,
    BookingInterval,
    DateSpan,
    StatusPriority,
    clamp_to_axis,
    is_active,
    status_priority,
)


class DayStatus(str, Enum):
    BOOKED = "booked"
    TENTATIVE = "tentative"
    AVAILABLE = "available"


_PRIORITY_TO_DAY_STATUS: dict[StatusPriority, DayStatus] = {
    StatusPriority.CONFIRMED: DayStatus.BOOKED,
    StatusPriority.PENDING: DayStatus.TENTATIVE,
    StatusPriority.AVAILABLE: DayStatus.AVAILABLE,
}


def mark_days(
    bookings: Iterable[BookingInterval],
    window: DateSpan | None = None,
) -> dict[date, DayStatus]:
    """Resolve each touched day to the most urgent status among its bookings.

    Works across properties: a day that is pending in one property and
    confirmed in another comes out ``booked``. The check-out day itself is not
    marked. Days no active booking touches are absent from the result; callers
    read absence as available.

    Args:
        bookings: Snapshot of bookings, any mix of properties and statuses.
        window: Optional ``[start, end)`` range to restrict the walk to, e.g.
            the displayed month.
    """
    best: dict[date, StatusPriority] = {}

    for booking in bookings:
        if not is_active(booking):
            continue

        span: DateSpan | None = booking.span
        if window is not None:
            span = clamp_to_axis(booking, window.check_in, window.check_out)
            if span is None:
                continue

        priority = status_priority(booking.status)
        day = span.check_in
        while day < span.check_out:
            if best.get(day, StatusPriority.CANCELLED) < priority:
                best[day] = priority
            day += ONE_DAY

    return {day: _PRIORITY_TO_DAY_STATUS[priority] for day, priority in sorted(best.items())}
