"""Availability engine — pure computations over a snapshot of bookings.

Everything a caller needs is re-exported here::

    from roomi.availability import build_segments, detect_conflicts
"""

from roomi.availability.conflicts import describe_conflicts, detect_conflicts
from roomi.availability.day_marks import DayStatus, mark_days
from roomi.availability.interval import (
    AvailabilityError,
    BookingInterval,
    BookingStatus,
    DateSpan,
    InvalidDateAxisError,
    InvalidIntervalError,
    StatusPriority,
    active_bookings,
    clamp_to_axis,
    contains_day,
    effective_status,
    is_active,
    nights,
    overlaps,
    status_priority,
    validate_date_axis,
    validate_interval,
)
from roomi.availability.segments import (
    EmptySegment,
    OccupiedSegment,
    Segment,
    build_segments,
    find_stacked_bookings,
)
from roomi.availability.stats import (
    DailyStats,
    PeriodStats,
    PropertyOccupancy,
    aggregate_daily_stats,
    aggregate_period_stats,
    nightly_rate,
)

__all__ = [
    "AvailabilityError",
    "BookingInterval",
    "BookingStatus",
    "DailyStats",
    "DateSpan",
    "DayStatus",
    "EmptySegment",
    "InvalidDateAxisError",
    "InvalidIntervalError",
    "OccupiedSegment",
    "PeriodStats",
    "PropertyOccupancy",
    "Segment",
    "StatusPriority",
    "active_bookings",
    "aggregate_daily_stats",
    "aggregate_period_stats",
    "build_segments",
    "clamp_to_axis",
    "contains_day",
    "describe_conflicts",
    "detect_conflicts",
    "effective_status",
    "find_stacked_bookings",
    "is_active",
    "mark_days",
    "nightly_rate",
    "nights",
    "overlaps",
    "status_priority",
    "validate_date_axis",
    "validate_interval",
]
