"""Interval model — the booking record every availability computation works on.

A stay is the half-open range ``[check_in, check_out)``: the guest sleeps every
night from check-in up to, but not including, the check-out day. That makes the
check-out day a turnover day that the next guest may arrive on.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum, IntEnum
from typing import NamedTuple, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from roomi.config import settings

ONE_DAY = timedelta(days=1)


class AvailabilityError(ValueError):
    """Base class for malformed input rejected at the engine boundary."""


class InvalidIntervalError(AvailabilityError):
    """Raised when an interval does not end strictly after it starts."""


class InvalidDateAxisError(AvailabilityError):
    """Raised when a date axis is not contiguous and strictly increasing."""


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class StatusPriority(IntEnum):
    """Ordering used when several bookings touch the same calendar day."""

    CANCELLED = 0
    AVAILABLE = 1
    PENDING = 2
    CONFIRMED = 3


_STATUS_PRIORITY: dict[str, StatusPriority] = {
    BookingStatus.CONFIRMED.value: StatusPriority.CONFIRMED,
    BookingStatus.PENDING.value: StatusPriority.PENDING,
    BookingStatus.CANCELLED.value: StatusPriority.CANCELLED,
}


def status_priority(status: BookingStatus | str) -> StatusPriority:
    """Return the day-marker priority of a status. Unknown statuses rank as AVAILABLE."""
    key = status.value if isinstance(status, BookingStatus) else str(status).lower()
    return _STATUS_PRIORITY.get(key, StatusPriority.AVAILABLE)


class Interval(Protocol):
    check_in: date
    check_out: date


class DateSpan(NamedTuple):
    """A bare half-open date range ``[check_in, check_out)``."""

    check_in: date
    check_out: date


def truncate_to_date(value: object) -> object:
    """Drop any time-of-day component so every source compares at day granularity."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        # ISO 8601 allows either "T" or a space between date and time
        return value.strip().split(" ", 1)[0].split("T", 1)[0]
    return value


class BookingInterval(BaseModel):
    """One reservation from a booking snapshot.

    Construction rejects ``check_out <= check_in``; everything downstream
    assumes at least one night.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    property_id: str
    check_in: date
    check_out: date
    status: BookingStatus = BookingStatus.CONFIRMED
    guest_name: str = ""
    total_price: Decimal | None = Field(None, ge=0)
    currency: str = Field(default_factory=lambda: settings.default_currency)

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def _day_granularity(cls, value: object) -> object:
        return truncate_to_date(value)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def check_dates(self) -> "BookingInterval":
        """Validate that check_out is strictly after check_in."""
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self

    @property
    def span(self) -> DateSpan:
        return DateSpan(self.check_in, self.check_out)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def overlaps(a: Interval, b: Interval) -> bool:
    """True when two half-open intervals share at least one night.

    Touching intervals (one check-out equal to the other's check-in) do not
    overlap.
    """
    return a.check_in < b.check_out and b.check_in < a.check_out


def contains_day(interval: Interval, day: date) -> bool:
    return interval.check_in <= day < interval.check_out


def effective_status(booking: BookingInterval) -> BookingStatus:
    return booking.status


def is_active(booking: BookingInterval) -> bool:
    """Cancelled bookings stay in the snapshot but never occupy a day."""
    return booking.status != BookingStatus.CANCELLED


def active_bookings(bookings: Iterable[BookingInterval]) -> list[BookingInterval]:
    """Drop cancelled bookings, preserving the original order."""
    return [b for b in bookings if is_active(b)]


def clamp_to_axis(interval: Interval, axis_start: date, axis_end: date) -> DateSpan | None:
    """Return the part of ``interval`` inside ``[axis_start, axis_end)``, or None if disjoint."""
    start = max(interval.check_in, axis_start)
    end = min(interval.check_out, axis_end)
    if start >= end:
        return None
    return DateSpan(start, end)


def nights(interval: Interval) -> int:
    """Number of nights in the interval; never negative."""
    return max((interval.check_out - interval.check_in).days, 0)


# ---------------------------------------------------------------------------
# Opt-in validation helpers
# ---------------------------------------------------------------------------


def validate_interval(check_in: date, check_out: date) -> DateSpan:
    """Return the span, or raise InvalidIntervalError when it has no nights."""
    if check_out <= check_in:
        raise InvalidIntervalError(
            f"check_out ({check_out.isoformat()}) must be after check_in ({check_in.isoformat()})"
        )
    return DateSpan(check_in, check_out)


def validate_date_axis(axis: Sequence[date]) -> None:
    """Raise InvalidDateAxisError unless each day follows the previous by exactly one day.

    An empty axis is valid.
    """
    for previous, current in zip(axis, axis[1:]):
        if current - previous != ONE_DAY:
            raise InvalidDateAxisError(
                f"date axis must be contiguous and increasing: {previous.isoformat()} "
                f"is followed by {current.isoformat()}"
            )


def axis_bounds(axis: Sequence[date]) -> DateSpan | None:
    """Half-open bounds ``[first, last + 1 day)`` of a non-empty axis."""
    if not axis:
        return None
    return DateSpan(axis[0], axis[-1] + ONE_DAY)
