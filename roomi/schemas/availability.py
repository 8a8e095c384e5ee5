"""Pydantic v2 request/response schemas for availability endpoints.

Every request carries its own booking snapshot; the service keeps nothing
between calls.
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator

from roomi.availability import BookingInterval, DayStatus, Segment
from roomi.availability.interval import truncate_to_date

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class SegmentsRequest(BaseModel):
    """Timeline row for one property over a caller-supplied date axis."""

    property_id: str
    axis: list[date]
    bookings: list[BookingInterval] = []

    @field_validator("axis", mode="before")
    @classmethod
    def _axis_day_granularity(cls, value: object) -> object:
        if isinstance(value, list):
            return [truncate_to_date(v) for v in value]
        return value


class DayMarksRequest(BaseModel):
    """Month-view dots across a mixed set of properties."""

    bookings: list[BookingInterval] = []
    window_start: date | None = None
    window_end: date | None = None

    @model_validator(mode="after")
    def check_window(self) -> "DayMarksRequest":
        """Both window bounds must be given together, end after start."""
        if (self.window_start is None) != (self.window_end is None):
            raise ValueError("window_start and window_end must be provided together")
        if self.window_start is not None and self.window_end <= self.window_start:
            raise ValueError("window_end must be after window_start")
        return self


class ConflictCheckRequest(BaseModel):
    """Candidate stay checked against the snapshot."""

    property_id: str
    check_in: date
    check_out: date
    exclude_booking_id: str | None = None
    bookings: list[BookingInterval] = []

    @model_validator(mode="after")
    def check_dates(self) -> "ConflictCheckRequest":
        """Validate that check_out is strictly after check_in."""
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


class DailyStatsRequest(BaseModel):
    """Front-desk numbers for ``reference_date``. The client decides what "today" is."""

    reference_date: date
    property_ids: list[str] | None = None
    bookings: list[BookingInterval] = []


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class StackedPair(BaseModel):
    """Two active bookings on the same property that overlap."""

    first: BookingInterval
    second: BookingInterval


class SegmentsResponse(BaseModel):
    property_id: str
    total_days: int
    segments: list[Segment]
    stacked: list[StackedPair] = Field(
        default_factory=list,
        description="Double-bookings found in the snapshot; non-empty means the row hides data.",
    )


class DayMarksResponse(BaseModel):
    marks: dict[date, DayStatus]


class ConflictCheckResponse(BaseModel):
    has_conflicts: bool
    conflicts: list[BookingInterval]
