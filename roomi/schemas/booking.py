"""Pydantic v2 request/response schemas for booking workflow endpoints."""

from datetime import date

from pydantic import BaseModel, Field, model_validator

from roomi.availability import BookingInterval
from roomi.services.import_service import ImportRow
from roomi.services.reservation_service import ReservationDecision

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ReservationCheckRequest(BaseModel):
    """A stay entered by hand, checked before it is saved.

    Set ``overlap_confirmed`` once the user has seen the conflicts and chosen
    to continue. Set ``exclude_booking_id`` when editing an existing booking.
    """

    property_id: str
    check_in: date
    check_out: date
    overlap_confirmed: bool = False
    exclude_booking_id: str | None = None
    bookings: list[BookingInterval] = []

    @model_validator(mode="after")
    def check_dates(self) -> "ReservationCheckRequest":
        """Validate that check_out is strictly after check_in."""
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


class ImportValidateRequest(BaseModel):
    """Parsed spreadsheet rows plus the current snapshot to validate them against."""

    rows: list[ImportRow] = Field(..., min_length=1)
    bookings: list[BookingInterval] = []
    known_property_ids: list[str] | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ReservationCheckResponse(BaseModel):
    decision: ReservationDecision
    can_proceed: bool
    conflicts: list[BookingInterval]
    message: str | None = None
