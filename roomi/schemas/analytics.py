"""Pydantic v2 schemas for analytics endpoints."""

from datetime import date

from pydantic import BaseModel, Field

from roomi.availability import BookingInterval


class OccupancyRequest(BaseModel):
    """Occupancy and revenue over ``[period_start, period_end)`` for the listed properties.

    Properties without any booking still count towards available nights, so
    the client sends the full list rather than relying on the snapshot.
    """

    period_start: date
    period_end: date
    property_ids: list[str] = Field(..., min_length=1)
    bookings: list[BookingInterval] = []
