"""Segment builder — turns one property's bookings into a timeline row.

The row is a run of ``empty`` and ``occupied`` segments whose lengths add up
to the number of days on the axis, so a renderer can lay them out left to
right without any date math of its own.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from roomi.availability.interval import (
    BookingInterval,
    active_bookings,
    axis_bounds,
    clamp_to_axis,
    overlaps,
)

logger = logging.getLogger(__name__)


class EmptySegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"
    start: date
    length: int


class OccupiedSegment(BaseModel):
    """Days on the axis covered by one booking.

    ``length`` counts on-screen days only: a stay that started before the axis
    or ends after it is clipped to the visible range.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["occupied"] = "occupied"
    start: date
    length: int
    booking: BookingInterval


Segment = Annotated[EmptySegment | OccupiedSegment, Field(discriminator="kind")]


def build_segments(
    axis: Sequence[date],
    bookings: Iterable[BookingInterval],
) -> list[EmptySegment | OccupiedSegment]:
    """Build the ordered segments of a single property's row.

    ``axis`` must be contiguous and increasing (see ``validate_date_axis``).
    Bookings are expected to belong to one property; cancelled ones are
    skipped. When two bookings collide on the axis the one reached first keeps
    the shared days and the later one is trimmed, so the segments always cover
    every axis day exactly once.
    """
    bounds = axis_bounds(axis)
    if bounds is None:
        return []

    axis_start = bounds.check_in
    total = len(axis)
    # sorted() is stable, so equal check-ins keep their snapshot order
    ordered = sorted(active_bookings(bookings), key=lambda b: b.check_in)

    segments: list[EmptySegment | OccupiedSegment] = []
    cursor = 0

    for booking in ordered:
        clamped = clamp_to_axis(booking, bounds.check_in, bounds.check_out)
        if clamped is None:
            continue

        start_idx = (clamped.check_in - axis_start).days
        end_idx = (clamped.check_out - axis_start).days

        if start_idx < cursor:
            logger.warning(
                "Booking %s on property %s overlaps an earlier booking on the timeline; "
                "rendering only its non-overlapping days",
                booking.id,
                booking.property_id,
            )
            start_idx = cursor
            if start_idx >= end_idx:
                continue

        if start_idx > cursor:
            segments.append(EmptySegment(start=axis[cursor], length=start_idx - cursor))

        segments.append(
            OccupiedSegment(start=axis[start_idx], length=end_idx - start_idx, booking=booking)
        )
        cursor = end_idx

    if cursor < total:
        segments.append(EmptySegment(start=axis[cursor], length=total - cursor))

    return segments


def find_stacked_bookings(
    bookings: Iterable[BookingInterval],
) -> list[tuple[BookingInterval, BookingInterval]]:
    """Return every pair of active bookings on the same property that overlap.

    These are double-bookings that reached the snapshot without passing the
    conflict check (for example, written straight to the backend).
    """
    ordered = sorted(active_bookings(bookings), key=lambda b: (b.property_id, b.check_in))
    pairs: list[tuple[BookingInterval, BookingInterval]] = []

    for i, first in enumerate(ordered):
        for second in ordered[i + 1 :]:
            if second.property_id != first.property_id or second.check_in >= first.check_out:
                break
            if overlaps(first, second):
                pairs.append((first, second))

    return pairs
