"""Availability API router — timeline rows, month dots, conflicts, daily stats.

All endpoints are POST because the booking snapshot travels in the body. The
router filters and validates; the computations live in ``roomi.availability``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from roomi.availability import (
    DailyStats,
    DateSpan,
    InvalidDateAxisError,
    aggregate_daily_stats,
    build_segments,
    detect_conflicts,
    find_stacked_bookings,
    mark_days,
    validate_date_axis,
)
from roomi.config import settings
from roomi.schemas.availability import (
    ConflictCheckRequest,
    ConflictCheckResponse,
    DayMarksRequest,
    DayMarksResponse,
    DailyStatsRequest,
    SegmentsRequest,
    SegmentsResponse,
    StackedPair,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/availability", tags=["availability"])


@router.post(
    "/segments",
    response_model=SegmentsResponse,
    summary="Build the timeline row for one property",
)
async def get_segments(body: SegmentsRequest) -> SegmentsResponse:
    """Return empty/occupied segments covering the axis exactly once.

    Bookings of other properties in the snapshot are ignored. Any
    double-bookings found on the property are returned in ``stacked`` so the
    client can raise an alert instead of silently hiding them.
    """
    if len(body.axis) > settings.max_axis_days:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"axis may not exceed {settings.max_axis_days} days",
        )
    try:
        validate_date_axis(body.axis)
    except InvalidDateAxisError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    bookings = [b for b in body.bookings if b.property_id == body.property_id]
    stacked = find_stacked_bookings(bookings)
    if stacked:
        logger.warning("Property %s has %d stacked booking pairs", body.property_id, len(stacked))

    return SegmentsResponse(
        property_id=body.property_id,
        total_days=len(body.axis),
        segments=build_segments(body.axis, bookings),
        stacked=[StackedPair(first=a, second=b) for a, b in stacked],
    )


@router.post(
    "/day-marks",
    response_model=DayMarksResponse,
    summary="Resolve one status per calendar day",
)
async def get_day_marks(body: DayMarksRequest) -> DayMarksResponse:
    """Map each touched day to ``booked``, ``tentative`` or ``available``."""
    window = None
    if body.window_start is not None and body.window_end is not None:
        window = DateSpan(body.window_start, body.window_end)
    return DayMarksResponse(marks=mark_days(body.bookings, window))


@router.post(
    "/conflicts",
    response_model=ConflictCheckResponse,
    summary="Find bookings overlapping a candidate stay",
)
async def get_conflicts(body: ConflictCheckRequest) -> ConflictCheckResponse:
    """Advisory check: returns the overlapping bookings, never rejects the candidate."""
    conflicts = detect_conflicts(
        body.property_id,
        body.check_in,
        body.check_out,
        body.bookings,
        exclude_booking_id=body.exclude_booking_id,
    )
    return ConflictCheckResponse(has_conflicts=bool(conflicts), conflicts=conflicts)


@router.post(
    "/daily-stats",
    response_model=DailyStats,
    summary="Arrivals, departures, stays and revenue for one day",
)
async def get_daily_stats(body: DailyStatsRequest) -> DailyStats:
    """Aggregate the snapshot for ``reference_date``, optionally limited to some properties."""
    property_ids = set(body.property_ids) if body.property_ids is not None else None
    return aggregate_daily_stats(body.reference_date, body.bookings, property_ids=property_ids)
