"""Analytics API router — occupancy rates and revenue over a period."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from roomi.availability import InvalidIntervalError, PeriodStats, aggregate_period_stats
from roomi.schemas.analytics import OccupancyRequest

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


@router.post("/occupancy", response_model=PeriodStats)
async def get_occupancy(body: OccupancyRequest) -> PeriodStats:
    """Calculate occupancy, ADR and RevPAR for the requested properties.

    For each property the endpoint computes how many nights within the period
    are covered by non-cancelled bookings. An overall rate across all listed
    properties is returned alongside per-property breakdowns.
    """
    try:
        return aggregate_period_stats(
            body.period_start,
            body.period_end,
            body.bookings,
            body.property_ids,
        )
    except InvalidIntervalError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="period_end must be after period_start",
        ) from e
