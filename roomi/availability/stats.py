"""Occupancy and revenue aggregates — one reference day, or a whole period.

Revenue is always prorated per night: a booking contributes
``total_price / nights`` for every night that falls in the window being
measured. Amounts are summed in whatever currency each booking carries; the
results flag a mixed-currency snapshot instead of converting it.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Collection, Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict

from roomi.availability.interval import (
    ONE_DAY,
    BookingInterval,
    active_bookings,
    clamp_to_axis,
    contains_day,
    nights,
    validate_interval,
)

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")
_WHOLE = Decimal("1")


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def nightly_rate(booking: BookingInterval) -> Decimal:
    """Total price spread evenly over the booking's nights; zero for a zero-night stay."""
    stay = nights(booking)
    if stay == 0 or not booking.total_price:
        return Decimal("0")
    return booking.total_price / Decimal(stay)


def _currencies(bookings: Iterable[BookingInterval]) -> list[str]:
    return sorted({b.currency for b in bookings if b.total_price})


class DailyStats(BaseModel):
    """Front-desk numbers for a single reference date."""

    model_config = ConfigDict(frozen=True)

    reference_date: date
    arrivals: int = 0
    departures: int = 0
    occupied: int = 0
    revenue_for_day: Decimal = Decimal("0.00")
    average_daily_rate: int = 0
    currencies: list[str] = []
    mixed_currency: bool = False


class PropertyOccupancy(BaseModel):
    """Occupancy statistics for a single property over a given period."""

    model_config = ConfigDict(frozen=True)

    property_id: str
    booked_nights: int
    occupancy_rate: Decimal  # percentage 0.00–100.00
    revenue: Decimal


class PeriodStats(BaseModel):
    """Aggregated occupancy and revenue across properties for ``[period_start, period_end)``."""

    model_config = ConfigDict(frozen=True)

    period_start: date
    period_end: date
    total_days: int
    available_nights: int
    booked_nights: int
    occupancy_rate: Decimal
    revenue: Decimal
    average_daily_rate: Decimal
    revpar: Decimal
    booking_count: int
    average_length_of_stay: Decimal
    properties: list[PropertyOccupancy]
    currencies: list[str] = []
    mixed_currency: bool = False


def aggregate_daily_stats(
    reference_date: date,
    bookings: Iterable[BookingInterval],
    *,
    property_ids: Collection[str] | None = None,
) -> DailyStats:
    """Count arrivals, departures and in-house stays on ``reference_date``.

    ``reference_date`` is always supplied by the caller; the aggregator never
    looks at the clock. ``property_ids`` restricts the snapshot to a subset of
    properties.
    """
    arrivals = departures = occupied = 0
    revenue = Decimal("0")
    in_house: list[BookingInterval] = []

    for booking in active_bookings(bookings):
        if property_ids is not None and booking.property_id not in property_ids:
            continue
        if booking.check_in == reference_date:
            arrivals += 1
        if booking.check_out == reference_date:
            departures += 1
        if contains_day(booking, reference_date):
            occupied += 1
            revenue += nightly_rate(booking)
            in_house.append(booking)

    adr = 0
    if occupied > 0:
        adr = int((revenue / Decimal(occupied)).quantize(_WHOLE, rounding=ROUND_HALF_UP))

    currencies = _currencies(in_house)
    if len(currencies) > 1:
        logger.warning(
            "Daily revenue for %s sums unconverted amounts in %s",
            reference_date.isoformat(),
            ", ".join(currencies),
        )

    return DailyStats(
        reference_date=reference_date,
        arrivals=arrivals,
        departures=departures,
        occupied=occupied,
        revenue_for_day=_money(revenue),
        average_daily_rate=adr,
        currencies=currencies,
        mixed_currency=len(currencies) > 1,
    )


def aggregate_period_stats(
    period_start: date,
    period_end: date,
    bookings: Iterable[BookingInterval],
    property_ids: Collection[str],
) -> PeriodStats:
    """Occupancy, revenue, ADR and RevPAR for ``property_ids`` over ``[period_start, period_end)``.

    Booked nights are counted per property as a set of days, so stacked
    bookings are not double-counted. Revenue is each booking's nightly rate
    times its nights inside the period.

    Raises:
        InvalidIntervalError: if ``period_end`` is not after ``period_start``.
    """
    validate_interval(period_start, period_end)
    total_days = (period_end - period_start).days
    wanted = set(property_ids)

    booked_days: dict[str, set[date]] = defaultdict(set)
    revenue_by_property: dict[str, Decimal] = defaultdict(Decimal)
    counted: list[BookingInterval] = []
    stay_nights = 0

    for booking in active_bookings(bookings):
        if booking.property_id not in wanted:
            continue
        clamped = clamp_to_axis(booking, period_start, period_end)
        if clamped is None:
            continue

        counted.append(booking)
        stay_nights += nights(booking)
        revenue_by_property[booking.property_id] += nightly_rate(booking) * nights(clamped)

        day = clamped.check_in
        while day < clamped.check_out:
            booked_days[booking.property_id].add(day)
            day += ONE_DAY

    per_property: list[PropertyOccupancy] = []
    for property_id in sorted(wanted):
        booked = len(booked_days.get(property_id, ()))
        per_property.append(
            PropertyOccupancy(
                property_id=property_id,
                booked_nights=booked,
                occupancy_rate=_money(Decimal(booked * 100) / Decimal(total_days)),
                revenue=_money(revenue_by_property.get(property_id, Decimal("0"))),
            )
        )

    available = total_days * len(wanted)
    booked_total = sum(p.booked_nights for p in per_property)
    revenue = sum(revenue_by_property.values(), Decimal("0"))

    def _ratio(numerator: Decimal, denominator: int) -> Decimal:
        if denominator <= 0:
            return Decimal("0.00")
        return _money(numerator / Decimal(denominator))

    currencies = _currencies(counted)
    if len(currencies) > 1:
        logger.warning(
            "Period revenue %s..%s sums unconverted amounts in %s",
            period_start.isoformat(),
            period_end.isoformat(),
            ", ".join(currencies),
        )

    return PeriodStats(
        period_start=period_start,
        period_end=period_end,
        total_days=total_days,
        available_nights=available,
        booked_nights=booked_total,
        occupancy_rate=_ratio(Decimal(booked_total * 100), available),
        revenue=_money(revenue),
        average_daily_rate=_ratio(revenue, booked_total),
        revpar=_ratio(revenue, available),
        booking_count=len(counted),
        average_length_of_stay=_ratio(Decimal(stay_nights), len(counted)),
        properties=per_property,
        currencies=currencies,
        mixed_currency=len(currencies) > 1,
    )
