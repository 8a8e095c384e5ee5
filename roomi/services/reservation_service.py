"""Interactive reservation check — warn about overlaps, let the user decide.

Creating or editing a single booking by hand is soft-blocking: conflicts are
shown to the user, who may confirm and proceed anyway.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from roomi.availability.conflicts import describe_conflicts, detect_conflicts
from roomi.availability.interval import BookingInterval, validate_interval

logger = logging.getLogger(__name__)


class ReservationDecision(str, Enum):
    ACCEPTED = "accepted"
    NEEDS_CONFIRMATION = "needs_confirmation"
    ACCEPTED_WITH_OVERLAP = "accepted_with_overlap"


@dataclass(frozen=True)
class ReservationCheck:
    """Outcome of checking one candidate stay against the snapshot."""

    decision: ReservationDecision
    conflicts: list[BookingInterval] = field(default_factory=list)

    @property
    def can_proceed(self) -> bool:
        return self.decision != ReservationDecision.NEEDS_CONFIRMATION


def check_reservation(
    property_id: str,
    check_in: date,
    check_out: date,
    bookings: Iterable[BookingInterval],
    *,
    overlap_confirmed: bool = False,
    exclude_booking_id: str | None = None,
) -> ReservationCheck:
    """Check a manually entered stay against existing bookings.

    Returns ``needs_confirmation`` with the overlapping bookings when there
    are conflicts and the user has not yet confirmed; once confirmed the same
    conflicts come back with ``accepted_with_overlap``.

    Raises:
        InvalidIntervalError: if ``check_out`` is not after ``check_in``.
    """
    validate_interval(check_in, check_out)
    conflicts = detect_conflicts(
        property_id,
        check_in,
        check_out,
        bookings,
        exclude_booking_id=exclude_booking_id,
    )

    if not conflicts:
        return ReservationCheck(decision=ReservationDecision.ACCEPTED)

    if not overlap_confirmed:
        return ReservationCheck(decision=ReservationDecision.NEEDS_CONFIRMATION, conflicts=conflicts)

    logger.info(
        "Overlap on property %s confirmed by user for %s..%s: %s",
        property_id,
        check_in.isoformat(),
        check_out.isoformat(),
        describe_conflicts(conflicts),
    )
    return ReservationCheck(decision=ReservationDecision.ACCEPTED_WITH_OVERLAP, conflicts=conflicts)
