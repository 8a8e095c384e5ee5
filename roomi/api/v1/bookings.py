"""Booking workflow API router — overlap checks before a write.

The two endpoints share one conflict detector but apply different policies:

- ``/check`` (manual entry) warns and lets the user confirm.
- ``/import/validate`` (spreadsheet import) rejects the batch on any conflict.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from roomi.availability import describe_conflicts
from roomi.config import settings
from roomi.schemas.booking import (
    ImportValidateRequest,
    ReservationCheckRequest,
    ReservationCheckResponse,
)
from roomi.services.import_service import ImportResult, validate_import
from roomi.services.reservation_service import ReservationDecision, check_reservation

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.post(
    "/check",
    response_model=ReservationCheckResponse,
    summary="Check a manually entered booking for overlaps",
)
async def check_booking(body: ReservationCheckRequest) -> ReservationCheckResponse:
    """Soft-blocking check for the create/edit reservation form.

    Returns ``needs_confirmation`` with the overlapping bookings until the
    client resubmits with ``overlap_confirmed=true``.
    """
    result = check_reservation(
        body.property_id,
        body.check_in,
        body.check_out,
        body.bookings,
        overlap_confirmed=body.overlap_confirmed,
        exclude_booking_id=body.exclude_booking_id,
    )

    message = None
    if result.decision == ReservationDecision.NEEDS_CONFIRMATION:
        message = f"Dates overlap existing bookings: {describe_conflicts(result.conflicts)}"

    return ReservationCheckResponse(
        decision=result.decision,
        can_proceed=result.can_proceed,
        conflicts=result.conflicts,
        message=message,
    )


@router.post(
    "/import/validate",
    response_model=ImportResult,
    summary="Validate a bulk import batch",
)
async def validate_import_batch(body: ImportValidateRequest) -> ImportResult:
    """Hard-blocking check for spreadsheet imports.

    Any row error (unknown property, bad dates, overlap) yields
    ``imported = 0`` and the full list of errors.
    """
    if len(body.rows) > settings.import_max_rows:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Import is limited to {settings.import_max_rows} rows",
        )

    known = set(body.known_property_ids) if body.known_property_ids is not None else None
    return validate_import(body.rows, body.bookings, known_property_ids=known)
