"""Bulk import validation — reject the whole batch if any row is bad.

Rows come from an already-parsed spreadsheet. Unlike the interactive flow, an
import never lets an overlap through: a single conflicting row blocks every
row, and all problems are reported together so the file can be fixed in one
pass.
"""

import logging
import uuid
from collections.abc import Collection, Iterable, Sequence
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from roomi.availability.conflicts import describe_conflicts, detect_conflicts
from roomi.availability.interval import BookingInterval, BookingStatus, truncate_to_date
from roomi.config import settings

logger = logging.getLogger(__name__)


class ImportRow(BaseModel):
    """One parsed spreadsheet row. Date order is checked per row, not on construction."""

    row: int = Field(..., ge=1)
    property_id: str
    check_in: date
    check_out: date
    guest_name: str = ""
    total_price: Decimal | None = Field(None, ge=0)
    currency: str = Field(default_factory=lambda: settings.default_currency)
    status: BookingStatus = BookingStatus.CONFIRMED

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

    def to_booking(self) -> BookingInterval:
        return BookingInterval(
            id=str(uuid.uuid4()),
            property_id=self.property_id,
            check_in=self.check_in,
            check_out=self.check_out,
            status=self.status,
            guest_name=self.guest_name,
            total_price=self.total_price,
            currency=self.currency,
        )


class ImportRowError(BaseModel):
    row: int
    message: str
    property_id: str | None = None


class ImportResult(BaseModel):
    """``imported`` is zero whenever ``errors`` is non-empty."""

    imported: int
    accepted: list[BookingInterval] = []
    errors: list[ImportRowError] = []


def validate_import(
    rows: Sequence[ImportRow],
    existing: Iterable[BookingInterval],
    *,
    known_property_ids: Collection[str] | None = None,
) -> ImportResult:
    """Validate a batch of rows against the snapshot and against each other.

    Each row is checked for an unknown property (when ``known_property_ids``
    is given), a stay that does not end after it starts, and overlaps with
    existing bookings or with rows accepted earlier in the batch.
    """
    snapshot = list(existing)
    accepted: list[BookingInterval] = []
    errors: list[ImportRowError] = []

    for row in rows:
        if known_property_ids is not None and row.property_id not in known_property_ids:
            errors.append(
                ImportRowError(
                    row=row.row,
                    message=f'Unknown property "{row.property_id}"',
                    property_id=row.property_id,
                )
            )
            continue

        if row.check_out <= row.check_in:
            errors.append(
                ImportRowError(
                    row=row.row,
                    message="check_out must be after check_in",
                    property_id=row.property_id,
                )
            )
            continue

        if row.status == BookingStatus.CANCELLED:
            # cancelled rows hold no nights
            accepted.append(row.to_booking())
            continue

        conflicts = detect_conflicts(row.property_id, row.check_in, row.check_out, [*snapshot, *accepted])
        if conflicts:
            errors.append(
                ImportRowError(
                    row=row.row,
                    message=f"Overlaps existing bookings: {describe_conflicts(conflicts)}",
                    property_id=row.property_id,
                )
            )
            continue

        accepted.append(row.to_booking())

    if errors:
        logger.info("Import of %d rows rejected with %d errors", len(rows), len(errors))
        return ImportResult(imported=0, errors=errors)

    logger.info("Import of %d rows validated", len(accepted))
    return ImportResult(imported=len(accepted), accepted=accepted)
