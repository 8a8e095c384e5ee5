"""Shared test configuration and fixtures.

The engine is pure, so unit tests build snapshots in memory with
``make_booking``. API tests drive the FastAPI app through an in-process
httpx client; there is no database to set up.
"""

import itertools
from collections.abc import AsyncGenerator, Callable
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from roomi.availability import BookingInterval
from roomi.main import app

_ids = itertools.count(1)


def booking(
    check_in: date,
    check_out: date,
    *,
    property_id: str = "villa-1",
    status: str = "confirmed",
    total_price: Decimal | int | None = None,
    currency: str = "RUB",
    guest_name: str = "",
    id: str | None = None,
) -> BookingInterval:
    """Build a BookingInterval with sensible defaults and a unique id."""
    return BookingInterval(
        id=id or f"b-{next(_ids)}",
        property_id=property_id,
        check_in=check_in,
        check_out=check_out,
        status=status,
        guest_name=guest_name,
        total_price=total_price,
        currency=currency,
    )


@pytest.fixture
def make_booking() -> Callable[..., BookingInterval]:
    return booking


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the ASGI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
