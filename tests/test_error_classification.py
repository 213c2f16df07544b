"""
Failure classification tests - transport vs application errors.
"""

import asyncio

import httpx
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from nexar.services.listing_source import (
    ApplicationFailure,
    FailureKind,
    Fetched,
    TransportFailure,
    classify_failure,
    fetch_listings,
)


@pytest.mark.parametrize(
    "error",
    [
        RuntimeError("TypeError: Failed to fetch"),
        RuntimeError("NETWORK unreachable"),
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
        ConnectionResetError(),
        asyncio.TimeoutError(),
    ],
)
def test_transport_errors(error):
    assert classify_failure(error) is FailureKind.TRANSPORT


@pytest.mark.parametrize(
    "error",
    [
        RuntimeError("permission denied for table listings"),
        ValueError("invalid input syntax"),
        IntegrityError("INSERT INTO listings", {}, Exception("check constraint")),
    ],
)
def test_application_errors(error):
    assert classify_failure(error) is FailureKind.APPLICATION


def test_invalidated_connection_is_transport():
    error = OperationalError("SELECT 1", {}, Exception("server closed the connection"), connection_invalidated=True)
    assert classify_failure(error) is FailureKind.TRANSPORT


def test_wrapped_os_error_is_transport():
    try:
        try:
            raise OSError("connection refused")
        except OSError as exc:
            raise RuntimeError("query failed") from exc
    except RuntimeError as wrapped:
        assert classify_failure(wrapped) is FailureKind.TRANSPORT


class _Source:
    def __init__(self, records=None, error=None):
        self.records = records
        self.error = error

    async def get_all(self, *, featured=None, category=None):
        if self.error:
            raise self.error
        return self.records


@pytest.mark.asyncio
async def test_fetch_listings_tags_outcomes():
    assert await fetch_listings(_Source(records=[{"id": 1}])) == Fetched([{"id": 1}])
    assert await fetch_listings(_Source(records=None)) == Fetched([])
    transport = await fetch_listings(_Source(error=RuntimeError("network down")))
    assert isinstance(transport, TransportFailure)
    application = await fetch_listings(_Source(error=RuntimeError("boom")))
    assert isinstance(application, ApplicationFailure)
    assert str(application.error) == "boom"
