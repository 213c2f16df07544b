"""
Listing data sources and tagged fetch results.
Challenge: Tell retryable transport failures apart from application failures.
Design: Sources raise; fetch_listings() turns every outcome into a tagged result
(Fetched | TransportFailure | ApplicationFailure) so callers never see an exception.
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, Union

import httpx
from sqlalchemy.exc import DBAPIError, DisconnectionError, InterfaceError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from nexar.core.policies import Identity
from nexar.db.models.listing import Listing
from nexar.db.repositories.listing_repository import ListingRepository

logger = logging.getLogger(__name__)

# Message fragments that mark a failure as connectivity-related when no typed signal exists
TRANSPORT_HINTS = ("fetch", "network")

TRANSPORT_ERRORS = (
    httpx.TransportError,
    ConnectionError,
    OSError,
    asyncio.TimeoutError,
    DisconnectionError,
    PoolTimeoutError,
    InterfaceError,
)


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    APPLICATION = "application"


def classify_failure(error: BaseException) -> FailureKind:
    """Typed transport errors first; otherwise fall back to the message text."""
    if isinstance(error, httpx.HTTPStatusError):
        # The server answered; its message embeds the request URL
        return FailureKind.APPLICATION
    if isinstance(error, TRANSPORT_ERRORS):
        return FailureKind.TRANSPORT
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return FailureKind.TRANSPORT
    if isinstance(error.__cause__, (ConnectionError, OSError)):
        return FailureKind.TRANSPORT
    message = str(error).lower()
    if any(hint in message for hint in TRANSPORT_HINTS):
        return FailureKind.TRANSPORT
    return FailureKind.APPLICATION


@dataclass(frozen=True)
class Fetched:
    records: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class TransportFailure:
    error: BaseException


@dataclass(frozen=True)
class ApplicationFailure:
    error: BaseException


FetchResult = Union[Fetched, TransportFailure, ApplicationFailure]


class ListingSource(Protocol):
    """Query surface the storefront reads from. Raises on failure."""

    async def get_all(
        self, *, featured: bool | None = None, category: str | None = None
    ) -> list[Mapping[str, Any]]: ...


async def fetch_listings(
    source: ListingSource, *, featured: bool | None = None, category: str | None = None
) -> FetchResult:
    """Run one source query and tag the outcome."""
    try:
        records = await source.get_all(featured=featured, category=category)
    except Exception as exc:
        kind = classify_failure(exc)
        logger.warning(
            "listing fetch failed: featured=%s category=%s kind=%s error=%s", featured, category, kind.value, exc
        )
        if kind is FailureKind.TRANSPORT:
            return TransportFailure(exc)
        return ApplicationFailure(exc)
    return Fetched(list(records or []))


def listing_to_record(listing: Listing) -> dict[str, Any]:
    """ORM row to the raw record shape a remote source would return."""
    return {
        "id": listing.id,
        "title": listing.title,
        "description": listing.description,
        "brand": listing.brand,
        "model": listing.model,
        "category": listing.category,
        "year": listing.year,
        "mileage": listing.mileage,
        "price": listing.price,
        "location": listing.location,
        "images": list(listing.images or []),
        "seller_id": listing.seller_id,
        "seller_name": listing.seller_name,
        "seller_type": listing.seller_type,
        "featured": listing.featured,
        "availability": listing.availability,
        "status": listing.status,
        "created_at": listing.created_at.isoformat() if listing.created_at else None,
    }


class DatabaseListingSource:
    """Reads listings straight from the database under the caller's read policy."""

    def __init__(self, session: AsyncSession, identity: Identity | None = None):
        self.repo = ListingRepository(session)
        self.identity = identity

    async def get_all(
        self, *, featured: bool | None = None, category: str | None = None
    ) -> list[Mapping[str, Any]]:
        listings = await self.repo.get_visible(self.identity, featured=featured, category=category)
        return [listing_to_record(listing) for listing in listings]


class HttpListingSource:
    """Reads listings from a remote Nexar API (GET /listings)."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 10.0,
        page_size: int = 100,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.page_size = page_size
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else None
        return httpx.AsyncClient(
            base_url=self.base_url, headers=headers, timeout=self.timeout, transport=self.transport
        )

    async def get_all(
        self, *, featured: bool | None = None, category: str | None = None
    ) -> list[Mapping[str, Any]]:
        params: dict[str, Any] = {"limit": self.page_size}
        if featured is not None:
            params["featured"] = str(featured).lower()
        if category:
            params["category"] = category
        records: list[Mapping[str, Any]] = []
        async with self._client() as client:
            skip = 0
            while True:
                r = await client.get("/listings", params={**params, "skip": skip})
                r.raise_for_status()
                page = r.json()
                records.extend(page)
                if len(page) < self.page_size:
                    break
                skip += self.page_size
        return records
