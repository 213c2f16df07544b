"""
Storefront - home page retrieval and view state.
Challenge: Featured/recent grids from one data source, clean error states, no stale overwrites.
Design: StorefrontService shapes data (limits, exclusion, formatting) and returns tagged results;
StorefrontView owns the page state machine (idle -> loading -> success | application_error | network_error)
and user interactions. Each fetch carries a request token; responses for an older token are dropped.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from prometheus_client import Counter

from nexar.config import get_settings
from nexar.db.models.enums import Category
from nexar.schemas.listing import DisplayListing
from nexar.schemas.storefront import StorefrontLinks, StorefrontPage
from nexar.services.formatting import format_listing
from nexar.services.listing_source import (
    ApplicationFailure,
    FailureKind,
    Fetched,
    FetchResult,
    ListingSource,
    TransportFailure,
    classify_failure,
    fetch_listings,
)
from nexar.services.navigation import (
    ADD_LISTING_PATH,
    LISTINGS_PATH,
    Navigator,
    RecordingNavigator,
    category_path,
    listing_path,
    search_path,
    seller_path,
)

logger = logging.getLogger(__name__)

FETCH_OUTCOMES = Counter(
    "nexar_storefront_fetch_total",
    "Storefront listing fetches by query and outcome",
    ["query", "outcome"],
)

POPULAR_CATEGORIES = (Category.SPORT, Category.TOURING, Category.CRUISER, Category.ADVENTURE)

# User-facing messages (Romanian storefront)
FEATURED_ERROR = "Nu s-au putut încărca anunțurile recomandate"
RECENT_ERROR = "Nu s-au putut încărca anunțurile recente"
CATEGORY_ERROR = "Nu s-au putut încărca anunțurile din categoria {category}"
LOAD_ERROR = "A apărut o eroare la încărcarea anunțurilor"
FILTER_ERROR = "A apărut o eroare la filtrarea după categoria {category}"


def _outcome(result: FetchResult) -> str:
    if isinstance(result, TransportFailure):
        return "transport_failure"
    if isinstance(result, ApplicationFailure):
        return "application_failure"
    return "success"


class StorefrontService:
    """Featured, recent and category queries over a ListingSource."""

    def __init__(
        self,
        source: ListingSource,
        *,
        featured_limit: int | None = None,
        recent_limit: int | None = None,
        fallback_image: str | None = None,
    ):
        settings = get_settings()
        self.source = source
        self.featured_limit = featured_limit if featured_limit is not None else settings.featured_limit
        self.recent_limit = recent_limit if recent_limit is not None else settings.recent_limit
        self.fallback_image = fallback_image or settings.fallback_image

    def format(self, raw) -> DisplayListing:
        return format_listing(raw, self.fallback_image)

    async def _query(
        self,
        name: str,
        shape: Callable[[list], list[DisplayListing]],
        *,
        featured: bool | None = None,
        category: str | None = None,
    ) -> FetchResult:
        result = await fetch_listings(self.source, featured=featured, category=category)
        if isinstance(result, Fetched):
            try:
                result = Fetched(shape(result.records))
            except (TypeError, ValueError) as exc:
                # A malformed record fails the whole query, like a source error would
                logger.warning("storefront %s: malformed listing record: %s", name, exc)
                result = ApplicationFailure(exc)
        FETCH_OUTCOMES.labels(query=name, outcome=_outcome(result)).inc()
        return result

    async def fetch_featured(self) -> FetchResult:
        """Featured listings, first featured_limit, formatted."""
        return await self._query(
            "featured",
            lambda records: [self.format(r) for r in records[: self.featured_limit]],
            featured=True,
        )

    async def fetch_recent(self, excluding: Iterable[int] = ()) -> FetchResult:
        """All listings minus the excluded ids, first recent_limit, formatted."""
        excluded = set(excluding)
        return await self._query(
            "recent",
            lambda records: [self.format(r) for r in records if r.get("id") not in excluded][: self.recent_limit],
        )

    async def fetch_by_category(self, category: str) -> FetchResult:
        """Every listing in the category, formatted. No truncation."""
        return await self._query(
            "category",
            lambda records: [self.format(r) for r in records],
            category=category,
        )


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    APPLICATION_ERROR = "application_error"
    NETWORK_ERROR = "network_error"


@dataclass
class ClickEvent:
    """Minimal DOM-like click event: handlers may cancel navigation or stop bubbling."""

    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class StorefrontView:
    """Home page state for one visitor session."""

    def __init__(self, service: StorefrontService, navigate: Navigator | None = None):
        self.service = service
        self.navigate = navigate or RecordingNavigator()
        self.state = ViewState.IDLE
        self.category: str | None = None
        self.featured: list[DisplayListing] = []
        self.recent: list[DisplayListing] = []
        self.error_message: str | None = None
        self.network_error: BaseException | None = None
        self._issued = 0
        self._entry: Callable[[], Awaitable[None]] = self.load

    # --- fetch lifecycle ---

    def _begin(self, entry: Callable[[], Awaitable[None]]) -> int:
        self._issued += 1
        self._entry = entry
        self.state = ViewState.LOADING
        self.error_message = None
        self.network_error = None
        return self._issued

    def _is_stale(self, token: int) -> bool:
        return token != self._issued

    def _fail(self, result: FetchResult, message: str) -> bool:
        """Apply a failed result to the view. Returns True if the fetch failed."""
        if isinstance(result, TransportFailure):
            self._show_error(result.error, FailureKind.TRANSPORT, message)
            return True
        if isinstance(result, ApplicationFailure):
            self._show_error(result.error, FailureKind.APPLICATION, message)
            return True
        return False

    def _show_error(self, error: BaseException, kind: FailureKind, message: str) -> None:
        self.featured = []
        self.recent = []
        if kind is FailureKind.TRANSPORT:
            self.state = ViewState.NETWORK_ERROR
            self.network_error = error
        else:
            self.state = ViewState.APPLICATION_ERROR
            self.error_message = message

    async def open(self, category: str | None = None) -> None:
        """Entry point on mount or when the categorie URL parameter changes."""
        if category:
            self.navigate(category_path(category), replace=True)
            await self.select_category(category)
        else:
            await self.load()

    async def load(self) -> None:
        """Landing view: featured grid, then recent grid without the featured ids."""
        token = self._begin(self.load)
        self.category = None
        try:
            featured = await self.service.fetch_featured()
            if self._is_stale(token) or self._fail(featured, FEATURED_ERROR):
                return
            recent = await self.service.fetch_recent(listing.id for listing in featured.records)
            if self._is_stale(token) or self._fail(recent, RECENT_ERROR):
                return
        except Exception as exc:
            if not self._is_stale(token):
                logger.exception("storefront load failed")
                self._show_error(exc, classify_failure(exc), LOAD_ERROR)
            return
        self.featured = featured.records
        self.recent = recent.records
        self.state = ViewState.SUCCESS
        logger.info("storefront loaded %d featured and %d recent listings", len(self.featured), len(self.recent))

    async def select_category(self, category: str) -> None:
        """Category tile click: one category query replaces both grids."""

        async def entry() -> None:
            await self.select_category(category)

        token = self._begin(entry)
        self.category = category
        try:
            result = await self.service.fetch_by_category(category)
            if self._is_stale(token) or self._fail(result, CATEGORY_ERROR.format(category=category)):
                return
        except Exception as exc:
            if not self._is_stale(token):
                logger.exception("storefront category filter failed: category=%s", category)
                self._show_error(exc, classify_failure(exc), FILTER_ERROR.format(category=category))
            return
        self.featured = []
        self.recent = result.records
        self.state = ViewState.SUCCESS
        logger.info("storefront loaded %d listings for category %s", len(self.recent), category)

    async def retry(self) -> None:
        """Re-run whichever entry point produced the current state."""
        await self._entry()

    # --- interactions ---

    def submit_search(self, query: str | None) -> str:
        path = search_path(query)
        self.navigate(path)
        return path

    def click_seller(self, event: ClickEvent, seller_id: int) -> None:
        """Seller link inside a card: go to the profile and keep the card from navigating too."""
        event.prevent_default()
        event.stop_propagation()
        self.navigate(seller_path(seller_id))

    def click_listing(self, event: ClickEvent, listing_id: int) -> None:
        if event.default_prevented:
            return
        self.navigate(listing_path(listing_id))

    def dispatch_card_click(self, listing: DisplayListing, target: str = "card") -> ClickEvent:
        """Deliver a click on a card element, bubbling from the seller link up to the card."""
        event = ClickEvent()
        if target == "seller" and listing.seller_id is not None:
            self.click_seller(event, listing.seller_id)
        if not event.propagation_stopped:
            self.click_listing(event, listing.id)
        return event

    # --- rendering ---

    def page(self) -> StorefrontPage:
        return StorefrontPage(
            state=self.state.value,
            category=self.category,
            featured=self.featured,
            recent=self.recent,
            error=self.error_message,
            retryable=self.state is ViewState.NETWORK_ERROR,
            links=StorefrontLinks(
                search=search_path(None),
                all_listings=LISTINGS_PATH,
                add_listing=ADD_LISTING_PATH,
                categories={c.value: category_path(c.value) for c in POPULAR_CATEGORIES},
            ),
        )
