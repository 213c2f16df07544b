"""
Navigation destinations produced by the storefront.
Paths match the public web routes (Romanian slugs).
"""

from typing import Protocol
from urllib.parse import urlencode

LISTINGS_PATH = "/anunturi"
ADD_LISTING_PATH = "/adauga-anunt"
HOME_PATH = "/"


def search_path(query: str | None) -> str:
    """Search results; a blank query lands on the unfiltered listings page."""
    query = (query or "").strip()
    if not query:
        return LISTINGS_PATH
    return f"{LISTINGS_PATH}?{urlencode({'q': query})}"


def category_path(category: str) -> str:
    return f"{HOME_PATH}?{urlencode({'categorie': category})}"


def listing_path(listing_id: int | str) -> str:
    return f"/anunt/{listing_id}"


def seller_path(seller_id: int | str) -> str:
    return f"/profil/{seller_id}"


class Navigator(Protocol):
    def __call__(self, path: str, *, replace: bool = False) -> None: ...


class RecordingNavigator:
    """Navigator that keeps the visited paths. The API returns them instead of redirecting."""

    def __init__(self):
        self.history: list[str] = []

    def __call__(self, path: str, *, replace: bool = False) -> None:
        if replace and self.history:
            self.history[-1] = path
        else:
            self.history.append(path)

    @property
    def current(self) -> str | None:
        return self.history[-1] if self.history else None
