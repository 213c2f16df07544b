"""
Storefront endpoint - home page state (featured + recent grids, or one category).
Challenge: Data-source failures become page states, never 5xx responses.
"""

from fastapi import APIRouter, Query

from nexar.core.dependencies import OptionalIdentity
from nexar.db.models.enums import Category
from nexar.db.session import DbSession
from nexar.schemas.storefront import StorefrontPage
from nexar.services.listing_source import DatabaseListingSource
from nexar.services.storefront import StorefrontService, StorefrontView

router = APIRouter()


@router.get("", response_model=StorefrontPage)
async def storefront(
    session: DbSession,
    identity: OptionalIdentity,
    categorie: Category | None = Query(None, description="Category filter (URL parameter of the web home page)"),
):
    view = StorefrontView(StorefrontService(DatabaseListingSource(session, identity)))
    await view.open(categorie.value if categorie else None)
    return view.page()
