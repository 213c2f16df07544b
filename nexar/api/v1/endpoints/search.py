"""
Search endpoint - Elasticsearch full-text search over active listings.
Challenge: Expose search behind the storefront's /anunturi?q= page; empty results when ES is down.
"""

from fastapi import APIRouter, Query

from nexar.config import get_settings
from nexar.db.models.enums import Category
from nexar.search.elasticsearch_client import search_listings

router = APIRouter()
settings = get_settings()


@router.get("/listings")
async def search_listings_endpoint(
    q: str = Query(..., min_length=1, description="Brand, model, title or location"),
    category: Category | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
):
    hits = await search_listings(
        query=q.strip(), category=category.value if category else None, skip=skip, limit=limit
    )
    return {"query": q, "category": category, "results": hits, "count": len(hits)}
