"""
Elasticsearch client - listing search by brand, model, title or location.
Challenge: Index management, async operations, graceful degradation when ES is down.
Sync helpers used by Celery workers (no event loop in fork).
"""

import logging
from typing import Any
from urllib.parse import urlparse

from elasticsearch import AsyncElasticsearch, Elasticsearch

from nexar.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

LISTINGS_INDEX = "listings"

_es_client: AsyncElasticsearch | None = None


def _es_client_options() -> dict:
    """Build Elasticsearch client options from settings (supports HTTPS + basic auth in URL)."""
    url = settings.elasticsearch_url
    basic_auth = None
    parsed = urlparse(url)
    if parsed.username and parsed.password:
        basic_auth = (parsed.username, parsed.password)
        # Remove auth from URL for the client (it uses basic_auth separately)
        netloc = parsed.hostname or ""
        if parsed.port:
            netloc += f":{parsed.port}"
        url = f"{parsed.scheme}://{netloc}"
    opts = {
        "hosts": [url],
        "verify_certs": settings.elasticsearch_verify_certs,
        "request_timeout": 30,  # PUT/index can be slow when ES busy; default 10s was too low
    }
    if basic_auth:
        opts["basic_auth"] = basic_auth
    return opts


async def get_elasticsearch() -> AsyncElasticsearch:
    """Get Elasticsearch client. Dependency injection for tests."""
    global _es_client
    if _es_client is None:
        _es_client = AsyncElasticsearch(**_es_client_options())
    return _es_client


def _listings_index_mappings() -> dict:
    """Mapping for listings index (shared by async and sync create)."""
    return {
        "properties": {
            "id": {"type": "integer"},
            "title": {"type": "text", "analyzer": "standard"},
            "description": {"type": "text", "analyzer": "standard"},
            "brand": {"type": "text", "fields": {"raw": {"type": "keyword"}}},
            "model": {"type": "text", "fields": {"raw": {"type": "keyword"}}},
            "location": {"type": "text"},
            "category": {"type": "keyword"},
            "status": {"type": "keyword"},
            "featured": {"type": "boolean"},
            "price": {"type": "integer"},
            "year": {"type": "integer"},
            "seller_id": {"type": "integer"},
            "created_at": {"type": "date"},
        }
    }


def listing_document(listing) -> dict[str, Any]:
    """Convert a listing (ORM row) to its search document."""
    return {
        "id": listing.id,
        "title": listing.title,
        "description": listing.description or "",
        "brand": listing.brand,
        "model": listing.model,
        "location": listing.location,
        "category": listing.category,
        "status": listing.status,
        "featured": listing.featured,
        "price": listing.price,
        "year": listing.year,
        "seller_id": listing.seller_id,
        "created_at": listing.created_at.isoformat() if listing.created_at else None,
    }


def _clean(doc: dict[str, Any]) -> dict[str, Any]:
    # Avoid sending null for date field (ES can reject)
    payload = {k: v for k, v in doc.items() if v is not None}
    payload.setdefault("created_at", "1970-01-01T00:00:00Z")
    return payload


async def ensure_listings_index() -> None:
    """Create listings index with mapping if not exists. Single-node: 0 replicas to avoid unassigned shards."""
    es = await get_elasticsearch()
    if not await es.indices.exists(index=LISTINGS_INDEX):
        await es.indices.create(
            index=LISTINGS_INDEX,
            settings={"index": {"number_of_replicas": 0}},
            mappings=_listings_index_mappings(),
        )


async def search_listings(
    query: str, *, category: str | None = None, skip: int = 0, limit: int = 20
) -> list[dict[str, Any]]:
    """Full-text search over active listings. Returns list of hits (empty when ES is down)."""
    filters: list[dict[str, Any]] = [{"term": {"status": "active"}}]
    if category:
        filters.append({"term": {"category": category}})
    try:
        es = await get_elasticsearch()
        response = await es.search(
            index=LISTINGS_INDEX,
            query={
                "bool": {
                    "must": {
                        "multi_match": {
                            "query": query,
                            "fields": ["brand^3", "model^3", "title^2", "location", "description"],
                            "fuzziness": "AUTO",
                        }
                    },
                    "filter": filters,
                }
            },
            from_=skip,
            size=limit,
        )
        # Response may be ObjectApiResponse; support both .body and dict access
        body = getattr(response, "body", response)
        hits = body["hits"]["hits"]
        if not hits:
            logger.info("search_listings: query=%r returned 0 hits (index may be empty or Celery not indexing)", query)
        return [hit["_source"] for hit in hits]
    except Exception as e:
        logger.warning("search_listings failed: query=%r error=%s", query, e)
        return []


# --- Sync API for Celery (workers run in sync context; async + new_event_loop fails after fork) ---

def _sync_es_client() -> Elasticsearch:
    """New sync client per call (safe in forked Celery worker)."""
    return Elasticsearch(**_es_client_options())


def ensure_listings_index_sync() -> None:
    """Create listings index if not exists. Call from Celery task."""
    es = _sync_es_client()
    if not es.indices.exists(index=LISTINGS_INDEX):
        es.indices.create(
            index=LISTINGS_INDEX,
            settings={"index": {"number_of_replicas": 0}},
            mappings=_listings_index_mappings(),
        )


def index_listing_sync(doc: dict[str, Any]) -> bool:
    """Index a single listing. Call from Celery task. ES 8 requires id to be str."""
    try:
        es = _sync_es_client()
        es.index(index=LISTINGS_INDEX, id=str(doc["id"]), document=_clean(doc))
        return True
    except Exception as e:
        logger.warning("index_listing_sync failed for doc id=%s: %s", doc.get("id"), e)
        return False


def remove_listing_sync(listing_id: int) -> bool:
    """Remove a deleted listing from the index. Missing documents are not an error."""
    try:
        es = _sync_es_client()
        es.options(ignore_status=404).delete(index=LISTINGS_INDEX, id=str(listing_id))
        return True
    except Exception as e:
        logger.warning("remove_listing_sync failed for id=%s: %s", listing_id, e)
        return False
