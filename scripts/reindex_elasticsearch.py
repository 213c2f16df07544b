#!/usr/bin/env python3
"""
Reindex all visible listings from the API into Elasticsearch via Celery.
Use this after fixing the worker or when the index was empty; no new data is created.
Requires: API running (to fetch listings). Celery worker must be running to process the queue.

If you get 503 / no_shard_available from Elasticsearch, delete the broken index and reindex:
  python scripts/reindex_elasticsearch.py --reset-index

  python scripts/reindex_elasticsearch.py
  python scripts/reindex_elasticsearch.py --base-url http://localhost:8000/api/v1
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from nexar.queue.tasks import index_listing_task
from nexar.services.listing_source import ApplicationFailure, HttpListingSource, TransportFailure, fetch_listings

API_BASE = "http://localhost:8000/api/v1"
PAGE_SIZE = 100  # API max_page_size

DOC_FIELDS = (
    "id", "title", "description", "brand", "model", "location", "category",
    "status", "featured", "price", "year", "seller_id", "created_at",
)


def delete_listings_index():
    """Delete the listings index so Celery will recreate it with number_of_replicas=0 (single-node safe)."""
    from nexar.search.elasticsearch_client import LISTINGS_INDEX, _sync_es_client
    es = _sync_es_client()
    if es.indices.exists(index=LISTINGS_INDEX):
        es.indices.delete(index=LISTINGS_INDEX)
        print(f"Deleted index '{LISTINGS_INDEX}'. Celery will recreate it when processing the first task.")
    else:
        print(f"Index '{LISTINGS_INDEX}' does not exist (already deleted or never created).")


def main():
    ap = argparse.ArgumentParser(description="Enqueue all listings for Elasticsearch reindex")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    ap.add_argument("--token", default=None, help="Bearer token (admin sees non-active listings too)")
    ap.add_argument("--reset-index", action="store_true", help="Delete the listings index first (fixes 503 / no_shard_available), then enqueue")
    args = ap.parse_args()

    if args.reset_index:
        delete_listings_index()
        print()

    source = HttpListingSource(args.base_url, token=args.token, page_size=PAGE_SIZE)
    result = asyncio.run(fetch_listings(source))
    if isinstance(result, (TransportFailure, ApplicationFailure)):
        print(f"Failed to fetch listings: {result.error}")
        sys.exit(1)

    listings = result.records
    if not listings:
        print("No listings in DB. Run seed_data.py first.")
        return

    for listing in listings:
        index_listing_task.delay({field: listing.get(field) for field in DOC_FIELDS})

    print(f"Enqueued {len(listings)} listings for Elasticsearch reindex. Ensure Celery worker is running.")
    print("Wait a few seconds, then try: curl -s 'http://localhost:9200/listings/_count?pretty'")


if __name__ == "__main__":
    main()
