"""
Celery tasks - listing search indexing and the profile reconciliation sweep.
Challenge: Offload indexing and repairs from the request path; retry transient failures.
"""

import asyncio

from nexar.config import get_settings
from nexar.db.session import create_engine_for, session_factory
from nexar.queue.celery_app import celery_app
from nexar.search.elasticsearch_client import ensure_listings_index_sync, index_listing_sync, remove_listing_sync
from nexar.services.provisioning import reconcile_profiles


def _run_async(coro):
    """Run async function from sync Celery task."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@celery_app.task(bind=True, max_retries=3)
def index_listing_task(self, listing_doc: dict):
    """
    Index listing in Elasticsearch asynchronously.
    Fired after listing create/update (event-driven: API publishes, worker consumes).
    """
    try:
        ensure_listings_index_sync()
        if not index_listing_sync(listing_doc):
            raise RuntimeError(f"Indexing listing {listing_doc.get('id')} failed")
    except Exception as exc:
        raise self.retry(exc=exc, countdown=5)


@celery_app.task(bind=True, max_retries=3)
def remove_listing_task(self, listing_id: int):
    """Drop a deleted listing from the search index."""
    if not remove_listing_sync(listing_id):
        raise self.retry(countdown=5)


async def _reconcile(database_url: str, admin_emails: list[str]) -> dict:
    engine = create_engine_for(database_url, pooled=False)
    try:
        async with session_factory(engine)() as session:
            report = await reconcile_profiles(session, admin_emails)
            await session.commit()
        return report.as_dict()
    finally:
        await engine.dispose()


@celery_app.task
def reconcile_profiles_task() -> dict:
    """Create missing profiles and promote configured admins. Idempotent; safe on a schedule."""
    settings = get_settings()
    return _run_async(_reconcile(settings.database_url, settings.admin_emails))
