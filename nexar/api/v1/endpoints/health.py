"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; readiness reports which optional backends this process relies on.
"""

from fastapi import APIRouter

from nexar.config import get_settings

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready():
    """Readiness. Redis and Elasticsearch are optional: the API degrades instead of failing without them."""
    return {
        "status": "ready",
        "cache": "enabled" if settings.cache_enabled else "disabled",
        "search_indexing": "enabled" if settings.search_indexing_enabled else "disabled",
    }
