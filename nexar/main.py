"""
FastAPI application entry point.
Challenge: Mount routes, middleware (Prometheus), startup events (ES index), policy errors as 403.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from nexar.api.v1.router import api_router
from nexar.config import get_settings
from nexar.core.policies import PolicyViolation
from nexar.search.elasticsearch_client import ensure_listings_index

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: ensure Elasticsearch index when ES is available."""
    if get_settings().search_indexing_enabled:
        try:
            await ensure_listings_index()
        except Exception as e:
            # ES may be down; app still works (search returns empty)
            logger.warning("Elasticsearch unavailable at startup: %s", e)
    yield


async def policy_violation_handler(request: Request, exc: PolicyViolation) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": exc.detail})


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        description="Motorcycle classifieds marketplace: storefront, listings, profiles, messaging and image storage.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS for the web storefront
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PolicyViolation, policy_violation_handler)

    # Prometheus metrics at /metrics (storefront fetch outcomes, provisioning failures)
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
