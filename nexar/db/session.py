"""
Async database session management.
Challenge: One engine per process for the API, short-lived engines for Celery tasks.
Design: create_engine_for() builds both; get_db() is the request-scoped unit of work
(signup, its profile provisioning savepoint and any listing write commit together).
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from nexar.config import get_settings

settings = get_settings()


def create_engine_for(url: str, *, pooled: bool = True) -> AsyncEngine:
    """Pooled engine for the API process; NullPool for workers whose event loop ends with the task."""
    if not pooled:
        return create_async_engine(url, echo=settings.debug, poolclass=NullPool)
    return create_async_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,  # Verify connections before use
        pool_size=10,
        max_overflow=20,
    )


def session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False, autoflush=False)


engine = create_engine_for(settings.database_url)
async_session_maker = session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session per request. Commit on success, rollback on any error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Type alias for FastAPI dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
