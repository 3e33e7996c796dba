"""Database engines and session factories.

The API runs on an async engine; Celery workers use a sync engine bound to
the same database (Celery doesn't support async well).
"""

from collections.abc import AsyncIterator

from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import NullPool

from redesigner.config import get_settings

settings = get_settings()


class Base(DeclarativeBase):
    """Declarative base for all models."""


def sync_database_url(url: str) -> str:
    """Derive the sync driver URL from an async one."""
    return url.replace("+asyncpg", "").replace("+aiosqlite", "")


_is_sqlite = settings.database_url.startswith("sqlite")

# SQLite connections can't be shared across event loops or threads
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    **({"poolclass": NullPool} if _is_sqlite else {}),
)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)

sync_engine = create_engine(
    sync_database_url(settings.database_url),
    **({"connect_args": {"check_same_thread": False}} if _is_sqlite else {}),
)
SyncSessionLocal = sessionmaker(bind=sync_engine, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield a request-scoped session, committing on success."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
