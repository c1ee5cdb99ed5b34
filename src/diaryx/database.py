"""Async engine, session factory and the per-request session dependency."""

from typing import Any, AsyncIterator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import get_settings
from .core.models.base import BaseModel

settings = get_settings()


def engine_options(url: str) -> Dict[str, Any]:
    """Driver specific engine arguments."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    # drop dead connections after a database restart
    return {"pool_pre_ping": True}


engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    **engine_options(settings.database_url),
)

# rows are read after commit (sync responses), so keep them loaded
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """One session per request."""
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables() -> None:
    """Create missing tables; alembic owns real schema changes."""
    from .core import models  # noqa: F401  registers the tables

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)


async def dispose_engine() -> None:
    await engine.dispose()
