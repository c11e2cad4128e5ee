"""Database Module

Async session management and lookup helpers that report a missing row as
``Err(not_found)`` rather than ``None``.
"""
from typing import AsyncIterator, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from core.config import settings
from core.errors import AppError, Ok, Result, not_found
from core.logging import db_logger

T = TypeVar("T")

log = db_logger()

engine_kwargs = {
    "echo": settings.LOG_SQL,
}

if "sqlite" not in settings.DATABASE_URL:
    engine_kwargs.update({
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
    })

engine = create_async_engine(
    settings.DATABASE_URL,
    **engine_kwargs
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    """Dependency that yields a database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables(bind=engine) -> None:
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("tables_created", tables=sorted(Base.metadata.tables))


async def fetch_one(
    session: AsyncSession,
    model: type[T],
    id,
    entity_name: str | None = None,
) -> Result[T, AppError]:
    """Fetch single entity by primary key.

    Returns:
        Ok(entity) if found
        Err(not_found) if not found
    """
    name = entity_name or model.__name__
    entity = await session.get(model, id)
    if entity is None:
        log.debug("entity_not_found", entity=name, entity_id=str(id))
        return not_found(name, id, origin="database.fetch_one")
    return Ok(entity)


async def fetch_one_by(
    session: AsyncSession,
    model: type[T],
    entity_name: str | None = None,
    **filters,
) -> Result[T, AppError]:
    """Fetch single entity by arbitrary column filters.

    Returns:
        Ok(entity) if found
        Err(not_found) if not found
    """
    name = entity_name or model.__name__
    query = select(model)
    for key, value in filters.items():
        query = query.where(getattr(model, key) == value)
    result = await session.execute(query)
    entity = result.scalar_one_or_none()
    if entity is None:
        return not_found(name, origin="database.fetch_one_by")
    return Ok(entity)
