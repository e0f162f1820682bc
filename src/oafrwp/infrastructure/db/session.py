"""Async SQLAlchemy session factory and schema helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from oafrwp.infrastructure.db.metadata import metadata


def create_session_factory(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Create a reusable async session factory for the provided database URL."""

    engine = create_async_engine(database_url)
    return async_sessionmaker(engine, expire_on_commit=False)


async def dispose_session_factory(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Close pooled connections of the engine bound to session_factory."""

    engine = session_factory.kw.get("bind")
    if engine is not None:
        await engine.dispose()


async def ensure_schema(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Create account tables that do not exist yet on the bound engine."""

    async with session_factory() as session:
        connection = await session.connection()
        await connection.run_sync(metadata.create_all)
        await session.commit()
