"""Async engine and session factory builders."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import UnitOfWorkSettings


def create_engine_from_settings(settings: UnitOfWorkSettings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        echo=settings.echo_sql,
        pool_pre_ping=settings.pool_pre_ping,
    )


def create_session_factory(
    engine: AsyncEngine, settings: UnitOfWorkSettings | None = None
) -> async_sessionmaker[AsyncSession]:
    """Return a session factory whose sessions serve as transaction handles."""

    expire_on_commit = settings.expire_on_commit if settings is not None else False
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=expire_on_commit)


__all__ = ["create_engine_from_settings", "create_session_factory"]
