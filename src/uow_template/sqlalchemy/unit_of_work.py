"""SQLAlchemy implementation of :class:`~uow_template.coordinator.UnitOfWork`."""

from __future__ import annotations

from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..config import UnitOfWorkSettings
from ..coordinator import UnitOfWork
from ..db import create_engine_from_settings, create_session_factory
from .backend import SQLAlchemyTransactionBackend


class SQLAlchemyUnitOfWork(UnitOfWork[AsyncSession]):
    """Unit of work whose transaction handles are :class:`AsyncSession` objects.

    Repositories subclass it and expose domain-named writes::

        class NoteRepository(SQLAlchemyUnitOfWork):
            async def create(self, note: Note) -> None:
                await self.mark_create(note)
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(SQLAlchemyTransactionBackend(session_factory))
        self._session_factory = session_factory

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    @classmethod
    def from_settings(cls, settings: UnitOfWorkSettings | None = None) -> Self:
        """Build the engine and session factory described by ``settings``."""

        settings = settings or UnitOfWorkSettings.build_default()
        engine = create_engine_from_settings(settings)
        return cls(create_session_factory(engine, settings))
