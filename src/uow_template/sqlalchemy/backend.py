"""SQLAlchemy implementation of :class:`~uow_template.interfaces.TransactionBackend`."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..exceptions import handle_sqlalchemy_errors


class SQLAlchemyTransactionBackend:
    """Hand out :class:`AsyncSession` objects as transaction handles.

    Each handle owns one pooled connection from ``begin`` until ``release``.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def begin(self) -> AsyncSession:
        session = self._session_factory()
        try:
            with handle_sqlalchemy_errors(stage="begin"):
                await session.begin()
                await session.connection()
        except BaseException:
            await session.close()
            raise
        return session

    async def commit(self, tx: AsyncSession) -> None:
        with handle_sqlalchemy_errors(stage="commit"):
            await tx.commit()

    async def rollback(self, tx: AsyncSession) -> None:
        with handle_sqlalchemy_errors(stage="rollback"):
            await tx.rollback()

    async def release(self, tx: AsyncSession) -> None:
        # AsyncSession.close() is a no-op on an already closed session.
        with handle_sqlalchemy_errors(stage="release"):
            await tx.close()
