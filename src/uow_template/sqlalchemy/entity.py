"""Declarative-model mixin implementing the transactional object contract."""

from __future__ import annotations

from typing import Any

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ensure_matched, handle_sqlalchemy_errors
from ..interfaces import IdentityKey


class SQLAlchemyTransactionalObject:
    """Give a mapped class ``create_by_tx``/``update_by_tx``/``delete_by_tx``.

    Subclasses list the attributes identifying a row in ``identity_fields``::

        class Note(Base, SQLAlchemyTransactionalObject):
            __tablename__ = "note"
            identity_fields = ("id",)

            id: Mapped[int] = mapped_column(Integer, primary_key=True)
            name: Mapped[str] = mapped_column(String(32))

    Statements are issued with ORM-enabled ``insert``/``update``/``delete``
    so the instance itself is never attached to the session. Only attributes
    the caller assigned are written; unassigned columns keep their defaults on
    insert and their stored values on update.
    """

    identity_fields = ()

    def identity_key(self) -> IdentityKey:
        if not self.identity_fields:
            raise TypeError(f"{type(self).__name__} does not declare identity_fields")
        return tuple((field, getattr(self, field)) for field in self.identity_fields)

    async def create_by_tx(self, tx: AsyncSession) -> None:
        stmt = sa.insert(type(self)).values(**self._assigned_values())
        with handle_sqlalchemy_errors(entity=self._entity_name()):
            await tx.execute(stmt)

    async def update_by_tx(self, tx: AsyncSession) -> None:
        stmt = (
            sa.update(type(self))
            .where(*self._identity_criteria())
            .values(**self._assigned_values())
            .execution_options(synchronize_session=False)
        )
        with handle_sqlalchemy_errors(entity=self._entity_name()):
            result = await tx.execute(stmt)
        ensure_matched(result.rowcount, entity=self._entity_name(), identifier=self._identifier())

    async def delete_by_tx(self, tx: AsyncSession) -> None:
        stmt = (
            sa.delete(type(self))
            .where(*self._identity_criteria())
            .execution_options(synchronize_session=False)
        )
        with handle_sqlalchemy_errors(entity=self._entity_name()):
            await tx.execute(stmt)

    def _assigned_values(self) -> dict[str, Any]:
        state = sa.inspect(self)
        return {
            attr.key: state.dict[attr.key]
            for attr in state.mapper.column_attrs
            if attr.key in state.dict
        }

    def _identity_criteria(self) -> list[sa.ColumnElement[bool]]:
        cls = type(self)
        return [getattr(cls, field) == value for field, value in self.identity_key()]

    def _identifier(self) -> str:
        return ",".join(str(value) for _, value in self.identity_key())

    def _entity_name(self) -> str:
        return getattr(type(self), "__tablename__", type(self).__name__)
