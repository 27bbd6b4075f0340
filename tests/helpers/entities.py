from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from uow_template.sqlalchemy import SQLAlchemyTransactionalObject, SQLAlchemyUnitOfWork


class Base(DeclarativeBase):
    """Declarative base for test models."""


class SampleEntity(Base, SQLAlchemyTransactionalObject):
    __tablename__ = "test_entity"

    identity_fields = ("id",)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(32), nullable=False, default="")


class SampleRepository(SQLAlchemyUnitOfWork):
    """Repository exposing domain-named writes on top of the unit of work."""

    async def create(self, entity: SampleEntity) -> None:
        await self.mark_create(entity)

    async def update(self, entity: SampleEntity) -> None:
        await self.mark_update(entity)

    async def delete(self, entity: SampleEntity) -> None:
        await self.mark_delete(entity)


def make_entity(entity_id: int, name: str) -> SampleEntity:
    return SampleEntity(id=entity_id, name=name)
