from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tests.helpers.entities import Base, SampleEntity, SampleRepository
from tests.mocks.backend import RecordingBackend


@dataclass
class DatabaseFixture:
    """File-backed SQLite database reached through ``aiosqlite``."""

    path: Path

    def __post_init__(self) -> None:
        self.url = f"sqlite+aiosqlite:///{self.path}"
        self.engine = create_async_engine(self.url)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def init_models(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def seed(self, *entities: SampleEntity) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(
                sa.insert(SampleEntity.__table__),
                [{"id": entity.id, "name": entity.name} for entity in entities],
            )

    async def rows(self) -> list[tuple[int, str]]:
        async with self.engine.connect() as conn:
            result = await conn.execute(
                sa.select(SampleEntity.id, SampleEntity.name).order_by(SampleEntity.id)
            )
            return [(row.id, row.name) for row in result]

    async def count(self) -> int:
        async with self.engine.connect() as conn:
            result = await conn.execute(sa.select(sa.func.count()).select_from(SampleEntity))
            return result.scalar_one()

    async def find(self, entity_id: int) -> tuple[int, str] | None:
        async with self.session_factory() as session:
            entity = await session.get(SampleEntity, entity_id)
            if entity is None:
                return None
            return entity.id, entity.name

    def repository(self) -> SampleRepository:
        return SampleRepository(self.session_factory)


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncIterator[DatabaseFixture]:
    fixture = DatabaseFixture(path=tmp_path / "uow.db")
    await fixture.init_models()
    yield fixture
    await fixture.dispose()


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()
