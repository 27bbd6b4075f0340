"""Settings for the SQLAlchemy-backed unit of work.

Values are read from ``UOW_*`` environment variables; the defaults target a
local SQLite file through the ``aiosqlite`` driver.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UnitOfWorkSettings(BaseSettings):
    """Pydantic settings container for engine and session construction."""

    model_config = SettingsConfigDict(env_prefix="UOW_")

    database_url: str = Field(
        default="sqlite+aiosqlite:///uow.db",
        min_length=1,
        description="Async SQLAlchemy URL of the transactional store.",
    )
    echo_sql: bool = Field(
        default=False,
        description="Log every SQL statement emitted by the engine.",
    )
    pool_pre_ping: bool = Field(
        default=True,
        description="Test pooled connections before handing them to a transaction.",
    )
    expire_on_commit: bool = Field(
        default=False,
        description="Expire ORM instances loaded through a session after commit.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level applied by configure_logging().",
    )

    @classmethod
    def build_default(cls) -> "UnitOfWorkSettings":
        """Construct settings from the environment and defaults."""

        return cls()


__all__ = ["UnitOfWorkSettings"]
