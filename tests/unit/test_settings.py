from __future__ import annotations

import pytest

from uow_template import UnitOfWorkSettings


@pytest.mark.unit
def test_defaults_target_local_sqlite(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("UOW_DATABASE_URL", raising=False)
    monkeypatch.delenv("UOW_ECHO_SQL", raising=False)

    settings = UnitOfWorkSettings.build_default()

    assert settings.database_url == "sqlite+aiosqlite:///uow.db"
    assert settings.echo_sql is False
    assert settings.expire_on_commit is False


@pytest.mark.unit
def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UOW_DATABASE_URL", "postgresql+asyncpg://localhost/test")
    monkeypatch.setenv("UOW_ECHO_SQL", "true")
    monkeypatch.setenv("UOW_LOG_LEVEL", "DEBUG")

    settings = UnitOfWorkSettings()

    assert settings.database_url == "postgresql+asyncpg://localhost/test"
    assert settings.echo_sql is True
    assert settings.log_level == "DEBUG"
