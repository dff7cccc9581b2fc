"""Database session manager — error mapping, health check, dependency guard."""

import pytest
from sqlalchemy import text

import wildwatch.infrastructure.database as db_module
from wildwatch.core.errors import DatabaseError
from wildwatch.infrastructure.database import DatabaseSessionManager, get_db


@pytest.fixture
async def manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    yield manager
    await manager.dispose()


async def test_integrity_error_becomes_database_error(manager):
    with pytest.raises(DatabaseError) as exc:
        async with manager.session() as db:
            await db.execute(text("CREATE TABLE t (id INTEGER PRIMARY KEY)"))
            await db.execute(text("INSERT INTO t VALUES (1)"))
            await db.execute(text("INSERT INTO t VALUES (1)"))
    assert exc.value.http_status == 500
    assert exc.value.operation == "commit"


async def test_other_exceptions_propagate_unchanged(manager):
    with pytest.raises(KeyError):
        async with manager.session():
            raise KeyError("x")


async def test_health_check(manager):
    assert await manager.health_check() is True


async def test_get_db_requires_initialization(monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    with pytest.raises(RuntimeError, match="Database not initialized"):
        async for _ in get_db():
            pass
