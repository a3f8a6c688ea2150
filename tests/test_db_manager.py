# tests/test_db_manager.py
import pytest
from sqlalchemy import text

from deskkit import NotFound, StorageError
import recruitdesk.db.db_manager as db_manager_module
from recruitdesk.db import DbManager


def test_rejects_non_sqlite_urls():
    with pytest.raises(ValueError, match="sqlite\\+aiosqlite"):
        DbManager("postgresql+asyncpg://user@localhost/desk")


async def test_health_check(db_manager):
    health = await db_manager.health_check()

    assert health["healthy"] is True
    assert health["pool_size"] == 5

    snapshot = db_manager.get_config_snapshot()
    snapshot["pool_size"] = 50
    assert db_manager.get_config_snapshot()["pool_size"] == 5


async def test_migration_check_requires_alembic_table(db_manager):
    with pytest.raises(RuntimeError, match="alembic upgrade head"):
        await db_manager.verify_migrations_current()

    async with db_manager.engine.begin() as conn:
        await conn.execute(text("CREATE TABLE alembic_version (version_num VARCHAR(32))"))
        await conn.execute(text("INSERT INTO alembic_version VALUES ('0001')"))

    assert await db_manager.verify_migrations_current() == "0001"


async def test_session_rolls_back_on_error(db_manager, services):
    with pytest.raises(RuntimeError):
        async with db_manager.session() as session:
            await session.execute(
                text("INSERT INTO required_documents (id, name) VALUES ('r1', 'Passport')")
            )
            raise RuntimeError("boom")

    assert await services.storage.query_all("SELECT id FROM required_documents") == []


async def test_storage_translates_driver_errors(services):
    with pytest.raises(StorageError) as exc_info:
        await services.storage.execute("UPDATE no_such_table SET x = 1")

    assert exc_info.value.code == "STORAGE_ERROR"
    assert "no_such_table" in exc_info.value.detail


async def test_storage_reports_changes_and_last_id(services):
    inserted = await services.storage.execute(
        "INSERT INTO audit_log (action) VALUES ('ping')"
    )
    updated = await services.storage.execute(
        "UPDATE audit_log SET details = 'x' WHERE action = 'ping'"
    )

    assert inserted.changes == 1
    assert inserted.last_id == 1
    assert updated.changes == 1


class RecordingLogger:
    def __init__(self):
        self.calls = []

    def __getattr__(self, level):
        return lambda msg, **kwargs: self.calls.append((level, msg))


async def test_domain_errors_roll_back_without_error_logs(db_manager, monkeypatch):
    recorder = RecordingLogger()
    monkeypatch.setattr(db_manager_module, "logger", recorder)

    with pytest.raises(NotFound):
        async with db_manager.session():
            raise NotFound("Candidate not found.")
    assert [level for level, _ in recorder.calls] == ["debug"]

    with pytest.raises(RuntimeError):
        async with db_manager.session():
            raise RuntimeError("boom")
    assert recorder.calls[-1] == ("error", "Session error, rolled back")
