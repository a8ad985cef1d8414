import asyncio
from datetime import datetime, timezone

import pytest

from autobiography.database import (
    build_engine,
    build_session_maker,
    create_tables,
    drop_tables,
    get_async_database_url,
)
from autobiography.errors import ExternalServiceError
from autobiography.models import AutobiographyRecord, SharedStoryRecord
from autobiography.persistence import MemoryRecordStore, SQLRecordStore
from autobiography.schemas import AutobiographyData


def test_database_url_is_rewritten_for_async_drivers():
    assert get_async_database_url("") == ""
    assert get_async_database_url("postgres://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert get_async_database_url("postgresql://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert get_async_database_url("sqlite:///local.db") == "sqlite+aiosqlite:///local.db"


# --- Memory store ---

def test_memory_load_unknown_user_returns_default():
    store = MemoryRecordStore()
    assert asyncio.run(store.load("nobody")) == AutobiographyData()


def test_memory_save_overwrites_whole_aggregate(sample_data):
    store = MemoryRecordStore()

    async def scenario():
        await store.save("u1", sample_data)
        await store.save("u1", AutobiographyData().with_section("dreams_beliefs", "Only this"))
        return await store.load("u1"), await store.list_all()

    loaded, rows = asyncio.run(scenario())
    assert loaded.dreams_beliefs == "Only this"
    assert loaded.childhood_memories == ""
    assert [user_id for user_id, _ in rows] == ["u1"]


# --- SQL store ---

def _run_sql(tmp_path, scenario):
    async def runner():
        engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'stories.db'}")
        await create_tables(engine)
        try:
            return await scenario(SQLRecordStore(build_session_maker(engine)))
        finally:
            await drop_tables(engine)
            await engine.dispose()

    return asyncio.run(runner())


def test_sql_load_unknown_user_returns_default(tmp_path):
    async def scenario(store):
        return await store.load("nobody")

    assert _run_sql(tmp_path, scenario) == AutobiographyData()


def test_sql_save_and_load(tmp_path, sample_data):
    saved = sample_data.mark_saved(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))

    async def scenario(store):
        await store.save("u1", saved)
        await store.save("u2", AutobiographyData())
        await store.save("u1", saved.with_generated_story("Updated"))
        return await store.load("u1"), await store.list_all()

    loaded, rows = _run_sql(tmp_path, scenario)

    assert loaded == saved.with_generated_story("Updated")
    assert [user_id for user_id, _ in rows] == ["u1", "u2"]


def test_sql_shares(tmp_path, sample_data):
    async def scenario(store):
        shared = await store.create_share("u1", sample_data)
        return shared, await store.fetch_share(shared.share_id), await store.fetch_share("SHR_nope")

    created, fetched, missing = _run_sql(tmp_path, scenario)

    assert created.share_id.startswith("SHR_")
    assert fetched.owner_id == "u1"
    assert fetched.data == sample_data
    assert missing is None


def test_sql_driver_failure_becomes_external_service_error():
    class ExplodingSession:
        async def __aenter__(self):
            raise OSError("connection refused")

        async def __aexit__(self, *args):
            return False

    store = SQLRecordStore(lambda: ExplodingSession())

    with pytest.raises(ExternalServiceError):
        asyncio.run(store.load("u1"))
    with pytest.raises(ExternalServiceError):
        asyncio.run(store.save("u1", AutobiographyData()))
    with pytest.raises(ExternalServiceError):
        asyncio.run(store.list_all())


def test_sql_save_accepts_naive_stamps(tmp_path, sample_data):
    saved = sample_data.mark_saved(datetime(2024, 1, 2, 3, 4, 5))

    async def scenario(store):
        await store.save("u1", saved)
        return await store.load("u1")

    assert _run_sql(tmp_path, scenario) == saved


def test_record_timestamps_are_timezone_aware():
    shared = SharedStoryRecord(id="SHR_x", owner_id="u1", data_json="{}")
    assert shared.created_at.tzinfo is not None
    assert AutobiographyRecord.__table__.c.updated_at.type.timezone is True
    assert SharedStoryRecord.__table__.c.created_at.type.timezone is True


def test_memory_share_is_stamped_in_utc(sample_data):
    shared = asyncio.run(MemoryRecordStore().create_share("u1", sample_data))
    assert shared.created_at.tzinfo is not None
