"""SQL Skin Store — persistence contract against SQLite.

Invariants:
    - value/signature/timestamp round-trip unchanged
    - Upserts overwrite (last write wins)
    - Purge removes exactly 0 < timestamp < cutoff
    - Rows with empty payload raise UNSUPPORTED_RECORD
    - SQLAlchemy failures surface as StorageError
"""

import pytest
from sqlalchemy import text

from skincache.core.domain_types import SkinErrorKind, StoredSkin
from skincache.core.errors import SkinRequestError, StorageError
from skincache.infrastructure.sql_skin_store import SKINS_PAGE_SIZE

BLOB = "ewogICJ0aW1lc3RhbXAiIDogMTY5OTk5OTk5OTk5OSwKICAicHJvZmlsZUlkIiA6ICJhYmMiCn0="


async def test_player_mapping_roundtrip(sql_store):
    assert await sql_store.get_player_skin("alice") is None
    await sql_store.set_player_skin("alice", "steve_skin")
    await sql_store.set_player_skin("alice", "https://example.com/a.png")
    assert await sql_store.get_player_skin("alice") == "https://example.com/a.png"
    await sql_store.remove_player_skin("alice")
    assert await sql_store.get_player_skin("alice") is None


async def test_skin_record_roundtrip_is_exact(sql_store):
    record = StoredSkin(value=BLOB, signature="c2lnbmF0dXJl+/==", timestamp=1_700_000_000_123)
    await sql_store.set_skin("steve", record)
    assert await sql_store.get_skin("steve") == record
    assert await sql_store.get_timestamp("steve") == 1_700_000_000_123


async def test_set_skin_overwrites(sql_store):
    await sql_store.set_skin("steve", StoredSkin("old", "old-sig", 1))
    await sql_store.set_skin("steve", StoredSkin("new", "new-sig", 2))
    assert await sql_store.get_skin("steve") == StoredSkin("new", "new-sig", 2)


async def test_missing_skin_and_timestamp(sql_store):
    assert await sql_store.get_skin("ghost") is None
    assert await sql_store.get_timestamp("ghost") is None


async def test_remove_skin(sql_store):
    await sql_store.set_skin("steve", StoredSkin("v", "s", 1))
    await sql_store.remove_skin("steve")
    assert await sql_store.get_skin("steve") is None


async def test_empty_payload_row_is_unsupported(sql_store, db_manager):
    async with db_manager.session() as session:
        await session.execute(text(
            "INSERT INTO skins (skin_name, value, signature, timestamp) "
            "VALUES ('broken', '', 'sig', 5)"
        ))
        await session.commit()

    with pytest.raises(SkinRequestError) as exc:
        await sql_store.get_skin("broken")
    assert exc.value.kind == SkinErrorKind.UNSUPPORTED_RECORD


async def test_purge_respects_pinned_and_cutoff(sql_store):
    await sql_store.set_skin("pinned", StoredSkin("v", "s", 0))
    await sql_store.set_skin("old", StoredSkin("v", "s", 100))
    await sql_store.set_skin("edge", StoredSkin("v", "s", 500))
    await sql_store.set_skin("new", StoredSkin("v", "s", 900))

    purged = await sql_store.purge_older_than(500)

    assert purged == 1
    assert await sql_store.get_skin("old") is None
    for name in ("pinned", "edge", "new"):
        assert await sql_store.get_skin(name) is not None


async def test_list_skins_is_paged_and_ordered(sql_store):
    for i in range(SKINS_PAGE_SIZE + 4):
        await sql_store.set_skin(f"skin{i:02d}", StoredSkin(f"v{i}", "s", 1))

    first = await sql_store.list_skins(0)
    rest = await sql_store.list_skins(SKINS_PAGE_SIZE)

    assert len(first) == SKINS_PAGE_SIZE
    assert first[0] == ("skin00", "v0")
    assert [name for name, _ in rest] == ["skin36", "skin37", "skin38", "skin39"]


async def test_sqlalchemy_errors_become_storage_error(sql_store, db_manager):
    async with db_manager.engine.begin() as conn:
        await conn.execute(text("DROP TABLE skins"))

    with pytest.raises(StorageError) as exc:
        await sql_store.get_skin("steve")
    assert exc.value.kind == SkinErrorKind.STORAGE_FAILURE


async def test_health_check(db_manager):
    assert await db_manager.health_check() is True
