"""Infrastructure fixtures — in-memory SQLite session manager.

Invariants:
    - Every test gets a fresh in-memory SQLite database with both tables created
    - StaticPool keeps one connection so :memory: survives across sessions
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from skincache.db.base import Base
from skincache.infrastructure.database import DatabaseSessionManager
from skincache.infrastructure.sql_skin_store import SqlSkinStore


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    manager._session_factory = async_sessionmaker(
        manager.engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.engine.dispose()


@pytest.fixture
def sql_store(db_manager):
    return SqlSkinStore(db_manager)
