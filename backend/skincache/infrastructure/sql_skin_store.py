"""SQL Skin Store — SkinStore implementation over the async SQLAlchemy session manager.

Invariants:
    - Keys arrive lower-cased from the engine; the store does not re-normalize
    - set_* are upserts (merge): last write wins under concurrent writers
    - Rows with empty value/signature or NULL timestamp raise UNSUPPORTED_RECORD
    - purge_older_than deletes only 0 < timestamp < cutoff (pinned rows survive)
    - list_skins pages by SKINS_PAGE_SIZE, ordered by skin name

Design Decisions:
    - One short-lived session per call: no transaction spans an upstream HTTP request
    - Core DELETE for purge: no ORM loading of rows that are about to go
"""

import logging

from sqlalchemy import delete, select

from skincache.core.domain_types import (
    PINNED_TIMESTAMP, PlayerName, SkinErrorKind, SkinIdentifier, StoredSkin,
)
from skincache.core.errors import ErrorContext, SkinRequestError
from skincache.infrastructure.database import DatabaseSessionManager
from skincache.models.player_skin import PlayerSkin
from skincache.models.skin_record import SkinRecord

logger = logging.getLogger(__name__)

SKINS_PAGE_SIZE = 36


class SqlSkinStore:
    """Player mappings and skin records in two SQL tables."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    # ─── Player mappings ─────────────────────────────────────────

    async def get_player_skin(self, player_name: PlayerName) -> str | None:
        async with self.db.session() as session:
            row = await session.get(PlayerSkin, player_name)
            return row.skin_name if row else None

    async def set_player_skin(self, player_name: PlayerName, skin_name: SkinIdentifier) -> None:
        async with self.db.session() as session:
            await session.merge(PlayerSkin(player_name=player_name, skin_name=skin_name))
            await session.commit()

    async def remove_player_skin(self, player_name: PlayerName) -> None:
        async with self.db.session() as session:
            await session.execute(
                delete(PlayerSkin).where(PlayerSkin.player_name == player_name),
            )
            await session.commit()

    # ─── Skin records ────────────────────────────────────────────

    async def get_skin(self, skin_name: SkinIdentifier) -> StoredSkin | None:
        async with self.db.session() as session:
            row = await session.get(SkinRecord, skin_name)
            if row is None:
                return None
            if not row.value or not row.signature or row.timestamp is None:
                raise SkinRequestError(
                    SkinErrorKind.UNSUPPORTED_RECORD,
                    context=ErrorContext(skin_name=skin_name),
                )
            return StoredSkin(
                value=row.value, signature=row.signature, timestamp=row.timestamp,
            )

    async def set_skin(self, skin_name: SkinIdentifier, record: StoredSkin) -> None:
        async with self.db.session() as session:
            await session.merge(SkinRecord(
                skin_name=skin_name,
                value=record.value,
                signature=record.signature,
                timestamp=record.timestamp,
            ))
            await session.commit()

    async def remove_skin(self, skin_name: SkinIdentifier) -> None:
        async with self.db.session() as session:
            await session.execute(
                delete(SkinRecord).where(SkinRecord.skin_name == skin_name),
            )
            await session.commit()

    async def get_timestamp(self, skin_name: SkinIdentifier) -> int | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(SkinRecord.timestamp).where(SkinRecord.skin_name == skin_name),
            )
            return result.scalar_one_or_none()

    async def list_skins(self, offset: int) -> list[tuple[str, str]]:
        async with self.db.session() as session:
            result = await session.execute(
                select(SkinRecord.skin_name, SkinRecord.value)
                .order_by(SkinRecord.skin_name)
                .offset(offset)
                .limit(SKINS_PAGE_SIZE),
            )
            return [(name, value) for name, value in result.all()]

    async def purge_older_than(self, cutoff_millis: int) -> int:
        async with self.db.session() as session:
            result = await session.execute(
                delete(SkinRecord)
                .where(SkinRecord.timestamp != PINNED_TIMESTAMP)
                .where(SkinRecord.timestamp < cutoff_millis),
            )
            await session.commit()
            logger.debug("Purged %d skin rows before %d", result.rowcount, cutoff_millis)
            return result.rowcount
