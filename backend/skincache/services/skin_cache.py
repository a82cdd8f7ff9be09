"""Skin Cache Engine — resolves players and skin names to signed texture properties.

Invariants:
    - Every skin key is lower-cased before it reaches the store
    - A record is never written with an empty value or signature
    - Pinned records (timestamp 0) are never refreshed and never purged
    - Staleness is advisory: a failed refresh returns the cached property
    - URL identifiers bypass the store and are generated fresh on every call
    - Storage failures and unsupported records degrade the call to None/False, never raise
    - Unsupported records are deleted on read (next call is a clean miss)
    - is_custom is preserved from selection through every resolution path

Design Decisions:
    - No in-memory record cache: every resolution round-trips through the store
    - No locking on resolution paths: concurrent fetches of one key are last-write-wins
    - Clock and random source injected: tests control staleness and default selection
"""

import logging
import random
import time
from collections.abc import Callable

from skincache.core.domain_types import (
    PINNED_TIMESTAMP, ResolvedSkin, SkinErrorKind, SkinIdentifier, SkinProperty,
    SkinSelection, StoredSkin,
)
from skincache.core.errors import ErrorContext, SkinRequestError, StorageError
from skincache.core.freshness import is_stale, purge_cutoff
from skincache.core.repository_protocols import (
    IdentityResolver, ImageSkinGenerator, SkinStore,
)
from skincache.core.skin_config import SkinCacheConfig
from skincache.core.skin_validation import (
    player_key, skin_key, valid_account_name, valid_url,
)
from skincache.services.default_skin_pool_manager import DefaultSkinPoolManager

logger = logging.getLogger(__name__)

# Kinds the identity service may report that are passed through unchanged
_USER_FACING_KINDS = (SkinErrorKind.NOT_PREMIUM, SkinErrorKind.NO_SKIN)


def _now_millis() -> int:
    return int(time.time() * 1000)


class SkinCacheEngine:
    """Skin lookup orchestration over a store, an identity service and an image skin service."""

    def __init__(
        self,
        store: SkinStore,
        identity: IdentityResolver,
        image_generator: ImageSkinGenerator,
        config: SkinCacheConfig,
        rng: random.Random | None = None,
        clock: Callable[[], int] | None = None,
    ):
        self.store = store
        self.identity = identity
        self.image_generator = image_generator
        self.pool_manager = DefaultSkinPoolManager(config)
        self._config = config
        self._rng = rng or random.Random()
        self._clock = clock or _now_millis

    @property
    def config(self) -> SkinCacheConfig:
        return self._config

    async def reload(self, config: SkinCacheConfig) -> None:
        """Swap configuration and rebuild the default skin pool (not preloaded)."""
        self._config = config
        await self.pool_manager.reload(config)

    async def preload_default_skins(self) -> None:
        await self.pool_manager.preload(self.fetch_skin_by_identifier)

    # ─── Resolution ──────────────────────────────────────────────

    async def resolve_player_skin(self, player_name: str) -> ResolvedSkin | None:
        """Skin the player should display. None when storage is degraded."""
        selection = await self.select_skin_identifier(player_name)

        if valid_url(selection.identifier):
            generated = await self.image_generator.generate(selection.identifier, None)
            return ResolvedSkin(generated, selection.is_custom)

        prop = await self.fetch_skin_by_identifier(selection.identifier)
        if prop is None:
            return None
        return ResolvedSkin(prop, selection.is_custom)

    async def fetch_skin_by_identifier(self, identifier: str) -> SkinProperty | None:
        """Cached property for identifier, fetching upstream on a miss.

        Raises SkinRequestError with NOT_PREMIUM, NO_SKIN or TRANSIENT_FAILURE
        when the upstream lookup fails. Returns None if the store could not be
        read or held an unsupported record.
        """
        key = skin_key(identifier)
        try:
            record = await self._read_record(key)
        except SkinRequestError:
            return None

        if record is not None:
            return await self._refresh_if_stale(key, record)
        return await self._fetch_upstream(key)

    async def lookup_cached_skin(
        self, identifier: str, refresh_if_stale: bool = False,
    ) -> SkinProperty | None:
        """Stored property only; never creates a record."""
        key = skin_key(identifier)
        try:
            record = await self._read_record(key)
        except SkinRequestError:
            return None
        if record is None:
            return None
        if refresh_if_stale:
            return await self._refresh_if_stale(key, record)
        return record.to_property()

    async def select_skin_identifier(
        self, player_name: str, clear: bool = False,
    ) -> SkinSelection:
        """Pick the identifier a player should display.

        Order: stored mapping (unless clear), own name when defaults are off,
        own name for registered accounts (unless defaults apply to them),
        then one entry from the default pool.
        """
        name = player_name.strip()

        if not clear:
            mapped = await self.get_skin_name_of_player(name)
            if mapped:
                return SkinSelection(mapped, True)

        pool = self.pool_manager.snapshot
        if not pool.enabled:
            return SkinSelection(name, False)

        if not pool.apply_to_premium and await self._is_premium(name):
            return SkinSelection(name, False)

        choice = pool.pick(self._rng)
        if choice is None:
            return SkinSelection(name, False)
        return SkinSelection(choice, False)

    # ─── Maintenance ─────────────────────────────────────────────

    async def refresh_skin_if_eligible(self, skin_name: str) -> bool:
        """Operator-triggered refresh. True when the record was rewritten.

        Raises SkinRequestError(UPDATE_DISABLED) for non-account names and
        pinned records; TRANSIENT_FAILURE from upstream passes through.
        """
        key = skin_key(skin_name)
        context = ErrorContext(skin_name=key)
        if not valid_account_name(key):
            raise SkinRequestError(SkinErrorKind.UPDATE_DISABLED, context=context)

        try:
            timestamp = await self.store.get_timestamp(key)
        except SkinRequestError as e:
            logger.error(
                "Could not read timestamp for %s: %s", key, e.message,
                extra={"skin_name": key, "error_code": e.code},
            )
            return False

        if timestamp == PINNED_TIMESTAMP:
            raise SkinRequestError(SkinErrorKind.UPDATE_DISABLED, context=context)

        try:
            unique_id = await self.identity.resolve_unique_id(key)
            if unique_id is None:
                return False
            prop = await self.identity.resolve_profile(unique_id)
        except SkinRequestError as e:
            if e.kind == SkinErrorKind.NOT_PREMIUM:
                raise SkinRequestError(
                    SkinErrorKind.UPDATE_DISABLED, context=context,
                ) from e
            raise

        if prop is None:
            return False
        return await self._write_skin(key, prop, self._clock())

    async def purge_expired(self, max_age_days: int) -> bool:
        """Delete unpinned records older than max_age_days. False on storage failure."""
        if max_age_days < 0:
            raise ValueError("max_age_days must be >= 0")
        cutoff = purge_cutoff(self._clock(), max_age_days)
        try:
            purged = await self.store.purge_older_than(cutoff)
        except SkinRequestError as e:
            logger.error(
                "Purging skins older than %d days failed: %s", max_age_days, e.message,
                extra={"error_code": e.code},
            )
            return False
        logger.info("Purged %d skin record(s) older than %d days", purged, max_age_days)
        return True

    # ─── Player mapping ──────────────────────────────────────────

    async def get_skin_name_of_player(self, player_name: str) -> str | None:
        key = player_key(player_name)
        try:
            mapped = await self.store.get_player_skin(key)
        except SkinRequestError as e:
            logger.error(
                "Could not read skin of player %s: %s", key, e.message,
                extra={"player_name": key, "error_code": e.code},
            )
            return None
        return mapped or None

    async def set_skin_of_player(self, player_name: str, skin_name: str) -> bool:
        key = player_key(player_name)
        try:
            await self.store.set_player_skin(key, SkinIdentifier(skin_name))
        except SkinRequestError as e:
            logger.error(
                "Could not set skin of player %s: %s", key, e.message,
                extra={"player_name": key, "error_code": e.code},
            )
            return False
        return True

    async def remove_skin_of_player(self, player_name: str) -> bool:
        key = player_key(player_name)
        try:
            await self.store.remove_player_skin(key)
        except SkinRequestError as e:
            logger.error(
                "Could not remove skin of player %s: %s", key, e.message,
                extra={"player_name": key, "error_code": e.code},
            )
            return False
        return True

    # ─── Skin records ────────────────────────────────────────────

    async def set_skin_data(
        self, skin_name: str, prop: SkinProperty, timestamp: int | None = None,
    ) -> bool:
        """Write-through a property. timestamp=0 pins the record."""
        stamp = self._clock() if timestamp is None else timestamp
        return await self._write_skin(skin_key(skin_name), prop, stamp)

    async def remove_skin_data(self, skin_name: str) -> bool:
        key = skin_key(skin_name)
        try:
            await self.store.remove_skin(key)
        except SkinRequestError as e:
            logger.error(
                "Could not remove skin %s: %s", key, e.message,
                extra={"skin_name": key, "error_code": e.code},
            )
            return False
        return True

    async def list_skins(self, offset: int = 0) -> list[tuple[str, str]]:
        try:
            return await self.store.list_skins(max(offset, 0))
        except SkinRequestError as e:
            logger.error(
                "Could not list skins at offset %d: %s", offset, e.message,
                extra={"error_code": e.code},
            )
            return []

    # ─── Internals ───────────────────────────────────────────────

    async def _read_record(self, key: SkinIdentifier) -> StoredSkin | None:
        """Read one record; unsupported rows are deleted before the error is re-raised."""
        try:
            return await self.store.get_skin(key)
        except SkinRequestError as e:
            if e.kind == SkinErrorKind.UNSUPPORTED_RECORD:
                logger.info(
                    "Unsupported skin format, removing (%s)", key,
                    extra={"skin_name": key},
                )
                await self.remove_skin_data(key)
            else:
                logger.error(
                    "Could not read skin %s: %s", key, e.message,
                    extra={"skin_name": key, "error_code": e.code},
                )
            raise

    async def _refresh_if_stale(self, key: SkinIdentifier, record: StoredSkin) -> SkinProperty:
        if not valid_account_name(key) or not is_stale(record, self._clock(), self._config):
            return record.to_property()

        try:
            fresh = await self.identity.resolve(key)
        except SkinRequestError as e:
            logger.debug(
                "Failed to update skin data for %s: %s", key, e.message,
                extra={"skin_name": key, "error_code": e.code},
            )
            return record.to_property()
        except Exception as e:
            logger.warning(
                "Unexpected identity service error refreshing %s, serving cached skin: %s",
                key, e, exc_info=True, extra={"skin_name": key},
            )
            return record.to_property()

        if fresh is None or not fresh.is_complete:
            return record.to_property()
        await self._write_skin(key, fresh, self._clock())
        return fresh

    async def _fetch_upstream(self, key: SkinIdentifier) -> SkinProperty:
        context = ErrorContext(skin_name=key)
        try:
            prop = await self.identity.resolve(key)
        except SkinRequestError as e:
            if e.kind in _USER_FACING_KINDS:
                raise SkinRequestError(e.kind, context=context) from e
            raise SkinRequestError(
                SkinErrorKind.TRANSIENT_FAILURE, context=context,
            ) from e
        except Exception as e:
            logger.error(
                "Unexpected identity service error for %s: %s", key, e,
                exc_info=True, extra={"skin_name": key},
            )
            raise SkinRequestError(
                SkinErrorKind.TRANSIENT_FAILURE, context=context,
            ) from e

        if prop is None:
            raise SkinRequestError(SkinErrorKind.NO_SKIN, context=context)

        await self._write_skin(key, prop, self._clock())
        return prop

    async def _write_skin(self, key: SkinIdentifier, prop: SkinProperty, timestamp: int) -> bool:
        if not prop.is_complete:
            return False
        record = StoredSkin(
            value=prop.value, signature=prop.signature, timestamp=timestamp,
        )
        try:
            await self.store.set_skin(key, record)
        except StorageError as e:
            logger.error(
                "Could not store skin %s: %s", key, e.message,
                extra={"skin_name": key, "error_code": e.code},
            )
            return False
        return True

    async def _is_premium(self, player_name: str) -> bool:
        """Registered-account probe. Any failure counts as not premium."""
        try:
            return await self.identity.resolve_unique_id(player_name) is not None
        except Exception as e:
            logger.debug(
                "Premium check for %s failed, treating as not premium: %s",
                player_name, e, extra={"player_name": player_name},
            )
            return False
