"""Default Skin Pool Manager — owns the process-wide fallback skin snapshot.

Invariants:
    - Readers get the current immutable snapshot without locking
    - Writers (reload, preload) are serialized by an asyncio.Lock and swap the snapshot
    - Preload validates every non-URL entry; failures drop the entry for this run only
    - Empty pool after preload disables the feature until the next reload

Design Decisions:
    - Fetch function injected: the manager does not depend on the engine class
    - URL entries skipped at preload: image skins are generated fresh on every resolution
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from skincache.core.default_skin_pool import DefaultSkinPool
from skincache.core.domain_types import SkinProperty
from skincache.core.errors import SkinRequestError
from skincache.core.skin_config import SkinCacheConfig
from skincache.core.skin_validation import valid_url

logger = logging.getLogger(__name__)

FetchSkin = Callable[[str], Awaitable[SkinProperty | None]]


class DefaultSkinPoolManager:
    """Holds the default skin pool snapshot and validates it against the store/upstream."""

    def __init__(self, config: SkinCacheConfig):
        self._pool = DefaultSkinPool.from_config(config)
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> DefaultSkinPool:
        return self._pool

    async def reload(self, config: SkinCacheConfig) -> DefaultSkinPool:
        async with self._lock:
            self._pool = DefaultSkinPool.from_config(config)
            return self._pool

    async def preload(self, fetch: FetchSkin) -> DefaultSkinPool:
        """Resolve every configured default skin once, pruning the ones that fail."""
        async with self._lock:
            pool = self._pool
            if not pool.enabled:
                return pool

            broken: set[str] = set()
            for skin in pool.skins:
                if valid_url(skin):
                    continue
                try:
                    resolved = await fetch(skin)
                except SkinRequestError as e:
                    logger.warning(
                        "Default skin '%s' could not be found or requested, removing from list",
                        skin, extra={"skin_name": skin, "error_code": e.code},
                    )
                    logger.debug("Default skin '%s' error: %s", skin, e.message)
                    broken.add(skin)
                    continue
                except Exception as e:
                    logger.warning(
                        "Default skin '%s' failed unexpectedly, removing from list: %s",
                        skin, e, exc_info=True, extra={"skin_name": skin},
                    )
                    broken.add(skin)
                    continue
                if resolved is None:
                    logger.warning(
                        "Default skin '%s' has no usable data, removing from list",
                        skin, extra={"skin_name": skin},
                    )
                    broken.add(skin)

            self._pool = pool.without(broken)
            if not self._pool.enabled:
                logger.warning("No working default skin left, disabling default skins")
            return self._pool
