"""Freshness Policy — staleness and purge cutoff arithmetic for stored skins.

Invariants:
    - Pure functions: caller supplies "now" in epoch millis
    - Pinned records (timestamp 0) are never stale and never purge-eligible
    - Stale means now - timestamp >= ttl, unless auto update is globally disabled
"""

from skincache.core.domain_types import (
    MILLIS_PER_DAY, MILLIS_PER_MINUTE, StoredSkin,
)
from skincache.core.skin_config import SkinCacheConfig


def is_stale(record: StoredSkin, now_millis: int, config: SkinCacheConfig) -> bool:
    if record.is_pinned or config.disallow_auto_update_skin:
        return False
    ttl = config.skin_expires_after * MILLIS_PER_MINUTE
    return now_millis - record.timestamp >= ttl


def purge_cutoff(now_millis: int, max_age_days: int) -> int:
    """Records with 0 < timestamp < cutoff are expired; stores apply the predicate."""
    return now_millis - max_age_days * MILLIS_PER_DAY
