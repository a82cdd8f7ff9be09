"""Default Skin Pool — immutable snapshot of fallback skins and the selection rule.

Invariants:
    - Snapshot is frozen; pruning returns a new pool (readers never see a half-pruned list)
    - An enabled pool that becomes empty after pruning is disabled
    - pick() never returns a name outside the configured skins
    - A single-entry pool is deterministic; N>1 is uniform per call, no per-player stickiness

Design Decisions:
    - Random source injected by the caller: seeded random.Random in tests
"""

import random
from dataclasses import dataclass, field

from skincache.core.skin_config import SkinCacheConfig


@dataclass(frozen=True)
class DefaultSkinPool:
    """Configured fallback skins plus feature flags."""
    skins: tuple[str, ...] = field(default_factory=tuple)
    enabled: bool = False
    apply_to_premium: bool = False      # False: registered accounts keep their own skin

    @classmethod
    def from_config(cls, config: SkinCacheConfig) -> "DefaultSkinPool":
        return cls(
            skins=config.default_skins,
            enabled=config.default_skins_enabled,
            apply_to_premium=config.default_skins_premium,
        )

    def without(self, removed: set[str]) -> "DefaultSkinPool":
        """Return a pool minus removed skins; disables the feature when nothing is left."""
        remaining = tuple(s for s in self.skins if s not in removed)
        return DefaultSkinPool(
            skins=remaining,
            enabled=self.enabled and bool(remaining),
            apply_to_premium=self.apply_to_premium,
        )

    def pick(self, rng: random.Random) -> str | None:
        if not self.skins:
            return None
        if len(self.skins) == 1:
            return self.skins[0]
        return self.skins[rng.randrange(len(self.skins))]
