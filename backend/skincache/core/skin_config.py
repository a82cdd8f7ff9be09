"""Skin Cache Config — explicit, immutable configuration handed to the engine.

Invariants:
    - Frozen: the engine never mutates config; reload replaces the whole object
    - skin_expires_after is in minutes and always >= 0
    - default_skins keeps configured order; duplicates are dropped

Design Decisions:
    - Value object over reading settings directly: the engine never reaches into
      process-global state, tests build configs inline
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SkinCacheConfig:
    """Options the skin cache engine recognizes."""
    default_skins: tuple[str, ...] = field(default_factory=tuple)
    default_skins_enabled: bool = False
    default_skins_premium: bool = False     # True: premium players may get a default skin too
    disallow_auto_update_skin: bool = False
    skin_expires_after: int = 20            # minutes

    def __post_init__(self):
        if self.skin_expires_after < 0:
            raise ValueError("skin_expires_after must be >= 0")
        cleaned = tuple(dict.fromkeys(
            s.strip() for s in self.default_skins if s and s.strip()
        ))
        object.__setattr__(self, "default_skins", cleaned)
