"""Platform Adapter Selection — maps a discovered platform version to one adapter.

Invariants:
    - Selection runs once at startup; the result is held as an immutable reference
    - First adapter whose supported_versions contains the version wins
    - Unknown or missing version selects nothing (caller decides how to degrade)

Design Decisions:
    - Strategy registry over version probing inside the engine: the engine never
      asks for the platform version at resolution time
"""

from collections.abc import Iterable
from typing import Protocol

from skincache.core.domain_types import SkinProperty


class PlatformAdapter(Protocol):
    """Applies a resolved property to a live player on one platform version range."""
    name: str
    supported_versions: frozenset[str]

    async def apply_skin(self, player_name: str, skin: SkinProperty) -> None: ...


def select_platform_adapter(
    version: str | None, adapters: Iterable[PlatformAdapter],
) -> PlatformAdapter | None:
    if not version:
        return None
    for adapter in adapters:
        if version in adapter.supported_versions:
            return adapter
    return None
