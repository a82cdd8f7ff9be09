"""Boundary Protocols — contracts between the skin cache core and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO (store, identity service, image skin service) accessed through Protocol types
    - Every method may raise SkinRequestError; the store raises StorageError
      (kind STORAGE_FAILURE) or kind UNSUPPORTED_RECORD for undecodable rows
    - Keys handed to SkinStore are already lower-cased by the engine

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: every collaborator does network or disk IO
"""

from typing import Protocol

from skincache.core.domain_types import (
    PlayerName, SkinIdentifier, SkinProperty, StoredSkin, UniqueId,
)


class SkinStore(Protocol):
    """Contract for player mapping and skin record persistence."""
    async def get_player_skin(self, player_name: PlayerName) -> str | None: ...
    async def set_player_skin(self, player_name: PlayerName, skin_name: SkinIdentifier) -> None: ...
    async def remove_player_skin(self, player_name: PlayerName) -> None: ...

    async def get_skin(self, skin_name: SkinIdentifier) -> StoredSkin | None: ...
    async def set_skin(self, skin_name: SkinIdentifier, record: StoredSkin) -> None: ...
    async def remove_skin(self, skin_name: SkinIdentifier) -> None: ...
    async def get_timestamp(self, skin_name: SkinIdentifier) -> int | None: ...

    async def list_skins(self, offset: int) -> list[tuple[str, str]]: ...
    async def purge_older_than(self, cutoff_millis: int) -> int: ...


class IdentityResolver(Protocol):
    """Contract for the official account/profile service.

    NOT_PREMIUM signals "not a registered account", distinct from
    TRANSIENT_FAILURE for everything else.
    """
    async def resolve_unique_id(self, name: str) -> UniqueId | None: ...
    async def resolve_profile(self, unique_id: UniqueId) -> SkinProperty | None: ...
    async def resolve(self, name: str) -> SkinProperty | None: ...


class ImageSkinGenerator(Protocol):
    """Contract for synthesizing a signed texture from an image URL. No caching."""
    async def generate(self, url: str, label: str | None = None) -> SkinProperty: ...
