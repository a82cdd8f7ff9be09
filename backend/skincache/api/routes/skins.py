"""Skin Routes — player skin resolution, mappings and stored skin maintenance.

Invariants:
    - Every failure surfaces as SkinCacheError (global handler renders the envelope)
    - A None/False from the engine on a read path means degraded storage -> 503
    - /skins/expired is registered before /skins/{skin_name} so it is never shadowed
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from skincache.api.dependencies import get_engine, get_platform_adapter
from skincache.core.domain_types import PINNED_TIMESTAMP, SkinProperty
from skincache.core.errors import ErrorContext, StorageError
from skincache.core.platform_adapter import PlatformAdapter
from skincache.schemas.skin import (
    PlayerSkinUpdate, ResolvedSkinResponse, SkinDataUpdate, SkinListResponse,
    SkinPropertyResponse, SkinSelectionResponse, StoredSkinSummary,
)
from skincache.services.skin_cache import SkinCacheEngine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/skins", tags=["skins"])


def _unavailable(operation: str, **context) -> StorageError:
    return StorageError("storage unavailable", operation, ErrorContext(**context))


# ─── Players ─────────────────────────────────────────────────────

@router.get("/players/{player_name}", response_model=ResolvedSkinResponse)
async def resolve_player_skin(
    player_name: str, engine: SkinCacheEngine = Depends(get_engine),
):
    """Skin the player should display right now."""
    resolved = await engine.resolve_player_skin(player_name)
    if resolved is None:
        raise _unavailable("read", player_name=player_name)
    return ResolvedSkinResponse.from_resolved(player_name, resolved)


@router.get("/players/{player_name}/selection", response_model=SkinSelectionResponse)
async def select_player_skin(
    player_name: str,
    clear: bool = Query(False),
    engine: SkinCacheEngine = Depends(get_engine),
):
    selection = await engine.select_skin_identifier(player_name, clear=clear)
    return SkinSelectionResponse(
        player_name=player_name,
        identifier=selection.identifier,
        is_custom=selection.is_custom,
    )


@router.put("/players/{player_name}", response_model=SkinSelectionResponse)
async def set_player_skin(
    player_name: str,
    body: PlayerSkinUpdate,
    engine: SkinCacheEngine = Depends(get_engine),
):
    if not await engine.set_skin_of_player(player_name, body.skin):
        raise _unavailable("write", player_name=player_name)
    return SkinSelectionResponse(
        player_name=player_name, identifier=body.skin, is_custom=True,
    )


@router.delete("/players/{player_name}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_player_skin(
    player_name: str, engine: SkinCacheEngine = Depends(get_engine),
):
    if not await engine.remove_skin_of_player(player_name):
        raise _unavailable("delete", player_name=player_name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/players/{player_name}/apply", response_model=ResolvedSkinResponse)
async def apply_player_skin(
    player_name: str,
    engine: SkinCacheEngine = Depends(get_engine),
    adapter: PlatformAdapter | None = Depends(get_platform_adapter),
):
    """Resolve and hand the skin to the platform adapter selected at startup."""
    if adapter is None:
        raise HTTPException(
            status.HTTP_501_NOT_IMPLEMENTED,
            detail="No platform adapter for this platform version",
        )
    resolved = await engine.resolve_player_skin(player_name)
    if resolved is None:
        raise _unavailable("read", player_name=player_name)
    await adapter.apply_skin(player_name, resolved.property)
    return ResolvedSkinResponse.from_resolved(player_name, resolved)


# ─── Stored skins ────────────────────────────────────────────────

@router.get("", response_model=SkinListResponse)
async def list_skins(
    offset: int = Query(0, ge=0),
    engine: SkinCacheEngine = Depends(get_engine),
):
    page = await engine.list_skins(offset)
    return SkinListResponse(
        offset=offset,
        skins=[StoredSkinSummary(name=name, value=value) for name, value in page],
    )


@router.delete("/expired")
async def purge_expired_skins(
    days: int = Query(ge=0),
    engine: SkinCacheEngine = Depends(get_engine),
):
    return {"purged": await engine.purge_expired(days)}


@router.get("/{skin_name}", response_model=SkinPropertyResponse)
async def fetch_skin(
    skin_name: str, engine: SkinCacheEngine = Depends(get_engine),
):
    prop = await engine.fetch_skin_by_identifier(skin_name)
    if prop is None:
        raise _unavailable("read", skin_name=skin_name)
    return SkinPropertyResponse.from_property(prop)


@router.put("/{skin_name}", response_model=SkinPropertyResponse)
async def store_skin(
    skin_name: str,
    body: SkinDataUpdate,
    engine: SkinCacheEngine = Depends(get_engine),
):
    prop = SkinProperty(value=body.value, signature=body.signature)
    timestamp = PINNED_TIMESTAMP if body.pinned else None
    if not await engine.set_skin_data(skin_name, prop, timestamp):
        raise _unavailable("write", skin_name=skin_name)
    return SkinPropertyResponse.from_property(prop)


@router.delete("/{skin_name}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_skin(
    skin_name: str, engine: SkinCacheEngine = Depends(get_engine),
):
    if not await engine.remove_skin_data(skin_name):
        raise _unavailable("delete", skin_name=skin_name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{skin_name}/refresh")
async def refresh_skin(
    skin_name: str, engine: SkinCacheEngine = Depends(get_engine),
):
    """Operator refresh. UPDATE_DISABLED -> 409 via the global handler."""
    updated = await engine.refresh_skin_if_eligible(skin_name)
    logger.info(
        f"Refresh of {skin_name}: {'updated' if updated else 'unchanged'}",
        extra={"skin_name": skin_name},
    )
    return {"skin_name": skin_name, "updated": updated}
