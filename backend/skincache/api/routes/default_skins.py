"""Default Skin Routes — inspect and reload the default skin pool.

Invariants:
    - Reload re-reads Settings (cache cleared), swaps engine config, then preloads
"""

from fastapi import APIRouter, Depends

from skincache.api.dependencies import get_engine
from skincache.config import get_settings
from skincache.schemas.skin import DefaultSkinPoolResponse
from skincache.services.skin_cache import SkinCacheEngine

router = APIRouter(prefix="/api/v1/default-skins", tags=["default-skins"])


def _pool_response(engine: SkinCacheEngine) -> DefaultSkinPoolResponse:
    pool = engine.pool_manager.snapshot
    return DefaultSkinPoolResponse(
        enabled=pool.enabled,
        apply_to_premium=pool.apply_to_premium,
        skins=list(pool.skins),
    )


@router.get("", response_model=DefaultSkinPoolResponse)
async def get_default_skins(engine: SkinCacheEngine = Depends(get_engine)):
    return _pool_response(engine)


@router.post("/reload", response_model=DefaultSkinPoolResponse)
async def reload_default_skins(engine: SkinCacheEngine = Depends(get_engine)):
    get_settings.cache_clear()
    await engine.reload(get_settings().to_skin_config())
    await engine.preload_default_skins()
    return _pool_response(engine)
