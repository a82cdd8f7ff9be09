"""Route Dependencies — engine and platform adapter lookup from app.state.

Invariants:
    - The engine is built once in the lifespan and read-only afterwards
    - Tests override get_engine via app.dependency_overrides
"""

from fastapi import Request

from skincache.core.platform_adapter import PlatformAdapter
from skincache.services.skin_cache import SkinCacheEngine


def get_engine(request: Request) -> SkinCacheEngine:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise RuntimeError("Skin engine not initialized")
    return engine


def get_platform_adapter(request: Request) -> PlatformAdapter | None:
    return getattr(request.app.state, "platform_adapter", None)
