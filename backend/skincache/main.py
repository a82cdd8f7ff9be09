"""SkinCache API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SkinCacheError → structured JSON responses
    - Engine, clients and database built once in the lifespan and held on app.state
    - Platform adapter selected once at startup from app.state.platform_adapters

Platform adapters:
    No adapter ships with the service. A host embedding the app registers its
    adapters before startup (app.state.platform_adapters = [...]); until one
    matches PLATFORM_VERSION, POST /api/v1/skins/players/{player}/apply is 501.

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Default skins preloaded before serving: broken entries pruned up front
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from skincache.api.error_handlers import register_error_handlers
from skincache.api.routes import default_skins, health, skins
from skincache.config import Settings, get_settings
from skincache.core.platform_adapter import select_platform_adapter
from skincache.infrastructure.database import init_db
from skincache.infrastructure.mineskin_client import MineSkinClient
from skincache.infrastructure.mojang_client import MojangClient
from skincache.infrastructure.observability import setup_logging
from skincache.infrastructure.resilient_http import ResilientHttpClient
from skincache.infrastructure.sql_skin_store import SqlSkinStore
from skincache.services.skin_cache import SkinCacheEngine

logger = logging.getLogger(__name__)


def _build_http(settings: Settings) -> ResilientHttpClient:
    return ResilientHttpClient(
        timeout_seconds=settings.http_timeout_seconds,
        max_retries=settings.http_max_retries,
        base_delay_ms=settings.http_base_delay_ms,
        max_delay_ms=settings.http_max_delay_ms,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_url.startswith("sqlite"):
        await db.create_tables()

    http = _build_http(settings)
    engine = SkinCacheEngine(
        store=SqlSkinStore(db),
        identity=MojangClient(
            http, settings.mojang_api_url, settings.mojang_session_url,
        ),
        image_generator=MineSkinClient(
            http, settings.mineskin_api_url, settings.mineskin_api_key,
        ),
        config=settings.to_skin_config(),
    )
    await engine.preload_default_skins()
    app.state.engine = engine
    app.state.platform_adapter = select_platform_adapter(
        settings.platform_version, getattr(app.state, "platform_adapters", ()),
    )
    if app.state.platform_adapter is None:
        logger.warning(
            f"No platform adapter for version {settings.platform_version!r}; "
            "skins can be resolved but not applied",
        )
    logger.info("SkinCache API started")
    yield
    logger.info("SkinCache API shutting down")
    await http.aclose()
    await db.dispose()


app = FastAPI(title="SkinCache API", version="1.0.0", lifespan=lifespan)

app.include_router(health.router)
app.include_router(skins.router)
app.include_router(default_skins.router)

register_error_handlers(app)
