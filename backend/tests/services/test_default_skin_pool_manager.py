"""Default Skin Pool Manager — preload pruning, force-disable and reload.

Invariants:
    - Failing entries are removed for this run; URL entries are not fetched
    - Empty pool after preload disables the feature; selection then returns own name
    - Reload restores the configured pool
"""

from skincache.core.domain_types import SkinErrorKind, SkinProperty, StoredSkin
from skincache.core.errors import SkinRequestError
from skincache.core.skin_config import SkinCacheConfig
from skincache.services.default_skin_pool_manager import DefaultSkinPoolManager

from tests.fakes import NOW

GOOD = SkinProperty(value="good", signature="good-sig")


def _config(*skins: str, **kwargs) -> SkinCacheConfig:
    return SkinCacheConfig(
        default_skins=skins, default_skins_enabled=True, **kwargs,
    )


async def test_preload_prunes_failing_entries(make_engine, identity):
    identity.add_account("steve", GOOD)
    engine = make_engine(_config("steve", "ghost_skin"))

    await engine.preload_default_skins()

    pool = engine.pool_manager.snapshot
    assert pool.skins == ("steve",)
    assert pool.enabled


async def test_preload_skips_url_entries(make_engine, identity, generator):
    engine = make_engine(_config("https://example.com/a.png"))
    await engine.preload_default_skins()
    assert engine.pool_manager.snapshot.skins == ("https://example.com/a.png",)
    assert identity.calls == []
    assert generator.calls == []


async def test_preload_uses_cached_records(make_engine, store, identity):
    store.skins["custom label"] = StoredSkin("v", "s", NOW)
    engine = make_engine(_config("custom label"))
    await engine.preload_default_skins()
    assert engine.pool_manager.snapshot.skins == ("custom label",)
    assert identity.calls == []


async def test_preload_disables_feature_when_all_fail(make_engine):
    engine = make_engine(_config("ghost1", "ghost2", default_skins_premium=True))

    await engine.preload_default_skins()

    assert not engine.pool_manager.snapshot.enabled
    selection = await engine.select_skin_identifier("alice")
    assert (selection.identifier, selection.is_custom) == ("alice", False)


async def test_preload_drops_entries_on_transient_failure(make_engine, identity):
    identity.errors["steve"] = SkinRequestError(SkinErrorKind.TRANSIENT_FAILURE)
    engine = make_engine(_config("steve"))
    await engine.preload_default_skins()
    assert engine.pool_manager.snapshot.skins == ()


async def test_preload_drops_entries_when_storage_is_down(make_engine, store):
    store.broken = True
    engine = make_engine(_config("steve"))
    await engine.preload_default_skins()
    assert not engine.pool_manager.snapshot.enabled


async def test_preload_prunes_entries_that_raise_unexpectedly():
    async def fetch(skin):
        if skin == "steve":
            raise TypeError("bad payload")
        return GOOD

    manager = DefaultSkinPoolManager(_config("steve", "alex"))
    pool = await manager.preload(fetch)

    assert pool.skins == ("alex",)
    assert pool.enabled


async def test_preload_noop_when_disabled():
    calls = []

    async def fetch(skin):
        calls.append(skin)
        return GOOD

    manager = DefaultSkinPoolManager(SkinCacheConfig(default_skins=("steve",)))
    pool = await manager.preload(fetch)
    assert calls == []
    assert pool.skins == ("steve",)


async def test_reload_restores_pruned_entries(make_engine, identity):
    identity.add_account("steve", GOOD)
    config = _config("steve", "ghost_skin")
    engine = make_engine(config)
    await engine.preload_default_skins()
    assert engine.pool_manager.snapshot.skins == ("steve",)

    await engine.reload(config)

    assert engine.pool_manager.snapshot.skins == ("steve", "ghost_skin")
    assert engine.config is config


async def test_snapshot_taken_before_preload_is_unchanged(make_engine):
    engine = make_engine(_config("ghost"))
    before = engine.pool_manager.snapshot
    await engine.preload_default_skins()
    assert before.skins == ("ghost",)
    assert before.enabled
