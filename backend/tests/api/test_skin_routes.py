"""Skin Routes — HTTP surface over the engine.

Invariants:
    - Kind errors render the structured envelope with the kind's status
    - Degraded storage on reads -> 503 STORAGE_FAILURE
    - /skins/expired is not shadowed by /skins/{skin_name}
"""

from skincache.core.domain_types import SkinProperty, StoredSkin
from skincache.main import app

from tests.fakes import NOW

STEVE = SkinProperty(value="steve-value", signature="steve-sig")


async def test_resolve_player_with_mapping(client, store):
    store.players["alice"] = "steve_skin"
    store.skins["steve_skin"] = StoredSkin("steve-value", "steve-sig", NOW)

    res = await client.get("/api/v1/skins/players/Alice")

    assert res.status_code == 200
    body = res.json()
    assert body["is_custom"] is True
    assert body["property"] == {
        "name": "textures", "value": "steve-value", "signature": "steve-sig",
    }


async def test_resolve_unknown_offline_player_is_404(client):
    res = await client.get("/api/v1/skins/players/offline_guy")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_PREMIUM"


async def test_resolve_with_storage_down_is_503(client, store):
    store.broken = True
    res = await client.get("/api/v1/skins/players/alice")
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "STORAGE_FAILURE"


async def test_set_select_and_clear_player_skin(client, store):
    res = await client.put("/api/v1/skins/players/Alice", json={"skin": " steve_skin "})
    assert res.status_code == 200
    assert store.players == {"alice": "steve_skin"}

    res = await client.get("/api/v1/skins/players/alice/selection")
    assert res.json()["identifier"] == "steve_skin"
    assert res.json()["is_custom"] is True

    res = await client.delete("/api/v1/skins/players/alice")
    assert res.status_code == 204
    assert store.players == {}


async def test_set_player_skin_rejects_blank(client):
    res = await client.put("/api/v1/skins/players/alice", json={"skin": "   "})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_fetch_skin_by_name(client, identity):
    identity.add_account("notch", STEVE)
    res = await client.get("/api/v1/skins/Notch")
    assert res.status_code == 200
    assert res.json()["value"] == "steve-value"


async def test_store_pinned_skin_then_refresh_is_409(client, store):
    res = await client.put(
        "/api/v1/skins/steve",
        json={"value": "v", "signature": "s", "pinned": True},
    )
    assert res.status_code == 200
    assert store.skins["steve"].timestamp == 0

    res = await client.post("/api/v1/skins/steve/refresh")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "UPDATE_DISABLED"


async def test_refresh_reports_update(client, store, identity):
    store.skins["steve"] = StoredSkin("old", "old-sig", 1)
    identity.add_account("steve", STEVE)
    res = await client.post("/api/v1/skins/steve/refresh")
    assert res.status_code == 200
    assert res.json() == {"skin_name": "steve", "updated": True}


async def test_list_skins(client, store):
    store.skins["a"] = StoredSkin("va", "s", NOW)
    store.skins["b"] = StoredSkin("vb", "s", NOW)
    res = await client.get("/api/v1/skins", params={"offset": 1})
    assert res.json() == {"offset": 1, "skins": [{"name": "b", "value": "vb"}]}


async def test_purge_expired_route(client, store):
    store.skins["old"] = StoredSkin("v", "s", 1)
    res = await client.delete("/api/v1/skins/expired", params={"days": 1})
    assert res.status_code == 200
    assert res.json() == {"purged": True}
    assert store.skins == {}


async def test_remove_skin_route(client, store):
    store.skins["steve"] = StoredSkin("v", "s", NOW)
    res = await client.delete("/api/v1/skins/Steve")
    assert res.status_code == 204
    assert store.skins == {}


async def test_apply_without_adapter_is_501(client):
    res = await client.post("/api/v1/skins/players/alice/apply")
    assert res.status_code == 501


async def test_apply_hands_skin_to_adapter(client, store):
    applied = []

    class _Adapter:
        name = "test"
        supported_versions = frozenset({"test"})

        async def apply_skin(self, player_name, skin):
            applied.append((player_name, skin))

    store.skins["alice"] = StoredSkin("steve-value", "steve-sig", NOW)
    app.state.platform_adapter = _Adapter()

    res = await client.post("/api/v1/skins/players/alice/apply")

    assert res.status_code == 200
    assert applied == [("alice", STEVE)]


async def test_default_skin_pool_view(client):
    res = await client.get("/api/v1/default-skins")
    assert res.json() == {"enabled": False, "apply_to_premium": False, "skins": []}


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
