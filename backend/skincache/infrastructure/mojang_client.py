"""Mojang Client — IdentityResolver over the official profile and session services.

Invariants:
    - resolve_unique_id: 200 -> id, 204/404 -> NOT_PREMIUM, other 4xx -> TRANSIENT_FAILURE
    - resolve_profile: requests signed textures (unsigned=false); 204/404 -> None
    - A profile without a signed "textures" property resolves to None
    - A malformed profile payload is TRANSIENT_FAILURE, never an untyped error
    - Names are percent-encoded as a single path segment
    - Retry/backoff is delegated to ResilientHttpClient

Design Decisions:
    - resolve() composes the two calls so callers get one failure point
"""

import logging
from urllib.parse import quote

import httpx

from skincache.core.domain_types import (
    TEXTURES_NAME, SkinErrorKind, SkinProperty, UniqueId,
)
from skincache.core.errors import ErrorContext, SkinRequestError
from skincache.infrastructure.resilient_http import ResilientHttpClient

logger = logging.getLogger(__name__)

_NOT_FOUND = (204, 404)


class MojangClient:
    """Resolves account names to unique ids and signed texture properties."""

    def __init__(
        self,
        http: ResilientHttpClient,
        api_url: str = "https://api.mojang.com",
        session_url: str = "https://sessionserver.mojang.com",
    ):
        self.http = http
        self.api_url = api_url.rstrip("/")
        self.session_url = session_url.rstrip("/")

    async def resolve_unique_id(self, name: str) -> UniqueId | None:
        context = ErrorContext(player_name=name)
        url = f"{self.api_url}/users/profiles/minecraft/{quote(name, safe='')}"
        response = await self.http.request("GET", url, context=context)
        if response.status_code in _NOT_FOUND:
            raise SkinRequestError(SkinErrorKind.NOT_PREMIUM, context=context)
        data = self._json_or_fail(response, context)
        unique_id = data.get("id")
        return UniqueId(unique_id) if unique_id else None

    async def resolve_profile(self, unique_id: UniqueId) -> SkinProperty | None:
        context = ErrorContext(debug_info={"unique_id": unique_id})
        response = await self.http.request(
            "GET",
            f"{self.session_url}/session/minecraft/profile/{unique_id}",
            params={"unsigned": "false"},
            context=context,
        )
        if response.status_code in _NOT_FOUND:
            return None
        data = self._json_or_fail(response, context)
        properties = data.get("properties") or []
        if not isinstance(properties, list):
            raise SkinRequestError(SkinErrorKind.TRANSIENT_FAILURE, context=context)
        for prop in properties:
            if not isinstance(prop, dict) or prop.get("name") != TEXTURES_NAME:
                continue
            value, signature = prop.get("value"), prop.get("signature")
            if not signature:
                continue
            if not isinstance(value, str) or not isinstance(signature, str) or not value:
                raise SkinRequestError(SkinErrorKind.TRANSIENT_FAILURE, context=context)
            return SkinProperty(value=value, signature=signature)
        return None

    async def resolve(self, name: str) -> SkinProperty | None:
        unique_id = await self.resolve_unique_id(name)
        if unique_id is None:
            return None
        return await self.resolve_profile(unique_id)

    @staticmethod
    def _json_or_fail(response: httpx.Response, context: ErrorContext) -> dict:
        if response.status_code != 200:
            logger.warning(
                f"Unexpected profile service response {response.status_code}",
                extra={"status_code": response.status_code},
            )
            raise SkinRequestError(SkinErrorKind.TRANSIENT_FAILURE, context=context)
        try:
            data = response.json()
        except ValueError:
            raise SkinRequestError(SkinErrorKind.TRANSIENT_FAILURE, context=context)
        if not isinstance(data, dict):
            raise SkinRequestError(SkinErrorKind.TRANSIENT_FAILURE, context=context)
        return data
