"""MineSkin Client — ImageSkinGenerator that signs arbitrary skin image URLs.

Invariants:
    - generate() never caches; every call is a fresh upstream request
    - 2xx with a signed texture -> SkinProperty
    - 2xx without value/signature -> NO_SKIN
    - 4xx (invalid image, bad key) and exhausted retries -> TRANSIENT_FAILURE

Design Decisions:
    - API key optional: anonymous generation is slower but works
"""

import logging

from skincache.core.domain_types import SkinErrorKind, SkinProperty
from skincache.core.errors import ErrorContext, SkinRequestError
from skincache.infrastructure.resilient_http import ResilientHttpClient

logger = logging.getLogger(__name__)


class MineSkinClient:
    """Generates signed textures from image URLs."""

    def __init__(
        self,
        http: ResilientHttpClient,
        api_url: str = "https://api.mineskin.org",
        api_key: str = "",
    ):
        self.http = http
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key

    async def generate(self, url: str, label: str | None = None) -> SkinProperty:
        context = ErrorContext(skin_name=url)
        body: dict = {"url": url, "visibility": 0}
        if label:
            body["name"] = label
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

        response = await self.http.request(
            "POST", f"{self.api_url}/generate/url",
            json=body, headers=headers, context=context,
        )
        if response.status_code >= 400:
            logger.warning(
                f"Skin generation rejected: HTTP {response.status_code}",
                extra={"status_code": response.status_code, "skin_name": url},
            )
            raise SkinRequestError(SkinErrorKind.TRANSIENT_FAILURE, context=context)

        try:
            texture = response.json()["data"]["texture"]
            prop = SkinProperty(
                value=texture["value"] or "", signature=texture["signature"] or "",
            )
        except (ValueError, KeyError, TypeError):
            raise SkinRequestError(SkinErrorKind.NO_SKIN, context=context)

        if not prop.is_complete:
            raise SkinRequestError(SkinErrorKind.NO_SKIN, context=context)
        return prop
