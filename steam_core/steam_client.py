# =============================================================================
# steam_core/steam_client.py  —  HTTP Access to the Steam Web API
# =============================================================================
#
# Two upstream hosts are involved:
#   - api.steampowered.com   → every tool except getAppDetails; the API key
#                               is attached as the `key` query parameter
#   - store.steampowered.com → getAppDetails; public, no key attached
#
# Every call is a plain GET.  A non-2xx status raises httpx.HTTPStatusError,
# a transport failure raises httpx.RequestError, and a 2xx body that is not
# JSON raises UpstreamShapeError.  Interpreting the JSON (is this a success?)
# is the invocation strategy's job, not this module's.
#
# No retries and no timeout of our own: an httpx timeout only applies when
# STEAM_HTTP_TIMEOUT is configured, otherwise httpx's default is used.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from steam_core.config import SteamSettings
from steam_core.errors import BODY_EXCERPT_LIMIT, UpstreamShapeError

logger = logging.getLogger(__name__)

USER_AGENT = "steam-mcp-server/0.1.0"


class SteamClient:
    """Async GET client bound to one immutable SteamSettings value."""

    def __init__(
        self,
        settings: SteamSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        options: dict[str, Any] = {
            "transport": transport,
            "headers": {"User-Agent": USER_AGENT, "Accept": "application/json"},
            "follow_redirects": True,
        }
        if settings.timeout is not None:
            options["timeout"] = settings.timeout
        self._http = httpx.AsyncClient(**options)

    async def get_api(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """GET an authenticated Web API endpoint and return its JSON body."""
        query = dict(params or {})
        query["key"] = self.settings.api_key
        return await self._get(f"{self.settings.api_base_url}{path}", query, path)

    async def get_store(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """GET a public storefront endpoint (no API key) and return its JSON body."""
        return await self._get(f"{self.settings.store_base_url}{path}", dict(params or {}), path)

    async def _get(self, url: str, params: dict[str, Any], label: str) -> Any:
        # Only the path is logged; the full URL carries the key.
        logger.debug("GET %s params=%s", label, sorted(k for k in params if k != "key"))
        response = await self._http.get(url, params=params)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError:
            raise UpstreamShapeError(
                f"Steam API returned a non-JSON body for {label} "
                f"(Content-Type: {response.headers.get('content-type', 'unknown')})",
                payload=response.text[:BODY_EXCERPT_LIMIT],
            ) from None

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "SteamClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
