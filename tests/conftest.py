"""Shared fixtures: a fake Steam upstream and dispatchers wired to it."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from steam_core.config import SteamSettings
from steam_core.dispatcher import Dispatcher
from steam_core.steam_client import SteamClient

API_KEY = "test-steam-key"

TOOL_ORDER = [
    "getCurrentPlayers",
    "getAppList",
    "getGameSchema",
    "getAppDetails",
    "getGameNews",
    "getPlayerAchievements",
    "getUserStatsForGame",
    "getGlobalStatsForGame",
    "getSupportedApiList",
    "getGlobalAchievementPercentages",
]


class SteamStub:
    """Routes requests by URL path to canned responses and records them all."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def on(
        self,
        path: str,
        *,
        json: Any = None,
        status: int = 200,
        text: str | None = None,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> "SteamStub":
        if handler is None:
            def handler(request: httpx.Request) -> httpx.Response:
                if text is not None:
                    return httpx.Response(status, text=text)
                return httpx.Response(status, json=json)
        self.routes[path] = handler
        return self

    def refuse_all(self) -> "SteamStub":
        self.routes.clear()
        self.routes["*"] = _refuse
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path) or self.routes.get("*")
        if route is None:
            return httpx.Response(404, text=f"no stub for {request.url.path}")
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("[Errno 111] Connection refused", request=request)


@pytest.fixture
def settings() -> SteamSettings:
    return SteamSettings(
        api_key=API_KEY,
        api_base_url="https://api.steampowered.com",
        store_base_url="https://store.steampowered.com",
    )


@pytest.fixture
def steam() -> SteamStub:
    return SteamStub()


@pytest.fixture
def client(settings: SteamSettings, steam: SteamStub) -> SteamClient:
    return SteamClient(settings, transport=steam.transport)


@pytest.fixture
def dispatcher(client: SteamClient) -> Dispatcher:
    return Dispatcher(client)
