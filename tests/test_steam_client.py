from __future__ import annotations

import asyncio

import httpx
import pytest

from steam_core.config import SteamSettings
from steam_core.errors import UpstreamShapeError
from steam_core.steam_client import SteamClient

from conftest import API_KEY


def test_get_api_attaches_key_and_params(client, steam):
    steam.on("/ISteamApps/GetAppList/v2/", json={"applist": {"apps": []}})

    payload = asyncio.run(client.get_api("/ISteamApps/GetAppList/v2/", {"appid": 10}))

    assert payload == {"applist": {"apps": []}}
    request = steam.requests[0]
    assert request.method == "GET"
    assert request.url.host == "api.steampowered.com"
    assert request.url.params["key"] == API_KEY
    assert request.url.params["appid"] == "10"


def test_get_store_is_unauthenticated(client, steam):
    steam.on("/api/appdetails", json={"10": {"success": True}})

    asyncio.run(client.get_store("/api/appdetails", {"appids": 10}))

    request = steam.requests[0]
    assert request.url.host == "store.steampowered.com"
    assert "key" not in request.url.params


def test_base_urls_come_from_settings(steam):
    settings = SteamSettings(api_key="k", api_base_url="http://localhost:8080")
    client = SteamClient(settings, transport=steam.transport)
    steam.on("/ISteamApps/GetAppList/v2/", json={})

    asyncio.run(client.get_api("/ISteamApps/GetAppList/v2/"))

    assert str(steam.requests[0].url).startswith("http://localhost:8080/ISteamApps/GetAppList/v2/")


def test_error_status_raises_http_status_error(client, steam):
    steam.on("/ISteamUserStats/GetSchemaForGame/v2/", status=500, text="oops")

    with pytest.raises(httpx.HTTPStatusError) as excinfo:
        asyncio.run(client.get_api("/ISteamUserStats/GetSchemaForGame/v2/", {"appid": 1}))
    assert excinfo.value.response.status_code == 500


def test_non_json_body_raises_shape_error(client, steam):
    steam.on("/ISteamApps/GetAppList/v2/", text="<html>maintenance</html>")

    with pytest.raises(UpstreamShapeError) as excinfo:
        asyncio.run(client.get_api("/ISteamApps/GetAppList/v2/"))
    assert excinfo.value.payload == "<html>maintenance</html>"


def test_connection_failure_propagates(client, steam):
    steam.refuse_all()

    with pytest.raises(httpx.ConnectError):
        asyncio.run(client.get_api("/ISteamApps/GetAppList/v2/"))


def test_settings_repr_hides_the_key():
    assert "secret" not in repr(SteamSettings(api_key="secret"))
