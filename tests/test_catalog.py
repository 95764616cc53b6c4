from __future__ import annotations

import asyncio

import pytest

from steam_core.catalog import (
    DEFAULT_NEWS_COUNT,
    DEFAULT_NEWS_MAXLENGTH,
    GET_APP_DETAILS,
    GET_GAME_NEWS,
    GET_GAME_SCHEMA,
    GET_GLOBAL_ACHIEVEMENT_PERCENTAGES,
    GET_GLOBAL_STATS_FOR_GAME,
    GET_PLAYER_ACHIEVEMENTS,
    GET_SUPPORTED_API_LIST,
    GET_USER_STATS_FOR_GAME,
    TOOL_CONTRACTS,
    build_registry,
)
from steam_core.errors import UpstreamShapeError
from steam_core.models import AppDetailsArgs, AppIdArgs, GameNewsArgs, GlobalStatsArgs, NoArgs, PlayerGameArgs

from conftest import TOOL_ORDER


class _Recorder:
    """Stands in for SteamClient: records the GET and answers with a fixed body."""

    def __init__(self, body):
        self.body = body
        self.calls = []

    async def get_api(self, path, params):
        self.calls.append(("api", path, params))
        return self.body

    async def get_store(self, path, params):
        self.calls.append(("store", path, params))
        return self.body


def test_registry_keeps_registration_order():
    assert list(build_registry()) == TOOL_ORDER


def test_registry_rejects_duplicate_names():
    with pytest.raises(ValueError, match="getAppList"):
        build_registry([TOOL_CONTRACTS[1], TOOL_CONTRACTS[1]])


@pytest.mark.parametrize("contract", TOOL_CONTRACTS, ids=lambda c: c.name)
def test_every_contract_describes_itself(contract):
    described = contract.describe()
    assert set(described) == {"name", "description", "inputSchema", "outputSchema"}
    assert described["inputSchema"]["type"] == "object"
    assert described["outputSchema"]["type"] == "object"
    assert described["description"]


def test_game_news_applies_defaults():
    client = _Recorder({"appnews": {"appid": 570, "newsitems": []}})

    asyncio.run(GET_GAME_NEWS.invoke(client, GameNewsArgs(appid=570)))

    assert client.calls == [
        (
            "api",
            "/ISteamNews/GetNewsForApp/v2/",
            {"appid": 570, "count": DEFAULT_NEWS_COUNT, "maxlength": DEFAULT_NEWS_MAXLENGTH},
        )
    ]


def test_game_news_keeps_explicit_zero_maxlength():
    client = _Recorder({"appnews": {}})

    asyncio.run(GET_GAME_NEWS.invoke(client, GameNewsArgs(appid=570, count=2, maxlength=0)))

    assert client.calls[0][2] == {"appid": 570, "count": 2, "maxlength": 0}


def test_game_news_without_appnews_is_shape_error():
    with pytest.raises(UpstreamShapeError, match="appid 570"):
        asyncio.run(GET_GAME_NEWS.invoke(_Recorder({}), GameNewsArgs(appid=570)))


def test_global_stats_uses_indexed_names():
    client = _Recorder({"response": {"result": 1, "globalstats": {}}})
    args = GlobalStatsArgs(appid=440, stat_names=("kills", "deaths"), start_date=100)

    asyncio.run(GET_GLOBAL_STATS_FOR_GAME.invoke(client, args))

    assert client.calls[0][2] == {
        "appid": 440,
        "count": 2,
        "name[0]": "kills",
        "name[1]": "deaths",
        "startdate": 100,
    }


def test_global_stats_reports_upstream_error_text():
    body = {"response": {"result": 8, "error": "Invalid stat name"}}

    with pytest.raises(UpstreamShapeError) as excinfo:
        asyncio.run(
            GET_GLOBAL_STATS_FOR_GAME.invoke(_Recorder(body), GlobalStatsArgs(appid=440, stat_names=("x",)))
        )
    assert str(excinfo.value) == "Invalid stat name (appid: 440)"
    assert excinfo.value.payload == body


def test_global_stats_reports_result_code_without_error_text():
    with pytest.raises(UpstreamShapeError, match="Result code: 8"):
        asyncio.run(
            GET_GLOBAL_STATS_FOR_GAME.invoke(
                _Recorder({"response": {"result": 8}}), GlobalStatsArgs(appid=440, stat_names=("x",))
            )
        )


def test_achievement_percentages_send_gameid():
    client = _Recorder({"achievementpercentages": {"achievements": []}})

    asyncio.run(GET_GLOBAL_ACHIEVEMENT_PERCENTAGES.invoke(client, AppIdArgs(appid=620)))

    assert client.calls[0][2] == {"gameid": 620}


def test_player_achievements_failure_flag():
    body = {"playerstats": {"success": False, "error": "Profile is not public"}}

    with pytest.raises(UpstreamShapeError) as excinfo:
        asyncio.run(
            GET_PLAYER_ACHIEVEMENTS.invoke(_Recorder(body), PlayerGameArgs(steamid="765", appid=440))
        )
    assert str(excinfo.value) == "Profile is not public (appid: 440, steamid: 765)"


def test_player_achievements_success_passes_payload_through():
    body = {"playerstats": {"success": True, "achievements": []}}
    payload = asyncio.run(
        GET_PLAYER_ACHIEVEMENTS.invoke(_Recorder(body), PlayerGameArgs(steamid="765", appid=440))
    )
    assert payload is body


@pytest.mark.parametrize("body", [{}, {"game": None}, {"game": False}, {"game": ""}])
def test_game_schema_requires_game(body):
    with pytest.raises(UpstreamShapeError, match="appid 1"):
        asyncio.run(GET_GAME_SCHEMA.invoke(_Recorder(body), AppIdArgs(appid=1)))


def test_game_schema_accepts_empty_game_object():
    body = {"game": {}}
    assert asyncio.run(GET_GAME_SCHEMA.invoke(_Recorder(body), AppIdArgs(appid=1))) is body


@pytest.mark.parametrize(
    "contract, args, key",
    [
        (GET_GAME_NEWS, GameNewsArgs(appid=570), "appnews"),
        (GET_USER_STATS_FOR_GAME, PlayerGameArgs(steamid="765", appid=440), "playerstats"),
    ],
    ids=["getGameNews", "getUserStatsForGame"],
)
@pytest.mark.parametrize("value, ok", [({}, True), ([], True), (1, True), (False, False), (0, False), ("", False)])
def test_presence_follows_json_truthiness(contract, args, key, value, ok):
    body = {key: value}
    if ok:
        assert asyncio.run(contract.invoke(_Recorder(body), args)) is body
    else:
        with pytest.raises(UpstreamShapeError):
            asyncio.run(contract.invoke(_Recorder(body), args))


@pytest.mark.parametrize("value", [None, False, 0])
def test_nested_presence_rejects_falsy_values(value):
    with pytest.raises(UpstreamShapeError):
        asyncio.run(
            GET_SUPPORTED_API_LIST.invoke(_Recorder({"apilist": {"interfaces": value}}), NoArgs())
        )
    with pytest.raises(UpstreamShapeError):
        asyncio.run(
            GET_GLOBAL_ACHIEVEMENT_PERCENTAGES.invoke(
                _Recorder({"achievementpercentages": {"achievements": value}}), AppIdArgs(appid=620)
            )
        )


def test_app_details_uses_store_without_key_and_adds_country():
    client = _Recorder({"10": {"success": True, "data": {"name": "Counter-Strike"}}})

    result = asyncio.run(GET_APP_DETAILS.invoke(client, AppDetailsArgs(appids=(10,), country="GB")))

    assert client.calls == [("store", "/api/appdetails", {"appids": 10, "cc": "GB"})]
    assert result == {"10": {"success": True, "data": {"name": "Counter-Strike"}}}


def test_app_details_omits_empty_country():
    client = _Recorder({"10": {"success": True, "data": {}}})

    asyncio.run(GET_APP_DETAILS.invoke(client, AppDetailsArgs(appids=(10,), country="")))

    assert client.calls[0][2] == {"appids": 10}


def test_app_details_embeds_reported_failure():
    client = _Recorder({"999": {"success": False}})

    result = asyncio.run(GET_APP_DETAILS.invoke(client, AppDetailsArgs(appids=(999,))))

    assert result["999"]["success"] is False
    assert "appid 999" in result["999"]["error"]
    assert '{"success": false}' in result["999"]["error"]
