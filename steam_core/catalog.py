# =============================================================================
# steam_core/catalog.py  —  The Tool Catalog (all ten contracts)
# =============================================================================
#
# Each ToolContract below bundles:
#   - the caller-facing metadata (description, input/output JSON schemas)
#   - the validator for its argument shape (validation.py)
#   - the invocation strategy: endpoint, parameter mapping, success oracle
#
# ORDER MATTERS:
#   TOOL_CONTRACTS is in registration order, which is also the order the
#   caller sees when listing tools.
#
# SUCCESS ORACLES AT A GLANCE:
#   result code == 1         → getCurrentPlayers, getGlobalStatsForGame
#   boolean flag             → getPlayerAchievements (playerstats.success)
#   expected key present     → getGameSchema, getGameNews, getUserStatsForGame,
#                              getSupportedApiList, getGlobalAchievementPercentages
#   HTTP status only         → getAppList
#   per item (fan-out)       → getAppDetails
# =============================================================================

from collections.abc import Iterable, Mapping
from typing import Any

from steam_core.invocation import FanOutCall, SingleCall, dig, embedded_failure, present
from steam_core.models import (
    AppDetailsArgs,
    AppIdArgs,
    GameNewsArgs,
    GlobalStatsArgs,
    PlayerGameArgs,
    ToolContract,
)
from steam_core.validation import (
    app_details_args,
    appid_args,
    game_news_args,
    global_stats_args,
    no_args,
    player_game_args,
)

DEFAULT_NEWS_COUNT = 10
DEFAULT_NEWS_MAXLENGTH = 300

_APPID_PROPERTY = {
    "title": "Appid",
    "type": "integer",
    "description": "The Steam Application ID of the game.",
}
_STEAMID_PROPERTY = {
    "title": "Steamid",
    "type": "string",
    "description": "The player's 64-bit Steam ID.",
}
_APPID_INPUT = {
    "type": "object",
    "properties": {"appid": _APPID_PROPERTY},
    "required": ["appid"],
}
_PLAYER_GAME_INPUT = {
    "type": "object",
    "properties": {"steamid": _STEAMID_PROPERTY, "appid": _APPID_PROPERTY},
    "required": ["steamid", "appid"],
}
_NO_INPUT = {"type": "object", "properties": {}, "description": "No arguments required."}


# =============================================================================
# TOOL 1: getCurrentPlayers  (result code)
# =============================================================================
def _current_players_failure(args: AppIdArgs, payload: Any) -> str:
    code = dig(payload, "response", "result")
    return f"Steam API returned an error result code: {code if code is not None else 'unknown'}"


GET_CURRENT_PLAYERS = ToolContract(
    name="getCurrentPlayers",
    description="Retrieves the current number of players for a given Steam application ID (AppID).",
    input_schema=_APPID_INPUT,
    output_schema={
        "type": "object",
        "properties": {
            "response": {
                "type": "object",
                "properties": {
                    "player_count": {"title": "Player Count", "type": "integer"},
                    "result": {"title": "Result Code", "type": "integer"},
                },
                "required": ["player_count", "result"],
            }
        },
        "required": ["response"],
    },
    validate=appid_args("getCurrentPlayers"),
    invoke=SingleCall(
        path="/ISteamUserStats/GetNumberOfCurrentPlayers/v1/",
        params=lambda args: {"appid": args.appid},
        succeeded=lambda payload: dig(payload, "response", "result") == 1,
        failure_message=_current_players_failure,
    ),
)


# =============================================================================
# TOOL 2: getAppList  (HTTP status only)
# =============================================================================
GET_APP_LIST = ToolContract(
    name="getAppList",
    description="Retrieves the complete list of public applications (games, software, etc.) available on Steam.",
    input_schema=_NO_INPUT,
    output_schema={
        "type": "object",
        "properties": {
            "applist": {
                "type": "object",
                "properties": {
                    "apps": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {"appid": {"type": "integer"}, "name": {"type": "string"}},
                            "required": ["appid", "name"],
                        },
                    }
                },
                "required": ["apps"],
            }
        },
        "required": ["applist"],
    },
    validate=no_args("getAppList"),
    invoke=SingleCall(path="/ISteamApps/GetAppList/v2/"),
)


# =============================================================================
# TOOL 3: getGameSchema  (top-level "game" must be present)
# =============================================================================
# Steam answers {"game": {}} for apps without a stats schema; that still
# counts as a schema.  Only a missing or falsy "game" is a failure.
GET_GAME_SCHEMA = ToolContract(
    name="getGameSchema",
    description="Retrieves the game schema (stats and achievements definitions) for a given AppID.",
    input_schema=_APPID_INPUT,
    output_schema={
        "type": "object",
        "properties": {
            "game": {
                "type": "object",
                "properties": {
                    "gameName": {"type": "string"},
                    "gameVersion": {"type": "string"},
                    "availableGameStats": {
                        "type": "object",
                        "properties": {
                            "stats": {
                                "type": "array",
                                "items": {
                                    "type": "object",
                                    "properties": {
                                        "name": {"type": "string"},
                                        "defaultvalue": {"type": "number"},
                                        "displayName": {"type": "string"},
                                    },
                                },
                            },
                            "achievements": {
                                "type": "array",
                                "items": {
                                    "type": "object",
                                    "properties": {
                                        "name": {"type": "string"},
                                        "defaultvalue": {"type": "integer"},
                                        "displayName": {"type": "string"},
                                        "hidden": {"type": "integer"},
                                        "description": {"type": "string"},
                                        "icon": {"type": "string", "format": "uri"},
                                        "icongray": {"type": "string", "format": "uri"},
                                    },
                                },
                            },
                        },
                    },
                },
                "required": ["gameName", "gameVersion", "availableGameStats"],
            }
        },
        "required": ["game"],
    },
    validate=appid_args("getGameSchema"),
    invoke=SingleCall(
        path="/ISteamUserStats/GetSchemaForGame/v2/",
        params=lambda args: {"appid": args.appid},
        succeeded=lambda payload: present(dig(payload, "game")),
        failure_message=lambda args, payload: (
            f"Steam API did not return game schema data for appid {args.appid}. "
            "It might be invalid or lack a schema."
        ),
    ),
)


# =============================================================================
# TOOL 4: getAppDetails  (fan-out over appids, public storefront endpoint)
# =============================================================================
# The storefront wraps each answer under the appid as a string key:
#   {"570": {"success": true, "data": {...}}}
# A successful entry is passed through verbatim; anything else becomes a
# {"success": false, "error": ...} entry for that appid only.
# =============================================================================
def _app_details_params(args: AppDetailsArgs, appid: int) -> dict[str, Any]:
    params: dict[str, Any] = {"appids": appid}
    if args.country:
        params["cc"] = args.country
    return params


def _app_details_item(appid: int, payload: Any) -> dict[str, Any]:
    app_data = dig(payload, str(appid))
    if isinstance(app_data, Mapping) and app_data.get("success"):
        return dict(app_data)
    return embedded_failure("appid", appid, app_data)


GET_APP_DETAILS = ToolContract(
    name="getAppDetails",
    description="Retrieves store page details for one or more Steam AppIDs.",
    input_schema={
        "type": "object",
        "properties": {
            "appids": {
                "title": "Appids",
                "type": "array",
                "items": {"type": "integer"},
                "description": "A list of Steam Application IDs.",
            },
            "country": {
                "title": "Country Code",
                "type": "string",
                "description": "ISO 3166 country code for regional pricing/filtering (e.g., 'US', 'GB'). Optional.",
            },
        },
        "required": ["appids"],
    },
    output_schema={
        "type": "object",
        "description": "A dictionary where keys are AppIDs (as strings) and values are app detail objects or error indicators.",
        "additionalProperties": {
            "type": "object",
            "properties": {
                "success": {"type": "boolean"},
                "data": {"type": "object"},
                "error": {"type": "string", "description": "Error message if success is false for this appid."},
            },
        },
    },
    validate=app_details_args("getAppDetails"),
    invoke=FanOutCall(
        path="/api/appdetails",
        keys=lambda args: args.appids,
        params=_app_details_params,
        item_result=_app_details_item,
        item_label="appid",
        authenticated=False,
    ),
)


# =============================================================================
# TOOL 5: getGameNews  (defaults for count / maxlength)
# =============================================================================
def _game_news_params(args: GameNewsArgs) -> dict[str, Any]:
    return {
        "appid": args.appid,
        "count": args.count if args.count is not None else DEFAULT_NEWS_COUNT,
        "maxlength": args.maxlength if args.maxlength is not None else DEFAULT_NEWS_MAXLENGTH,
    }


GET_GAME_NEWS = ToolContract(
    name="getGameNews",
    description="Retrieves the latest news items for a given AppID.",
    input_schema={
        "type": "object",
        "properties": {
            "appid": _APPID_PROPERTY,
            "count": {
                "title": "Count",
                "type": "integer",
                "description": "Number of news items to retrieve.",
                "default": DEFAULT_NEWS_COUNT,
            },
            "maxlength": {
                "title": "Max Length",
                "type": "integer",
                "description": "Maximum length of the 'contents' field for each news item. 0 for full content.",
                "default": DEFAULT_NEWS_MAXLENGTH,
            },
        },
        "required": ["appid"],
    },
    output_schema={
        "type": "object",
        "properties": {
            "appnews": {
                "type": "object",
                "properties": {
                    "appid": {"type": "integer"},
                    "newsitems": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "gid": {"type": "string"},
                                "title": {"type": "string"},
                                "url": {"type": "string", "format": "uri"},
                                "is_external_url": {"type": "boolean"},
                                "author": {"type": "string"},
                                "contents": {"type": "string"},
                                "feedlabel": {"type": "string"},
                                "date": {"type": "integer", "format": "timestamp"},
                                "feedname": {"type": "string"},
                            },
                        },
                    },
                    "count": {"type": "integer"},
                },
            }
        },
        "required": ["appnews"],
    },
    validate=game_news_args("getGameNews"),
    invoke=SingleCall(
        path="/ISteamNews/GetNewsForApp/v2/",
        params=_game_news_params,
        succeeded=lambda payload: present(dig(payload, "appnews")),
        failure_message=lambda args, payload: (
            f"Steam API did not return news data for appid {args.appid}. "
            "It might be invalid or have no news."
        ),
    ),
)


# =============================================================================
# TOOL 6: getPlayerAchievements  (boolean flag playerstats.success)
# =============================================================================
def _player_achievements_failure(args: PlayerGameArgs, payload: Any) -> str:
    reported = dig(payload, "playerstats", "error")
    if reported:
        return f"{reported} (appid: {args.appid}, steamid: {args.steamid})"
    return (
        "Steam API reported failure for getPlayerAchievements "
        f"(appid: {args.appid}, steamid: {args.steamid})."
    )


GET_PLAYER_ACHIEVEMENTS = ToolContract(
    name="getPlayerAchievements",
    description="Retrieves a player's achievement status for a specific game.",
    input_schema=_PLAYER_GAME_INPUT,
    output_schema={
        "type": "object",
        "properties": {
            "playerstats": {
                "type": "object",
                "properties": {
                    "steamID": {"type": "string"},
                    "gameName": {"type": "string"},
                    "achievements": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "apiname": {"type": "string"},
                                "achieved": {"type": "integer"},
                                "unlocktime": {"type": "integer", "format": "timestamp"},
                            },
                        },
                    },
                    "success": {"type": "boolean"},
                    "error": {"type": "string", "description": "Error message if success is false."},
                },
            }
        },
        "required": ["playerstats"],
    },
    validate=player_game_args("getPlayerAchievements"),
    invoke=SingleCall(
        path="/ISteamUserStats/GetPlayerAchievements/v1/",
        params=lambda args: {"steamid": args.steamid, "appid": args.appid},
        succeeded=lambda payload: bool(dig(payload, "playerstats", "success")),
        failure_message=_player_achievements_failure,
    ),
)


# =============================================================================
# TOOL 7: getUserStatsForGame  ("playerstats" present)
# =============================================================================
# Private profiles and bad ids come back as HTTP errors here, not as a
# success flag, so the only body check is that playerstats exists.
GET_USER_STATS_FOR_GAME = ToolContract(
    name="getUserStatsForGame",
    description="Retrieves detailed statistics for a user in a specific game.",
    input_schema=_PLAYER_GAME_INPUT,
    output_schema={
        "type": "object",
        "properties": {
            "playerstats": {
                "type": "object",
                "properties": {
                    "steamID": {"type": "string"},
                    "gameName": {"type": "string"},
                    "stats": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {"name": {"type": "string"}, "value": {"type": "number"}},
                            "required": ["name", "value"],
                        },
                    },
                    "achievements": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {"name": {"type": "string"}, "achieved": {"type": "integer"}},
                            "required": ["name", "achieved"],
                        },
                    },
                    "success": {"type": "boolean"},
                },
                "required": ["steamID", "gameName"],
            }
        },
        "required": ["playerstats"],
    },
    validate=player_game_args("getUserStatsForGame"),
    invoke=SingleCall(
        path="/ISteamUserStats/GetUserStatsForGame/v1/",
        params=lambda args: {"steamid": args.steamid, "appid": args.appid},
        succeeded=lambda payload: present(dig(payload, "playerstats")),
        failure_message=lambda args, payload: (
            "Steam API did not return the expected 'playerstats' structure for "
            f"getUserStatsForGame (appid: {args.appid}, steamid: {args.steamid})."
        ),
    ),
)


# =============================================================================
# TOOL 8: getGlobalStatsForGame  (indexed name[i] parameters, result code)
# =============================================================================
def _global_stats_params(args: GlobalStatsArgs) -> dict[str, Any]:
    params: dict[str, Any] = {"appid": args.appid, "count": len(args.stat_names)}
    for index, name in enumerate(args.stat_names):
        params[f"name[{index}]"] = name
    if args.start_date is not None:
        params["startdate"] = args.start_date
    if args.end_date is not None:
        params["enddate"] = args.end_date
    return params


def _global_stats_failure(args: GlobalStatsArgs, payload: Any) -> str:
    reported = dig(payload, "response", "error")
    if reported:
        return f"{reported} (appid: {args.appid})"
    code = dig(payload, "response", "result")
    return (
        f"Steam API reported failure for getGlobalStatsForGame (appid: {args.appid}). "
        f"Result code: {code if code is not None else 'unknown'}"
    )


GET_GLOBAL_STATS_FOR_GAME = ToolContract(
    name="getGlobalStatsForGame",
    description="Retrieves aggregated global stats for a specific game.",
    input_schema={
        "type": "object",
        "properties": {
            "appid": _APPID_PROPERTY,
            "stat_names": {
                "title": "Stat Names",
                "type": "array",
                "items": {"type": "string"},
                "description": "List of specific global stat API names to retrieve.",
            },
            "start_date": {
                "title": "Start Date",
                "type": "integer",
                "format": "timestamp",
                "description": "Optional Unix timestamp for the start date.",
            },
            "end_date": {
                "title": "End Date",
                "type": "integer",
                "format": "timestamp",
                "description": "Optional Unix timestamp for the end date.",
            },
        },
        "required": ["appid", "stat_names"],
    },
    output_schema={
        "type": "object",
        "properties": {
            "response": {
                "type": "object",
                "properties": {
                    "result": {"type": "integer", "description": "Steam API result code (1 for success)."},
                    "globalstats": {
                        "type": "object",
                        "description": "Object where keys are stat names, values are {total: string}.",
                        "additionalProperties": {
                            "type": "object",
                            "properties": {"total": {"type": "string"}},
                            "required": ["total"],
                        },
                    },
                    "error": {"type": "string", "description": "Error message if result code indicates failure."},
                },
                "required": ["result"],
            }
        },
        "required": ["response"],
    },
    validate=global_stats_args("getGlobalStatsForGame"),
    invoke=SingleCall(
        path="/ISteamUserStats/GetGlobalStatsForGame/v1/",
        params=_global_stats_params,
        succeeded=lambda payload: dig(payload, "response", "result") == 1,
        failure_message=_global_stats_failure,
    ),
)


# =============================================================================
# TOOL 9: getSupportedApiList  ("apilist.interfaces" present)
# =============================================================================
GET_SUPPORTED_API_LIST = ToolContract(
    name="getSupportedApiList",
    description="Retrieves the complete list of supported Steam Web API interfaces and methods.",
    input_schema=_NO_INPUT,
    output_schema={
        "type": "object",
        "properties": {
            "apilist": {
                "type": "object",
                "properties": {
                    "interfaces": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string"},
                                "methods": {
                                    "type": "array",
                                    "items": {
                                        "type": "object",
                                        "properties": {
                                            "name": {"type": "string"},
                                            "version": {"type": "integer"},
                                            "httpmethod": {"type": "string"},
                                            "parameters": {"type": "array", "items": {"type": "object"}},
                                        },
                                        "required": ["name", "version", "httpmethod", "parameters"],
                                    },
                                },
                            },
                            "required": ["name", "methods"],
                        },
                    }
                },
                "required": ["interfaces"],
            }
        },
        "required": ["apilist"],
    },
    validate=no_args("getSupportedApiList"),
    invoke=SingleCall(
        path="/ISteamWebAPIUtil/GetSupportedAPIList/v1/",
        succeeded=lambda payload: present(dig(payload, "apilist", "interfaces")),
        failure_message=lambda args, payload: (
            "Steam API did not return the expected 'apilist.interfaces' structure "
            "for getSupportedApiList."
        ),
    ),
)


# =============================================================================
# TOOL 10: getGlobalAchievementPercentages  (appid renamed to gameid)
# =============================================================================
GET_GLOBAL_ACHIEVEMENT_PERCENTAGES = ToolContract(
    name="getGlobalAchievementPercentages",
    description="Retrieves the global achievement completion percentages for a specific game.",
    input_schema=_APPID_INPUT,
    output_schema={
        "type": "object",
        "properties": {
            "achievementpercentages": {
                "type": "object",
                "properties": {
                    "achievements": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string"},
                                "percent": {"type": "number", "format": "float"},
                            },
                            "required": ["name", "percent"],
                        },
                    }
                },
                "required": ["achievements"],
            }
        },
        "required": ["achievementpercentages"],
    },
    validate=appid_args("getGlobalAchievementPercentages"),
    invoke=SingleCall(
        path="/ISteamUserStats/GetGlobalAchievementPercentagesForApp/v2/",
        params=lambda args: {"gameid": args.appid},
        succeeded=lambda payload: present(dig(payload, "achievementpercentages", "achievements")),
        failure_message=lambda args, payload: (
            "Steam API did not return the expected 'achievementpercentages.achievements' "
            f"structure for getGlobalAchievementPercentages (appid: {args.appid})."
        ),
    ),
)


# =============================================================================
# Registry
# =============================================================================
TOOL_CONTRACTS: tuple[ToolContract, ...] = (
    GET_CURRENT_PLAYERS,
    GET_APP_LIST,
    GET_GAME_SCHEMA,
    GET_APP_DETAILS,
    GET_GAME_NEWS,
    GET_PLAYER_ACHIEVEMENTS,
    GET_USER_STATS_FOR_GAME,
    GET_GLOBAL_STATS_FOR_GAME,
    GET_SUPPORTED_API_LIST,
    GET_GLOBAL_ACHIEVEMENT_PERCENTAGES,
)


def build_registry(contracts: Iterable[ToolContract] = TOOL_CONTRACTS) -> dict[str, ToolContract]:
    """Index contracts by name, keeping registration order.

    Raises ValueError if two contracts share a name.
    """
    registry: dict[str, ToolContract] = {}
    for contract in contracts:
        if contract.name in registry:
            raise ValueError(f"duplicate tool contract name: {contract.name}")
        registry[contract.name] = contract
    return registry
