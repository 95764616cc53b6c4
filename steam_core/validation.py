# =============================================================================
# steam_core/validation.py  —  Argument Validators (one per tool)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Parses the untyped `arguments` mapping a caller sent into one of the
#   frozen argument models from models.py, or raises InvalidArgumentsError
#   naming the offending field.
#
# HOW IT WORKS:
#   pydantic does the parsing (`model_validate`); the field types in
#   models.py carry the JSON typing rules.  This module only binds a model
#   to a tool name and turns the first pydantic error into the message and
#   {"field", "expected"} detail the caller sees.
#
# RULES (purely structural, no "does this appid exist" checks):
#   - the arguments value must be a mapping (None counts as "no arguments")
#   - required fields must be present and of the declared JSON type
#   - optional fields may be absent; if present they must match (null does not)
#   - array fields must hold only elements of the declared type
#   - unknown extra fields are ignored
# =============================================================================

from typing import Any, Callable

from pydantic import ValidationError

from steam_core.errors import InvalidArgumentsError
from steam_core.models import (
    AppDetailsArgs,
    AppIdArgs,
    GameNewsArgs,
    GlobalStatsArgs,
    NoArgs,
    PlayerGameArgs,
    ToolArgs,
)

# JSON type of every argument name used by any tool.
_EXPECTED = {
    "appid": "integer",
    "appids": "array of integers",
    "country": "string",
    "count": "integer",
    "maxlength": "integer",
    "steamid": "string",
    "stat_names": "array of strings",
    "start_date": "integer",
    "end_date": "integer",
}

_ARTICLE = {
    "integer": "an integer",
    "string": "a string",
    "array of integers": "an array of integers",
    "array of strings": "an array of strings",
}

_ELEMENT = {
    "array of integers": "an integer",
    "array of strings": "a string",
}


def _translate(tool: str, usage: str, raw: Any, exc: ValidationError) -> InvalidArgumentsError:
    """Turn the first pydantic error into an InvalidArgumentsError."""
    error = exc.errors()[0]
    loc = error["loc"]

    if not loc:
        return InvalidArgumentsError(
            f"Invalid arguments for {tool}. Arguments must be an object. {usage}",
            detail={"expected": "object", "received": type(raw).__name__},
        )

    name = str(loc[0])
    expected = _EXPECTED.get(name, "valid value")
    if error["type"] == "missing":
        problem = f'"{name}" is required'
    elif len(loc) > 1 and expected in _ELEMENT:
        problem = f'"{name}[{loc[1]}]" must be {_ELEMENT[expected]}'
    else:
        problem = f'"{name}" must be {_ARTICLE.get(expected, expected)}'

    return InvalidArgumentsError(
        f"Invalid arguments for {tool}: {problem}. {usage}",
        detail={"field": name, "expected": expected},
    )


def _validator(tool: str, model: type[ToolArgs], usage: str) -> Callable[[Any], ToolArgs]:
    def validate(raw: Any) -> ToolArgs:
        try:
            return model.model_validate({} if raw is None else raw)
        except ValidationError as exc:
            raise _translate(tool, usage, raw, exc) from None

    return validate


# =============================================================================
# Validator factories
# =============================================================================
# Several tools share an argument shape but not a name, and the tool name
# appears in every error message.  Each factory returns a validator bound
# to one tool.
# =============================================================================
def no_args(tool: str):
    return _validator(tool, NoArgs, "No arguments required.")


def appid_args(tool: str):
    return _validator(tool, AppIdArgs, 'Requires an integer "appid".')


def player_game_args(tool: str):
    return _validator(tool, PlayerGameArgs, 'Requires a string "steamid" and an integer "appid".')


def app_details_args(tool: str):
    return _validator(
        tool,
        AppDetailsArgs,
        'Requires an array of integers "appids" and optionally a string "country".',
    )


def game_news_args(tool: str):
    return _validator(
        tool,
        GameNewsArgs,
        'Requires an integer "appid" and optionally integers "count" and "maxlength".',
    )


def global_stats_args(tool: str):
    return _validator(
        tool,
        GlobalStatsArgs,
        'Requires integer "appid", array of strings "stat_names", '
        'and optionally timestamps "start_date", "end_date".',
    )
