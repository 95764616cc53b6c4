# =============================================================================
# steam_core/models.py  —  Data Models (the "nouns" of the engine)
# =============================================================================
#
# These types define the shape of everything that flows through the
# dispatcher: the request coming in, the validated arguments for each tool,
# the static tool contract, and the two envelope variants going out.
#
# Envelopes and contracts are frozen dataclasses; validated arguments are
# frozen pydantic models, so parsing them is pydantic's job (validation.py
# translates its errors).  Rendering lives in responses.py, classification
# in errors.py, and the contracts themselves are filled in by catalog.py.
#
# ALL MODELS ARE FROZEN:
#   A ToolContract is built once at import time and shared by every call.
#   Validated arguments are produced once per call and only ever read.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Awaitable, Callable, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, StrictInt, StrictStr


# -----------------------------------------------------------------------------
# ErrorKind — the failure taxonomy
# -----------------------------------------------------------------------------
# Every Failure carries exactly one of these codes.  The values are the
# literal strings the caller sees in the envelope.
# -----------------------------------------------------------------------------
class ErrorKind(str, Enum):
    INVALID_ARGUMENTS = "InvalidArguments"
    UNKNOWN_TOOL = "UnknownTool"
    NETWORK_ERROR = "NetworkError"
    PERMISSION_OR_AUTH_ERROR = "PermissionOrAuthError"
    UPSTREAM_INTERNAL_ERROR = "UpstreamInternalError"
    INTERNAL_ERROR = "InternalError"


# -----------------------------------------------------------------------------
# CallRequest / CallResult
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class CallRequest:
    """One inbound tool call: a name plus whatever arguments the caller sent."""

    tool_name: str
    arguments: Any = None


@dataclass(frozen=True)
class Success:
    """The payload exactly as upstream returned it (or the merged batch)."""

    payload: Any


@dataclass(frozen=True)
class Failure:
    """A classified failure.

    `detail` holds structured context for debugging: the offending field for
    validation errors, the upstream status/body for HTTP errors, the raw
    payload for shape errors.
    """

    kind: ErrorKind
    message: str
    detail: dict[str, Any] = field(default_factory=dict)


CallResult = Union[Success, Failure]

# Keyed by the decimal item id; one entry per requested id.
PartialBatchResult = dict[str, dict[str, Any]]


# -----------------------------------------------------------------------------
# Validated arguments, one pydantic model per argument shape
# -----------------------------------------------------------------------------
# Optional fields stay None when the caller left them out.  Defaults such as
# getGameNews' count=10 are applied by the parameter mapping in catalog.py,
# not here, so a validated value always reflects what the caller sent.
#
# JSON TYPES:
#   JsonInt accepts int and integral floats (570.0 → 570).  bool, numeric
#   strings and null are rejected.  Strings must be real strings.
#   An optional field that is present must not be null.
#   Unknown extra fields are ignored.
# -----------------------------------------------------------------------------
def _integral_float(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _not_null(value: Any) -> Any:
    if value is None:
        raise ValueError("must not be null")
    return value


JsonInt = Annotated[StrictInt, BeforeValidator(_integral_float)]
OptionalJsonInt = Annotated[Optional[JsonInt], BeforeValidator(_not_null)]
OptionalJsonStr = Annotated[Optional[StrictStr], BeforeValidator(_not_null)]


class ToolArgs(BaseModel):
    """Base class for validated tool arguments."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class NoArgs(ToolArgs):
    pass


class AppIdArgs(ToolArgs):
    appid: JsonInt


class AppDetailsArgs(ToolArgs):
    appids: tuple[JsonInt, ...]
    country: OptionalJsonStr = None


class GameNewsArgs(ToolArgs):
    appid: JsonInt
    count: OptionalJsonInt = None
    maxlength: OptionalJsonInt = None


class PlayerGameArgs(ToolArgs):
    steamid: StrictStr
    appid: JsonInt


class GlobalStatsArgs(ToolArgs):
    appid: JsonInt
    stat_names: tuple[StrictStr, ...]
    start_date: OptionalJsonInt = None
    end_date: OptionalJsonInt = None


# -----------------------------------------------------------------------------
# ToolContract — the static description of one tool
# -----------------------------------------------------------------------------
# description / input_schema / output_schema are surfaced verbatim to the
# caller and never interpreted by the engine.
#
# validate(raw)           → a validated-args value, or raises InvalidArgumentsError
# invoke(client, args)    → the raw upstream payload (may await several GETs)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolContract:
    name: str
    description: str
    input_schema: dict[str, Any]
    output_schema: dict[str, Any]
    validate: Callable[[Any], Any]
    invoke: Callable[[Any, Any], Awaitable[Any]]

    def describe(self) -> dict[str, Any]:
        """The caller-facing metadata for this tool."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
            "outputSchema": self.output_schema,
        }
