# =============================================================================
# steam_core/responses.py  —  Response Normalizer & Envelope Rendering
# =============================================================================
#
# normalize() wraps an upstream payload in a Success without touching it:
# no reshaping, no filtering.  The caller sees Steam's authoritative shape.
#
# envelope() / render() turn any CallResult into the one wire format the
# caller always parses the same way:
#
#   {"success": true,  "data": <payload>}
#   {"success": false, "error": {"kind": ..., "message": ..., "detail": {...}}}
# =============================================================================

import json
from typing import Any

from steam_core.models import CallResult, Failure, Success


def normalize(payload: Any) -> Success:
    return Success(payload=payload)


def envelope(result: CallResult) -> dict[str, Any]:
    if isinstance(result, Success):
        return {"success": True, "data": result.payload}
    error: dict[str, Any] = {"kind": result.kind.value, "message": result.message}
    if result.detail:
        error["detail"] = result.detail
    return {"success": False, "error": error}


def render(result: CallResult) -> str:
    """Serialize a CallResult as indented JSON text."""
    # default=str keeps odd upstream detail (bytes, exceptions) from breaking rendering
    return json.dumps(envelope(result), indent=2, default=str)


def is_failure(result: CallResult) -> bool:
    return isinstance(result, Failure)
