# =============================================================================
# steam_core/errors.py  —  Exception Types & the Error Classifier
# =============================================================================
#
# Failures reach the dispatcher in four flavours:
#
#   1. ToolCallError      → already classified (bad arguments, unknown tool)
#   2. httpx.RequestError → the request never got a response (NetworkError)
#   3. httpx.HTTPStatusError → Steam answered with a non-2xx status
#   4. UpstreamShapeError → Steam answered 200 but without its success signal
#
# classify() folds all of them (and anything else) into one Failure envelope.
# Rules are applied in that priority order; anything unrecognised becomes
# InternalError.
#
# CREDENTIAL HYGIENE:
#   httpx puts the full request URL (including ?key=...) into the string form
#   of HTTPStatusError.  Nothing in this module stringifies a status error;
#   messages are rebuilt from the status code and reason phrase instead.
# =============================================================================

from collections.abc import Mapping
from typing import Any, Optional

import httpx

from steam_core.models import ErrorKind, Failure

# Upstream bodies are copied into Failure.detail up to this many characters.
BODY_EXCERPT_LIMIT = 1000

# Argument names worth echoing back in a failure message.
_IDENTIFIER_FIELDS = ("appid", "appids", "steamid")


class ToolCallError(Exception):
    """A failure that already knows its taxonomy code."""

    kind = ErrorKind.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        *,
        kind: Optional[ErrorKind] = None,
        detail: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.detail = dict(detail or {})


class InvalidArgumentsError(ToolCallError):
    kind = ErrorKind.INVALID_ARGUMENTS


class UnknownToolError(ToolCallError):
    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", detail={"tool": tool_name})


class UpstreamShapeError(Exception):
    """Steam returned 200 but the body lacks the tool's success signal."""

    def __init__(self, message: str, *, payload: Any = None):
        super().__init__(message)
        self.payload = payload


def describe_transport_error(exc: Exception) -> str:
    """A short, credential-free description of an httpx failure."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return f"HTTP {response.status_code} {response.reason_phrase}".rstrip()
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


def classify(error: Any, tool_name: str, arguments: Any = None) -> Failure:
    """Turn whatever went wrong during a call into a Failure.

    Calling classify() on a Failure returns it unchanged, so classification
    is idempotent.
    """
    if isinstance(error, Failure):
        return error

    if isinstance(error, ToolCallError):
        return Failure(kind=error.kind, message=error.message, detail=dict(error.detail))

    if isinstance(error, httpx.HTTPStatusError):
        return _classify_status(error.response, tool_name, arguments)

    if isinstance(error, httpx.RequestError):
        return Failure(
            kind=ErrorKind.NETWORK_ERROR,
            message=(
                f"Network error contacting Steam API during '{tool_name}'"
                f"{_identifiers(arguments)}: {describe_transport_error(error)}"
            ),
            detail={"error": type(error).__name__},
        )

    if isinstance(error, UpstreamShapeError):
        return Failure(
            kind=ErrorKind.UPSTREAM_INTERNAL_ERROR,
            message=(
                f"Unexpected Steam API response for '{tool_name}'"
                f"{_identifiers(arguments)}: {error}"
            ),
            detail={"payload": error.payload},
        )

    return Failure(
        kind=ErrorKind.INTERNAL_ERROR,
        message=(
            f"Internal server error during '{tool_name}'"
            f"{_identifiers(arguments)}: {error}"
        ),
        detail={"error": type(error).__name__},
    )


def _classify_status(response: httpx.Response, tool_name: str, arguments: Any) -> Failure:
    status = response.status_code
    detail = {"status": status, "body": _body_excerpt(response)}
    idents = _identifiers(arguments)

    # 400/404 usually mean Steam did not recognise an id the caller supplied.
    if status in (400, 404):
        return Failure(
            kind=ErrorKind.INVALID_ARGUMENTS,
            message=(
                f"Steam API request failed (Status: {status}). "
                f"Check arguments for '{tool_name}'{idents}."
            ),
            detail=detail,
        )
    if status in (401, 403):
        return Failure(
            kind=ErrorKind.PERMISSION_OR_AUTH_ERROR,
            message=(
                f"Steam API request failed during '{tool_name}'{idents} "
                f"(Status: {status}). Check API key or profile visibility."
            ),
            detail=detail,
        )
    return Failure(
        kind=ErrorKind.UPSTREAM_INTERNAL_ERROR,
        message=(
            f"Steam API request failed during '{tool_name}'{idents} "
            f"(Status: {status} {response.reason_phrase})."
        ),
        detail=detail,
    )


def _body_excerpt(response: httpx.Response) -> str:
    try:
        return response.text[:BODY_EXCERPT_LIMIT]
    except httpx.ResponseNotRead:
        return ""


def _identifiers(arguments: Any) -> str:
    """Render the identifying arguments, e.g. " (appid=570)", or ""."""
    if not isinstance(arguments, Mapping):
        return ""
    parts = [f"{name}={arguments[name]!r}" for name in _IDENTIFIER_FIELDS if name in arguments]
    return f" ({', '.join(parts)})" if parts else ""
